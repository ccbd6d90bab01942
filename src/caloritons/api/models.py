"""Request bodies and response helpers for the HTTP API."""

from dataclasses import asdict
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from caloritons.domain.calculator import ActivityLevel, Gender, UserStats
from caloritons.domain.foods import FoodEntry, NutritionFacts
from caloritons.domain.goals import DailyGoals
from caloritons.domain.logs import DayLog
from caloritons.domain.units import (
    MAX_GOAL,
    MAX_PER_100G,
    MAX_PORTION_GRAMS,
    MAX_WATER_ML,
)
from caloritons.services.progress import summarize_day


class NutritionIn(BaseModel):
    """Per-100 g nutrition facts."""

    model_config = ConfigDict(allow_inf_nan=False)

    calories: float = Field(ge=0, le=MAX_PER_100G)
    protein: float = Field(ge=0, le=MAX_PER_100G)
    carbs: float = Field(ge=0, le=MAX_PER_100G)
    fat: float = Field(ge=0, le=MAX_PER_100G)


class FoodEntryIn(BaseModel):
    """Food to add, or to replace when ``id`` matches an existing entry."""

    model_config = ConfigDict(allow_inf_nan=False)

    id: str | None = None
    name: str = Field(min_length=1)
    weight: float = Field(gt=0, le=MAX_PORTION_GRAMS)
    portion_name: str | None = None
    per100g: NutritionIn

    def to_entry(self) -> FoodEntry:
        return FoodEntry.build(
            name=self.name,
            weight=self.weight,
            per100g=NutritionFacts(**self.per100g.model_dump()),
            portion_name=self.portion_name,
            entry_id=self.id,
        )


class WaterAmount(BaseModel):
    amount: int = Field(ge=0, le=MAX_WATER_ML)


class WaterDelta(BaseModel):
    delta: int = Field(ge=-MAX_WATER_ML, le=MAX_WATER_ML)


class GoalsIn(BaseModel):
    """Complete goal record; every field is required and positive."""

    calories: int = Field(gt=0, le=MAX_GOAL)
    carbs: int = Field(gt=0, le=MAX_GOAL)
    protein: int = Field(gt=0, le=MAX_GOAL)
    fat: int = Field(gt=0, le=MAX_GOAL)
    water: int = Field(gt=0, le=MAX_GOAL)

    def to_goals(self) -> DailyGoals:
        return DailyGoals(**self.model_dump())


class UserStatsIn(BaseModel):
    """Calculator input: weight in kg, height in cm, age in years."""

    model_config = ConfigDict(allow_inf_nan=False)

    weight: float = Field(gt=0, le=1000)
    height: float = Field(gt=0, le=300)
    age: int = Field(gt=0, le=150)
    gender: Gender
    activity_level: ActivityLevel

    def to_stats(self) -> UserStats:
        return UserStats(**self.model_dump())


class LookupRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    query: str = Field(min_length=1)


class DateSelection(BaseModel):
    day: date


class DateShift(BaseModel):
    days: int


class StagedWeight(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    weight: float = Field(gt=0, le=MAX_PORTION_GRAMS)


def day_payload(day: str, log: DayLog, goals: DailyGoals) -> dict[str, object]:
    """Serialize a day log together with its summary."""
    return {
        "day": day,
        "log": asdict(log),
        "summary": asdict(summarize_day(day, log, goals)),
    }
