"""JSON encoding of the persisted log and goal slots."""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from caloritons.domain.foods import FoodEntry, NutritionFacts
from caloritons.domain.goals import DailyGoals
from caloritons.domain.logs import DayLog, LogSnapshot
from caloritons.domain.units import (
    MAX_ENTRY_TOTAL,
    MAX_GOAL,
    MAX_PER_100G,
    MAX_PORTION_GRAMS,
    MAX_WATER_ML,
)


class SnapshotDecodeError(ValueError):
    """Raised when a persisted slot cannot be decoded."""


class StoredNutrition(BaseModel):
    """Per-100 g facts as persisted."""

    model_config = ConfigDict(allow_inf_nan=False)

    calories: float = Field(default=0, ge=0, le=MAX_PER_100G)
    protein: float = Field(default=0, ge=0, le=MAX_PER_100G)
    carbs: float = Field(default=0, ge=0, le=MAX_PER_100G)
    fat: float = Field(default=0, ge=0, le=MAX_PER_100G)


class StoredEntry(BaseModel):
    """Food entry as persisted."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    id: str
    name: str
    weight: float = Field(ge=0, le=MAX_PORTION_GRAMS)
    portion_name: str | None = Field(default=None, alias="portionName")
    per100g: StoredNutrition | None = Field(default=None, alias="nutritionPer100g")
    calories: float = Field(default=0, ge=0, le=MAX_ENTRY_TOTAL)
    protein: float = Field(default=0, ge=0, le=MAX_ENTRY_TOTAL)
    carbs: float = Field(default=0, ge=0, le=MAX_ENTRY_TOTAL)
    fat: float = Field(default=0, ge=0, le=MAX_ENTRY_TOTAL)


class StoredDayLog(BaseModel):
    """Day log as persisted."""

    food: list[StoredEntry] = Field(default_factory=list)
    water: int = Field(default=0, ge=0, le=MAX_WATER_ML)


class StoredGoals(BaseModel):
    """Daily goals as persisted."""

    calories: int = Field(ge=0, le=MAX_GOAL)
    carbs: int = Field(ge=0, le=MAX_GOAL)
    protein: int = Field(ge=0, le=MAX_GOAL)
    fat: int = Field(ge=0, le=MAX_GOAL)
    water: int = Field(ge=0, le=MAX_GOAL)


_LOGS_ADAPTER = TypeAdapter(dict[str, StoredDayLog])


def encode_logs(logs: LogSnapshot) -> str:
    """Serialize the full date to log mapping."""
    payload = {day: _stored_day(log) for day, log in logs.items()}
    return _LOGS_ADAPTER.dump_json(payload, by_alias=True).decode("utf-8")


def decode_logs(raw: str) -> dict[str, DayLog]:
    """Parse a persisted logs slot."""
    try:
        stored = _LOGS_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise SnapshotDecodeError(f"Invalid logs slot: {exc}") from exc
    try:
        return {
            day: DayLog(
                food=tuple(_entry_from_stored(entry) for entry in log.food),
                water=log.water,
            )
            for day, log in stored.items()
        }
    except (ArithmeticError, ValueError) as exc:
        raise SnapshotDecodeError(f"Unusable logs slot entry: {exc}") from exc


def encode_goals(goals: DailyGoals) -> str:
    """Serialize the goal record."""
    stored = StoredGoals(
        calories=goals.calories,
        carbs=goals.carbs,
        protein=goals.protein,
        fat=goals.fat,
        water=goals.water,
    )
    return stored.model_dump_json()


def decode_goals(raw: str) -> DailyGoals:
    """Parse a persisted goals slot."""
    try:
        stored = StoredGoals.model_validate_json(raw)
    except ValidationError as exc:
        raise SnapshotDecodeError(f"Invalid goals slot: {exc}") from exc
    return DailyGoals(
        calories=stored.calories,
        carbs=stored.carbs,
        protein=stored.protein,
        fat=stored.fat,
        water=stored.water,
    )


def _stored_day(log: DayLog) -> StoredDayLog:
    return StoredDayLog(
        food=[
            StoredEntry(
                id=entry.id,
                name=entry.name,
                weight=entry.weight,
                portion_name=entry.portion_name,
                per100g=StoredNutrition(
                    calories=entry.per100g.calories,
                    protein=entry.per100g.protein,
                    carbs=entry.per100g.carbs,
                    fat=entry.per100g.fat,
                ),
                calories=entry.calories,
                protein=entry.protein,
                carbs=entry.carbs,
                fat=entry.fat,
            )
            for entry in log.food
        ],
        water=log.water,
    )


def _entry_from_stored(stored: StoredEntry) -> FoodEntry:
    """Rebuild an entry, recomputing absolute macros from per-100 g facts."""
    facts = stored.per100g or _per100g_from_totals(stored)
    return FoodEntry.build(
        name=stored.name,
        weight=stored.weight,
        per100g=NutritionFacts(
            calories=facts.calories,
            protein=facts.protein,
            carbs=facts.carbs,
            fat=facts.fat,
        ),
        portion_name=stored.portion_name,
        entry_id=stored.id,
    )


def _per100g_from_totals(stored: StoredEntry) -> StoredNutrition:
    """Back-derive per-100 g facts for entries saved without them.

    Raises ValidationError when the derived facts fall out of range.
    """
    if stored.weight <= 0:
        return StoredNutrition()
    scale = 100 / stored.weight
    return StoredNutrition(
        calories=stored.calories * scale,
        protein=stored.protein * scale,
        carbs=stored.carbs * scale,
        fat=stored.fat * scale,
    )
