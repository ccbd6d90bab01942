"""Domain models for the body-metric calculators."""

from dataclasses import dataclass
from typing import Literal

Gender = Literal["male", "female"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]


@dataclass(frozen=True)
class UserStats:
    """Body stats entered into the calculator. Never persisted."""

    weight: float
    height: float
    age: int
    gender: Gender
    activity_level: ActivityLevel


DEFAULT_STATS = UserStats(
    weight=70, height=170, age=30, gender="female", activity_level="sedentary"
)


@dataclass(frozen=True)
class BodyMetrics:
    """Calculator output."""

    bmi: float
    bmi_category: str
    tdee: int
    water_target: int


@dataclass(frozen=True)
class MacroSplit:
    """Gram targets derived from a calorie target."""

    carbs: int
    protein: int
    fat: int
