"""Domain models for per-date logs and their aggregates."""

from collections.abc import Mapping
from dataclasses import dataclass

from caloritons.domain.foods import FoodEntry


@dataclass(frozen=True)
class DayLog:
    """Foods and water logged for one calendar date."""

    food: tuple[FoodEntry, ...] = ()
    water: int = 0


EMPTY_DAY = DayLog()

# Read-only mapping of ISO date (YYYY-MM-DD) to its log.
LogSnapshot = Mapping[str, DayLog]


@dataclass(frozen=True)
class DayTotals:
    """Summed absolute macros for a day."""

    calories: int
    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class Progress:
    """Progress of a total against its goal.

    ``ratio`` is clamped to 1.0 for progress bars, ``percent`` is not.
    Both are None when the goal is not positive.
    """

    total: int
    goal: int
    ratio: float | None
    percent: int | None


@dataclass(frozen=True)
class DaySummary:
    """Totals and goal progress for one date."""

    day: str
    totals: DayTotals
    calories: Progress
    protein: Progress
    carbs: Progress
    fat: Progress
    water: Progress
