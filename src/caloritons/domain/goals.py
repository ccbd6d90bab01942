"""Domain models for daily targets."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyGoals:
    """Active daily targets applied to every date."""

    calories: int
    carbs: int
    protein: int
    fat: int
    water: int


DEFAULT_GOALS = DailyGoals(calories=2000, carbs=250, protein=100, fat=66, water=2500)
