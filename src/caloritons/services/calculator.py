"""Body-metric calculators: BMI, BMR/TDEE, water need and macro split."""

from caloritons.domain.calculator import BodyMetrics, MacroSplit, UserStats
from caloritons.domain.goals import DailyGoals
from caloritons.domain.units import (
    KCAL_PER_GRAM_CARBS,
    KCAL_PER_GRAM_FAT,
    KCAL_PER_GRAM_PROTEIN,
    round_half_up,
)

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

# Upper bounds are exclusive: a BMI of exactly 18.5 is "normal weight".
_BMI_CATEGORIES = (
    (18.5, "underweight"),
    (24.9, "normal weight"),
    (29.9, "overweight"),
)
_BMI_OBESE = "obese"

WATER_ML_PER_KG = 35

# Share of calories from carbs, protein and fat.
CARBS_SHARE = 0.5
PROTEIN_SHARE = 0.2
FAT_SHARE = 0.3


def compute_bmi(weight: float, height_cm: float) -> float:
    """Return the unrounded BMI.

    A zero height is not guarded here and raises ZeroDivisionError.
    """
    height_m = height_cm / 100
    return weight / (height_m * height_m)


def bmi_category(bmi: float) -> str:
    """Return the category label for a BMI value."""
    for upper, label in _BMI_CATEGORIES:
        if bmi < upper:
            return label
    return _BMI_OBESE


def compute_bmr(stats: UserStats) -> float:
    """Mifflin-St Jeor basal metabolic rate."""
    bmr = 10 * stats.weight + 6.25 * stats.height - 5 * stats.age
    if stats.gender == "male":
        return bmr + 5
    return bmr - 161


def compute_tdee(stats: UserStats) -> int:
    """Maintenance calories for the stats' activity level."""
    multiplier = ACTIVITY_MULTIPLIERS[stats.activity_level]
    return round_half_up(compute_bmr(stats) * multiplier)


def compute_water_target(weight: float) -> int:
    """Daily water target in milliliters."""
    return round_half_up(weight * WATER_ML_PER_KG)


def compute_metrics(stats: UserStats) -> BodyMetrics:
    """Compute every calculator output for the given stats."""
    raw_bmi = compute_bmi(stats.weight, stats.height)
    return BodyMetrics(
        bmi=round(raw_bmi, 1),
        bmi_category=bmi_category(raw_bmi),
        tdee=compute_tdee(stats),
        water_target=compute_water_target(stats.weight),
    )


def macro_split(calories: float) -> MacroSplit:
    """Split a calorie target 50/20/30 into carb, protein and fat grams."""
    return MacroSplit(
        carbs=round_half_up(calories * CARBS_SHARE / KCAL_PER_GRAM_CARBS),
        protein=round_half_up(calories * PROTEIN_SHARE / KCAL_PER_GRAM_PROTEIN),
        fat=round_half_up(calories * FAT_SHARE / KCAL_PER_GRAM_FAT),
    )


def goals_from_metrics(metrics: BodyMetrics) -> DailyGoals:
    """Build a complete goal set from calculator output."""
    split = macro_split(metrics.tdee)
    return DailyGoals(
        calories=metrics.tdee,
        carbs=split.carbs,
        protein=split.protein,
        fat=split.fat,
        water=metrics.water_target,
    )
