"""Rounding and energy constants shared by the nutrition models."""

import math

KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_FAT = 9

# Accepted ranges for stored and submitted values. Derived macros of any
# in-range entry stay finite.
MAX_PORTION_GRAMS = 100_000
MAX_PER_100G = 10_000
MAX_ENTRY_TOTAL = MAX_PORTION_GRAMS * MAX_PER_100G // 100
MAX_WATER_ML = 1_000_000
MAX_GOAL = 1_000_000


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounding towards +infinity."""
    return math.floor(value + 0.5)
