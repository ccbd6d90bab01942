"""Day totals and goal progress, recomputed on demand."""

from caloritons.domain.goals import DailyGoals
from caloritons.domain.logs import DayLog, DaySummary, DayTotals, Progress
from caloritons.domain.units import round_half_up


def day_totals(log: DayLog) -> DayTotals:
    """Sum absolute macros over a day's entries."""
    return DayTotals(
        calories=sum(entry.calories for entry in log.food),
        protein=sum(entry.protein for entry in log.food),
        carbs=sum(entry.carbs for entry in log.food),
        fat=sum(entry.fat for entry in log.food),
    )


def progress(total: int, goal: int) -> Progress:
    """Return clamped and raw progress of a total towards a goal."""
    if goal <= 0:
        return Progress(total=total, goal=goal, ratio=None, percent=None)
    raw = total / goal
    return Progress(
        total=total,
        goal=goal,
        ratio=min(raw, 1.0),
        percent=round_half_up(raw * 100),
    )


def summarize_day(day: str, log: DayLog, goals: DailyGoals) -> DaySummary:
    """Aggregate a day's log against the active goals."""
    totals = day_totals(log)
    return DaySummary(
        day=day,
        totals=totals,
        calories=progress(totals.calories, goals.calories),
        protein=progress(totals.protein, goals.protein),
        carbs=progress(totals.carbs, goals.carbs),
        fat=progress(totals.fat, goals.fat),
        water=progress(log.water, goals.water),
    )
