"""Tracker session: selected date, staged food and the actions on them."""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from caloritons.domain.calculator import BodyMetrics, UserStats
from caloritons.domain.foods import FoodEntry, StagedFood
from caloritons.domain.goals import DailyGoals
from caloritons.domain.logs import DayLog, DaySummary
from caloritons.services.calculator import compute_metrics, goals_from_metrics
from caloritons.services.day_logs import DayLogStore
from caloritons.services.goals import GoalsStore
from caloritons.services.lookup import FoodLookupError, FoodLookupService
from caloritons.services.progress import summarize_day

_logger = logging.getLogger(__name__)

FOUND = "found"
NOT_FOUND = "not_found"
FAILED = "failed"
STALE = "stale"


def today_iso() -> str:
    """Return today's date as YYYY-MM-DD."""
    return date.today().isoformat()


@dataclass(frozen=True)
class LookupOutcome:
    """Result of a food search from the user's point of view."""

    status: str
    staged: StagedFood | None = None
    message: str | None = None


@dataclass
class TrackerSession:
    """Application context owning the stores for one user session."""

    day_logs: DayLogStore
    goals: GoalsStore
    lookup: FoodLookupService
    selected_date: str = field(default_factory=today_iso)
    staged: StagedFood | None = None
    _context: int = field(default=0, init=False, repr=False)

    def current_log(self) -> DayLog:
        """Return the log for the selected date."""
        return self.day_logs.get(self.selected_date)

    def summary(self) -> DaySummary:
        """Return totals and progress for the selected date."""
        return summarize_day(self.selected_date, self.current_log(), self.goals.get())

    def select_date(self, day: str) -> str:
        """Switch to another date, dropping any staged food."""
        self.selected_date = date.fromisoformat(day).isoformat()
        self._reset_staging()
        return self.selected_date

    def shift_date(self, days: int) -> str:
        """Move the selected date by a number of days."""
        shifted = date.fromisoformat(self.selected_date) + timedelta(days=days)
        return self.select_date(shifted.isoformat())

    async def search(self, query: str) -> LookupOutcome:
        """Look up a food and stage it for the selected date.

        A response arriving after the date or staging context changed is
        discarded. Overlapping searches in the same context keep whichever
        finishes last. A blank query leaves the session untouched.
        """
        if not query.strip():
            return LookupOutcome(
                status=NOT_FOUND, message="Describe the food to look up."
            )
        context = self._context
        self.staged = None
        try:
            result = await self.lookup.lookup(query)
        except FoodLookupError:
            if context != self._context:
                return LookupOutcome(status=STALE)
            return LookupOutcome(status=FAILED, message="Error looking up food.")
        if context != self._context:
            _logger.info("Discarding stale lookup result: query=%s", query)
            return LookupOutcome(status=STALE)
        if result is None:
            return LookupOutcome(
                status=NOT_FOUND,
                message="Food not found. Try describing it in more detail.",
            )
        self.staged = result.to_staged()
        return LookupOutcome(status=FOUND, staged=self.staged)

    def edit_entry(self, entry_id: str) -> StagedFood | None:
        """Stage an entry of the selected date for editing."""
        for entry in self.current_log().food:
            if entry.id == entry_id:
                self._reset_staging()
                self.staged = StagedFood.from_entry(entry)
                return self.staged
        return None

    def set_staged_weight(self, weight: float) -> StagedFood | None:
        """Change the portion weight of the staged food."""
        if self.staged is not None:
            self.staged = self.staged.with_weight(weight)
        return self.staged

    def cancel_staging(self) -> None:
        """Drop the staged food."""
        self._reset_staging()

    def save_staged(self) -> FoodEntry | None:
        """Add or update the staged food on the selected date."""
        if self.staged is None:
            return None
        entry = self.staged.to_entry()
        self.day_logs.upsert_food(self.selected_date, entry)
        self._reset_staging()
        return entry

    def remove_entry(self, entry_id: str, *, confirmed: bool) -> bool:
        """Delete an entry once the user has confirmed it."""
        if not confirmed:
            return False
        before = self.day_logs.logs
        self.day_logs.remove_food(self.selected_date, entry_id)
        return self.day_logs.logs is not before

    def add_water(self, delta: int) -> DayLog:
        """Add water to the selected date."""
        return self.day_logs.add_water(self.selected_date, delta)

    def apply_calculator(self, stats: UserStats) -> tuple[BodyMetrics, DailyGoals]:
        """Compute metrics and replace all goals with the derived targets."""
        metrics = compute_metrics(stats)
        goals = self.goals.replace_all(goals_from_metrics(metrics))
        return metrics, goals

    def _reset_staging(self) -> None:
        self._context += 1
        self.staged = None
