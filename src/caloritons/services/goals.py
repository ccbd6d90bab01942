"""Active daily goals."""

import logging
from dataclasses import dataclass

from caloritons.domain.goals import DEFAULT_GOALS, DailyGoals
from caloritons.services.slots import SlotStore, read_slot, write_slot
from caloritons.services.snapshots import (
    SnapshotDecodeError,
    decode_goals,
    encode_goals,
)

_logger = logging.getLogger(__name__)


@dataclass
class GoalsStore:
    """Single goal record, replaced wholesale and persisted on change."""

    slots: SlotStore
    slot_key: str
    goals: DailyGoals = DEFAULT_GOALS
    last_save_ok: bool | None = None

    def load(self) -> None:
        """Read the goals slot, keeping the defaults if it is unusable."""
        raw = read_slot(self.slots, self.slot_key)
        if raw is None:
            return
        try:
            self.goals = decode_goals(raw)
        except SnapshotDecodeError:
            _logger.warning("Ignoring unreadable goals slot %s", self.slot_key)

    def get(self) -> DailyGoals:
        """Return the active goals."""
        return self.goals

    def replace_all(self, goals: DailyGoals) -> DailyGoals:
        """Replace every goal field at once and persist."""
        self.goals = goals
        self.last_save_ok = write_slot(self.slots, self.slot_key, encode_goals(goals))
        return self.goals
