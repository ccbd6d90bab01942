"""Per-date food and water logs."""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from caloritons.domain.foods import FoodEntry
from caloritons.domain.logs import EMPTY_DAY, DayLog, LogSnapshot
from caloritons.services.slots import SlotStore, read_slot, write_slot
from caloritons.services.snapshots import (
    SnapshotDecodeError,
    decode_logs,
    encode_logs,
)

_logger = logging.getLogger(__name__)


def freeze_logs(logs: dict[str, DayLog]) -> LogSnapshot:
    """Wrap a mapping as a read-only snapshot."""
    return MappingProxyType(dict(logs))


EMPTY_LOGS: LogSnapshot = freeze_logs({})


def get_log(logs: LogSnapshot, day: str) -> DayLog:
    """Return the log for a date, or an empty log when none exists."""
    return logs.get(day, EMPTY_DAY)


def upsert_food(logs: LogSnapshot, day: str, entry: FoodEntry) -> LogSnapshot:
    """Replace the entry with the same id in place, or append it."""
    current = get_log(logs, day)
    if any(item.id == entry.id for item in current.food):
        food = tuple(entry if item.id == entry.id else item for item in current.food)
    else:
        food = (*current.food, entry)
    return _with_day(logs, day, replace(current, food=food))


def remove_food(logs: LogSnapshot, day: str, entry_id: str) -> LogSnapshot:
    """Remove an entry by id. Returns ``logs`` itself when the id is absent."""
    current = get_log(logs, day)
    food = tuple(item for item in current.food if item.id != entry_id)
    if len(food) == len(current.food):
        return logs
    return _with_day(logs, day, replace(current, food=food))


def set_water(logs: LogSnapshot, day: str, amount: int) -> LogSnapshot:
    """Replace the water volume for a date."""
    current = get_log(logs, day)
    return _with_day(logs, day, replace(current, water=max(0, amount)))


def add_water(logs: LogSnapshot, day: str, delta: int) -> LogSnapshot:
    """Add a (possibly negative) volume, never going below zero."""
    return set_water(logs, day, get_log(logs, day).water + delta)


def _with_day(logs: LogSnapshot, day: str, log: DayLog) -> LogSnapshot:
    updated = dict(logs)
    updated[day] = log
    return freeze_logs(updated)


@dataclass
class DayLogStore:
    """Holds the current log snapshot and persists it after each change."""

    slots: SlotStore
    slot_key: str
    logs: LogSnapshot = field(default_factory=lambda: EMPTY_LOGS)
    last_save_ok: bool | None = None

    def load(self) -> None:
        """Read the logs slot, keeping the current snapshot if it is unusable."""
        raw = read_slot(self.slots, self.slot_key)
        if raw is None:
            return
        try:
            self.logs = freeze_logs(decode_logs(raw))
        except SnapshotDecodeError:
            _logger.warning("Ignoring unreadable logs slot %s", self.slot_key)

    def get(self, day: str) -> DayLog:
        """Return the log for a date."""
        return get_log(self.logs, day)

    def upsert_food(self, day: str, entry: FoodEntry) -> DayLog:
        """Add or replace an entry on a date."""
        self._commit(upsert_food(self.logs, day, entry))
        return self.get(day)

    def remove_food(self, day: str, entry_id: str) -> DayLog:
        """Remove an entry from a date."""
        self._commit(remove_food(self.logs, day, entry_id))
        return self.get(day)

    def set_water(self, day: str, amount: int) -> DayLog:
        """Replace the water volume for a date."""
        self._commit(set_water(self.logs, day, amount))
        return self.get(day)

    def add_water(self, day: str, delta: int) -> DayLog:
        """Add water to a date, clamping the result at zero."""
        self._commit(add_water(self.logs, day, delta))
        return self.get(day)

    def save(self) -> bool:
        """Write the snapshot to its slot. An empty snapshot is not written."""
        if not self.logs:
            return True
        self.last_save_ok = write_slot(
            self.slots, self.slot_key, encode_logs(self.logs)
        )
        return self.last_save_ok

    def _commit(self, logs: LogSnapshot) -> None:
        if logs is self.logs:
            return
        self.logs = logs
        self.save()
