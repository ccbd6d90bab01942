"""Key-value slot storage interface."""

import logging
from typing import Protocol

_logger = logging.getLogger(__name__)


class SlotStore(Protocol):
    """Persistence interface for named JSON text slots."""

    def read(self, key: str) -> str | None:
        """Return the stored text for a slot, or None when absent."""

    def write(self, key: str, value: str) -> None:
        """Replace the stored text for a slot."""


def write_slot(store: SlotStore, key: str, value: str) -> bool:
    """Write a slot and report whether it succeeded.

    Failures are logged and not retried.
    """
    try:
        store.write(key, value)
    except Exception:
        _logger.exception("Failed to persist slot %s", key)
        return False
    return True


def read_slot(store: SlotStore, key: str) -> str | None:
    """Read a slot, treating a failing backend like an absent slot."""
    try:
        return store.read(key)
    except Exception:
        _logger.exception("Failed to read slot %s", key)
        return None
