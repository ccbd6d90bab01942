"""JSON file slot store for single-device persistence."""

from dataclasses import dataclass
from pathlib import Path

from caloritons.services.slots import SlotStore


@dataclass
class FileSlotStore(SlotStore):
    """Stores each slot as ``<key>.json`` inside a data directory."""

    directory: Path

    def read(self, key: str) -> str | None:
        """Return the slot file contents if it exists."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        """Replace the slot file atomically."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"
