"""Supabase table slot store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from caloritons.services.slots import SlotStore

SLOTS_TABLE = "kv_slots"


@dataclass
class SupabaseSlotStore(SlotStore):
    """Supabase implementation keeping one row per slot."""

    client: Client
    table: str = SLOTS_TABLE

    def read(self, key: str) -> str | None:
        """Return the stored value for a slot."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def write(self, key: str, value: str) -> None:
        """Insert or replace the slot row."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()
