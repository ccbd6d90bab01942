"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from caloritons.adapters.file_slot_store import FileSlotStore
from caloritons.adapters.openai_food_client import OpenAIFoodLookupClient
from caloritons.adapters.supabase_slot_store import SupabaseSlotStore
from caloritons.config import Settings
from caloritons.services.day_logs import DayLogStore
from caloritons.services.goals import GoalsStore
from caloritons.services.lookup import FoodLookupService
from caloritons.services.slots import SlotStore
from caloritons.services.tracker import TrackerSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    slot_store: SlotStore
    day_log_store: DayLogStore
    goals_store: GoalsStore
    lookup_service: FoodLookupService
    tracker: TrackerSession
    close_resources: Callable[[], Awaitable[None]]


def build_slot_store(settings: Settings) -> SlotStore:
    """Create the configured slot store."""
    if settings.storage_backend == "file":
        return FileSlotStore(settings.data_dir)
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage needs SUPABASE_URL and a service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseSlotStore(client)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container and load persisted state."""
    resolved_settings = settings or Settings()
    slot_store = build_slot_store(resolved_settings)
    day_log_store = DayLogStore(slot_store, resolved_settings.logs_slot)
    goals_store = GoalsStore(slot_store, resolved_settings.goals_slot)
    day_log_store.load()
    goals_store.load()
    openai_client = OpenAIFoodLookupClient.create(resolved_settings.openai_api_key)
    lookup_service = FoodLookupService(
        client=openai_client,
        model=resolved_settings.openai_model,
        language=resolved_settings.lookup_language,
    )
    tracker = TrackerSession(
        day_logs=day_log_store,
        goals=goals_store,
        lookup=lookup_service,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        slot_store=slot_store,
        day_log_store=day_log_store,
        goals_store=goals_store,
        lookup_service=lookup_service,
        tracker=tracker,
        close_resources=close_resources,
    )
