"""Shared test fixtures."""

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from caloritons.config import Settings
from caloritons.containers import AppContainer
from caloritons.domain.foods import FoodEntry, NutritionFacts
from caloritons.services.day_logs import DayLogStore
from caloritons.services.goals import GoalsStore
from caloritons.services.lookup import FoodLookupClient, FoodLookupService
from caloritons.services.slots import SlotStore
from caloritons.services.tracker import TrackerSession

APPLE_JSON = json.dumps(
    {
        "name": "Maçã",
        "calories100g": 52,
        "protein100g": 0.3,
        "carbs100g": 14,
        "fat100g": 0.2,
        "standardPortionGrams": 130,
        "standardPortionName": "1 unidade média",
    }
)

BANANA_JSON = json.dumps(
    {
        "name": "Banana",
        "calories100g": 89,
        "protein100g": 1.1,
        "carbs100g": 22.8,
        "fat100g": 0.3,
        "standardPortionGrams": 120,
        "standardPortionName": "1 unidade",
    }
)


def make_entry(
    name: str = "Arroz branco",
    weight: float = 150,
    calories: float = 130,
    entry_id: str | None = None,
) -> FoodEntry:
    return FoodEntry.build(
        name=name,
        weight=weight,
        per100g=NutritionFacts(calories=calories, protein=2.5, carbs=28, fat=0.3),
        portion_name="1 concha",
        entry_id=entry_id,
    )


@dataclass
class InMemorySlotStore(SlotStore):
    """In-memory slot store for tests."""

    slots: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def read(self, key: str) -> str | None:
        return self.slots.get(key)

    def write(self, key: str, value: str) -> None:
        self.slots[key] = value
        self.writes.append(key)


@dataclass
class FailingSlotStore(SlotStore):
    """Slot store whose backend is always unavailable."""

    def read(self, key: str) -> str | None:
        raise OSError("storage unavailable")

    def write(self, key: str, value: str) -> None:
        raise OSError("storage unavailable")


@dataclass
class FakeFoodLookupClient(FoodLookupClient):
    """Returns a canned completion, or raises a configured error."""

    response: str | None = APPLE_JSON
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def complete(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response or ""


@dataclass
class GatedFoodLookupClient(FoodLookupClient):
    """Holds each completion until its gate is opened."""

    payloads: dict[str, str]
    gates: dict[str, asyncio.Event] = field(default_factory=dict)

    def gate(self, description: str) -> asyncio.Event:
        return self.gates.setdefault(description, asyncio.Event())

    async def complete(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> str:
        for description, payload in self.payloads.items():
            if f'"{description}"' in prompt:
                await self.gate(description).wait()
                return payload
        return ""


def make_tracker(
    client: FoodLookupClient | None = None,
    slots: SlotStore | None = None,
    selected_date: str = "2024-05-10",
) -> TrackerSession:
    store = slots or InMemorySlotStore()
    return TrackerSession(
        day_logs=DayLogStore(store, "caloritons_logs"),
        goals=GoalsStore(store, "caloritons_goals"),
        lookup=FoodLookupService(client=client or FakeFoodLookupClient(), model="m"),
        selected_date=selected_date,
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(openai_api_key="openai-key", data_dir=tmp_path / "data")


@pytest.fixture
def slot_store() -> InMemorySlotStore:
    return InMemorySlotStore()


@pytest.fixture
def lookup_client() -> FakeFoodLookupClient:
    return FakeFoodLookupClient()


@pytest.fixture
def container(
    settings: Settings,
    slot_store: InMemorySlotStore,
    lookup_client: FakeFoodLookupClient,
) -> AppContainer:
    day_log_store = DayLogStore(slot_store, settings.logs_slot)
    goals_store = GoalsStore(slot_store, settings.goals_slot)
    lookup_service = FoodLookupService(
        client=lookup_client,
        model=settings.openai_model,
        language=settings.lookup_language,
    )
    tracker = TrackerSession(
        day_logs=day_log_store,
        goals=goals_store,
        lookup=lookup_service,
        selected_date="2024-05-10",
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        slot_store=slot_store,
        day_log_store=day_log_store,
        goals_store=goals_store,
        lookup_service=lookup_service,
        tracker=tracker,
        close_resources=close_resources,
    )
