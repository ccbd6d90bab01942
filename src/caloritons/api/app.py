"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date

from fastapi import FastAPI, HTTPException, Request, status

from caloritons.api.models import (
    FoodEntryIn,
    GoalsIn,
    UserStatsIn,
    WaterAmount,
    WaterDelta,
    day_payload,
)
from caloritons.api.session import router as session_router
from caloritons.app_logging import configure_logging
from caloritons.containers import AppContainer
from caloritons.services.calculator import compute_metrics, goals_from_metrics


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(session_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/days/{day}")
    async def get_day(day: date, request: Request) -> dict[str, object]:
        """Return a date's log with totals and goal progress."""
        state_container: AppContainer = request.app.state.container
        key = day.isoformat()
        return day_payload(
            key,
            state_container.day_log_store.get(key),
            state_container.goals_store.get(),
        )

    @app.post("/days/{day}/foods")
    async def upsert_food(
        day: date, body: FoodEntryIn, request: Request
    ) -> dict[str, object]:
        """Add a food, or replace the entry with the same id."""
        state_container: AppContainer = request.app.state.container
        key = day.isoformat()
        log = state_container.day_log_store.upsert_food(key, body.to_entry())
        return day_payload(key, log, state_container.goals_store.get())

    @app.delete("/days/{day}/foods/{entry_id}")
    async def delete_food(
        day: date, entry_id: str, request: Request, confirm: bool = False
    ) -> dict[str, object]:
        """Delete a food entry. Requires ``confirm=true``."""
        if not confirm:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Deleting a food entry must be confirmed.",
            )
        state_container: AppContainer = request.app.state.container
        key = day.isoformat()
        log = state_container.day_log_store.remove_food(key, entry_id)
        return day_payload(key, log, state_container.goals_store.get())

    @app.put("/days/{day}/water")
    async def set_water(
        day: date, body: WaterAmount, request: Request
    ) -> dict[str, object]:
        """Replace the water volume for a date."""
        state_container: AppContainer = request.app.state.container
        key = day.isoformat()
        log = state_container.day_log_store.set_water(key, body.amount)
        return day_payload(key, log, state_container.goals_store.get())

    @app.post("/days/{day}/water")
    async def add_water(
        day: date, body: WaterDelta, request: Request
    ) -> dict[str, object]:
        """Add water to a date; negative deltas never go below zero."""
        state_container: AppContainer = request.app.state.container
        key = day.isoformat()
        log = state_container.day_log_store.add_water(key, body.delta)
        return day_payload(key, log, state_container.goals_store.get())

    @app.get("/goals")
    async def get_goals(request: Request) -> dict[str, object]:
        """Return the active goals."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.goals_store.get())

    @app.put("/goals")
    async def replace_goals(body: GoalsIn, request: Request) -> dict[str, object]:
        """Replace all goals."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.goals_store.replace_all(body.to_goals()))

    @app.post("/calculator")
    async def calculate(body: UserStatsIn) -> dict[str, object]:
        """Return body metrics and the goals they would produce."""
        metrics = compute_metrics(body.to_stats())
        return {
            "metrics": asdict(metrics),
            "goals": asdict(goals_from_metrics(metrics)),
        }

    @app.post("/calculator/apply")
    async def apply_calculator(
        body: UserStatsIn, request: Request
    ) -> dict[str, object]:
        """Replace all goals with the calculator's targets."""
        state_container: AppContainer = request.app.state.container
        metrics, goals = state_container.tracker.apply_calculator(body.to_stats())
        return {"metrics": asdict(metrics), "goals": asdict(goals)}

    return app

