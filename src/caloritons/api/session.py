"""Tracker session endpoints: date navigation, lookup and staged food."""

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from caloritons.api.models import (
    DateSelection,
    DateShift,
    LookupRequest,
    StagedWeight,
    WaterDelta,
    day_payload,
)
from caloritons.services.tracker import FAILED, NOT_FOUND, STALE, TrackerSession

if TYPE_CHECKING:
    from caloritons.containers import AppContainer

router = APIRouter(prefix="/session", tags=["session"])

_OUTCOME_STATUS = {
    NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FAILED: status.HTTP_502_BAD_GATEWAY,
    STALE: status.HTTP_409_CONFLICT,
}


def _tracker(request: Request) -> TrackerSession:
    container: AppContainer = request.app.state.container
    return container.tracker


def _session_payload(tracker: TrackerSession) -> dict[str, object]:
    payload = day_payload(
        tracker.selected_date, tracker.current_log(), tracker.goals.get()
    )
    payload["staged"] = _staged_payload(tracker)
    return payload


def _staged_payload(tracker: TrackerSession) -> dict[str, object] | None:
    if tracker.staged is None:
        return None
    preview = tracker.staged.to_entry() if tracker.staged.weight > 0 else None
    return {
        "food": asdict(tracker.staged),
        "preview": asdict(preview) if preview else None,
    }


@router.get("")
async def get_session(request: Request) -> dict[str, object]:
    """Return the selected date, its log and any staged food."""
    return _session_payload(_tracker(request))


@router.put("/date")
async def select_date(body: DateSelection, request: Request) -> dict[str, object]:
    """Switch the selected date."""
    tracker = _tracker(request)
    tracker.select_date(body.day.isoformat())
    return _session_payload(tracker)


@router.post("/date/shift")
async def shift_date(body: DateShift, request: Request) -> dict[str, object]:
    """Move the selected date by a number of days."""
    tracker = _tracker(request)
    try:
        tracker.shift_date(body.days)
    except OverflowError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Date out of range."
        ) from exc
    return _session_payload(tracker)


@router.post("/lookup")
async def lookup_food(body: LookupRequest, request: Request) -> dict[str, object]:
    """Look up a food and stage it for the selected date."""
    tracker = _tracker(request)
    outcome = await tracker.search(body.query)
    if outcome.status in _OUTCOME_STATUS:
        raise HTTPException(
            status_code=_OUTCOME_STATUS[outcome.status],
            detail=outcome.message or "Lookup result discarded.",
        )
    return _session_payload(tracker)


@router.post("/entries/{entry_id}/edit")
async def edit_entry(entry_id: str, request: Request) -> dict[str, object]:
    """Stage an existing entry for editing."""
    tracker = _tracker(request)
    if tracker.edit_entry(entry_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return _session_payload(tracker)


@router.delete("/entries/{entry_id}")
async def remove_entry(
    entry_id: str, request: Request, confirm: bool = False
) -> dict[str, object]:
    """Delete an entry of the selected date. Requires ``confirm=true``."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Deleting a food entry must be confirmed.",
        )
    tracker = _tracker(request)
    tracker.remove_entry(entry_id, confirmed=True)
    return _session_payload(tracker)


@router.patch("/staged")
async def set_staged_weight(body: StagedWeight, request: Request) -> dict[str, object]:
    """Change the staged portion weight."""
    tracker = _tracker(request)
    if tracker.set_staged_weight(body.weight) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return _session_payload(tracker)


@router.post("/staged/save")
async def save_staged(request: Request) -> dict[str, object]:
    """Add or update the staged food on the selected date."""
    tracker = _tracker(request)
    try:
        entry = tracker.save_staged()
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return _session_payload(tracker)


@router.delete("/staged")
async def cancel_staged(request: Request) -> dict[str, object]:
    """Drop the staged food."""
    tracker = _tracker(request)
    tracker.cancel_staging()
    return _session_payload(tracker)


@router.post("/water")
async def add_water(body: WaterDelta, request: Request) -> dict[str, object]:
    """Add water to the selected date."""
    tracker = _tracker(request)
    tracker.add_water(body.delta)
    return _session_payload(tracker)
