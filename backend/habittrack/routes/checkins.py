"""
Check-in Routes - Toggle, value and note edits for a single day
"""
from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException

from habittrack.core.dependencies import get_store, get_today
from habittrack.core.exceptions import StorageError
from habittrack.models.habit import SetValueRequest, UpdateNoteRequest
from habittrack.services.habits.store import HabitStore
from habittrack.routes.habits import require_habit

router = APIRouter(prefix="/habits/{habit_id}/checkins", tags=["checkins"])


def _reject_future(day: date, today: date) -> None:
    if day > today:
        raise HTTPException(status_code=400, detail=f"Cannot check in on future date {day}")


def _result(day: date, record: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {"status": "success", "date": str(day), "check_in": record}


@router.get("")
async def list_check_ins(habit_id: str, store: HabitStore = Depends(get_store)):
    """All stored check-ins for a habit"""
    require_habit(store, habit_id)
    return {"status": "success", "habit_id": habit_id, "check_ins": store.get_check_ins(habit_id)}


@router.post("/{day}/toggle")
async def toggle_check_in(
    habit_id: str,
    day: date,
    store: HabitStore = Depends(get_store),
    today: date = Depends(get_today)
):
    """Mark a day done, or undo it"""
    require_habit(store, habit_id)
    _reject_future(day, today)
    try:
        return _result(day, store.toggle_check_in(habit_id, day))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{day}/value")
async def set_check_in_value(
    habit_id: str,
    day: date,
    request: SetValueRequest,
    store: HabitStore = Depends(get_store),
    today: date = Depends(get_today)
):
    """Set a day's repetitions (0 clears completion)"""
    require_habit(store, habit_id)
    _reject_future(day, today)
    try:
        return _result(day, store.set_check_in_value(habit_id, day, request.value))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{day}/note")
async def update_note(
    habit_id: str,
    day: date,
    request: UpdateNoteRequest,
    store: HabitStore = Depends(get_store),
    today: date = Depends(get_today)
):
    """Set or clear a day's note"""
    require_habit(store, habit_id)
    _reject_future(day, today)
    try:
        return _result(day, store.update_note(habit_id, day, request.note))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
