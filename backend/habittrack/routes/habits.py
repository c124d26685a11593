"""
Habit Routes - Endpoints for habits, statistics and calendars
"""
from datetime import date
from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from habittrack.core.config import settings
from habittrack.core.dependencies import get_store, get_today, get_tz
from habittrack.core.exceptions import InvalidHabitDataError, StorageError
from habittrack.models.habit import AddHabitRequest, ReorderHabitsRequest, UpdateHabitRequest
from habittrack.services.habits import build_calendar, habit_stats, recent_days
from habittrack.services.habits.store import HabitStore

router = APIRouter(prefix="/habits", tags=["habits"])


def require_habit(store: HabitStore, habit_id: str) -> Dict[str, Any]:
    """Fetch a habit or answer 404"""
    habit = store.get_habit(habit_id)
    if habit is None:
        raise HTTPException(status_code=404, detail=f"Habit {habit_id} not found")
    return habit


def _with_stats(store: HabitStore, habit: Dict[str, Any], today: date, tz) -> Dict[str, Any]:
    check_ins = store.get_check_ins(habit["id"])
    return {
        **habit,
        "stats": habit_stats(habit, check_ins, today, tz),
        "recentDays": recent_days(check_ins, today),
    }


@router.get("")
async def list_habits(
    store: HabitStore = Depends(get_store),
    today: date = Depends(get_today),
    tz=Depends(get_tz)
):
    """All habits in display order with their statistics"""
    return {
        "status": "success",
        "date": str(today),
        "habits": [_with_stats(store, habit, today, tz) for habit in store.habits]
    }


@router.post("", status_code=201)
async def add_habit(request: AddHabitRequest, store: HabitStore = Depends(get_store)):
    """Add a new habit"""
    try:
        habit = store.add_habit(request.model_dump(exclude_none=True))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {
        "status": "success",
        "message": f"Habit '{habit['name']}' added successfully",
        "data": habit
    }


@router.put("/order")
async def reorder_habits(request: ReorderHabitsRequest, store: HabitStore = Depends(get_store)):
    """Replace the display order; the ids must match the current habits exactly"""
    try:
        applied = store.reorder_habits(request.ids)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not applied:
        raise HTTPException(status_code=409, detail="Order must list every habit id exactly once")
    return {"status": "success", "ids": [h["id"] for h in store.habits]}


@router.get("/{habit_id}")
async def get_habit(
    habit_id: str,
    store: HabitStore = Depends(get_store),
    today: date = Depends(get_today),
    tz=Depends(get_tz)
):
    """One habit with its statistics"""
    habit = require_habit(store, habit_id)
    return {"status": "success", "data": _with_stats(store, habit, today, tz)}


@router.patch("/{habit_id}")
async def update_habit(habit_id: str, request: UpdateHabitRequest, store: HabitStore = Depends(get_store)):
    """Update name, frequency, colours, pattern or archived flag"""
    try:
        habit = store.update_habit(habit_id, request.to_updates())
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if habit is None:
        raise HTTPException(status_code=404, detail=f"Habit {habit_id} not found")
    return {"status": "success", "message": f"Habit '{habit.get('name')}' updated", "data": habit}


@router.delete("/{habit_id}")
async def delete_habit(habit_id: str, store: HabitStore = Depends(get_store)):
    """Delete a habit and all of its check-ins"""
    try:
        deleted = store.delete_habit(habit_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Habit {habit_id} not found")
    return {"status": "success", "message": "Habit deleted", "habit_id": habit_id}


@router.get("/{habit_id}/stats")
async def get_habit_stats(
    habit_id: str,
    store: HabitStore = Depends(get_store),
    today: date = Depends(get_today),
    tz=Depends(get_tz)
):
    """Streaks, totals and completion rate"""
    habit = require_habit(store, habit_id)
    return {
        "status": "success",
        "date": str(today),
        "stats": habit_stats(habit, store.get_check_ins(habit_id), today, tz)
    }


@router.get("/{habit_id}/calendar")
async def get_habit_calendar(
    habit_id: str,
    weeks: Optional[int] = Query(default=None, ge=1, le=104),
    week_start: Optional[Literal["sunday", "monday"]] = Query(default=None),
    store: HabitStore = Depends(get_store),
    today: date = Depends(get_today)
):
    """Heatmap weeks ending with the current week"""
    require_habit(store, habit_id)
    try:
        weeks_data = build_calendar(
            store.get_check_ins(habit_id),
            today,
            weeks=weeks or settings.HEATMAP_WEEKS,
            week_start=week_start or settings.WEEK_START
        )
    except InvalidHabitDataError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "success", "date": str(today), "weeks": weeks_data}
