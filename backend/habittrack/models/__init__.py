"""
Pydantic models for the application
"""
from habittrack.models.habit import (
    AddHabitRequest,
    UpdateHabitRequest,
    ReorderHabitsRequest,
    SetValueRequest,
    UpdateNoteRequest
)
from habittrack.models.backup import ImportPayload

__all__ = [
    "AddHabitRequest",
    "UpdateHabitRequest",
    "ReorderHabitsRequest",
    "SetValueRequest",
    "UpdateNoteRequest",
    "ImportPayload"
]
