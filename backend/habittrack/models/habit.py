"""
Pydantic models for habits and check-ins
"""
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from habittrack.core.constants import NOTE_MAX_LENGTH
from habittrack.utils.themes import is_known_theme

Frequency = Literal["daily", "weekly", "monthly"]

Pattern = Literal[
    "diagonal-right",
    "diagonal-left",
    "crosshatch",
    "dots",
    "dashed-h",
    "dashed-v",
    "circles",
    "waves",
    "none",
]


def _validate_theme(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not is_known_theme(v):
        raise ValueError(f"Unknown theme '{v}'")
    return v.lower()


class AddHabitRequest(BaseModel):
    """Request model for adding a new habit"""
    name: str = Field(..., min_length=1, max_length=200, description="Habit name")
    frequency: Frequency = Field(default="daily", description="How often the habit is meant to happen")
    color: Optional[str] = Field(default=None, description="Hex colour, overridden when a theme is given")
    theme: Optional[str] = Field(default=None, description="Theme palette key, e.g. 'green'")
    pattern: Pattern = Field(default="none", description="Fill pattern for completed days")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Name must contain something other than whitespace"""
        if not v.strip():
            raise ValueError("Name is required")
        return v

    @field_validator('theme')
    @classmethod
    def validate_theme(cls, v: Optional[str]) -> Optional[str]:
        return _validate_theme(v)


class UpdateHabitRequest(BaseModel):
    """Request model for a partial habit update"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    frequency: Optional[Frequency] = None
    color: Optional[str] = None
    theme: Optional[str] = None
    pattern: Optional[Pattern] = None
    archived: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Name is required")
        return v

    @field_validator('theme')
    @classmethod
    def validate_theme(cls, v: Optional[str]) -> Optional[str]:
        return _validate_theme(v)

    def to_updates(self) -> Dict[str, Any]:
        """Fields the client actually sent, without explicit nulls"""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class ReorderHabitsRequest(BaseModel):
    """Request model for changing the display order"""
    ids: List[str] = Field(..., description="Every habit id, in the new order")


class SetValueRequest(BaseModel):
    """Request model for setting a day's intensity value"""
    value: int = Field(..., description="Repetitions for the day; negatives are treated as 0")


class UpdateNoteRequest(BaseModel):
    """Request model for a day's note"""
    note: str = Field(default="", max_length=NOTE_MAX_LENGTH, description="Note text; empty clears it")
