"""
Pydantic models for .habittrack export files
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from habittrack.core.constants import EXPORT_VERSION


class ImportPayload(BaseModel):
    """Structure every import file must have before it reaches the store"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: int = Field(default=EXPORT_VERSION, description="Export format version")
    habits: List[Dict[str, Any]] = Field(..., description="Habits in display order")
    check_ins: Dict[str, Dict[str, Dict[str, Any]]] = Field(
        ...,
        alias="checkIns",
        description="habitId -> date -> check-in record"
    )
    exported_at: Optional[str] = Field(default=None, alias="exportedAt")

    @field_validator('version')
    @classmethod
    def validate_version(cls, v: int) -> int:
        """Reject files written by a newer format"""
        if v < 1 or v > EXPORT_VERSION:
            raise ValueError(f"Unsupported export version {v} (expected {EXPORT_VERSION})")
        return v

    @field_validator('habits')
    @classmethod
    def validate_habit_ids(cls, v: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Every habit needs a unique string id"""
        seen = set()
        for habit in v:
            habit_id = habit.get("id")
            if not isinstance(habit_id, str) or not habit_id:
                raise ValueError("Every habit must have a string id")
            if habit_id in seen:
                raise ValueError(f"Duplicate habit id '{habit_id}'")
            seen.add(habit_id)
        return v

