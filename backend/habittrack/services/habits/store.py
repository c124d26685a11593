"""
Habit Store - Canonical owner of habits and check-ins
All mutations go through this class so check-in records stay normalized
"""
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
import copy
import logging
import threading
import uuid

from habittrack.core.constants import DEFAULT_THEME
from habittrack.core.exceptions import InvalidDateError
from habittrack.utils.themes import primary_color
from habittrack.utils.timezone import get_local_now, to_epoch_ms, to_iso_instant
from .repository import StateRepository, empty_state

logger = logging.getLogger(__name__)

DayLike = Union[str, date]

# Fields the store assigns itself and never takes from callers
_STORE_ASSIGNED_FIELDS = ("id", "createdAt", "archived")
_IMMUTABLE_FIELDS = ("id", "createdAt")


def day_key(day: DayLike) -> str:
    """
    Normalize a calendar day to its 'YYYY-MM-DD' storage key

    Raises:
        InvalidDateError: If the value is not a calendar date
    """
    if isinstance(day, datetime):
        return day.date().isoformat()
    if isinstance(day, date):
        return day.isoformat()
    if isinstance(day, str):
        try:
            return date.fromisoformat(day.strip()).isoformat()
        except ValueError:
            raise InvalidDateError(f"Invalid date '{day}'. Use YYYY-MM-DD")
    raise InvalidDateError(f"Invalid date {day!r}. Use YYYY-MM-DD")


def is_empty_check_in(record: Dict[str, Any]) -> bool:
    """A record with no completion and no note is represented by absence"""
    return not record.get("completed") and not record.get("note")


def _stored_value(record: Optional[Dict[str, Any]]) -> int:
    # Records written before values existed only carry the completed flag
    if not record:
        return 0
    if record.get("value") is None:
        return 1 if record.get("completed") else 0
    return record["value"]


class HabitStore:
    """
    State container for habits and their check-ins

    The store is the only writer of both collections. Every mutation builds
    the next state from the latest committed one, commits it in a single
    assignment and hands a snapshot to the persistence port.

    Args:
        repository: Optional persistence port; its state is loaded on init
            unless initial_state is given, and it is saved after each mutation
        initial_state: Optional {'habits', 'checkIns'} dict to start from
        clock: Callable returning the current aware datetime
        id_factory: Callable returning a fresh habit id
    """

    def __init__(
        self,
        repository: Optional[StateRepository] = None,
        initial_state: Optional[Dict[str, Any]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._repository = repository
        self._clock = clock or get_local_now
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._lock = threading.RLock()

        if initial_state is None:
            initial_state = repository.load() if repository else empty_state()

        self._habits: List[Dict[str, Any]] = copy.deepcopy(initial_state.get("habits", []))
        self._check_ins: Dict[str, Dict[str, Dict[str, Any]]] = copy.deepcopy(
            initial_state.get("checkIns", {})
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def habits(self) -> List[Dict[str, Any]]:
        """Habits in display order"""
        return copy.deepcopy(self._habits)

    @property
    def check_ins(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        return copy.deepcopy(self._check_ins)

    def get_habit(self, habit_id: str) -> Optional[Dict[str, Any]]:
        index = self._find_index(habit_id)
        return copy.deepcopy(self._habits[index]) if index is not None else None

    def get_check_ins(self, habit_id: str) -> Dict[str, Dict[str, Any]]:
        """Check-in map (date -> record) for one habit, empty if none"""
        return copy.deepcopy(self._check_ins.get(habit_id, {}))

    def get_check_in(self, habit_id: str, day: DayLike) -> Optional[Dict[str, Any]]:
        record = self._check_ins.get(habit_id, {}).get(day_key(day))
        return copy.deepcopy(record) if record is not None else None

    def snapshot(self) -> Dict[str, Any]:
        """Full state in the persisted layout"""
        with self._lock:
            return {"habits": copy.deepcopy(self._habits), "checkIns": copy.deepcopy(self._check_ins)}

    # ------------------------------------------------------------------
    # Habit mutations
    # ------------------------------------------------------------------

    def add_habit(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a habit and append it to the display order

        Args:
            data: Habit fields (name, frequency, color, theme, pattern).
                Any id, createdAt or archived keys are ignored.

        Returns:
            The created habit
        """
        fields = {k: v for k, v in data.items() if k not in _STORE_ASSIGNED_FIELDS}

        theme = fields.get("theme")
        if theme:
            fields["theme"] = theme.lower()
            fields["color"] = primary_color(theme)
        else:
            fields["theme"] = DEFAULT_THEME
            if not fields.get("color"):
                fields["color"] = primary_color(DEFAULT_THEME)

        with self._lock:
            habit = {
                **fields,
                "id": self._id_factory(),
                "createdAt": to_iso_instant(self._clock()),
                "archived": False,
            }
            self._commit(habits=self._habits + [habit])

        logger.info(f"Habit created: {habit.get('name')} ({habit['id']})")
        return copy.deepcopy(habit)

    def update_habit(self, habit_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Merge partial fields into a habit

        id and createdAt cannot be changed. Writing a theme also rewrites color.

        Returns:
            The updated habit, or None if no habit has this id
        """
        fields = {k: v for k, v in updates.items() if k not in _IMMUTABLE_FIELDS}
        if fields.get("theme"):
            fields["theme"] = fields["theme"].lower()
            fields["color"] = primary_color(fields["theme"])

        with self._lock:
            index = self._find_index(habit_id)
            if index is None:
                logger.warning(f"Update ignored, habit {habit_id} not found")
                return None

            habits = list(self._habits)
            habits[index] = {**habits[index], **fields}
            self._commit(habits=habits)
            updated = habits[index]

        logger.info(f"Habit {habit_id} updated: {sorted(fields)}")
        return copy.deepcopy(updated)

    def delete_habit(self, habit_id: str) -> bool:
        """
        Remove a habit together with all of its check-ins

        Returns:
            True if the habit existed
        """
        with self._lock:
            if self._find_index(habit_id) is None:
                logger.warning(f"Delete ignored, habit {habit_id} not found")
                return False

            habits = [h for h in self._habits if h.get("id") != habit_id]
            check_ins = {hid: days for hid, days in self._check_ins.items() if hid != habit_id}
            self._commit(habits=habits, check_ins=check_ins)

        logger.info(f"Habit {habit_id} deleted with its check-ins")
        return True

    def reorder_habits(self, new_order: Iterable[Union[str, Dict[str, Any]]]) -> bool:
        """
        Replace the display order

        Args:
            new_order: Habit ids (or habit dicts) in the desired order. Must
                name every current habit exactly once.

        Returns:
            True if applied, False if the ids do not match the current habits
        """
        ids = [item.get("id") if isinstance(item, dict) else item for item in new_order]

        with self._lock:
            by_id = {h.get("id"): h for h in self._habits}
            if len(ids) != len(self._habits) or len(set(ids)) != len(ids) or set(ids) != set(by_id):
                logger.warning(
                    f"Reorder rejected: got {len(ids)} ids for {len(self._habits)} habits "
                    f"or the id sets differ"
                )
                return False

            self._commit(habits=[by_id[habit_id] for habit_id in ids])

        logger.debug(f"Habits reordered: {ids}")
        return True

    # ------------------------------------------------------------------
    # Check-in mutations
    # ------------------------------------------------------------------

    def toggle_check_in(self, habit_id: str, day: DayLike) -> Optional[Dict[str, Any]]:
        """
        Flip completion for one day

        Completed days become value 0 / not completed, anything else becomes
        value 1 / completed. The note is kept.

        Returns:
            The stored record, or None if the day is now empty (or the habit
            does not exist)
        """
        def flip(current):
            if current and current.get("completed"):
                return 0
            return 1

        return self._write_check_in(habit_id, day, value_for=flip)

    def set_check_in_value(self, habit_id: str, day: DayLike, value: int) -> Optional[Dict[str, Any]]:
        """
        Set the intensity value for one day; completed follows value > 0

        Negative values are clamped to 0.
        """
        value = max(0, int(value))
        return self._write_check_in(habit_id, day, value_for=lambda current: value)

    def update_note(self, habit_id: str, day: DayLike, note: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Set or clear the note for one day

        A note alone keeps an incomplete day stored; clearing the note of an
        incomplete day removes the record.
        """
        return self._write_check_in(habit_id, day, value_for=_stored_value, note=note or "")

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    def import_data(self, habits: List[Dict[str, Any]], check_ins: Dict[str, Dict[str, Dict[str, Any]]]) -> None:
        """
        Replace both collections wholesale

        The payload is trusted; validation belongs to the import parser.
        """
        with self._lock:
            self._commit(habits=copy.deepcopy(list(habits)), check_ins=copy.deepcopy(dict(check_ins)))
        logger.info(f"Imported {len(habits)} habits")

    def reset_data(self) -> None:
        """Remove every habit and check-in"""
        with self._lock:
            self._commit(habits=[], check_ins={})
        logger.info("All habit data reset")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find_index(self, habit_id: str) -> Optional[int]:
        for index, habit in enumerate(self._habits):
            if habit.get("id") == habit_id:
                return index
        return None

    def _write_check_in(
        self,
        habit_id: str,
        day: DayLike,
        value_for: Callable[[Optional[Dict[str, Any]]], int],
        note: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Read-modify-write of a single check-in record

        value_for receives the current record (or None) and returns the new
        value. When note is None the existing note is kept.
        """
        key = day_key(day)

        with self._lock:
            if self._find_index(habit_id) is None:
                logger.warning(f"Check-in ignored, habit {habit_id} not found")
                return None

            days = dict(self._check_ins.get(habit_id, {}))
            current = days.get(key)

            value = value_for(current)
            if note is None:
                note = current.get("note") if current else None

            record = {
                "completed": value > 0,
                "value": value,
                "timestamp": to_epoch_ms(self._clock()),
            }
            if note:
                record["note"] = note

            if is_empty_check_in(record):
                days.pop(key, None)
                stored = None
            else:
                days[key] = record
                stored = record

            check_ins = dict(self._check_ins)
            check_ins[habit_id] = days
            self._commit(check_ins=check_ins)

        logger.debug(f"Check-in {habit_id}/{key} -> {stored}")
        return copy.deepcopy(stored) if stored is not None else None

    def _commit(
        self,
        habits: Optional[List[Dict[str, Any]]] = None,
        check_ins: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None,
    ) -> None:
        # Both collections are swapped before anything observes the new state
        if habits is not None:
            self._habits = habits
        if check_ins is not None:
            self._check_ins = check_ins

        if self._repository is not None:
            self._repository.save(self.snapshot())
