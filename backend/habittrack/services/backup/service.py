"""
Backup Service - .habittrack export files and validated imports
Nothing reaches HabitStore.import_data until the payload has been validated here
"""
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
import json
import logging

from pydantic import ValidationError

from habittrack.core.constants import EXPORT_FILE_EXTENSION, EXPORT_FILE_PREFIX, EXPORT_VERSION
from habittrack.core.exceptions import InvalidImportError, StorageError
from habittrack.models.backup import ImportPayload
from habittrack.services.habits.store import HabitStore
from habittrack.utils.timezone import get_local_now, to_iso_instant

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = "Invalid file format"


def build_export(
    habits: List[Dict[str, Any]],
    check_ins: Dict[str, Dict[str, Dict[str, Any]]],
    exported_at: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Build the export document

    Args:
        habits: Habits in display order
        check_ins: habitId -> date -> record
        exported_at: Export time (defaults to now)

    Returns:
        Dict with version, habits, checkIns and exportedAt
    """
    return {
        "version": EXPORT_VERSION,
        "habits": habits,
        "checkIns": check_ins,
        "exportedAt": to_iso_instant(exported_at or get_local_now()),
    }


def dumps_export(payload: Dict[str, Any]) -> str:
    """Serialize an export document as indented JSON"""
    return json.dumps(payload, ensure_ascii=False, indent=2)


def export_filename(day: date) -> str:
    """File name for a backup taken on `day`"""
    return f"{EXPORT_FILE_PREFIX}{day.isoformat()}{EXPORT_FILE_EXTENSION}"


def export_from(store: HabitStore, exported_at: Optional[datetime] = None) -> Dict[str, Any]:
    """Export the store's current state"""
    state = store.snapshot()
    return build_export(state["habits"], state["checkIns"], exported_at)


def parse_import(raw: Union[str, bytes, Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """
    Parse and validate an import file

    Args:
        raw: File contents (text or bytes) or an already decoded JSON object

    Returns:
        Tuple of (habits, check_ins) ready for HabitStore.import_data

    Raises:
        InvalidImportError: If the payload is not JSON, not an object, misses
            habits or checkIns, or has the wrong structure
    """
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Import rejected, not JSON: {e}")
            raise InvalidImportError(INVALID_FORMAT_MESSAGE)
    else:
        data = raw

    if not isinstance(data, dict):
        logger.warning("Import rejected, payload is not an object")
        raise InvalidImportError(INVALID_FORMAT_MESSAGE)

    missing = [key for key in ("habits", "checkIns") if key not in data]
    if missing:
        logger.warning(f"Import rejected, missing keys: {missing}")
        raise InvalidImportError(INVALID_FORMAT_MESSAGE)

    try:
        payload = ImportPayload.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Import rejected, invalid structure: {e.error_count()} error(s)")
        raise InvalidImportError(INVALID_FORMAT_MESSAGE)

    return payload.habits, payload.check_ins


def import_into(store: HabitStore, raw: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Validate a payload and replace the store's state with it

    Raises:
        InvalidImportError: If the payload is invalid (store left untouched)
    """
    habits, check_ins = parse_import(raw)
    store.import_data(habits, check_ins)

    return {
        "status": "success",
        "message": f"Imported {len(habits)} habits",
        "habits": len(habits),
        "check_ins": sum(len(days) for days in check_ins.values()),
    }


def write_export_file(store: HabitStore, directory: Union[str, Path], now: Optional[datetime] = None) -> Path:
    """
    Write a backup of the store into `directory`

    Returns:
        Path of the written file

    Raises:
        StorageError: If the file cannot be written
    """
    now = now or get_local_now()
    path = Path(directory).expanduser() / export_filename(now.date())

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dumps_export(export_from(store, now)) + "\n", encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to write export {path}: {e}")
        raise StorageError(f"Failed to write export: {e}")

    logger.info(f"Exported habit data to {path}")
    return path


def read_import_file(path: Union[str, Path]) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """
    Read and validate a .habittrack file

    Raises:
        StorageError: If the file cannot be read
        InvalidImportError: If its contents are invalid
    """
    path = Path(path).expanduser()
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.error(f"Failed to read import file {path}: {e}")
        raise StorageError(f"Failed to read import file: {e}")
    return parse_import(raw)
