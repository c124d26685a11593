"""
Habits Repository - Persistence port for the habit store
Loads the full state at startup and saves it after every committed mutation
"""
from pathlib import Path
from typing import Any, Dict, Optional, Union
import copy
import json
import logging
import os
import tempfile

from habittrack.core.exceptions import StorageError

logger = logging.getLogger(__name__)


def empty_state() -> Dict[str, Any]:
    """Fresh state with no habits and no check-ins"""
    return {"habits": [], "checkIns": {}}


class StateRepository:
    """
    Base persistence port. The store calls load() once when it is created
    and save() with the complete state after each mutation.
    """

    def load(self) -> Dict[str, Any]:
        raise NotImplementedError

    def save(self, state: Dict[str, Any]) -> None:
        raise NotImplementedError


class InMemoryRepository(StateRepository):
    """Keeps the last saved state in memory"""

    def __init__(self, initial_state: Optional[Dict[str, Any]] = None):
        self.state = copy.deepcopy(initial_state) if initial_state else empty_state()
        self.save_count = 0

    def load(self) -> Dict[str, Any]:
        return copy.deepcopy(self.state)

    def save(self, state: Dict[str, Any]) -> None:
        self.state = copy.deepcopy(state)
        self.save_count += 1


class JsonFileRepository(StateRepository):
    """
    Stores the state as a single JSON document on disk

    A missing file reads as an empty state. A file that exists but cannot be
    parsed raises StorageError instead of being replaced.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> Dict[str, Any]:
        """
        Read the persisted state

        Returns:
            Dict with 'habits' and 'checkIns'

        Raises:
            StorageError: If the file is unreadable or not a state document
        """
        if not self.path.exists():
            logger.info(f"No state file at {self.path}, starting empty")
            return empty_state()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read state file {self.path}: {e}")
            raise StorageError(f"Failed to read state file: {e}")

        if not isinstance(data, dict):
            logger.error(f"State file {self.path} does not contain an object")
            raise StorageError("State file does not contain an object")

        habits = data.get("habits", [])
        check_ins = data.get("checkIns", {})
        if not isinstance(habits, list) or not isinstance(check_ins, dict):
            logger.error(f"State file {self.path} has malformed collections")
            raise StorageError("State file has malformed habits or checkIns")

        logger.debug(f"Loaded {len(habits)} habits from {self.path}")
        return {"habits": habits, "checkIns": check_ins}

    def save(self, state: Dict[str, Any]) -> None:
        """
        Write the state atomically (temp file + rename)

        Raises:
            StorageError: If the write fails
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(state, f, ensure_ascii=False, indent=2)
                    f.write("\n")
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error(f"Failed to write state file {self.path}: {e}")
            raise StorageError(f"Failed to write state file: {e}")
