"""Key-value stores backing the schedule cache and widget state."""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Abstract string key-value store.

    The application shell owns the schedule keys; readers only call the
    getters. Widget state uses the setters on its own store.
    """

    @abstractmethod
    def get_string(self, key: str) -> Optional[str]:
        """Return the string stored under ``key`` or None."""
        pass

    @abstractmethod
    def set_string(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key`` if present."""
        pass

    def get_int(self, key: str, default: int = 0) -> int:
        raw = self.get_string(key)
        if raw is None:
            return default
        try:
            return int(raw.strip())
        except ValueError:
            return default

    def set_int(self, key: str, value: int) -> None:
        self.set_string(key, str(value))


def _as_string(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class MemoryStore(KeyValueStore):
    """Dictionary backed store, used by tests and short-lived hosts."""

    def __init__(self, values: Optional[dict[str, Any]] = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def get_string(self, key: str) -> Optional[str]:
        return _as_string(self._values.get(key))

    def set_string(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileStore(KeyValueStore):
    """Store persisted as a single JSON object file.

    This is the layout the ``shared_preferences`` plugin writes on
    desktop hosts. The file is read on every lookup so that changes made
    by the application shell are picked up without any in-process cache.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        try:
            with self._path.open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Could not read preferences file %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Preferences file %s does not hold a JSON object", self._path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self._path)

    def get_string(self, key: str) -> Optional[str]:
        return _as_string(self._read().get(key))

    def set_string(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
