"""Key/value stores for user preferences such as the zoom level."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from tripline.core.logger import log_warning


class PreferenceStore(Protocol):
    """Get/set port owned by the host application."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class MemoryPreferenceStore:
    """Preferences kept in memory only."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonPreferenceStore:
    """Preferences persisted in a JSON file."""

    def __init__(self, path: Path):
        """
        Args:
            path: Path to the preferences file
        """
        self.path = path
        self._data: Dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load preferences from file."""
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                self._data = data
        except (json.JSONDecodeError, IOError):
            self._data = {}

    def _save(self) -> None:
        """Save preferences to file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            log_warning(f"preferences not saved to {self.path}: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()
