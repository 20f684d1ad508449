"""
Session-scoped key-value storage.

A session store holds plain string values under string keys for the
lifetime of one play session, the way a browser's sessionStorage does.
Engines use it to survive a host restart in the middle of a game.

Implementations:
- InMemorySessionStore: dict-backed, lives as long as the process
- JsonFileSessionStore: one JSON object on disk, shared across restarts
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Protocol every session store implements."""

    def get_item(self, key: str) -> Optional[str]:
        """Return the value for ``key`` or None if absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete ``key``. Missing keys are ignored."""
        ...


class InMemorySessionStore:
    """Dict-based session store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list:
        return list(self._items.keys())

    def __len__(self) -> int:
        return len(self._items)


class JsonFileSessionStore:
    """
    Session store persisted as a single JSON object file.

    The file is re-read on every access so that two host processes
    pointed at the same path observe each other's writes. An unreadable
    or malformed file is treated as an empty session.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring session file %s: not a JSON object", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        # Readers only ever see the old file or the new one, never a partial write.
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp.write(json.dumps(data, indent=2, sort_keys=True))
        try:
            os.replace(tmp.name, self.path)
        except OSError:
            os.unlink(tmp.name)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
