"""Process-wide key-value settings, scoped per extension and persisted to JSON with debouncing."""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional
from loguru import logger

from chunkloom.config import DEFAULT_EXTENSION_NAME

PLAINTEXT_MODE_KEY = "keyword_input_plaintext"
DEFAULT_DEBOUNCE_SECONDS = 1.0


class SettingsStore:
    """Settings grouped by extension identifier.

    ``save_debounced`` coalesces bursts of writes into one file write after
    ``debounce_seconds``; outside a running event loop it writes immediately.
    """

    def __init__(self, path: Optional[str] = None, debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS):
        """
        Args:
            path: JSON file to load from and persist to; None keeps settings in memory only.
            debounce_seconds: Delay before a debounced save hits the file.
        """
        self.path = Path(path) if path else None
        self.debounce_seconds = debounce_seconds
        self._data: Dict[str, Dict[str, Any]] = {}
        self._pending: Optional[asyncio.TimerHandle] = None
        self.save_count = 0
        self._load()

    def _load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable settings file {self.path}: {e}")
            return
        if isinstance(data, dict):
            self._data = {k: v for k, v in data.items() if isinstance(v, dict)}

    def scope(self, extension: str = DEFAULT_EXTENSION_NAME) -> Dict[str, Any]:
        """The settings dict of an extension, created on first access."""
        return self._data.setdefault(extension, {})

    def get(self, key: str, default: Any = None, extension: str = DEFAULT_EXTENSION_NAME) -> Any:
        return self.scope(extension).get(key, default)

    def set(self, key: str, value: Any, extension: str = DEFAULT_EXTENSION_NAME) -> None:
        self.scope(extension)[key] = value

    def flush(self) -> None:
        """Write the settings now and cancel any pending debounced save."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.save_count += 1
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def save_debounced(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.flush()
            return
        if self._pending is not None:
            self._pending.cancel()
        self._pending = loop.call_later(self.debounce_seconds, self._save_pending)

    def _save_pending(self) -> None:
        self._pending = None
        try:
            self.flush()
        except OSError as e:
            logger.error(f"Failed to save settings to {self.path}: {e}")

    @property
    def has_pending_save(self) -> bool:
        return self._pending is not None


def is_plaintext_mode(store: SettingsStore, extension: str = DEFAULT_EXTENSION_NAME) -> bool:
    """Whether keywords are edited as plaintext (``keyword:weight`` list) instead of tag widgets."""
    scope = store.scope(extension)
    if PLAINTEXT_MODE_KEY not in scope:
        scope[PLAINTEXT_MODE_KEY] = False
    return bool(scope[PLAINTEXT_MODE_KEY])


def toggle_plaintext_mode(store: SettingsStore, extension: str = DEFAULT_EXTENSION_NAME) -> bool:
    """Flip the keyword entry mode, schedule a save and return the new value."""
    enabled = not is_plaintext_mode(store, extension)
    store.set(PLAINTEXT_MODE_KEY, enabled, extension)
    store.save_debounced()
    return enabled
