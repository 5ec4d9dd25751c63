# core/preferences.py
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable, Optional

from PySide6.QtCore import QSettings

from core.utils import clamp

logger = logging.getLogger(__name__)

VOLUME = "volume"
DARK_THEME = "darkTheme"
ENABLED_ARTISTS = "enabledArtists"
FILTER_PANEL_VISIBLE = "filterPanelVisible"


class KeyValueStore:
    """Host persistent store: string values keyed by name."""

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.data.get(key, default)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class QSettingsStore(KeyValueStore):
    def __init__(self, organization: str, application: str):
        self.settings = QSettings(organization, application)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self.settings.value(key, default)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        self.settings.setValue(key, value)
        self.settings.sync()


# -----------------------------
# Codecs
# -----------------------------

def _encode_bool(value: Any) -> str:
    return "true" if bool(value) else "false"


def _decode_bool(raw: str) -> bool:
    s = raw.strip().lower()
    if s in ("true", "1", "yes"):
        return True
    if s in ("false", "0", "no"):
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _encode_volume(value: Any) -> str:
    return repr(clamp(float(value)))


def _decode_volume(raw: str) -> float:
    v = float(raw)
    if v != v:  # NaN
        raise ValueError("volume is NaN")
    return clamp(v)


def _encode_artists(value: Iterable[str]) -> str:
    return json.dumps(sorted(value), ensure_ascii=False)


def _decode_artists(raw: str) -> set[str]:
    data = json.loads(raw)
    if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
        raise ValueError("enabled artists must be a list of strings")
    return set(data)


CODECS: dict[str, tuple[Callable[[Any], str], Callable[[str], Any]]] = {
    VOLUME: (_encode_volume, _decode_volume),
    DARK_THEME: (_encode_bool, _decode_bool),
    ENABLED_ARTISTS: (_encode_artists, _decode_artists),
    FILTER_PANEL_VISIBLE: (_encode_bool, _decode_bool),
}

DEFAULTS: dict[str, Any] = {
    VOLUME: 1.0,
    DARK_THEME: False,
    ENABLED_ARTISTS: None,  # None = every artist in the catalog at load time
    FILTER_PANEL_VISIBLE: False,
}


class PreferenceStore:
    """
    Typed access to user preferences. Keys are namespaced per player variant
    so the shuffle and library players keep separate settings.
    """

    def __init__(self, store: KeyValueStore, namespace: str):
        self.store = store
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}/{key}"

    def get(self, key: str, default: Any = None) -> Any:
        if key not in CODECS:
            raise KeyError(f"unknown preference: {key}")
        try:
            raw = self.store.get(self._key(key))
        except Exception as e:
            logger.warning("Preference store read failed for %s: %s", key, e)
            return default
        if raw is None:
            return default
        _encode, decode = CODECS[key]
        try:
            return decode(raw)
        except (ValueError, TypeError) as e:
            logger.warning("Ignoring bad stored value for %s (%r): %s", key, raw, e)
            return default

    def set(self, key: str, value: Any) -> None:
        if key not in CODECS:
            raise KeyError(f"unknown preference: {key}")
        encode, _decode = CODECS[key]
        try:
            self.store.set(self._key(key), encode(value))
        except Exception as e:
            # writes are best-effort; a broken store must not reach the user
            logger.warning("Preference store write failed for %s: %s", key, e)

    # typed helpers
    def volume(self) -> float:
        return self.get(VOLUME, DEFAULTS[VOLUME])

    def set_volume(self, volume: float) -> None:
        self.set(VOLUME, volume)

    def dark_theme(self) -> bool:
        return self.get(DARK_THEME, DEFAULTS[DARK_THEME])

    def set_dark_theme(self, dark: bool) -> None:
        self.set(DARK_THEME, dark)

    def enabled_artists(self) -> set[str] | None:
        return self.get(ENABLED_ARTISTS, DEFAULTS[ENABLED_ARTISTS])

    def set_enabled_artists(self, artists: Iterable[str]) -> None:
        self.set(ENABLED_ARTISTS, artists)

    def filter_panel_visible(self) -> bool:
        return self.get(FILTER_PANEL_VISIBLE, DEFAULTS[FILTER_PANEL_VISIBLE])

    def set_filter_panel_visible(self, visible: bool) -> None:
        self.set(FILTER_PANEL_VISIBLE, visible)
