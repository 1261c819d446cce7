"""Data models for places synchronization."""

from .config import (
    DEFAULT_LABEL,
    PlacesSettings,
    ShortcutConfig,
    dialogs_key_path,
)
from .places import PlaceEntry, StoreValue, WritePlan

__all__ = [
    "DEFAULT_LABEL",
    "PlaceEntry",
    "PlacesSettings",
    "ShortcutConfig",
    "StoreValue",
    "WritePlan",
    "dialogs_key_path",
]
