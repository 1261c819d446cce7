"""Core places synchronization functionality."""

from .codec import KeyCodec, PlaceField
from .errors import (
    InvalidPath,
    InvalidSetup,
    NotConfigured,
    PlaceSyncError,
    StoreCorruption,
    StoreWriteFailure,
)
from .paths import ensure_directory, resolve_target_directory
from .service import ShortcutService, SyncResult
from .store import JsonStore, MemoryStore, PlacesStore, RegistryStore
from .synchronizer import ListSynchronizer, ReadReport, apply_plan, plan_synchronization

__all__ = [
    "InvalidPath",
    "InvalidSetup",
    "JsonStore",
    "KeyCodec",
    "ListSynchronizer",
    "MemoryStore",
    "NotConfigured",
    "PlaceField",
    "PlaceSyncError",
    "PlacesStore",
    "ReadReport",
    "RegistryStore",
    "ShortcutService",
    "StoreCorruption",
    "StoreWriteFailure",
    "SyncResult",
    "apply_plan",
    "ensure_directory",
    "plan_synchronization",
    "resolve_target_directory",
]
