"""Flat key/value stores holding the host's file-dialog settings."""

import json
from pathlib import Path
from typing import Any

from ..models.places import StoreValue
from .errors import PlaceSyncError, StoreCorruption, StoreWriteFailure


class PlacesStore:
    """Narrow interface over the host's flat key/value store.

    Enumeration order is whatever the backing store reports; callers treat
    it as the order of the places list.
    """

    def enumerate(self) -> list[tuple[str, Any]]:
        """Return every (key, value) pair currently in the store."""
        raise NotImplementedError

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for a key, or default when absent."""
        raise NotImplementedError

    def set(self, key: str, value: StoreValue) -> None:
        """Create or overwrite a single value."""
        raise NotImplementedError

    def delete(self, key: str) -> None:
        """Remove a single value; absent keys are ignored."""
        raise NotImplementedError


class MemoryStore(PlacesStore):
    """In-memory store, enumerated in insertion order."""

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self.values: dict[str, Any] = dict(values or {})

    def enumerate(self) -> list[tuple[str, Any]]:
        return list(self.values.items())

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def set(self, key: str, value: StoreValue) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


class JsonStore(PlacesStore):
    """Store persisted as a flat JSON object on disk.

    Every set and delete is written through immediately, mirroring the
    per-value writes of the host store.
    """

    def __init__(self, store_file: Path) -> None:
        """Initialize store.

        Args:
            store_file: Path to the JSON file (created on first write)
        """
        self.store_file = Path(store_file)
        self._values: dict[str, Any] | None = None

    @property
    def values(self) -> dict[str, Any]:
        """Get or load the stored values."""
        if self._values is None:
            self._values = self._load()
        return self._values

    def _load(self) -> dict[str, Any]:
        """Load values from disk or start empty."""
        if not self.store_file.exists():
            return {}
        try:
            with open(self.store_file, encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            raise StoreCorruption(f"Store file {self.store_file} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise StoreCorruption(f"Store file {self.store_file} must hold a JSON object")
        return data

    def _save(self, key: str, operation: str) -> None:
        """Write values to disk."""
        try:
            self.store_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.store_file, "w", encoding="utf-8") as f:
                json.dump(self.values, f, indent=2)
                f.write("\n")
        except OSError as e:
            raise StoreWriteFailure(
                f"Failed to {operation} '{key}' in {self.store_file}: {e}", key, operation
            ) from e

    def enumerate(self) -> list[tuple[str, Any]]:
        return list(self.values.items())

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def set(self, key: str, value: StoreValue) -> None:
        self.values[key] = value
        self._save(key, "set")

    def delete(self, key: str) -> None:
        if key not in self.values:
            return
        del self.values[key]
        self._save(key, "delete")


class RegistryStore(PlacesStore):
    """Values of a single registry key under HKEY_CURRENT_USER (Windows only)."""

    def __init__(self, key_path: str) -> None:
        """Initialize store.

        Args:
            key_path: Key path relative to HKEY_CURRENT_USER
        """
        try:
            import winreg
        except ImportError as e:
            raise PlaceSyncError("The registry store is only available on Windows") from e

        self._winreg = winreg
        self.key_path = key_path

    def _open(self, write: bool = False):
        access = self._winreg.KEY_READ
        if write:
            access |= self._winreg.KEY_SET_VALUE
        return self._winreg.OpenKey(self._winreg.HKEY_CURRENT_USER, self.key_path, 0, access)

    def enumerate(self) -> list[tuple[str, Any]]:
        values = []
        with self._open() as key:
            index = 0
            while True:
                try:
                    name, data, _ = self._winreg.EnumValue(key, index)
                except OSError:
                    # No more values
                    break
                values.append((name, data))
                index += 1
        return values

    def get(self, key: str, default: Any = None) -> Any:
        with self._open() as handle:
            try:
                data, _ = self._winreg.QueryValueEx(handle, key)
            except FileNotFoundError:
                return default
        return data

    def set(self, key: str, value: StoreValue) -> None:
        if isinstance(value, int):
            kind, data = self._winreg.REG_DWORD, value
        else:
            kind, data = self._winreg.REG_SZ, str(value)
        try:
            with self._open(write=True) as handle:
                self._winreg.SetValueEx(handle, key, 0, kind, data)
        except OSError as e:
            raise StoreWriteFailure(f"Failed to set '{key}': {e}", key, "set") from e

    def delete(self, key: str) -> None:
        try:
            with self._open(write=True) as handle:
                self._winreg.DeleteValue(handle, key)
        except FileNotFoundError:
            # Already gone
            return
        except OSError as e:
            raise StoreWriteFailure(f"Failed to delete '{key}': {e}", key, "delete") from e
