"""Configuration models for the places synchronizer."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

DEFAULT_LABEL = "Google Drive"
DEFAULT_CONFIG_FILE = "placesync.yaml"
DEFAULT_STORE_PATH = "~/.placesync/places.json"

# Host key holding the file-dialog settings, relative to HKEY_CURRENT_USER
DIALOGS_KEY_TEMPLATE = r"{product_root}\Profiles\{profile}\Dialogs\AllAnavDialogs"


def dialogs_key_path(product_root: str, profile: str) -> str:
    """Build the registry path of the host's file-dialog settings.

    Args:
        product_root: Host's per-user product root key
        profile: Name of the active host profile

    Returns:
        Key path relative to HKEY_CURRENT_USER
    """
    return DIALOGS_KEY_TEMPLATE.format(
        product_root=product_root.strip("\\"),
        profile=profile,
    )


@dataclass
class ShortcutConfig:
    """Base path and depth saved by setup, read by every sync.

    Both values live in the same store as the places list, under two fixed
    keys outside the position-indexed family.
    """

    base_path: str
    depth: int

    # Fixed store keys
    BASE_PATH_KEY = "Google Drive"
    DEPTH_KEY = "Google Drive Depth"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the store's key/value layout."""
        return {
            self.BASE_PATH_KEY: self.base_path,
            self.DEPTH_KEY: self.depth,
        }


@dataclass
class PlacesSettings:
    """Tool settings loaded from placesync.yaml."""

    label: str = DEFAULT_LABEL
    store: str = "json"  # "json" or "registry"
    store_path: str = DEFAULT_STORE_PATH
    registry_key: str | None = None  # Full key path, wins over product_root/profile
    product_root: str | None = None
    profile: str | None = None
    create_directories: bool = True

    STORE_KINDS = ("json", "registry")

    @property
    def resolved_store_path(self) -> Path:
        """JSON store path with ~ expanded."""
        return Path(self.store_path).expanduser()

    @property
    def resolved_registry_key(self) -> str | None:
        """Registry key of the host's dialog settings, if enough is configured."""
        if self.registry_key:
            return self.registry_key
        if self.product_root and self.profile:
            return dialogs_key_path(self.product_root, self.profile)
        return None

    @staticmethod
    def _optional_text(data: dict[str, Any], name: str) -> str | None:
        value = data.get(name)
        return None if value is None else str(value)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlacesSettings":
        """Create from dictionary.

        Raises:
            ValueError: If a value has the wrong type or an unknown store kind
        """
        if not isinstance(data, dict):
            raise ValueError(f"Settings must be a mapping, got {type(data).__name__}")

        store = data.get("store", "json")
        if store not in cls.STORE_KINDS:
            raise ValueError(
                f"Unknown store kind '{store}', expected one of: {', '.join(cls.STORE_KINDS)}"
            )

        # The label is compared with text read back from the store
        label = data.get("label", DEFAULT_LABEL)
        if label is None or str(label) == "":
            raise ValueError("label must not be empty")

        create_directories = data.get("create_directories", True)
        if not isinstance(create_directories, bool):
            raise ValueError(
                f"create_directories must be true or false, got {create_directories!r}"
            )

        return cls(
            label=str(label),
            store=store,
            store_path=str(data.get("store_path", DEFAULT_STORE_PATH)),
            registry_key=cls._optional_text(data, "registry_key"),
            product_root=cls._optional_text(data, "product_root"),
            profile=cls._optional_text(data, "profile"),
            create_directories=create_directories,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        data: dict[str, Any] = {
            "label": self.label,
            "store": self.store,
            "store_path": self.store_path,
        }
        if self.registry_key:
            data["registry_key"] = self.registry_key
        if self.product_root:
            data["product_root"] = self.product_root
        if self.profile:
            data["profile"] = self.profile
        data["create_directories"] = self.create_directories
        return data

    @classmethod
    def load(cls, config_path: Path) -> "PlacesSettings":
        """Load settings from YAML file."""
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    def save(self, config_path: Path) -> None:
        """Save settings to YAML file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_environment(
        cls,
        config_path: Path | None = None,
        store_path: str | None = None,
    ) -> "PlacesSettings":
        """Load settings, honouring PLACESYNC_CONFIG and PLACESYNC_STORE.

        Explicit arguments win over the environment. A missing settings file
        yields defaults.

        Args:
            config_path: Settings file (or load from PLACESYNC_CONFIG env)
            store_path: JSON store file (or load from PLACESYNC_STORE env)
        """
        load_dotenv()

        path = Path(config_path or os.getenv("PLACESYNC_CONFIG", DEFAULT_CONFIG_FILE))
        settings = cls.load(path) if path.exists() else cls()

        store_override = store_path or os.getenv("PLACESYNC_STORE")
        if store_override:
            settings.store = "json"
            settings.store_path = store_override

        return settings
