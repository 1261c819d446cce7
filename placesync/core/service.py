"""Setup and synchronization of this tool's places shortcut."""

import os
from dataclasses import dataclass
from typing import Any

from rich.console import Console

from ..models.config import PlacesSettings, ShortcutConfig
from ..models.places import WritePlan
from .errors import InvalidSetup, NotConfigured, PlaceSyncError
from .paths import ensure_directory, resolve_target_directory
from .store import PlacesStore
from .synchronizer import ListSynchronizer


console = Console()


@dataclass
class SyncResult:
    """Result of a sync operation."""

    success: bool
    message: str
    directory: str = ""
    position: int | None = None  # Where our entry ended up
    count: int = 0  # Surviving entries, terminator excluded
    skipped: bool = False  # Nothing configured yet
    plan: WritePlan | None = None


class ShortcutService:
    """Handles setup and synchronization of the places shortcut."""

    def __init__(
        self,
        store: PlacesStore,
        settings: PlacesSettings | None = None,
        synchronizer: ListSynchronizer | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Store holding both the shortcut config and the places list
            settings: Tool settings (defaults if not provided)
            synchronizer: ListSynchronizer (created from store if not provided)
        """
        self.store = store
        self.settings = settings or PlacesSettings()
        self.synchronizer = synchronizer or ListSynchronizer(store, label=self.settings.label)

    def load_config(self) -> ShortcutConfig:
        """Read the shortcut config from the store.

        Raises:
            NotConfigured: If either key is missing or the depth is unreadable
        """
        base_path = self.store.get(ShortcutConfig.BASE_PATH_KEY)
        depth = self.store.get(ShortcutConfig.DEPTH_KEY)

        if not base_path or depth is None:
            raise NotConfigured("Shortcut has not been set up yet")

        try:
            depth = int(depth)
        except (TypeError, ValueError) as e:
            raise NotConfigured(f"Stored depth is not a number: {depth!r}") from e

        return ShortcutConfig(base_path=str(base_path), depth=depth)

    def setup(
        self,
        path: str,
        depth: str | int,
        document_path: str | None = None,
    ) -> ShortcutConfig:
        """Validate and persist the shortcut config.

        Both values are validated before anything is written. When a
        document path is given, a sync runs straight after.

        Args:
            path: Shortcut base path, must exist as a file or directory
            depth: Number of directory levels, must parse as an int >= 0
            document_path: Optional active document to sync for

        Raises:
            InvalidSetup: If the path or depth is invalid
        """
        path = path.strip() if path else ""
        if not path or not os.path.exists(path):
            raise InvalidSetup(f"Invalid Path {path}")

        try:
            parsed_depth = int(str(depth).strip())
        except ValueError as e:
            raise InvalidSetup(f"Invalid number: {depth}") from e
        if parsed_depth < 0:
            raise InvalidSetup(f"Invalid number: {depth}")

        config = ShortcutConfig(base_path=path, depth=parsed_depth)
        for key, value in config.to_dict().items():
            self.store.set(key, value)

        if document_path:
            self.synchronize(document_path)

        return config

    def resolve_directory(
        self,
        document_path: str,
        config: ShortcutConfig,
        create: bool = True,
    ) -> str:
        """Resolve and, if enabled, create the target directory."""
        directory = resolve_target_directory(config.base_path, document_path, config.depth)
        if create and self.settings.create_directories:
            ensure_directory(directory)
        return directory

    def synchronize(self, document_path: str, dry_run: bool = False) -> SyncResult:
        """Fold the directory for ``document_path`` into the places list.

        An unconfigured store is skipped without touching the filesystem
        or the store. A dry run only plans, creating nothing.

        Raises:
            InvalidPath: If the target directory cannot be resolved or created
            StoreWriteFailure: If a store operation fails part way through
        """
        try:
            config = self.load_config()
        except NotConfigured as e:
            return SyncResult(success=True, skipped=True, message=str(e))

        directory = self.resolve_directory(document_path, config, create=not dry_run)
        if dry_run:
            plan = self.synchronizer.plan(directory)
        else:
            plan = self.synchronizer.synchronize(directory)

        return SyncResult(
            success=True,
            message=f"{self.settings.label} -> {directory} (position {plan.position} of {plan.count})",
            directory=directory,
            position=plan.position,
            count=plan.count,
            plan=plan,
        )

    def on_dialog_opening(self, document_path: str) -> SyncResult:
        """Sync before the host shows a file dialog, never raising.

        A failure here must not get in the way of the dialog, so errors are
        reported and returned as an unsuccessful result.
        """
        try:
            return self.synchronize(document_path)
        except (PlaceSyncError, OSError) as e:
            console.print(f"[dim]Places sync skipped: {e}[/dim]")
            return SyncResult(success=False, message=str(e))

    def get_status(self) -> dict[str, Any]:
        """Get a summary of the shortcut config and places list."""
        try:
            config: ShortcutConfig | None = self.load_config()
        except NotConfigured:
            config = None

        report = self.synchronizer.read()
        own = [e for e in report.entries if e.display == self.synchronizer.label]

        return {
            "label": self.settings.label,
            "configured": config is not None,
            "base_path": config.base_path if config else None,
            "depth": config.depth if config else None,
            "entries": len(report.entries),
            "own_position": own[0].position if own else None,
            "family_keys": len(self.synchronizer.family_keys()),
            "dropped": [str(e) for e in report.dropped],
        }
