#!/usr/bin/env python3
"""CLI entry point for the dialog places synchronizer."""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
import yaml

from .core.errors import InvalidPath, InvalidSetup, PlaceSyncError
from .core.service import ShortcutService
from .core.store import JsonStore, PlacesStore, RegistryStore
from .models.config import PlacesSettings

console = Console()


def load_settings(args: argparse.Namespace) -> PlacesSettings:
    """Load settings from --config/--store or the environment."""
    config_path = Path(args.config) if args.config else None
    return PlacesSettings.from_environment(config_path=config_path, store_path=args.store)


def open_store(settings: PlacesSettings) -> PlacesStore:
    """Open the store the settings point at."""
    if settings.store == "registry":
        key_path = settings.resolved_registry_key
        if not key_path:
            raise PlaceSyncError(
                "Set registry_key, or product_root and profile, to use the registry store"
            )
        return RegistryStore(key_path)
    return JsonStore(settings.resolved_store_path)


def get_service(args: argparse.Namespace) -> ShortcutService:
    """Build the service from command line arguments."""
    try:
        settings = load_settings(args)
    except (ValueError, OSError, yaml.YAMLError) as e:
        raise PlaceSyncError(f"Configuration error: {e}") from e
    return ShortcutService(open_store(settings), settings)


def cmd_setup(args: argparse.Namespace) -> int:
    """Save the shortcut base path and depth."""
    try:
        service = get_service(args)
        config = service.setup(args.path, args.depth, document_path=args.document)
    except InvalidSetup as e:
        console.print(f"[red]{e}")
        return 1
    except PlaceSyncError as e:
        console.print(f"[red]Setup failed: {e}")
        return 1

    console.print(f"[green]Shortcut saved:[/green] {config.base_path} (depth {config.depth})")
    return 0


def cmd_sync(args: argparse.Namespace) -> int:
    """Sync the places list for a document."""
    try:
        service = get_service(args)
        result = service.synchronize(args.document, dry_run=args.dry_run)
    except InvalidPath as e:
        console.print(f"[red]Invalid path: {e}")
        return 1
    except PlaceSyncError as e:
        console.print(f"[red]Sync failed: {e}")
        return 1

    if result.skipped:
        console.print(f"[yellow]{result.message}. Run 'setup' first.")
        return 0

    if args.dry_run and result.plan is not None:
        console.print("[yellow](DRY RUN - no changes will be made)")
        table = Table(title="Places after sync")
        table.add_column("Key")
        table.add_column("Value")
        for key, value in result.plan.final_state().items():
            table.add_row(key, str(value))
        console.print(table)
        console.print(
            f"[bold]Operations:[/bold] {len(result.plan)} "
            f"({len(result.plan.deletes)} deletes, {len(result.plan.writes)} writes)"
        )

    console.print(f"[green]{result.message}")
    return 0


def cmd_hook(args: argparse.Namespace) -> int:
    """Sync before a file dialog; never fails."""
    try:
        service = get_service(args)
    except PlaceSyncError as e:
        console.print(f"[dim]Places sync skipped: {e}[/dim]")
        return 0

    result = service.on_dialog_opening(args.document)
    if result.success and not result.skipped:
        console.print(f"[dim]{result.message}[/dim]")
    return 0


def cmd_places(args: argparse.Namespace) -> int:
    """List the places entries in the store."""
    try:
        service = get_service(args)
        report = service.synchronizer.read()
        raw_keys = service.synchronizer.family_keys()
    except PlaceSyncError as e:
        console.print(f"[red]Error: {e}")
        return 1

    if args.json:
        console.print_json(data=[entry.to_dict() for entry in report.entries])
        return 0

    if not report.entries:
        console.print("[dim]No places entries in the store.[/dim]")
    else:
        table = Table(title="Places")
        table.add_column("#")
        table.add_column("Display")
        table.add_column("Path")

        for entry in report.entries:
            display = entry.display
            if display == service.synchronizer.label:
                display = f"[green]{display}[/green]"
            table.add_row(str(entry.position), display, entry.path)

        console.print(table)

    for error in report.dropped:
        console.print(f"[yellow]Dropped: {error}")

    if args.raw:
        console.print("\n[bold]Raw keys:[/bold]")
        for key in raw_keys:
            console.print(f"  {key}")

    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Show shortcut config and places list summary."""
    try:
        service = get_service(args)
        status = service.get_status()
    except PlaceSyncError as e:
        console.print(f"[red]Error: {e}")
        return 1

    console.print(f"\n[bold]Label:[/bold] {status['label']}")
    if status["configured"]:
        console.print(f"[bold]Base Path:[/bold] {status['base_path']}")
        console.print(f"[bold]Depth:[/bold] {status['depth']}")
    else:
        console.print("[yellow]Not configured. Run 'setup' first.")

    own = status["own_position"]
    console.print(f"[bold]Entries:[/bold] {status['entries']}")
    console.print(f"[bold]Own Entry:[/bold] {own if own is not None else 'None'}")
    console.print(f"[bold]Family Keys:[/bold] {status['family_keys']}")

    for message in status["dropped"]:
        console.print(f"[yellow]Dropped: {message}")

    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    """Remove every places entry from the store."""
    try:
        service = get_service(args)
        removed = service.synchronizer.clear()
    except PlaceSyncError as e:
        console.print(f"[red]Error: {e}")
        return 1

    console.print(f"[green]Removed {len(removed)} keys")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="placesync",
        description="Keep a shortcut in the CAD file dialog's places list",
    )
    parser.add_argument("--config", help="Settings file (default: placesync.yaml)")
    parser.add_argument("--store", help="JSON store file (overrides settings)")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # setup command
    setup_parser = subparsers.add_parser("setup", help="Save shortcut base path and depth")
    setup_parser.add_argument("path", help="Shortcut base path")
    setup_parser.add_argument("depth", help="Directory levels to carry over")
    setup_parser.add_argument("--document", help="Sync for this document straight away")

    # sync command
    sync_parser = subparsers.add_parser("sync", help="Sync places list for a document")
    sync_parser.add_argument("document", help="Path of the active document")
    sync_parser.add_argument("--dry-run", action="store_true", help="Show what would happen")

    # hook command
    hook_parser = subparsers.add_parser("hook", help="Pre-dialog sync that never fails")
    hook_parser.add_argument("document", help="Path of the active document")

    # places command
    places_parser = subparsers.add_parser("places", help="List places entries")
    places_parser.add_argument("--raw", action="store_true", help="Also list raw family keys")
    places_parser.add_argument("--json", action="store_true", help="Print entries as JSON")

    # status command
    subparsers.add_parser("status", help="Show configuration and list summary")

    # clear command
    subparsers.add_parser("clear", help="Remove all places entries")

    args = parser.parse_args(argv)

    if args.command == "setup":
        return cmd_setup(args)
    elif args.command == "sync":
        return cmd_sync(args)
    elif args.command == "hook":
        return cmd_hook(args)
    elif args.command == "places":
        return cmd_places(args)
    elif args.command == "status":
        return cmd_status(args)
    elif args.command == "clear":
        return cmd_clear(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
