"""Read, repair and rewrite the host's dialog places list.

A sync is split in two halves. ``plan_synchronization`` looks at a snapshot
of the store and returns the exact deletes and writes needed, without
touching anything. ``apply_plan`` then runs those operations one key at a
time. The store has no transactions, so a failure part way through leaves
earlier operations in place.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from ..models.config import DEFAULT_LABEL
from ..models.places import PlaceEntry, WritePlan
from .codec import KeyCodec
from .errors import StoreCorruption
from .store import PlacesStore


@dataclass
class ReadReport:
    """Result of reading the places list out of a store snapshot."""

    entries: list[PlaceEntry] = field(default_factory=list)
    dropped: list[StoreCorruption] = field(default_factory=list)


def _as_text(key: str, value: Any) -> str:
    """Read a store value as text, treating absent values as empty."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise StoreCorruption(
        f"Value of '{key}' is {type(value).__name__}, expected text", key=key
    )


def read_entries(
    snapshot: Iterable[tuple[str, Any]],
    codec: KeyCodec | None = None,
) -> ReadReport:
    """Rebuild the places list from a store snapshot.

    Entries keep the store's enumeration order and are renumbered densely
    from 0. The digits embedded in a key only locate its sibling keys; they
    are never used for sorting. Entries with an empty path are skipped and
    missing siblings read as empty strings.

    Args:
        snapshot: (key, value) pairs in store enumeration order
        codec: Key codec (default prefix if not provided)

    Returns:
        ReadReport with the surviving entries and any dropped as corrupt
    """
    codec = codec or KeyCodec()
    pairs = list(snapshot)
    values = dict(pairs)
    report = ReadReport()

    for key, value in pairs:
        if not codec.is_base(key):
            continue
        position, _ = codec.decode(key)

        try:
            path = _as_text(key, value)
            if not path:
                continue
            _, display_key, ext_key = codec.sibling_keys(position)
            display = _as_text(display_key, values.get(display_key))
            extension = _as_text(ext_key, values.get(ext_key))
        except StoreCorruption as e:
            report.dropped.append(e)
            continue

        report.entries.append(
            PlaceEntry(
                position=len(report.entries),
                path=path,
                display=display,
                extension=extension,
            )
        )

    return report


def prune_keys(
    snapshot: Iterable[tuple[str, Any]],
    codec: KeyCodec | None = None,
) -> list[str]:
    """Every key of the places family, whether it survived the read or not."""
    codec = codec or KeyCodec()
    return [key for key, _ in snapshot if codec.is_member(key)]


def upsert_entry(
    entries: list[PlaceEntry],
    directory: str,
    label: str = DEFAULT_LABEL,
) -> tuple[list[PlaceEntry], int]:
    """Point the entry labelled ``label`` at ``directory``.

    The first entry carrying the label is updated in place and any later
    duplicates are dropped. Without one, a new entry is appended.

    Returns:
        (final entries renumbered from 0, position of the labelled entry)
    """
    result: list[PlaceEntry] = []
    position: int | None = None

    for entry in entries:
        if entry.display == label:
            if position is not None:
                continue
            position = len(result)
            entry = replace(entry, path=directory)
        result.append(replace(entry, position=len(result)))

    if position is None:
        position = len(result)
        result.append(PlaceEntry(position=position, path=directory, display=label))

    return result, position


def _entry_writes(entry: PlaceEntry, codec: KeyCodec) -> list[tuple[str, str]]:
    """Key/value writes for all three sibling keys of an entry."""
    values = (entry.path, entry.display, entry.extension)
    return list(zip(codec.sibling_keys(entry.position), values))


def plan_synchronization(
    snapshot: Iterable[tuple[str, Any]],
    directory: str,
    label: str = DEFAULT_LABEL,
    codec: KeyCodec | None = None,
) -> WritePlan:
    """Compute the deletes and writes that fold ``directory`` into the list.

    Args:
        snapshot: (key, value) pairs in store enumeration order
        directory: Target directory for this tool's entry
        label: Display label identifying this tool's entry
        codec: Key codec (default prefix if not provided)

    Returns:
        WritePlan: prune every family key, then write the dense list and a
        terminator at position ``count``
    """
    codec = codec or KeyCodec()
    pairs = list(snapshot)

    report = read_entries(pairs, codec)
    entries, position = upsert_entry(report.entries, directory, label)

    writes: list[tuple[str, str]] = []
    for entry in entries:
        writes.extend(_entry_writes(entry, codec))
    writes.extend(_entry_writes(PlaceEntry(position=len(entries), path=""), codec))

    return WritePlan(
        deletes=prune_keys(pairs, codec),
        writes=writes,
        entries=entries,
        position=position,
    )


def apply_plan(store: PlacesStore, plan: WritePlan) -> None:
    """Run a plan against the store, deletes first.

    Raises:
        StoreWriteFailure: On the first failed operation; nothing after it runs
    """
    for key in plan.deletes:
        store.delete(key)
    for key, value in plan.writes:
        store.set(key, value)


class ListSynchronizer:
    """Keeps this tool's shortcut in a store's places list."""

    def __init__(
        self,
        store: PlacesStore,
        label: str = DEFAULT_LABEL,
        codec: KeyCodec | None = None,
    ) -> None:
        """Initialize synchronizer.

        Args:
            store: Store holding the places list
            label: Display label identifying this tool's entry
            codec: Key codec (default prefix if not provided)
        """
        self.store = store
        self.label = str(label)
        self.codec = codec or KeyCodec()

    def read(self) -> ReadReport:
        """Read the current list without modifying the store."""
        return read_entries(self.store.enumerate(), self.codec)

    def family_keys(self) -> list[str]:
        """Raw family key names currently in the store."""
        return prune_keys(self.store.enumerate(), self.codec)

    def plan(self, directory: str) -> WritePlan:
        """Plan a sync against the store's current contents."""
        return plan_synchronization(self.store.enumerate(), directory, self.label, self.codec)

    def synchronize(self, directory: str) -> WritePlan:
        """Fold ``directory`` into the list and return the applied plan."""
        plan = self.plan(directory)
        apply_plan(self.store, plan)
        return plan

    def clear(self) -> list[str]:
        """Delete every family key, leaving unrelated keys alone."""
        keys = self.family_keys()
        apply_plan(self.store, WritePlan(deletes=keys))
        return keys
