"""Data models for entries in the dialog places list."""

from dataclasses import dataclass, field
from typing import Any, Union

# Values the host store hands back: REG_SZ strings and REG_DWORD integers
StoreValue = Union[str, int]


@dataclass
class PlaceEntry:
    """A single shortcut rebuilt from its three sibling keys."""

    position: int
    path: str  # Empty path marks a dead slot or the terminator
    display: str = ""  # Label shown in the dialog, also our identity
    extension: str = ""  # Opaque to us, always empty in practice

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for display or JSON output."""
        return {
            "position": self.position,
            "path": self.path,
            "display": self.display,
            "extension": self.extension,
        }


@dataclass
class WritePlan:
    """Exact store operations needed to rewrite the places list.

    Deletes run first, then writes, both in list order.
    """

    deletes: list[str] = field(default_factory=list)
    writes: list[tuple[str, StoreValue]] = field(default_factory=list)
    entries: list[PlaceEntry] = field(default_factory=list)  # Final list, no terminator
    position: int | None = None  # Where our own entry ended up

    @property
    def count(self) -> int:
        """Number of surviving entries (terminator excluded)."""
        return len(self.entries)

    def final_state(self) -> dict[str, StoreValue]:
        """Family keys and values as they will be once the plan is applied."""
        return dict(self.writes)

    def __len__(self) -> int:
        return len(self.deletes) + len(self.writes)
