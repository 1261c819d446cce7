"""Key naming for position-indexed place entries.

The host keeps each places entry in three sibling values whose names embed
the entry's position:

    PlacesOrder3         -> path
    PlacesOrder3Display  -> display label
    PlacesOrder3Ext      -> extension

Everything that knows about that naming scheme lives here.
"""

import re

PREFIX = "PlacesOrder"


class PlaceField:
    """Suffixes distinguishing the three sibling keys of an entry."""

    PATH = ""
    DISPLAY = "Display"
    EXT = "Ext"

    ALL = (PATH, DISPLAY, EXT)


class KeyCodec:
    """Encodes and decodes (position, field) pairs to store key names."""

    def __init__(self, prefix: str = PREFIX) -> None:
        self.prefix = prefix
        # No leading zeros, so encode(decode(key)) == key for every match
        self._pattern = re.compile(
            rf"{re.escape(prefix)}(0|[1-9][0-9]*)(Display|Ext)?"
        )

    def encode(self, position: int, field: str = PlaceField.PATH) -> str:
        """Build the key name for a field of the entry at ``position``."""
        return f"{self.prefix}{position}{field}"

    def decode(self, key: str) -> tuple[int, str] | None:
        """Split a key name into (position, field).

        Returns None for keys outside the family, including keys that share
        the prefix but carry unrecognized trailing characters.
        """
        match = self._pattern.fullmatch(key)
        if match is None:
            return None
        return int(match.group(1)), match.group(2) or PlaceField.PATH

    def is_member(self, key: str) -> bool:
        """Check whether a key belongs to the places family at all."""
        return self.decode(key) is not None

    def is_base(self, key: str) -> bool:
        """Check whether a key is the path key of an entry."""
        decoded = self.decode(key)
        return decoded is not None and decoded[1] == PlaceField.PATH

    def sibling_keys(self, position: int) -> tuple[str, str, str]:
        """All three key names for the entry at ``position``."""
        return tuple(self.encode(position, field) for field in PlaceField.ALL)
