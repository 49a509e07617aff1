"""ID Generation.

ULID-based identifiers for layout components.

- ULIDs: lexicographically sortable, timestamp-based
- Type-safe: NewType wrapper for component IDs
- Prefixed: ``comp_`` prefix keeps IDs readable in logs and saved documents
"""

import time
from datetime import datetime
from typing import NewType

from ulid import ULID

ComponentID = NewType("ComponentID", str)
"""Placed component identifier"""


class Prefix:
    """ID prefix constants."""

    COMPONENT = "comp"


class Generator:
    """ULID generator with optional type prefix."""

    def generate(self) -> str:
        """Generate a new ULID."""
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with type prefix."""
        return f"{prefix}_{self.generate()}"

    def timestamp(self, id_str: str) -> int:
        """Extract timestamp (milliseconds) from a ULID, 0 if unparseable."""
        try:
            ulid_str = id_str.rsplit("_", 1)[-1]
            return int(ULID.from_str(ulid_str).timestamp * 1000)
        except (ValueError, IndexError):
            return 0


_generator = Generator()


def new_component_id() -> ComponentID:
    """Generate new component ID."""
    return ComponentID(_generator.generate_with_prefix(Prefix.COMPONENT))


def is_valid(id_str: str) -> bool:
    """Check if string is a (possibly prefixed) valid ULID."""
    try:
        ulid_part = id_str.rsplit("_", 1)[-1]
        if len(ulid_part) != 26:
            return False
        ULID.from_str(ulid_part)
        return True
    except (ValueError, IndexError, AttributeError):
        return False


def is_component_id(id_str: str) -> bool:
    """Check if ID was produced by new_component_id()."""
    return isinstance(id_str, str) and id_str.startswith(f"{Prefix.COMPONENT}_") and is_valid(id_str)


def extract_timestamp(id_str: str) -> datetime | None:
    """Creation time encoded in an ID, or None if invalid."""
    timestamp_ms = _generator.timestamp(id_str)
    return datetime.fromtimestamp(timestamp_ms / 1000.0) if timestamp_ms > 0 else None


def now_millis() -> int:
    """Current wall-clock time as epoch milliseconds (document timestamp format)."""
    return int(time.time() * 1000)
