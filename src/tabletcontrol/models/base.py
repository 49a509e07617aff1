"""Shared model configuration and repair reporting."""

from dataclasses import dataclass, field
from typing import Iterator, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..core.logging_config import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound="Repairable")


class DocumentModel(BaseModel):
    """
    Base for every persisted model.

    Python attributes are snake_case; the document uses the camelCase
    names of the saved-file format. Unknown keys are ignored so older and
    newer files load. Assignment is not validated: models may hold invalid
    data until repaired.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        validate_assignment=False,
    )


@dataclass
class RepairReport:
    """Changes made by a repair pass (empty when nothing needed fixing)."""

    changes: list[str] = field(default_factory=list)

    def add(self, change: str) -> None:
        self.changes.append(change)
        logger.warning("integrity_repair", change=change)

    def extend(self, other: "RepairReport", prefix: str = "") -> None:
        """Merge another report, optionally prefixing its entries with the owner."""
        for change in other.changes:
            self.changes.append(f"{prefix}{change}")

    def __bool__(self) -> bool:
        return bool(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    def __iter__(self) -> Iterator[str]:
        return iter(self.changes)


class Repairable(Protocol):
    def model_copy(self, *, update=None, deep: bool = False): ...

    def repair(self) -> RepairReport: ...


def repaired(model: M) -> tuple[M, RepairReport]:
    """
    Repair a deep copy of a model, leaving the argument untouched.

    Args:
        model: Any model exposing repair()

    Returns:
        (repaired copy, report of the changes applied to it)
    """
    clone = model.model_copy(deep=True)
    report = clone.repair()
    return clone, report
