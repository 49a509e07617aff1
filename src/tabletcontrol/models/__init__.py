"""
Project data model.
Project -> Pages -> Components -> RelativePosition, plus integrity repair.
"""

from .base import DocumentModel, RepairReport, repaired
from .position import AbsolutePosition, RelativePosition
from .label import LabelData
from .component import ComponentData, PositionMode, UNKNOWN_FUNCTION_TYPE
from .page import PageData
from .project import ProjectData

__all__ = [
    # Base
    "DocumentModel",
    "RepairReport",
    "repaired",
    # Placement
    "AbsolutePosition",
    "RelativePosition",
    # Components
    "LabelData",
    "ComponentData",
    "PositionMode",
    "UNKNOWN_FUNCTION_TYPE",
    # Aggregates
    "PageData",
    "ProjectData",
]
