"""
Service Layer
Locked orchestration of the current project
"""

from .base import ProjectService
from .project_service import ProjectServiceImpl

__all__ = ["ProjectService", "ProjectServiceImpl"]
