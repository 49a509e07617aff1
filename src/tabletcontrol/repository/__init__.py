"""Persistence of project documents."""

from .base import ProjectRepository
from .json_repository import JsonProjectRepository

__all__ = ["ProjectRepository", "JsonProjectRepository"]
