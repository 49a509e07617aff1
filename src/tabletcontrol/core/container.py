"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from .config import Settings, get_settings
from ..repository import JsonProjectRepository, ProjectRepository
from ..services import ProjectService, ProjectServiceImpl


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide explicit settings, or the cached environment settings."""
        return self.settings if self.settings is not None else get_settings()

    @singleton
    @provider
    def provide_repository(self, settings: Settings) -> ProjectRepository:
        """Provide JSON file repository singleton."""
        return JsonProjectRepository(settings)

    @singleton
    @provider
    def provide_project_service(self, repository: ProjectRepository, settings: Settings) -> ProjectService:
        """Provide the locked project service."""
        return ProjectServiceImpl(repository, settings)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
