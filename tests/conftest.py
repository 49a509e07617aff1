"""Pytest configuration and fixtures."""

import pytest

from tabletcontrol.core import Settings, configure_from_settings
from tabletcontrol.models import ComponentData, LabelData, RelativePosition
from tabletcontrol.repository import JsonProjectRepository
from tabletcontrol.services import ProjectServiceImpl


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure logging once for the test session."""
    configure_from_settings(Settings(log_level="DEBUG"))


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings(tmp_path):
    """Settings rooted in a per-test temporary directory."""
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def repository(settings):
    """JSON repository on the temporary data directory."""
    return JsonProjectRepository(settings)


@pytest.fixture
def service(repository, settings):
    """Project service with no project loaded."""
    return ProjectServiceImpl(repository, settings)


# ============================================================================
# Model Fixtures
# ============================================================================

@pytest.fixture
def button():
    """Absolute-positioned button component."""
    return ComponentData.absolute(10, 20, 120, 40, 120, 40, "Button", LabelData(text="OK"))


@pytest.fixture
def slider():
    """Relative-positioned slider component."""
    return ComponentData.relative(RelativePosition.of(0.1, 0.5, 0.4, 0.1), "Slider")
