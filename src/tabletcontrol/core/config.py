"""Configuration Management."""

import re
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

RESOLUTION_PATTERN = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


class Settings(BaseSettings):
    """Project storage and editor settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="TABLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Storage
    data_dir: Path = Field(default=Path("data"), description="Directory holding the project file")
    project_file_name: str = Field(default="project_data.json", min_length=1)
    backup_dir_name: str = Field(default="backups", min_length=1)
    export_extension: str = Field(default=".json", description="Appended to export paths")
    json_indent: bool = Field(default=True, description="Pretty-print persisted documents")

    # New project defaults
    default_project_name: str = Field(default="New Project", min_length=1)
    default_project_description: str = Field(default="Cross-platform control project")
    default_page_name: str = Field(default="Main Page", min_length=1)
    default_edit_resolution: str = Field(default="1366x768", description="Authoring resolution WxH")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    @field_validator("default_edit_resolution")
    @classmethod
    def validate_resolution(cls, v: str) -> str:
        """Ensure resolution is written as <width>x<height>."""
        if not RESOLUTION_PATTERN.match(v):
            raise ValueError(f"Resolution must look like 1366x768, got {v!r}")
        return v.strip()

    @property
    def project_file(self) -> Path:
        return self.data_dir / self.project_file_name

    @property
    def backup_dir(self) -> Path:
        return self.data_dir / self.backup_dir_name


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
