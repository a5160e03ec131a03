"""Configuration management for slicekit."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


class SlicekitSettings(BaseSettings):
    """Runtime configuration sourced from environment variables and optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    git_path: str | None = Field(default=None, validation_alias="SLICEKIT_GIT_PATH")
    log_level: str = Field(default="WARNING", validation_alias="SLICEKIT_LOG_LEVEL")
    worktree_root: Path | None = Field(default=None, validation_alias="SLICEKIT_WORKTREE_ROOT")
    template_dir: Path = Field(default=BUNDLED_TEMPLATE_DIR, validation_alias="SLICEKIT_TEMPLATE_DIR")
    layout_file: str = Field(default=".slicekit.yaml", validation_alias="SLICEKIT_LAYOUT_FILE")
    agent_command: str = Field(default="claude", validation_alias="SLICEKIT_AGENT_COMMAND")
    default_project: str = Field(default="my-app", validation_alias="SLICEKIT_DEFAULT_PROJECT")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "SLICEKIT_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized

    @field_validator("worktree_root", mode="before")
    @classmethod
    def _empty_worktree_root(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value

    @field_validator("layout_file")
    @classmethod
    def _validate_layout_file(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("SLICEKIT_LAYOUT_FILE must not be empty")
        return stripped


@lru_cache(maxsize=1)
def get_settings() -> SlicekitSettings:
    """Return cached settings instance."""

    settings = SlicekitSettings()
    settings.template_dir = settings.template_dir.expanduser().resolve()
    if settings.worktree_root is not None:
        settings.worktree_root = settings.worktree_root.expanduser().resolve()
    return settings


__all__ = ["BUNDLED_TEMPLATE_DIR", "SlicekitSettings", "get_settings"]
