"""Configuration loader for plancal.

A single optional file (plancal_config.yaml) holds holidays shared by every
plan plus drag, grid and display settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from . import context
from .drag import DEFAULT_COMMIT_TIMEOUT_SECONDS
from .exceptions import ParseError
from .schemas import HolidaySchema

CONFIG_FILENAME = "plancal_config.yaml"


class DragConfig(BaseModel):
    """Configuration for drag-to-reschedule."""

    commit_timeout_seconds: float | None = DEFAULT_COMMIT_TIMEOUT_SECONDS  # None = no limit

    @field_validator("commit_timeout_seconds")
    @classmethod
    def positive_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("drag.commit_timeout_seconds must be positive")
        return v


class GridConfig(BaseModel):
    """Configuration for month grid generation."""

    show_milestones: bool = True


class DisplayConfig(BaseModel):
    """Configuration for human-readable output."""

    date_format: str = "%b %d, %Y"  # strftime format for notification messages


class PlancalConfig(BaseModel):
    """Complete plancal configuration."""

    holidays: list[HolidaySchema] = Field(default_factory=list[HolidaySchema])
    drag: DragConfig = DragConfig()
    grid: GridConfig = GridConfig()
    display: DisplayConfig = DisplayConfig()


def load_config(config_path: Path | str) -> PlancalConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to plancal_config.yaml

    Returns:
        PlancalConfig with defaults for omitted sections

    Raises:
        FileNotFoundError: If config file doesn't exist
        ParseError: If the file is not valid YAML
        ValueError: If config is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse config {config_path}: {e}") from e

    if data is None:
        return PlancalConfig()
    if not isinstance(data, dict):
        raise ValueError("Config must contain a mapping at the root level")

    return PlancalConfig.model_validate(data)


def discover_config(
    plan_path: Path | None = None,
    config_path: Path | None = None,
) -> PlancalConfig:
    """Find and load configuration, falling back to defaults.

    Search order:
    1. Explicit config_path argument (must exist)
    2. Global context (set via CLI --config, must exist)
    3. plan file directory / plancal_config.yaml
    4. Current directory / plancal_config.yaml
    """
    if config_path is not None:
        return load_config(config_path)

    ctx_config = context.get_config_path()
    if ctx_config is not None:
        return load_config(ctx_config)

    if plan_path is not None:
        dir_config = Path(plan_path).parent / CONFIG_FILENAME
        if dir_config.exists():
            return load_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return PlancalConfig()
