"""Process-wide settings chosen on the command line."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path


@dataclass
class _Context:
    config_path: Path | None = None
    today: date | None = None  # Overrides the system date when set


# Singleton instance
_context = _Context()


def get_config_path() -> Path | None:
    """Get the global config path (set via CLI --config)."""
    return _context.config_path


def set_config_path(path: Path | None) -> None:
    _context.config_path = path


def get_today() -> date:
    """Day treated as today: the --today override, else the system date."""
    return _context.today or date.today()  # noqa: DTZ011


def set_today(day: date | None) -> None:
    _context.today = day
