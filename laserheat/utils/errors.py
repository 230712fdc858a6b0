# laserheat/utils/errors.py
from __future__ import annotations

__all__ = ["LaserHeatError", "ConvergenceError", "ConfigError"]


class LaserHeatError(Exception):
    """Base class for errors raised by laserheat."""


class ConvergenceError(LaserHeatError):
    """A series or iteration hit its cap before reaching the working epsilon."""


class ConfigError(LaserHeatError, ValueError):
    """Malformed YAML/CSV input."""
