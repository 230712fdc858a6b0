# laserheat/utils/__init__.py
from __future__ import annotations
from .constants import DEFAULT_PRECISION_BITS, MIN_PRECISION_BITS
from .errors import LaserHeatError, ConvergenceError, ConfigError

__all__ = [
    "DEFAULT_PRECISION_BITS", "MIN_PRECISION_BITS",
    "LaserHeatError", "ConvergenceError", "ConfigError",
]
