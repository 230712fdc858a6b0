# -*- coding: utf-8 -*-
"""
Sampled profiles of the instantaneous rise for plotting and export.

Each point is evaluated at full precision; the returned arrays are float64.
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from laserheat.models.multilayer import MultiLayer
from laserheat.models.thermal import ThermalProperties
from laserheat.physics.beams import Beam
from laserheat.utils.precision import RealLike

__all__ = ["depth_profile", "time_trace", "radial_profile"]


def _sample(values: Iterable[float], fn) -> np.ndarray:
    return np.ascontiguousarray([float(fn(v)) for v in values], dtype=np.float64)


def depth_profile(
    precision: int,
    beam: Beam,
    thermal: ThermalProperties,
    stack: MultiLayer,
    z: Iterable[float],
    *,
    r: RealLike = 0,
    t: RealLike = 0,
) -> np.ndarray:
    """Rise [K] at every depth in ``z`` for fixed (r, t)."""
    return _sample(z, lambda zi: stack.evaluate_with(precision, beam, thermal, zi, r, t))


def time_trace(
    precision: int,
    beam: Beam,
    thermal: ThermalProperties,
    stack: MultiLayer,
    t: Iterable[float],
    *,
    z: RealLike,
    r: RealLike = 0,
) -> np.ndarray:
    """Rise [K] at every time in ``t`` for fixed (z, r)."""
    return _sample(t, lambda ti: stack.evaluate_with(precision, beam, thermal, z, r, ti))


def radial_profile(
    precision: int,
    beam: Beam,
    thermal: ThermalProperties,
    stack: MultiLayer,
    r: Iterable[float],
    *,
    z: RealLike,
    t: RealLike,
) -> np.ndarray:
    """Rise [K] at every radial offset in ``r`` for fixed (z, t)."""
    return _sample(r, lambda ri: stack.evaluate_with(precision, beam, thermal, z, ri, t))
