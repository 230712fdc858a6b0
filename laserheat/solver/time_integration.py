# -*- coding: utf-8 -*-
"""
Time integration of the instantaneous temperature rise over a pulse.

The rise at a fixed (z, r) is turned into a function of t alone and handed to
a Quadrature; the engine's (value, error) pair is returned untouched.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Tuple, Union

import mpmath
from mpmath import mp

from laserheat.utils.precision import RealLike, workprec

if TYPE_CHECKING:
    from laserheat.models.layer import Layer
    from laserheat.models.multilayer import MultiLayer
    from laserheat.models.thermal import ThermalProperties
    from laserheat.physics.beams import Beam
    from laserheat.solver.quadrature import Quadrature

__all__ = ["integrate_rise", "temperature_rise"]


def integrate_rise(
    precision: int,
    quadrature: "Quadrature",
    rise: Callable[[mpmath.mpf], mpmath.mpf],
    epsilon: RealLike,
    bounds: Tuple[RealLike, RealLike],
) -> Tuple[mpmath.mpf, mpmath.mpf]:
    with workprec(precision):
        a, b = bounds
        return quadrature.integrate(rise, mp.mpf(epsilon), (mp.mpf(a), mp.mpf(b)))


def temperature_rise(
    precision: int,
    quadrature: "Quadrature",
    beam: "Beam",
    thermal_properties: "ThermalProperties",
    source: Union["Layer", "MultiLayer"],
    z: RealLike,
    r: RealLike,
    epsilon: RealLike,
    bounds: Tuple[RealLike, RealLike],
) -> Tuple[mpmath.mpf, mpmath.mpf]:
    """Time-integrated rise for a single Layer or a whole MultiLayer."""
    from laserheat.models.layer import Layer

    if isinstance(source, Layer):
        return beam.temperature_rise(precision, quadrature, thermal_properties, source,
                                     z, r, epsilon, bounds)
    return source.temperature_rise(precision, quadrature, beam, thermal_properties,
                                   z, r, epsilon, bounds)
