# -*- coding: utf-8 -*-
"""
Beam profiles: map (layer, thermal properties, query point) to the
instantaneous temperature rise produced by that layer's absorption.

Variants:
  - LargeBeam:            laterally infinite, ignores r
  - FlatTopBeam(radius):  hard-edged disc; planar solution x radial factor

Both are stateless/immutable and safe to reuse across evaluations.

Public API:
    Beam.evaluate_with(precision, thermal, layer, z, r, t)              -> mpf
    Beam.temperature_rise(precision, quadrature, thermal, layer, z, r,
                          epsilon, bounds)                              -> (mpf, mpf)
    beam_from_spec(spec: dict)                                          -> Beam
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Tuple

import mpmath
from mpmath import mp

from laserheat.models.layer import Layer
from laserheat.models.thermal import ThermalProperties
from laserheat.physics.greens import flat_top_radial_factor, large_beam_absorbing_layer
from laserheat.solver.time_integration import integrate_rise
from laserheat.utils.precision import RealLike, parse_real, workprec

if TYPE_CHECKING:
    from laserheat.solver.quadrature import Quadrature

__all__ = ["Beam", "LargeBeam", "FlatTopBeam", "beam_from_spec", "BEAM_KINDS"]

BEAM_KINDS = ("large", "flat_top")


def _check_point(r: RealLike, t: RealLike) -> None:
    parse_real("r", r, nonnegative=True)
    parse_real("t", t, nonnegative=True)


class Beam(ABC):
    """Spatial beam profile."""

    @abstractmethod
    def evaluate_with(
        self,
        precision: int,
        thermal_properties: ThermalProperties,
        layer: Layer,
        z: RealLike,
        r: RealLike,
        t: RealLike,
    ) -> mpmath.mpf:
        """Instantaneous rise [K] at depth z [cm], radius r [cm], time t [s]."""

    def temperature_rise(
        self,
        precision: int,
        quadrature: "Quadrature",
        thermal_properties: ThermalProperties,
        layer: Layer,
        z: RealLike,
        r: RealLike,
        epsilon: RealLike,
        bounds: Tuple[RealLike, RealLike],
    ) -> Tuple[mpmath.mpf, mpmath.mpf]:
        """Integral over t in ``bounds`` of ``evaluate_with``; (value, error estimate)."""
        def rise(t):
            return self.evaluate_with(precision, thermal_properties, layer, z, r, t)

        return integrate_rise(precision, quadrature, rise, epsilon, bounds)


@dataclass(frozen=True, slots=True)
class LargeBeam(Beam):
    """Beam much wider than the thermal diffusion length: 1-D planar solution."""

    def evaluate_with(self, precision, thermal_properties, layer, z, r, t):
        _check_point(r, t)
        return large_beam_absorbing_layer(precision, thermal_properties, layer, z, t)


@dataclass(frozen=True, slots=True)
class FlatTopBeam(Beam):
    """
    Uniform disc of ``radius`` [cm].

    The depth dependence is the LargeBeam solution; truncation only rescales
    it (separable approximation).
    """
    radius: RealLike

    def __post_init__(self) -> None:
        parse_real("radius", self.radius, positive=True)

    def evaluate_with(self, precision, thermal_properties, layer, z, r, t):
        _check_point(r, t)
        with workprec(precision):
            z_factor = large_beam_absorbing_layer(precision, thermal_properties, layer, z, t)
            if mp.mpf(t) == 0:
                return z_factor if mp.mpf(r) <= mp.mpf(self.radius) else mp.mpf(0)
            radial = flat_top_radial_factor(precision, thermal_properties, self.radius, r, t)
            return z_factor * radial


def beam_from_spec(spec: Mapping[str, Any]) -> Beam:
    """
    Build a Beam from a mapping such as ``{"kind": "flat_top", "radius": 0.1}``.
    """
    kind = str(spec.get("kind", "large")).lower().replace("-", "_")
    if kind == "large":
        return LargeBeam()
    if kind == "flat_top":
        if "radius" not in spec:
            raise ValueError("flat_top beam needs a 'radius'")
        return FlatTopBeam(radius=spec["radius"])
    raise ValueError(f"Unknown beam kind: {kind!r} (try: {', '.join(BEAM_KINDS)})")
