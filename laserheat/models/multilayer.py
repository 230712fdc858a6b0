# -*- coding: utf-8 -*-
"""
Ordered, validated stack of absorbing layers.

Construction (MultiLayer.new):
  1. copy the input layers and sort them by ascending z0;
  2. walk them top to bottom, rejecting any layer whose top lies above the
     bottom of the previous one (exact contact is allowed);
  3. overwrite every layer's e0, except the first, with the irradiance leaving
     the previous layer: e0[i] = e0[i-1] exp(-mu_a[i-1] d[i-1]).

The stack is immutable afterwards. Evaluation sums the per-layer Green's
function contributions (linear superposition); no other coupling exists.
"""
from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Tuple

import mpmath
from mpmath import mp

from laserheat.models.layer import Layer
from laserheat.models.thermal import ThermalProperties
from laserheat.solver.time_integration import integrate_rise
from laserheat.utils import logger
from laserheat.utils.constants import DEFAULT_PRECISION_BITS
from laserheat.utils.precision import RealLike, workprec

if TYPE_CHECKING:
    from laserheat.physics.beams import Beam
    from laserheat.solver.quadrature import Quadrature

__all__ = ["MultiLayer"]


class MultiLayer:
    """
    Use ``MultiLayer.new(layers)``; the bare constructor trusts its input.

    The carried e0 values are computed at the construction precision. An
    evaluation at a higher precision recomputes them at that precision.
    """

    __slots__ = ("_layers", "_precision")

    def __init__(self, layers: Tuple[Layer, ...] = (), precision: int = DEFAULT_PRECISION_BITS) -> None:
        self._layers = tuple(layers)
        self._precision = precision

    # ---- construction -------------------------------------------------------

    @classmethod
    def new(
        cls,
        layers: Iterable[Layer],
        *,
        precision: int = DEFAULT_PRECISION_BITS,
    ) -> Optional["MultiLayer"]:
        """
        Sort, validate and propagate irradiance. Returns None when two layers
        overlap; an empty input gives an empty stack.

        ``precision`` is the bit-width used for the propagated e0 values.
        """
        with workprec(precision):
            ordered = sorted(layers, key=lambda layer: mp.mpf(layer.z0))
            if not ordered:
                return cls((), precision)

            bottom = ordered[0].bottom(precision)
            for layer in ordered[1:]:
                z0 = mp.mpf(layer.z0)
                if z0 < bottom:
                    logger.warn(
                        f"[stack] layer{_label(layer)} at z0={mpmath.nstr(z0, 8)} overlaps "
                        f"previous layer ending at z={mpmath.nstr(bottom, 8)}"
                    )
                    return None
                bottom = layer.bottom(precision)

        stack = _propagate(ordered, precision)
        logger.debug(f"[stack] built {len(stack)} layer(s), bottom at z={mpmath.nstr(bottom, 8)}")
        return cls(stack, precision)

    # ---- container protocol -------------------------------------------------

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return self._layers

    @property
    def precision(self) -> int:
        """Bit-width the stored e0 values were propagated at."""
        return self._precision

    def layers_at(self, precision: int) -> Tuple[Layer, ...]:
        """The stack with e0 propagated at ``precision`` (stored layers if not higher)."""
        if precision <= self._precision or len(self._layers) < 2:
            return self._layers
        return _propagate(self._layers, precision)

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self._layers)

    def __getitem__(self, idx: int) -> Layer:
        return self._layers[idx]

    def __repr__(self) -> str:
        return f"MultiLayer({list(self._layers)!r})"

    def interfaces(self, precision: int = DEFAULT_PRECISION_BITS) -> list[mpmath.mpf]:
        """Top depth of every layer plus the bottom of the last one."""
        if not self._layers:
            return []
        with workprec(precision):
            out = [mp.mpf(layer.z0) for layer in self._layers]
        out.append(self._layers[-1].bottom(precision))
        return out

    # ---- physics ------------------------------------------------------------

    def evaluate_with(
        self,
        precision: int,
        beam: "Beam",
        thermal_properties: ThermalProperties,
        z: RealLike,
        r: RealLike,
        t: RealLike,
    ) -> mpmath.mpf:
        """Instantaneous rise [K] at (z, r, t): sum of every layer's contribution."""
        layers = self.layers_at(precision)
        with workprec(precision):
            total = mp.mpf(0)
            for layer in layers:
                total += beam.evaluate_with(precision, thermal_properties, layer, z, r, t)
            return total

    def temperature_rise(
        self,
        precision: int,
        quadrature: "Quadrature",
        beam: "Beam",
        thermal_properties: ThermalProperties,
        z: RealLike,
        r: RealLike,
        epsilon: RealLike,
        bounds: Tuple[RealLike, RealLike],
    ) -> Tuple[mpmath.mpf, mpmath.mpf]:
        """Integral of ``evaluate_with`` over t in ``bounds``; (value, error estimate)."""
        def rise(t):
            return self.evaluate_with(precision, beam, thermal_properties, z, r, t)

        return integrate_rise(precision, quadrature, rise, epsilon, bounds)


def _propagate(ordered: Iterable[Layer], precision: int) -> Tuple[Layer, ...]:
    """Keep the first e0; every later layer gets the irradiance leaving the one above."""
    ordered = list(ordered)
    stack = [ordered[0]]
    irradiance = ordered[0].exit_irradiance(precision)
    for layer in ordered[1:]:
        layer = replace(layer, e0=irradiance)
        stack.append(layer)
        irradiance = layer.exit_irradiance(precision)
    return tuple(stack)


def _label(layer: Layer) -> str:
    return f" '{layer.name}'" if layer.name else ""
