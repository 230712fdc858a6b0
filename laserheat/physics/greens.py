# -*- coding: utf-8 -*-
r"""
Closed-form Green's-function solutions of the linear heat equation

    rho c dT/dt = k lap(T) + mu_a E(z),   E(z) = e0 exp(-mu_a (z - z0))

for one absorbing slab z0 <= z <= z0 + d, integrated against the heat kernel.

Public API:
    large_beam_absorbing_layer(precision, thermal, layer, z, t)   -> mpf
    flat_top_radial_factor(precision, thermal, radius, r, t)      -> mpf

Notes
-----
- Planar (laterally infinite) solution:
      dT = mu_a e0 / (2 rho c) * exp(-mu_a (z - z0)) * exp(mu_a^2 alpha t)
           * [erf((z0 + d - z)/sqrt(4 alpha t) + mu_a sqrt(alpha t))
              - erf((z0 - z)/sqrt(4 alpha t) + mu_a sqrt(alpha t))]
  with alpha = k / (rho c). At t == 0 (exact) only the absorption term
  mu_a e0 / (2 rho c) exp(-mu_a (z - z0)) is returned.
- The t == 0 value matches the t -> 0+ limit on the layer faces only; strictly
  inside the slab the erf bracket tends to 2, not 1.
- The t == 0 term is not restricted to the slab: above it (z < z0) it grows
  like exp(mu_a (z0 - z)).
- Lateral truncation is separable: a finite beam only scales the planar
  solution by a radial factor.
"""
from __future__ import annotations

import mpmath
from mpmath import mp

from laserheat.models.layer import Layer
from laserheat.models.thermal import ThermalProperties
from laserheat.special.marcum import marcum_q
from laserheat.utils.precision import RealLike, workprec

__all__ = ["large_beam_absorbing_layer", "flat_top_radial_factor"]


def large_beam_absorbing_layer(
    precision: int,
    thermal: ThermalProperties,
    layer: Layer,
    z: RealLike,
    t: RealLike,
) -> mpmath.mpf:
    """Instantaneous rise [K] at depth z, time t, from a laterally infinite beam."""
    with workprec(precision):
        rho = mp.mpf(thermal.rho)
        c = mp.mpf(thermal.c)
        k = mp.mpf(thermal.k)
        mu_a = mp.mpf(layer.mu_a)
        d = mp.mpf(layer.d)
        z0 = mp.mpf(layer.z0)
        e0 = mp.mpf(layer.e0)
        z = mp.mpf(z)
        t = mp.mpf(t)

        alpha = k / rho / c

        term_1 = mu_a * e0 / rho / c / 2
        term_2 = mp.exp(-mu_a * (z - z0))

        if t == 0:
            return term_1 * term_2

        term_3 = mp.exp(mu_a * mu_a * alpha * t)

        reciprocal_sqrt = 1 / mp.sqrt(4 * alpha * t)
        sqrt_mu_a = mu_a * mp.sqrt(alpha * t)

        argument_1 = mp.erf((z0 + d - z) * reciprocal_sqrt + sqrt_mu_a)
        argument_2 = mp.erf((z0 - z) * reciprocal_sqrt + sqrt_mu_a)
        term_4 = argument_1 - argument_2

        return term_1 * term_2 * term_3 * term_4


def flat_top_radial_factor(
    precision: int,
    thermal: ThermalProperties,
    radius: RealLike,
    r: RealLike,
    t: RealLike,
) -> mpmath.mpf:
    """
    Fraction of the planar rise that survives lateral truncation to a disc of
    ``radius`` [cm], at radial offset r and time t.

    t == 0 : 1 inside the disc (r <= radius), 0 outside
    r == 0 : 1 - exp(-radius^2 / (4 alpha t))
    r >  0 : 1 - Q_1(r / (2 alpha t), radius / (2 alpha t))

    Off axis, ab = r radius / (2 alpha t)^2 grows like 1/t^2; small t lands on
    the large-argument path of ``marcum_q`` (0 or 1 to working precision).
    """
    with workprec(precision):
        radius = mp.mpf(radius)
        r = mp.mpf(r)
        t = mp.mpf(t)

        if t == 0:
            return mp.mpf(1) if r <= radius else mp.mpf(0)

        alpha = thermal.diffusivity(precision)
        if r == 0:
            return 1 - mp.exp(-radius * radius / (4 * alpha * t))

        two_alpha_t = 2 * alpha * t
        a = r / two_alpha_t
        b = radius / two_alpha_t
        return 1 - marcum_q(1, a, b, precision)
