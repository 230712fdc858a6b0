# -*- coding: utf-8 -*-
"""
Bulk thermal constants of the irradiated medium.

Fields (CGS, tissue-optics convention):
  - rho: density           [g/cm^3]
  - c:   specific heat     [J/(g K)]
  - k:   conductivity      [W/(cm K)]

One instance is shared by every layer and every evaluation of a run; layers
never own it.
"""
from __future__ import annotations
from dataclasses import dataclass

import mpmath
from mpmath import mp

from laserheat.utils.precision import RealLike, parse_real, workprec

__all__ = ["ThermalProperties"]


@dataclass(frozen=True, slots=True)
class ThermalProperties:
    rho: RealLike
    c: RealLike
    k: RealLike

    def __post_init__(self) -> None:
        parse_real("rho", self.rho, positive=True)
        parse_real("c", self.c, positive=True)
        parse_real("k", self.k, positive=True)

    def volumetric_heat_capacity(self, precision: int) -> mpmath.mpf:
        """rho * c  [J/(cm^3 K)]"""
        with workprec(precision):
            return mp.mpf(self.rho) * mp.mpf(self.c)

    def diffusivity(self, precision: int) -> mpmath.mpf:
        """Thermal diffusivity alpha = k / (rho c)  [cm^2/s]"""
        with workprec(precision):
            alpha = mp.mpf(self.k)
            alpha /= mp.mpf(self.rho)
            alpha /= mp.mpf(self.c)
            return alpha
