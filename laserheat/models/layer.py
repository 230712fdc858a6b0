# -*- coding: utf-8 -*-
"""
Layer dataclass for one absorbing slab of the stack.

Fields:
  - d:     thickness [cm], > 0
  - z0:    depth of the top surface [cm]
  - mu_a:  absorption coefficient [1/cm], >= 0
  - e0:    irradiance reaching the top surface [W/cm^2], >= 0
  - name:  optional label for reports

Values are kept as given (int/float/decimal str/mpf) and materialized at the
precision of each evaluation.
"""
from __future__ import annotations
from dataclasses import dataclass

import mpmath
from mpmath import mp

from laserheat.utils.precision import RealLike, parse_real, workprec

__all__ = ["Layer"]


@dataclass(frozen=True, slots=True)
class Layer:
    d: RealLike
    z0: RealLike
    mu_a: RealLike
    e0: RealLike
    name: str = ""

    def __post_init__(self) -> None:
        parse_real("d", self.d, positive=True)
        parse_real("z0", self.z0)
        parse_real("mu_a", self.mu_a, nonnegative=True)
        parse_real("e0", self.e0, nonnegative=True)

    def bottom(self, precision: int) -> mpmath.mpf:
        """Depth of the bottom surface, z0 + d."""
        with workprec(precision):
            return mp.mpf(self.z0) + mp.mpf(self.d)

    def exit_irradiance(self, precision: int) -> mpmath.mpf:
        """Irradiance leaving the bottom surface (Beer's law): e0 exp(-mu_a d)."""
        with workprec(precision):
            return mp.mpf(self.e0) * mp.exp(-mp.mpf(self.mu_a) * mp.mpf(self.d))
