# laserheat/solver/quadrature.py
# Adaptive quadrature over a 1-D time interval, backed by mpmath.quad.
# The physics side only sees the Quadrature protocol.

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Tuple

import mpmath
from mpmath import mp

from laserheat.utils import logger

__all__ = ["Quadrature", "MpmathQuadrature", "QUADRATURE_METHODS"]

QUADRATURE_METHODS = ("tanh-sinh", "gauss-legendre")


class Quadrature(Protocol):
    def integrate(
        self,
        f: Callable[[mpmath.mpf], mpmath.mpf],
        epsilon: mpmath.mpf,
        bounds: Tuple[mpmath.mpf, mpmath.mpf],
    ) -> Tuple[mpmath.mpf, mpmath.mpf]:
        """Return (approximate integral of f over bounds, error estimate)."""
        ...


@dataclass(frozen=True, slots=True)
class MpmathQuadrature:
    """
    Degree-stepping wrapper around ``mpmath.quad``.

    The rule degree is raised from ``min_degree`` until the error estimate
    drops to ``epsilon`` or ``max_degree`` is reached; in the latter case the
    best estimate is returned with its (too large) error and a warning is
    printed. Runs at whatever mpmath precision is active at call time.
    """
    method: str = "tanh-sinh"
    min_degree: int = 2
    max_degree: int = 8

    def __post_init__(self) -> None:
        if self.method not in QUADRATURE_METHODS:
            raise ValueError(f"Unknown quadrature method: {self.method!r} (try: {', '.join(QUADRATURE_METHODS)})")
        if not 1 <= self.min_degree <= self.max_degree:
            raise ValueError("need 1 <= min_degree <= max_degree")

    def integrate(self, f, epsilon, bounds):
        a, b = (mp.mpf(x) for x in bounds)
        epsilon = mp.mpf(epsilon)
        if not epsilon > 0:
            raise ValueError(f"epsilon must be > 0, got {epsilon}")
        if a > b:
            raise ValueError(f"bounds must satisfy a <= b, got ({a}, {b})")
        if a == b:
            return mp.mpf(0), mp.mpf(0)

        value, err = mp.mpf(0), mp.inf
        for degree in range(self.min_degree, self.max_degree + 1):
            value, err = mp.quad(f, [a, b], method=self.method, maxdegree=degree, error=True)
            logger.debug(f"[quad] {self.method} degree={degree} value={mpmath.nstr(value, 12)} "
                         f"err={mpmath.nstr(err, 3)}")
            if err <= epsilon:
                return value, err

        logger.warn(f"[quad] {self.method}: error estimate {mpmath.nstr(err, 3)} above "
                    f"epsilon={mpmath.nstr(epsilon, 3)} at max_degree={self.max_degree}")
        return value, err
