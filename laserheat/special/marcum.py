# laserheat/special/marcum.py
"""
Generalized Marcum Q-function Q_M(a, b) at arbitrary precision.

Evaluation paths:
  - b == 0          : Q_M = 1                        (M >= 1)
  - a == 0          : Q_M = Gamma(M, b^2/2) / Gamma(M)
  - ab small, a <  b: Q_M = e^{-(a^2+b^2)/2} sum_{k >= 1-M} (a/b)^k I_k(ab)
  - ab small, a >= b: Q_M = 1 - e^{-(a^2+b^2)/2} sum_{k >= M} (b/a)^k I_k(ab)
  - ab large        : Q_M = int_b^inf x (x/a)^{M-1} e^{-(x-a)^2/2} [e^{-ax} I_{M-1}(ax)] dx
  - M == 0          : Q_0 = Q_1 - e^{-(a^2+b^2)/2} I_0(ab)   (Q_0(0, b) = 0)

"Large" means ab >= large_argument_threshold(precision). There the Bessel
factor is replaced by its Hankel expansion, which is accurate to the working
eps for every x >= b, and the integrand is a unit-width bump around x = a:
  - b >= a + w : Q_M = 0 to working precision
  - b <= a - w : Q_M = 1 to working precision
  - otherwise  : mp.quad over [max(b, a - w), a + w]
with w = gaussian_half_width(precision). This path replaces the series where
the series needs O(ab) terms of I_k at huge orders, which mpmath cannot always
evaluate (the off-axis flat-top beam reaches ab ~ 1/t^2).

Known limitations
-----------------
  * relative accuracy degrades when Q is close to 0 (a >= b branch) or close
    to 1 (a < b branch) because of cancellation against 1; the absolute error
    stays at the working eps;
  * ``max_terms`` caps the small-argument series only.
Raising the working precision pushes the cancellation error down but does not
remove it.
"""
from __future__ import annotations

import math

import mpmath
from mpmath import mp

from laserheat.utils.errors import ConvergenceError
from laserheat.utils.precision import RealLike, workprec

__all__ = ["marcum_q", "MAX_TERMS", "large_argument_threshold", "gaussian_half_width"]

MAX_TERMS = 100_000

# extra bits for the large-argument quadrature
GUARD_BITS = 10


def large_argument_threshold(precision: int) -> float:
    """Smallest ab for which the Hankel expansion reaches 2^-precision."""
    # smallest Hankel term is ~ e^{-2x}
    return max(24.0, 0.35 * precision + 8.0)


def gaussian_half_width(precision: int) -> float:
    """Distance from x = a beyond which e^{-(x-a)^2/2} is below 2^-precision."""
    return math.sqrt(2 * (0.6932 * precision + 20)) + 2.0


def _scaled_bessel(order: int, x: mpmath.mpf) -> mpmath.mpf:
    """e^{-x} I_order(x) from the Hankel expansion, x >= large_argument_threshold."""
    mu = 4 * order * order
    eps = mp.eps
    term = mp.mpf(1)
    total = mp.mpf(1)
    k = 1
    while True:
        nxt = -term * (mu - (2 * k - 1) ** 2) / (8 * k * x)
        # asymptotic: stop once terms stop shrinking
        if abs(nxt) >= abs(term) or abs(nxt) <= eps * abs(total):
            break
        total += nxt
        term = nxt
        k += 1
    return total / mp.sqrt(2 * mp.pi * x)


def _bessel_tail(ratio: mpmath.mpf, x: mpmath.mpf, k_start: int, max_terms: int) -> mpmath.mpf:
    """sum_{k >= k_start} ratio^k I_k(x), ratio <= 1, stopped at the working eps."""
    total = mp.mpf(0)
    eps = mp.eps
    k = k_start
    for _ in range(max_terms):
        # I_{-k} = I_k for integer order
        term = ratio ** k * mp.besseli(abs(k), x)
        total += term
        if k > x and abs(term) <= eps * abs(total):
            return total
        k += 1
    raise ConvergenceError(
        f"Marcum-Q series did not converge in {max_terms} terms (ab={mpmath.nstr(x, 6)})"
    )


def _series_q(order: int, a: mpmath.mpf, b: mpmath.mpf, max_terms: int) -> mpmath.mpf:
    x = a * b
    prefactor = mp.exp(-(a * a + b * b) / 2)
    if a < b:
        return prefactor * _bessel_tail(a / b, x, 1 - order, max_terms)
    return 1 - prefactor * _bessel_tail(b / a, x, order, max_terms)


def _large_argument_q(order: int, a: mpmath.mpf, b: mpmath.mpf, precision: int) -> mpmath.mpf:
    """Q_order(a, b) for ab >= large_argument_threshold(precision), order >= 1."""
    width = gaussian_half_width(precision)
    if b >= a + width:
        return mp.mpf(0)
    if b <= a - width:
        return mp.mpf(1)

    nu = order - 1

    def integrand(x):
        return x * (x / a) ** nu * mp.exp(-(x - a) ** 2 / 2) * _scaled_bessel(nu, a * x)

    with workprec(precision + GUARD_BITS):
        lo = max(b, a - width)
        hi = a + width
        if lo < a:
            return mp.quad(integrand, [lo, a, hi])
        return mp.quad(integrand, [lo, hi])


def marcum_q(order: int, a: RealLike, b: RealLike, precision: int,
             *, max_terms: int = MAX_TERMS) -> mpmath.mpf:
    """Q_order(a, b) in [0, 1], computed with ``precision``-bit intermediates."""
    if isinstance(order, bool) or int(order) != order or order < 0:
        raise ValueError(f"order must be a non-negative integer, got {order!r}")
    order = int(order)

    with workprec(precision):
        a = mp.mpf(a)
        b = mp.mpf(b)
        if a < 0 or b < 0:
            raise ValueError(f"Marcum-Q arguments must be >= 0, got a={a}, b={b}")
        large = a * b >= large_argument_threshold(precision)

        if order == 0 and a == 0:
            q = mp.mpf(0)
        elif order == 0:
            if large:
                weight = mp.exp(-(a - b) ** 2 / 2) * _scaled_bessel(0, a * b)
            else:
                weight = mp.exp(-(a * a + b * b) / 2) * mp.besseli(0, a * b)
            q = marcum_q(1, a, b, precision, max_terms=max_terms) - weight
        elif b == 0:
            q = mp.mpf(1)
        elif a == 0 and order == 1:
            q = mp.exp(-b * b / 2)
        elif a == 0:
            q = mp.gammainc(order, b * b / 2, mp.inf, regularized=True)
        elif large:
            q = _large_argument_q(order, a, b, precision)
        else:
            q = _series_q(order, a, b, max_terms)

        if q < 0:
            return mp.mpf(0)
        if q > 1:
            return mp.mpf(1)
        return +q
