# laserheat/utils/precision.py
"""
Arbitrary-precision plumbing on top of mpmath.

- Every evaluation runs inside ``workprec(bits)``; intermediates are mpf at
  that mantissa width.
- Inputs may be int, float, decimal str or mpf. Strings are parsed at the
  working precision, so "0.1" is as exact as the bit-width allows.

Public API:
    workprec(bits)                 -> context manager
    digits_for(bits)               -> int
    to_decimal_str(value, bits)    -> str
    check_precision(bits)          -> int
    parse_real(name, value, ...)   -> mpf (validation)

Notes
-----
mpmath keeps its precision in a process-global context; run concurrent
evaluations in separate processes, not threads.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Union

import mpmath
from mpmath import mp
from mpmath.libmp import prec_to_dps

from .constants import MIN_PRECISION_BITS

__all__ = [
    "RealLike", "workprec", "digits_for",
    "to_decimal_str", "check_precision", "parse_real",
]

RealLike = Union[int, float, str, mpmath.mpf]


def check_precision(bits: int) -> int:
    if isinstance(bits, bool) or int(bits) != bits:
        raise ValueError(f"precision must be an integer bit-width, got {bits!r}")
    bits = int(bits)
    if bits < MIN_PRECISION_BITS:
        raise ValueError(f"precision must be >= {MIN_PRECISION_BITS} bits, got {bits}")
    return bits


@contextmanager
def workprec(bits: int) -> Iterator[None]:
    with mp.workprec(check_precision(bits)):
        yield


def digits_for(bits: int) -> int:
    """Decimal digits representable by a ``bits``-wide mantissa."""
    return int(prec_to_dps(check_precision(bits)))


def to_decimal_str(value: RealLike, bits: int) -> str:
    with mp.workprec(check_precision(bits)):
        return mpmath.nstr(mp.mpf(value), digits_for(bits))


def parse_real(name: str, value: RealLike, *, positive: bool = False,
               nonnegative: bool = False) -> mpmath.mpf:
    """
    Parse ``value`` for validation only (sign/finiteness); the raw value is what
    gets stored so it can be re-materialized at any later precision.
    """
    try:
        x = mp.mpf(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name}: cannot parse {value!r} as a real number") from exc
    if not mp.isfinite(x):
        raise ValueError(f"{name} must be finite, got {value!r}")
    if positive and not x > 0:
        raise ValueError(f"{name} must be > 0, got {value!r}")
    if nonnegative and x < 0:
        raise ValueError(f"{name} must be >= 0, got {value!r}")
    return x
