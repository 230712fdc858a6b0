# laserheat/utils/constants.py
from __future__ import annotations

__all__ = ["DEFAULT_PRECISION_BITS", "MIN_PRECISION_BITS"]

# Working precision of mpmath intermediates [bits of mantissa]
DEFAULT_PRECISION_BITS = 64
MIN_PRECISION_BITS     = 2
