# -*- coding: utf-8 -*-
"""Number formatting for display. Never applied to stored or returned values."""

import math

_FIXED_MIN = 1e-6
_FIXED_MAX = 1e6


def format_number(num: float) -> str:
    """Render a number for the terminal.

    ``0`` renders as ``"0"``; magnitudes in ``[1e-6, 1e6)`` get up to six
    significant digits; everything else uses scientific notation with a
    two-digit mantissa. The range test applies to the rounded value, so
    ``999999.7`` renders as ``"1.00e+06"``.

    Example:
        >>> format_number(212.0), format_number(1.5e-9), format_number(0.0)
        ('212', '1.50e-09', '0')
    """
    if num == 0:
        return "0"
    if math.isfinite(num):
        fixed = f"{num:.6g}"
        if _FIXED_MIN <= abs(float(fixed)) < _FIXED_MAX:
            return fixed
    return f"{num:.2e}"
