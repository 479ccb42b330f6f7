# -*- coding: utf-8 -*-
"""
Unit Name Normalization

Maps a raw user token to the canonical key used by lookup: uppercase,
with every space removed. Tokens whose case carries meaning are kept as
typed when they appear in the case-preserving allow-list, so that ``m``
(meter) does not collapse into ``M`` (mega) and ``L`` (liter) stays a
liter.

The function is pure and idempotent:
``normalize(normalize(x)) == normalize(x)``.
"""

from typing import FrozenSet

#: Tokens returned unchanged by :func:`normalize`.
CASE_PRESERVING_SYMBOLS: FrozenSet[str] = frozenset({
    # Length
    "m", "km", "cm", "mm", "in", "ft", "yd", "mi",
    # Time
    "s", "min", "hr", "h", "d", "w", "day", "week",
    # Volume
    "L", "mL",
    # Power
    "W", "kW", "MW", "hp",
    # Pressure
    "Pa", "kPa", "bar", "atm", "psi",
})


def normalize(raw: str) -> str:
    """Return the canonical lookup key for ``raw``.

    Args:
        raw: Token as typed by the user.

    Returns:
        ``raw`` itself if it is in :data:`CASE_PRESERVING_SYMBOLS`,
        otherwise ``raw`` uppercased with all spaces removed.

    Example:
        >>> normalize("m"), normalize("kg"), normalize("km / h")
        ('m', 'KG', 'KM/H')
    """
    if raw in CASE_PRESERVING_SYMBOLS:
        return raw
    return raw.upper().replace(" ", "")


def is_normalized(token: str) -> bool:
    """True if ``token`` is already a canonical key."""
    return normalize(token) == token
