# -*- coding: utf-8 -*-
"""
Unit Converter Data Models

Pydantic v2 models shared by the registry, the converter and the history
store.

Enumerations:
    - Category: the closed set of physical categories, in display order

Unit scales (tagged by ``kind``):
    - LinearScale: value_in_base = value * factor
    - AffineScale: celsius = (value - offset) * numerator / denominator

Models:
    - UnitDefinition, HistoryEntry, ConversionResult
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator

#: Pseudo-category accepted by lookup meaning "any category".
ALL = "All"


class Category(str, Enum):
    """Physical category of a unit. Member order is the menu display order."""

    LENGTH = "Length"
    TEMPERATURE = "Temperature"
    DIGITAL_STORAGE = "Digital Storage"
    MASS = "Mass"
    TIME = "Time"
    VOLUME = "Volume"
    AREA = "Area"
    SPEED = "Speed"
    ENERGY = "Energy"
    POWER = "Power"
    PRESSURE = "Pressure"


# =============================================================================
# Unit scales
# =============================================================================


class LinearScale(BaseModel):
    """Multiplicative scale relative to the category's base unit."""

    kind: Literal["linear"] = "linear"
    factor: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Base units per one of this unit"
    )

    model_config = {"frozen": True, "extra": "forbid"}

    def to_base(self, value: float) -> float:
        return value * self.factor

    def from_base(self, value: float) -> float:
        return value / self.factor


class AffineScale(BaseModel):
    """Offset scale relative to degrees Celsius.

    ``celsius = (value - offset) * numerator / denominator`` and the
    inverse ``value = celsius * denominator / numerator + offset``.
    Celsius is (0, 1, 1), Fahrenheit (32, 5, 9), Kelvin (273.15, 1, 1).
    """

    kind: Literal["affine"] = "affine"
    offset: float = 0.0
    numerator: float = Field(1.0, gt=0)
    denominator: float = Field(1.0, gt=0)

    model_config = {"frozen": True, "extra": "forbid"}

    def to_celsius(self, value: float) -> float:
        return (value - self.offset) * self.numerator / self.denominator

    def from_celsius(self, celsius: float) -> float:
        return celsius * self.denominator / self.numerator + self.offset


UnitScale = Union[LinearScale, AffineScale]


# =============================================================================
# Unit definition
# =============================================================================


class UnitDefinition(BaseModel):
    """An immutable unit descriptor.

    Attributes:
        name: Human-readable label ("Kilometer").
        symbol: Canonical short token ("km").
        category: Category the unit belongs to.
        scale: Linear factor or affine (temperature) mapping.
        aliases: Alternate tokens, already in normalized form.
        description: Free text for the info display.
    """

    name: str = Field(..., min_length=1)
    symbol: str = Field(..., min_length=1)
    category: Category
    scale: UnitScale = Field(..., discriminator="kind")
    aliases: Tuple[str, ...] = ()
    description: str = ""

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        """Symbols are written to the comma-separated history file."""
        if "," in v or v != v.strip():
            raise ValueError(f"symbol must not contain commas or padding, got '{v}'")
        return v

    @property
    def is_temperature(self) -> bool:
        return isinstance(self.scale, AffineScale)

    @property
    def factor(self) -> Optional[float]:
        """Linear factor, or None for temperature units."""
        if isinstance(self.scale, LinearScale):
            return self.scale.factor
        return None

    def __str__(self) -> str:
        return f"{self.name} ({self.symbol})"


# =============================================================================
# History
# =============================================================================


class HistoryEntry(BaseModel):
    """One recorded conversion.

    ``from_symbol``/``to_symbol`` are the tokens the user typed that
    resolved successfully, not necessarily the canonical symbols.
    ``timestamp`` is wall-clock seconds.
    """

    from_symbol: str = Field(..., min_length=1)
    to_symbol: str = Field(..., min_length=1)
    value: float
    result: float
    timestamp: int

    model_config = {"frozen": True}

    def to_line(self) -> str:
        """Render as ``<from>,<to>,<value>,<result>,<unix_seconds>``."""
        return (
            f"{self.from_symbol},{self.to_symbol},"
            f"{self.value:.8g},{self.result:.8g},{self.timestamp}"
        )

    @classmethod
    def from_line(cls, line: str) -> Optional[HistoryEntry]:
        """Parse one history line; return None when it is malformed."""
        parts = line.rstrip("\r\n").split(",")
        if len(parts) != 5:
            return None
        from_symbol, to_symbol, value, result, timestamp = parts
        if not from_symbol or not to_symbol:
            return None
        try:
            return cls(
                from_symbol=from_symbol,
                to_symbol=to_symbol,
                value=float(value),
                result=float(result),
                timestamp=int(timestamp),
            )
        except ValueError:
            # pydantic's ValidationError subclasses ValueError
            return None

    def local_time(self) -> str:
        """Timestamp as local time ``YYYY-MM-DD HH:MM:SS``."""
        return datetime.fromtimestamp(self.timestamp).strftime("%Y-%m-%d %H:%M:%S")


class ConversionResult(BaseModel):
    """Outcome of a single successful conversion."""

    value: float
    result: float
    from_token: str
    to_token: str
    from_unit: UnitDefinition
    to_unit: UnitDefinition
    precision_warning: bool = False

    model_config = {"frozen": True}
