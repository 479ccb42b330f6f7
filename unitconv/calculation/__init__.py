# -*- coding: utf-8 -*-
"""
Conversion engine: unit registry, name normalization and the converter.
"""

from unitconv.calculation.normalization import (
    CASE_PRESERVING_SYMBOLS,
    is_normalized,
    normalize,
)
from unitconv.calculation.registry import (
    UnitRegistry,
    build_default_registry,
    builtin_units,
)
from unitconv.calculation.unit_converter import (
    UnitConverter,
    parse_number,
    parse_quantity,
)

__all__ = [
    "CASE_PRESERVING_SYMBOLS",
    "is_normalized",
    "normalize",
    "UnitRegistry",
    "build_default_registry",
    "builtin_units",
    "UnitConverter",
    "parse_number",
    "parse_quantity",
]
