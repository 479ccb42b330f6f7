# -*- coding: utf-8 -*-
"""
unitconv: Interactive Terminal Unit Converter
=============================================

Converts a value between units of the same physical category and keeps
a persistent, bounded history of conversions.

Key Components:
    - calculation: unit registry, name normalization, converter
    - history: bounded history log with text persistence and CSV export
    - engine: Engine facade owning registry, converter and history
    - config: UnitConvConfig with UNITCONV_ env prefix
    - cli: typer entry point (direct mode) and the interactive menu

Example:
    >>> from unitconv import UnitConverter
    >>> UnitConverter().convert(1, "kg", "lb")
    2.2046226218487757
"""

from unitconv._version import __version__
from unitconv.calculation import UnitConverter, UnitRegistry, build_default_registry, normalize
from unitconv.config import UnitConvConfig, get_config, reset_config, set_config
from unitconv.engine import Engine
from unitconv.exceptions import (
    ConversionError,
    CrossCategoryError,
    ParseNumberError,
    PersistenceIOError,
    RegistryError,
    RetryBudgetExhausted,
    UnitConvException,
    UnknownFromUnitError,
    UnknownToUnitError,
    UnknownUnitError,
)
from unitconv.formatting import format_number
from unitconv.history import HistoryStore
from unitconv.models import ALL, Category, ConversionResult, HistoryEntry, UnitDefinition

__all__ = [
    "__version__",
    "ALL",
    "Category",
    "ConversionResult",
    "ConversionError",
    "CrossCategoryError",
    "Engine",
    "HistoryEntry",
    "HistoryStore",
    "ParseNumberError",
    "PersistenceIOError",
    "RegistryError",
    "RetryBudgetExhausted",
    "UnitConvConfig",
    "UnitConvException",
    "UnitConverter",
    "UnitDefinition",
    "UnitRegistry",
    "UnknownFromUnitError",
    "UnknownToUnitError",
    "UnknownUnitError",
    "build_default_registry",
    "format_number",
    "get_config",
    "normalize",
    "reset_config",
    "set_config",
]
