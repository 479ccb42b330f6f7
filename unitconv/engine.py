# -*- coding: utf-8 -*-
"""
Conversion Engine Facade

``Engine`` owns the unit registry, the converter and the history store
for the lifetime of the process. The UI layers receive it explicitly
instead of reaching for module-level state.

Usage:
    >>> from unitconv.engine import Engine
    >>> engine = Engine.from_config()
    >>> result = engine.convert(100, "C", "F")
    >>> result.result
    212.0
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from unitconv.calculation.normalization import normalize
from unitconv.calculation.registry import UnitRegistry, build_default_registry
from unitconv.calculation.unit_converter import UnitConverter
from unitconv.config import UnitConvConfig, get_config
from unitconv.history.store import HistoryStore
from unitconv.models import ALL, Category, ConversionResult, UnitDefinition

logger = logging.getLogger(__name__)


class Engine:
    """Registry + converter + history, wired together.

    Every successful conversion made through the engine is appended to
    the history (which persists it). Failed conversions leave the
    history untouched.

    Attributes:
        config: Active configuration.
        registry: Read-only unit table.
        converter: Converter bound to ``registry``.
        history: Persistent history log.
    """

    def __init__(
        self,
        config: Optional[UnitConvConfig] = None,
        registry: Optional[UnitRegistry] = None,
        history: Optional[HistoryStore] = None,
    ):
        self.config = config or get_config()
        self.registry = registry or build_default_registry()
        self.converter = UnitConverter(
            self.registry,
            precision_warning_threshold=self.config.precision_warning_threshold,
        )
        self.history = history or HistoryStore(
            self.config.history_file,
            max_entries=self.config.max_history,
        )

    @classmethod
    def from_config(cls, config: Optional[UnitConvConfig] = None, load_history: bool = True) -> Engine:
        """Build an engine and, by default, load the history file."""
        engine = cls(config=config)
        if load_history:
            engine.history.load()
        return engine

    # ------------------------------------------------------------------
    # Registry queries
    # ------------------------------------------------------------------

    def categories(self) -> List[Category]:
        return list(self.registry.categories())

    def units(self, category: Union[Category, str] = ALL) -> List[UnitDefinition]:
        return list(self.registry.iter(category))

    def exists(self, token: str, category: Union[Category, str] = ALL) -> bool:
        """True if the raw token names a unit in ``category``."""
        return self.registry.exists(normalize(token.strip()), category)

    def describe(self, token: str) -> UnitDefinition:
        """Resolve a unit for the info display (symbol, alias or name).

        Raises:
            UnknownUnitError: If nothing matches.
        """
        return self.converter.resolve(token)

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def convert(
        self,
        value: float,
        from_unit: str,
        to_unit: str,
        category: Union[Category, str] = ALL,
    ) -> ConversionResult:
        """Convert and record the conversion in the history.

        Raises:
            UnknownFromUnitError, UnknownToUnitError, CrossCategoryError
        """
        result = self.converter.convert_detailed(value, from_unit, to_unit, category)
        self.history.append(result.from_token, result.to_token, result.value, result.result)
        return result

    def convert_batch(
        self,
        values: Iterable[float],
        from_unit: str,
        to_unit: str,
    ) -> List[ConversionResult]:
        """Convert several values with one unit pair, recording each in order."""
        results = self.converter.convert_many(values, from_unit, to_unit)
        for result in results:
            self.history.append(result.from_token, result.to_token, result.value, result.result)
        return results

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def clear_history(self) -> None:
        self.history.clear()

    def export_history(self, path: Union[str, Path, None] = None) -> bool:
        return self.history.export_csv(path or self.config.csv_file)
