# -*- coding: utf-8 -*-
"""
Unit Conversion Engine

All conversions are deterministic double-precision operations. Unknown
units and cross-category requests fail loudly.

Linear units:      result = value * from.factor / to.factor
Temperature units: value -> degrees Celsius -> target (affine)

Tokens handed to the converter may be raw user input; they are
normalized before lookup.
"""

import logging
import math
import re
from typing import Iterable, List, Optional, Tuple, Union

from unitconv.calculation.normalization import normalize
from unitconv.calculation.registry import UnitRegistry, build_default_registry
from unitconv.exceptions import (
    CrossCategoryError,
    ParseNumberError,
    UnknownFromUnitError,
    UnknownToUnitError,
    UnknownUnitError,
)
from unitconv.models import ALL, Category, ConversionResult, UnitDefinition

logger = logging.getLogger(__name__)

#: Magnitude at or above which a precision warning is logged.
PRECISION_WARNING_THRESHOLD = 1e15

_QUANTITY_RE = re.compile(
    r"^\s*(?P<number>[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*(?P<unit>.*?)\s*$"
)


def parse_number(raw: str) -> float:
    """Parse user text as a float.

    Raises:
        ParseNumberError: If the text is not a finite number.
    """
    text = raw.strip()
    try:
        value = float(text)
    except ValueError:
        raise ParseNumberError(raw) from None
    if not math.isfinite(value):
        raise ParseNumberError(raw, message=f"Number must be finite: '{raw}'")
    return value


def parse_quantity(raw: str) -> Tuple[float, str]:
    """Split ``"10km"`` or ``"10 km"`` into ``(10.0, "km")``.

    The unit part is returned as typed (not normalized) and may be empty.

    Raises:
        ParseNumberError: If the text does not start with a number.
    """
    match = _QUANTITY_RE.match(raw)
    if match is None:
        raise ParseNumberError(raw, message=f"Expected a number followed by a unit: '{raw}'")
    return parse_number(match.group("number")), match.group("unit")


class UnitConverter:
    """
    Deterministic unit converter backed by a :class:`UnitRegistry`.

    GUARANTEES:
    - Same input -> same output
    - Converting a unit to itself returns the value unchanged
    - Unknown units -> UnknownFromUnitError / UnknownToUnitError
    - Different categories -> CrossCategoryError

    Example:
        >>> converter = UnitConverter()
        >>> converter.convert(1000, "m", "km")
        1.0
        >>> converter.convert(100, "C", "F")
        212.0
    """

    def __init__(
        self,
        registry: Optional[UnitRegistry] = None,
        precision_warning_threshold: float = PRECISION_WARNING_THRESHOLD,
    ):
        self.registry = registry or build_default_registry()
        self.precision_warning_threshold = precision_warning_threshold

    def resolve(
        self,
        token: str,
        category: Union[Category, str] = ALL,
    ) -> UnitDefinition:
        """Normalize ``token`` and look it up in ``category``.

        Raises:
            UnknownUnitError: If nothing matches.
        """
        unit = self.registry.lookup(normalize(token.strip()), category)
        if unit is None:
            raise UnknownUnitError(token, category=_category_name(category))
        return unit

    def convert(self, value: float, from_unit: str, to_unit: str) -> float:
        """
        Convert value from one unit to another.

        Args:
            value: Numerical value to convert
            from_unit: Source unit token (e.g., 'km', 'KG', 'c')
            to_unit: Target unit token

        Returns:
            Converted value as float

        Raises:
            UnknownFromUnitError: If the source unit is unknown
            UnknownToUnitError: If the target unit is unknown
            CrossCategoryError: If the units measure different things
        """
        return self.convert_detailed(value, from_unit, to_unit).result

    def convert_detailed(
        self,
        value: float,
        from_unit: str,
        to_unit: str,
        category: Union[Category, str] = ALL,
    ) -> ConversionResult:
        """Convert and return the resolved units alongside the result."""
        source = self._resolve_as(UnknownFromUnitError, from_unit, category)
        target = self._resolve_as(UnknownToUnitError, to_unit, category)

        if source.category != target.category:
            raise CrossCategoryError(
                from_unit, to_unit, source.category.value, target.category.value
            )

        value = float(value)
        warn = abs(value) >= self.precision_warning_threshold
        if warn:
            logger.warning(
                "Value %g exceeds %g; result may lose precision",
                value, self.precision_warning_threshold,
            )

        result = self.convert_units(value, source, target)
        logger.debug(
            "Converted %r %s -> %r %s", value, source.symbol, result, target.symbol
        )
        return ConversionResult(
            value=value,
            result=result,
            from_token=from_unit.strip(),
            to_token=to_unit.strip(),
            from_unit=source,
            to_unit=target,
            precision_warning=warn,
        )

    @staticmethod
    def convert_units(value: float, source: UnitDefinition, target: UnitDefinition) -> float:
        """Convert between two resolved units of the same category."""
        if source == target:
            return value
        if source.is_temperature:
            celsius = source.scale.to_celsius(value)
            return target.scale.from_celsius(celsius)
        return value * source.factor / target.factor

    def convert_many(
        self,
        values: Iterable[float],
        from_unit: str,
        to_unit: str,
    ) -> List[ConversionResult]:
        """Convert every value with the same pair of units.

        Units are validated once, before any value is converted.
        """
        values = list(values)
        if not values:
            return []
        first = self.convert_detailed(values[0], from_unit, to_unit)
        results = [first]
        for value in values[1:]:
            value = float(value)
            warn = abs(value) >= self.precision_warning_threshold
            if warn:
                logger.warning(
                    "Value %g exceeds %g; result may lose precision",
                    value, self.precision_warning_threshold,
                )
            results.append(first.model_copy(update={
                "value": value,
                "result": self.convert_units(value, first.from_unit, first.to_unit),
                "precision_warning": warn,
            }))
        return results

    def _resolve_as(self, error_cls, token: str, category) -> UnitDefinition:
        try:
            return self.resolve(token, category)
        except UnknownUnitError:
            raise error_cls(token, category=_category_name(category)) from None


def _category_name(category: Union[Category, str]) -> str:
    return category.value if isinstance(category, Category) else str(category)
