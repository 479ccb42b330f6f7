# -*- coding: utf-8 -*-
"""
Unit Registry

Immutable, process-wide table of unit definitions grouped by category,
plus token lookup. The table is built once (``build_default_registry``)
and has no mutation API afterwards.

Lookup compares an already-normalized token first against each unit's
canonical key (the normalized symbol), then against its aliases. The
pseudo-category ``All`` searches every category in display order.

Base units (factor 1.0) per category:
    Length: m        Mass: g          Time: s          Volume: L
    Area: m²         Speed: m/s       Digital Storage: B
    Energy: J        Power: W         Pressure: Pa
    Temperature: affine, routed through degrees Celsius
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from unitconv.calculation.normalization import is_normalized, normalize
from unitconv.exceptions import RegistryError
from unitconv.models import (
    ALL,
    AffineScale,
    Category,
    LinearScale,
    UnitDefinition,
)

logger = logging.getLogger(__name__)

CategoryScope = Union[Category, str]


def _linear(name, symbol, factor, category, aliases=(), description=""):
    return UnitDefinition(
        name=name,
        symbol=symbol,
        category=category,
        scale=LinearScale(factor=factor),
        aliases=tuple(aliases),
        description=description,
    )


def _affine(name, symbol, offset, numerator, denominator, aliases=(), description=""):
    return UnitDefinition(
        name=name,
        symbol=symbol,
        category=Category.TEMPERATURE,
        scale=AffineScale(offset=offset, numerator=numerator, denominator=denominator),
        aliases=tuple(aliases),
        description=description,
    )


def builtin_units() -> List[UnitDefinition]:
    """Return the built-in unit set in registration order."""
    length = Category.LENGTH
    mass = Category.MASS
    time_ = Category.TIME
    volume = Category.VOLUME
    area = Category.AREA
    speed = Category.SPEED
    storage = Category.DIGITAL_STORAGE
    energy = Category.ENERGY
    power = Category.POWER
    pressure = Category.PRESSURE

    return [
        # Length (base m)
        _linear("Meter", "m", 1.0, length, ("METER", "METRE", "METERS"),
                "Base unit of length in the metric system"),
        _linear("Kilometer", "km", 1000.0, length, ("KM", "KILOMETER", "KILOMETRE"),
                "1000 meters, commonly used for long distances"),
        _linear("Centimeter", "cm", 0.01, length, ("CM", "CENTIMETER", "CENTIMETRE"),
                "One hundredth of a meter"),
        _linear("Millimeter", "mm", 0.001, length, ("MM", "MILLIMETER", "MILLIMETRE"),
                "One thousandth of a meter"),
        _linear("Inch", "in", 0.0254, length, ("IN", "INCH", "INCHES"),
                "Imperial unit of length, 1/12 of a foot"),
        _linear("Foot", "ft", 0.3048, length, ("FT", "FOOT", "FEET"),
                "Imperial unit of length, 12 inches"),
        _linear("Yard", "yd", 0.9144, length, ("YD", "YARD", "YARDS"),
                "Imperial unit of length, 3 feet"),
        _linear("Mile", "mi", 1609.344, length, ("MI", "MILE", "MILES"),
                "Imperial unit of length, 5280 feet"),
        _linear("Light Year", "ly", 9.461e15, length, ("LIGHTYEAR", "LIGHTYEARS"),
                "Distance light travels in one year"),

        # Temperature (affine, via Celsius)
        _affine("Celsius", "C", 0.0, 1.0, 1.0, ("CELSIUS", "°C"),
                "Water freezes at 0 and boils at 100 at sea level"),
        _affine("Fahrenheit", "F", 32.0, 5.0, 9.0, ("FAHRENHEIT", "°F"),
                "Water freezes at 32 and boils at 212 at sea level"),
        _affine("Kelvin", "K", 273.15, 1.0, 1.0, ("KELVIN",),
                "SI unit of thermodynamic temperature, 0 at absolute zero"),

        # Digital Storage (base B, binary multiples)
        _linear("Byte", "B", 1.0, storage, ("BYTE", "BYTES"),
                "8 bits, basic unit of digital storage"),
        _linear("Kilobyte", "KB", 1024.0, storage, ("KILOBYTE", "KILOBYTES"),
                "1024 bytes"),
        _linear("Megabyte", "MB", 1048576.0, storage, ("MEGABYTE", "MEGABYTES"),
                "1024 kilobytes"),
        _linear("Gigabyte", "GB", 1073741824.0, storage, ("GIGABYTE", "GIGABYTES"),
                "1024 megabytes"),
        _linear("Terabyte", "TB", 1099511627776.0, storage, ("TERABYTE", "TERABYTES"),
                "1024 gigabytes"),

        # Mass (base g)
        _linear("Gram", "g", 1.0, mass, ("GRAM", "GRAMS"),
                "Base unit of mass used here, 1/1000 of a kilogram"),
        _linear("Kilogram", "kg", 1000.0, mass, ("KILOGRAM", "KILOGRAMS", "KILO"),
                "SI unit of mass, 1000 grams"),
        _linear("Milligram", "mg", 0.001, mass, ("MILLIGRAM", "MILLIGRAMS"),
                "One thousandth of a gram"),
        _linear("Pound", "lb", 453.59237, mass, ("LBS", "POUND", "POUNDS"),
                "Avoirdupois pound, exactly 0.45359237 kg"),
        _linear("Ounce", "oz", 28.349523125, mass, ("OUNCE", "OUNCES"),
                "1/16 of a pound"),

        # Time (base s)
        _linear("Second", "s", 1.0, time_, ("SEC", "SECOND", "SECONDS"),
                "SI unit of time"),
        _linear("Minute", "min", 60.0, time_, ("MIN", "MINUTE", "MINUTES"),
                "60 seconds"),
        _linear("Hour", "hr", 3600.0, time_, ("h", "HR", "HOUR", "HOURS"),
                "60 minutes"),
        _linear("Day", "day", 86400.0, time_, ("d", "DAY", "DAYS"),
                "24 hours"),
        _linear("Week", "week", 604800.0, time_, ("w", "WEEK", "WEEKS"),
                "7 days"),

        # Volume (base L)
        _linear("Liter", "L", 1.0, volume, ("LITER", "LITRE", "LITERS"),
                "Metric unit of volume, one cubic decimeter"),
        _linear("Milliliter", "mL", 0.001, volume, ("ML", "MILLILITER", "MILLILITRE"),
                "One thousandth of a liter"),
        _linear("Gallon", "gal", 3.785411784, volume, ("GALLON", "GALLONS"),
                "US liquid gallon, 231 cubic inches"),
        _linear("Quart", "qt", 0.946352946, volume, ("QUART", "QUARTS"),
                "US liquid quart, 1/4 gallon"),
        _linear("Pint", "pt", 0.473176473, volume, ("PINT", "PINTS"),
                "US liquid pint, 1/2 quart"),

        # Area (base m²)
        _linear("Square Meter", "m²", 1.0, area, ("M2", "SQM"),
                "SI unit of area"),
        _linear("Square Kilometer", "km²", 1e6, area, ("KM2", "SQKM"),
                "One million square meters"),
        _linear("Square Foot", "ft²", 0.09290304, area, ("FT2", "SQFT"),
                "Area of a square one foot on a side"),
        _linear("Square Mile", "mi²", 2589988.110336, area, ("MI2", "SQMI"),
                "Area of a square one mile on a side"),
        _linear("Acre", "ac", 4046.8564224, area, ("ACRE", "ACRES"),
                "Imperial unit of land area, 43560 square feet"),

        # Speed (base m/s)
        _linear("Meter per Second", "m/s", 1.0, speed, ("MPS",),
                "SI unit of speed"),
        _linear("Kilometer per Hour", "km/h", 0.277777778, speed, ("KPH", "KMH"),
                "Common road speed unit outside the US"),
        _linear("Mile per Hour", "mph", 0.44704, speed, ("MILESPERHOUR",),
                "Road speed unit in the US and UK"),
        _linear("Knot", "kt", 0.514444444, speed, ("KN", "KNOT", "KNOTS"),
                "One nautical mile per hour"),

        # Energy (base J)
        _linear("Joule", "J", 1.0, energy, ("JOULE", "JOULES"),
                "SI unit of energy"),
        _linear("Calorie", "cal", 4.184, energy, ("CALORIE", "CALORIES"),
                "Energy needed to raise 1 g of water by 1 degree Celsius"),
        _linear("Kilowatt Hour", "kWh", 3.6e6, energy, ("KILOWATTHOUR",),
                "Energy of 1 kilowatt of power sustained for 1 hour"),
        _linear("Electron Volt", "eV", 1.602e-19, energy, ("ELECTRONVOLT",),
                "Energy gained by an electron moving through 1 volt"),

        # Power (base W)
        _linear("Watt", "W", 1.0, power, ("WATT", "WATTS"),
                "SI unit of power"),
        _linear("Kilowatt", "kW", 1000.0, power, ("KW", "KILOWATT", "KILOWATTS"),
                "1000 watts"),
        _linear("Megawatt", "MW", 1e6, power, ("MEGAWATT", "MEGAWATTS"),
                "One million watts"),
        _linear("Horsepower", "hp", 745.7, power, ("HP", "HORSEPOWER"),
                "Mechanical horsepower, 550 foot-pounds per second"),

        # Pressure (base Pa)
        _linear("Pascal", "Pa", 1.0, pressure, ("PA", "PASCAL", "PASCALS"),
                "SI unit of pressure"),
        _linear("Kilopascal", "kPa", 1000.0, pressure, ("KPA", "KILOPASCAL"),
                "1000 pascals"),
        _linear("Bar", "bar", 1e5, pressure, ("BAR", "BARS"),
                "100,000 pascals"),
        _linear("Atmosphere", "atm", 101325.0, pressure, ("ATM", "ATMOSPHERE"),
                "Standard atmospheric pressure at sea level"),
        _linear("PSI", "psi", 6894.76, pressure, ("PSI", "POUNDSPERSQUAREINCH"),
                "Pounds per square inch"),
    ]


class UnitRegistry:
    """Read-only table of units, indexed for lookup.

    Built from a list of definitions, usually through
    :func:`build_default_registry`; there is no way to add units to an
    existing registry.

    Example:
        >>> registry = build_default_registry()
        >>> registry.lookup("km", Category.LENGTH).name
        'Kilometer'
        >>> registry.exists("KG", "All")
        True
    """

    def __init__(self, definitions: Iterable[UnitDefinition] = ()):
        self._units: Dict[Category, List[UnitDefinition]] = {c: [] for c in Category}
        self._by_key: Dict[Category, Dict[str, UnitDefinition]] = {c: {} for c in Category}
        self._by_alias: Dict[Category, Dict[str, UnitDefinition]] = {c: {} for c in Category}
        for unit in definitions:
            self._register(unit)
        self._validate_temperature()
        logger.debug(
            "UnitRegistry built: %d units in %d categories",
            len(self), len(self.categories()),
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _register(self, unit: UnitDefinition) -> None:
        category = unit.category
        key = normalize(unit.symbol)
        taken = self._by_key[category].keys() | self._by_alias[category].keys()

        if key in taken:
            raise RegistryError(
                f"Duplicate unit key '{key}' in category {category.value}",
                context={"symbol": unit.symbol, "category": category.value},
            )
        if unit.is_temperature != (category is Category.TEMPERATURE):
            raise RegistryError(
                f"Unit '{unit.symbol}': only Temperature units may use an affine scale",
                context={"symbol": unit.symbol, "category": category.value},
            )

        aliases = set()
        for alias in unit.aliases:
            if not is_normalized(alias):
                raise RegistryError(
                    f"Alias '{alias}' of unit '{unit.symbol}' is not in normalized form",
                    context={"alias": alias, "expected": normalize(alias)},
                )
            if alias == key or alias in taken or alias in aliases:
                raise RegistryError(
                    f"Duplicate alias '{alias}' in category {category.value}",
                    context={"alias": alias, "symbol": unit.symbol},
                )
            aliases.add(alias)

        self._units[category].append(unit)
        self._by_key[category][key] = unit
        for alias in unit.aliases:
            self._by_alias[category][alias] = unit

    def _validate_temperature(self) -> None:
        symbols = {u.symbol for u in self._units[Category.TEMPERATURE]}
        if symbols and symbols != {"C", "F", "K"}:
            raise RegistryError(
                f"Temperature must hold exactly C, F and K, got {sorted(symbols)}",
                context={"symbols": sorted(symbols)},
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def categories(self) -> Tuple[Category, ...]:
        """Categories that hold at least one unit, in display order."""
        return tuple(c for c in Category if self._units[c])

    def iter(self, category: CategoryScope) -> Iterator[UnitDefinition]:
        """Lazily yield the units of ``category`` in registration order."""
        for scope in self._scopes(category):
            yield from self._units[scope]

    def __iter__(self) -> Iterator[UnitDefinition]:
        return self.iter(ALL)

    def __len__(self) -> int:
        return sum(len(units) for units in self._units.values())

    def lookup(self, token: str, category: CategoryScope = ALL) -> Optional[UnitDefinition]:
        """Resolve a normalized token within ``category``.

        Symbols win over aliases; within each pass the first category in
        display order wins. The token is not normalized again here.

        Returns:
            The matching unit, or None.
        """
        scopes = self._scopes(category)
        for scope in scopes:
            unit = self._by_key[scope].get(token)
            if unit is not None:
                return unit
        for scope in scopes:
            unit = self._by_alias[scope].get(token)
            if unit is not None:
                return unit
        return None

    def exists(self, token: str, category: CategoryScope = ALL) -> bool:
        return self.lookup(token, category) is not None

    def _scopes(self, category: CategoryScope) -> Tuple[Category, ...]:
        if category == ALL:
            return tuple(Category)
        try:
            return (Category(category),)
        except ValueError:
            raise ValueError(f"Unknown category: {category}") from None


def build_default_registry() -> UnitRegistry:
    """Build the registry holding the built-in unit set."""
    return UnitRegistry(builtin_units())
