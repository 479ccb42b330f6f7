# -*- coding: utf-8 -*-
"""
Tests for the unit registry: the built-in table, lookup and build-time validation.
"""

import pytest

from unitconv.calculation.normalization import is_normalized, normalize
from unitconv.calculation.registry import UnitRegistry, build_default_registry, builtin_units
from unitconv.exceptions import RegistryError
from unitconv.models import ALL, AffineScale, Category, LinearScale, UnitDefinition


def _unit(symbol, category=Category.LENGTH, factor=1.0, aliases=()):
    return UnitDefinition(
        name=symbol.title(),
        symbol=symbol,
        category=category,
        scale=LinearScale(factor=factor),
        aliases=aliases,
    )


def _temperature_units():
    return [
        UnitDefinition(name="Celsius", symbol="C", category=Category.TEMPERATURE,
                       scale=AffineScale()),
        UnitDefinition(name="Fahrenheit", symbol="F", category=Category.TEMPERATURE,
                       scale=AffineScale(offset=32, numerator=5, denominator=9)),
        UnitDefinition(name="Kelvin", symbol="K", category=Category.TEMPERATURE,
                       scale=AffineScale(offset=273.15)),
    ]


class TestBuiltinTable:
    """Test the shape of the default registry."""

    def test_categories_in_display_order(self, registry):
        assert [c.value for c in registry.categories()] == [
            "Length", "Temperature", "Digital Storage", "Mass", "Time",
            "Volume", "Area", "Speed", "Energy", "Power", "Pressure",
        ]

    def test_unit_count(self, registry):
        assert len(registry) == 54
        assert len(list(registry)) == 54

    @pytest.mark.parametrize("category, symbols", [
        (Category.LENGTH, ["m", "km", "cm", "mm", "in", "ft", "yd", "mi", "ly"]),
        (Category.TEMPERATURE, ["C", "F", "K"]),
        (Category.DIGITAL_STORAGE, ["B", "KB", "MB", "GB", "TB"]),
        (Category.MASS, ["g", "kg", "mg", "lb", "oz"]),
        (Category.TIME, ["s", "min", "hr", "day", "week"]),
        (Category.VOLUME, ["L", "mL", "gal", "qt", "pt"]),
        (Category.AREA, ["m²", "km²", "ft²", "mi²", "ac"]),
        (Category.SPEED, ["m/s", "km/h", "mph", "kt"]),
        (Category.ENERGY, ["J", "cal", "kWh", "eV"]),
        (Category.POWER, ["W", "kW", "MW", "hp"]),
        (Category.PRESSURE, ["Pa", "kPa", "bar", "atm", "psi"]),
    ])
    def test_units_in_registration_order(self, registry, category, symbols):
        assert [u.symbol for u in registry.iter(category)] == symbols

    @pytest.mark.parametrize("category", [c for c in Category if c is not Category.TEMPERATURE])
    def test_first_unit_is_the_base_unit(self, registry, category):
        first = next(registry.iter(category))
        assert first.factor == 1.0

    @pytest.mark.parametrize("symbol, category, factor", [
        ("mi", Category.LENGTH, 1609.344),
        ("ly", Category.LENGTH, 9.461e15),
        ("TB", Category.DIGITAL_STORAGE, 1099511627776.0),
        ("lb", Category.MASS, 453.59237),
        ("week", Category.TIME, 604800.0),
        ("gal", Category.VOLUME, 3.785411784),
        ("mi²", Category.AREA, 2589988.110336),
        ("kt", Category.SPEED, 0.514444444),
        ("eV", Category.ENERGY, 1.602e-19),
        ("hp", Category.POWER, 745.7),
        ("psi", Category.PRESSURE, 6894.76),
    ])
    def test_factors(self, registry, symbol, category, factor):
        assert registry.lookup(normalize(symbol), category).factor == factor

    def test_temperature_units_are_affine(self, registry):
        units = list(registry.iter(Category.TEMPERATURE))
        assert all(u.is_temperature for u in units)
        assert all(u.factor is None for u in units)
        assert not any(u.is_temperature for u in registry if u.category is not Category.TEMPERATURE)

    def test_canonical_keys_are_unique_per_category(self, registry):
        for category in registry.categories():
            keys = [normalize(u.symbol) for u in registry.iter(category)]
            assert len(keys) == len(set(keys))

    def test_aliases_are_normalized(self, registry):
        for unit in registry:
            for alias in unit.aliases:
                assert is_normalized(alias), (unit.symbol, alias)

    def test_builtin_units_returns_fresh_list(self):
        assert builtin_units() == builtin_units()
        assert builtin_units() is not builtin_units()


class TestLookup:
    """Test token resolution."""

    def test_symbol_in_category(self, registry):
        assert registry.lookup("km", Category.LENGTH).name == "Kilometer"

    def test_symbol_in_all(self, registry):
        assert registry.lookup("KG", ALL).symbol == "kg"
        assert registry.lookup("C").symbol == "C"

    def test_category_given_as_string(self, registry):
        assert registry.lookup("KG", "Mass").symbol == "kg"

    @pytest.mark.parametrize("alias, symbol", [
        ("KILOMETRE", "km"),
        ("LBS", "lb"),
        ("SQFT", "ft²"),
        ("M2", "m²"),
        ("KPH", "km/h"),
        ("CELSIUS", "C"),
        ("°F", "F"),
        ("h", "hr"),
        ("d", "day"),
        ("w", "week"),
        ("ML", "mL"),
    ])
    def test_aliases(self, registry, alias, symbol):
        assert registry.lookup(alias).symbol == symbol

    def test_wrong_category_misses(self, registry):
        assert registry.lookup("km", Category.MASS) is None
        assert not registry.exists("km", Category.MASS)

    def test_unknown_token(self, registry):
        assert registry.lookup("FURLONG") is None
        assert not registry.exists("FURLONG")

    def test_lookup_does_not_normalize(self, registry):
        """Callers normalize first; raw lowercase 'kg' is not a key."""
        assert registry.lookup("kg") is None
        assert registry.lookup(normalize("kg")).symbol == "kg"

    def test_meter_is_case_sensitive(self, registry):
        assert registry.lookup("m").symbol == "m"
        assert registry.lookup("M") is None

    def test_symbol_beats_alias(self):
        """A key match anywhere in scope wins over an alias match."""
        registry = UnitRegistry([
            _unit("a", aliases=("X",)),
            _unit("X", category=Category.MASS),
        ])
        assert registry.lookup("X").category is Category.MASS
        assert registry.lookup("X", Category.LENGTH).symbol == "a"

    def test_first_category_wins(self):
        registry = UnitRegistry([
            _unit("Q", category=Category.MASS),
            _unit("Q", category=Category.LENGTH),
        ])
        assert registry.lookup("Q").category is Category.LENGTH

    def test_unknown_category(self, registry):
        with pytest.raises(ValueError, match="Unknown category"):
            registry.lookup("KG", "Colour")

    def test_iter_all_covers_every_category(self, registry):
        assert {u.category for u in registry.iter(ALL)} == set(Category)


class TestValidation:
    """Test build-time consistency checks."""

    def test_duplicate_key(self):
        with pytest.raises(RegistryError, match="Duplicate unit key"):
            UnitRegistry([_unit("km"), _unit("km", factor=2.0)])

    def test_duplicate_key_after_normalization(self):
        with pytest.raises(RegistryError):
            UnitRegistry([_unit("kg", category=Category.MASS), _unit("KG", category=Category.MASS)])

    def test_same_key_in_different_categories_is_allowed(self):
        registry = UnitRegistry([_unit("X"), _unit("X", category=Category.MASS)])
        assert len(registry) == 2

    def test_alias_must_be_normalized(self):
        with pytest.raises(RegistryError, match="not in normalized form") as exc_info:
            UnitRegistry([_unit("km", aliases=("kilometre",))])
        assert exc_info.value.context["expected"] == "KILOMETRE"

    def test_alias_clashing_with_key(self):
        with pytest.raises(RegistryError, match="Duplicate alias"):
            UnitRegistry([_unit("a"), _unit("b", aliases=("A",))])

    def test_key_clashing_with_alias(self):
        with pytest.raises(RegistryError, match="Duplicate unit key"):
            UnitRegistry([_unit("a", aliases=("B",)), _unit("b")])

    def test_alias_equal_to_own_key(self):
        with pytest.raises(RegistryError):
            UnitRegistry([_unit("b", aliases=("B",))])

    def test_affine_scale_outside_temperature(self):
        unit = UnitDefinition(name="Odd", symbol="odd", category=Category.LENGTH,
                              scale=AffineScale(offset=1))
        with pytest.raises(RegistryError, match="affine"):
            UnitRegistry([unit])

    def test_linear_scale_in_temperature(self):
        units = _temperature_units()[:2] + [_unit("K", category=Category.TEMPERATURE)]
        with pytest.raises(RegistryError, match="affine"):
            UnitRegistry(units)

    def test_temperature_requires_c_f_and_k(self):
        with pytest.raises(RegistryError, match="exactly C, F and K"):
            UnitRegistry(_temperature_units()[:2])

    def test_complete_temperature_set(self):
        registry = UnitRegistry(_temperature_units())
        assert registry.categories() == (Category.TEMPERATURE,)

    def test_empty_registry(self):
        registry = UnitRegistry()
        assert len(registry) == 0
        assert registry.categories() == ()

    def test_default_registry_builds(self):
        assert len(build_default_registry()) == 54

    def test_constructor_accepts_builtin_units(self):
        registry = UnitRegistry(builtin_units())
        assert list(registry) == list(build_default_registry())


class TestUnitDefinition:
    """Test model-level constraints on units."""

    def test_factor_must_be_positive(self):
        with pytest.raises(ValueError):
            LinearScale(factor=0)
        with pytest.raises(ValueError):
            LinearScale(factor=-1.0)

    def test_factor_must_be_finite(self):
        with pytest.raises(ValueError):
            LinearScale(factor=float("inf"))

    def test_symbol_rejects_commas(self):
        with pytest.raises(ValueError):
            _unit("a,b")

    def test_definitions_are_frozen(self, registry):
        unit = registry.lookup("km")
        with pytest.raises(ValueError):
            unit.name = "Other"

    def test_str(self, registry):
        assert str(registry.lookup("km")) == "Kilometer (km)"
