# -*- coding: utf-8 -*-
"""Unit Converter Exception Hierarchy.

Exception Hierarchy:
    UnitConvException (base)
    ├── RegistryError
    ├── ConversionError
    │   ├── UnknownUnitError
    │   │   ├── UnknownFromUnitError
    │   │   └── UnknownToUnitError
    │   ├── CrossCategoryError
    │   └── ParseNumberError
    ├── PersistenceIOError
    └── RetryBudgetExhausted

All exceptions include:
- error_code: Unique error identifier
- context: Dictionary with error-specific details
- timestamp: When the error occurred

Only RegistryError is fatal, and only while the registry is being built.
Everything else is reported to the user and the program carries on.

Example:
    >>> from unitconv.exceptions import UnknownFromUnitError
    >>> raise UnknownFromUnitError("furlong", category="Length")
"""

import json
import re
from datetime import datetime
from typing import Any, Dict, Optional


# ==============================================================================
# Base Exception
# ==============================================================================

class UnitConvException(Exception):
    """Base exception for all unit converter errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error identifier (e.g., "UC_CROSS_CATEGORY_ERROR")
        context: Dictionary with error-specific details
        timestamp: When the error occurred
    """

    ERROR_PREFIX = "UC"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.timestamp = datetime.now()

    def _generate_error_code(self) -> str:
        """Generate error code like "UC_UNKNOWN_UNIT_ERROR" from the class name."""
        error_type = re.sub(r'(?<!^)(?=[A-Z])', '_', self.__class__.__name__).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}')"
        )


# ==============================================================================
# Registry Exceptions
# ==============================================================================

class RegistryError(UnitConvException):
    """Raised when the unit table is inconsistent.

    This is a build-time bug (duplicate canonical key within a category,
    alias not in normalized form, non-positive factor), never a runtime
    condition.
    """
    pass


# ==============================================================================
# Conversion Exceptions
# ==============================================================================

class ConversionError(UnitConvException):
    """Base for errors raised on the conversion path."""
    pass


class UnknownUnitError(ConversionError):
    """Raised when a token does not resolve to any unit in scope.

    Example:
        >>> raise UnknownUnitError("parsec", category="Length")
    """

    role = "unit"

    def __init__(self, token: str, category: Optional[str] = None, **kwargs):
        where = f" in {category}" if category and category != "All" else ""
        message = kwargs.pop("message", None) or f"Unknown {self.role}: '{token}'{where}"
        context = kwargs.pop("context", {})
        context.update({"token": token, "category": category})
        super().__init__(message=message, context=context, **kwargs)
        self.token = token
        self.category = category


class UnknownFromUnitError(UnknownUnitError):
    """Source unit of a conversion is unknown."""
    role = "source unit"


class UnknownToUnitError(UnknownUnitError):
    """Target unit of a conversion is unknown."""
    role = "target unit"


class CrossCategoryError(ConversionError):
    """Raised when source and target units belong to different categories.

    Example:
        >>> raise CrossCategoryError("kg", "km", "Mass", "Length")
    """

    def __init__(
        self,
        from_token: str,
        to_token: str,
        from_category: str,
        to_category: str,
        **kwargs,
    ):
        message = (
            f"Cannot convert between different unit types: "
            f"{from_token} ({from_category}) -> {to_token} ({to_category})"
        )
        context = kwargs.pop("context", {})
        context.update({
            "from": from_token,
            "to": to_token,
            "from_category": from_category,
            "to_category": to_category,
        })
        super().__init__(message=message, context=context, **kwargs)
        self.from_category = from_category
        self.to_category = to_category


class ParseNumberError(ConversionError):
    """Raised when user text cannot be read as a number."""

    def __init__(self, raw: str, **kwargs):
        message = kwargs.pop("message", None) or f"Invalid number: '{raw}'"
        context = kwargs.pop("context", {})
        context["raw"] = raw
        super().__init__(message=message, context=context, **kwargs)
        self.raw = raw


# ==============================================================================
# Persistence / Interaction Exceptions
# ==============================================================================

class PersistenceIOError(UnitConvException):
    """Raised (and swallowed by the history store) when a file cannot be written.

    The in-memory history stays authoritative when this happens.
    """

    def __init__(self, path: str, operation: str, reason: str = "", **kwargs):
        message = f"Could not {operation} {path}"
        if reason:
            message = f"{message}: {reason}"
        context = kwargs.pop("context", {})
        context.update({"path": str(path), "operation": operation})
        super().__init__(message=message, context=context, **kwargs)
        self.path = str(path)
        self.operation = operation


class RetryBudgetExhausted(UnitConvException):
    """Raised when an interactive prompt gets too many invalid answers in a row."""

    def __init__(self, prompt: str, attempts: int, **kwargs):
        message = f"Too many failed attempts ({attempts}). Returning to menu."
        context = kwargs.pop("context", {})
        context.update({"prompt": prompt, "attempts": attempts})
        super().__init__(message=message, context=context, **kwargs)
        self.attempts = attempts
