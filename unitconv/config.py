# -*- coding: utf-8 -*-
"""
Unit Converter Configuration

Centralized configuration for the unit converter covering:
- History file location and CSV export default
- History capacity (MAX_HISTORY) and interactive retry budget
- Precision warning threshold for very large magnitudes
- Logging level and terminal behaviour

All settings can be overridden via environment variables with the
``UNITCONV_`` prefix (e.g. ``UNITCONV_HISTORY_FILE``,
``UNITCONV_MAX_HISTORY``), or loaded from a YAML file.

Environment Variable Reference (UNITCONV_ prefix):
    UNITCONV_HISTORY_FILE                 - History log path
    UNITCONV_CSV_FILE                     - Default CSV export path
    UNITCONV_MAX_HISTORY                  - Maximum retained history entries
    UNITCONV_MAX_ATTEMPTS                 - Invalid answers tolerated per prompt
    UNITCONV_PRECISION_WARNING_THRESHOLD  - Magnitude that triggers a precision warning
    UNITCONV_LOG_LEVEL                    - Logging level (DEBUG/INFO/WARNING/ERROR)
    UNITCONV_CLEAR_SCREEN                 - Clear the terminal between screens

Example:
    >>> from unitconv.config import get_config
    >>> cfg = get_config()
    >>> print(cfg.history_file, cfg.max_history)
    conversion_history.txt 100

    >>> # Override for testing
    >>> from unitconv.config import set_config, reset_config, UnitConvConfig
    >>> set_config(UnitConvConfig(max_history=10))
    >>> reset_config()  # teardown
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

_ENV_PREFIX = "UNITCONV_"

_VALID_LOG_LEVELS = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)

#: Default number of retained history entries.
MAX_HISTORY: int = 100


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class UnitConvConfig:
    """Complete configuration for the unit converter.

    Attributes:
        history_file: Path of the textual history log. Relative paths
            resolve against the process's current working directory.
        csv_file: Default destination of the CSV export.
        max_history: Maximum entries kept in the history log; the oldest
            entry is evicted on overflow.
        max_attempts: Consecutive invalid answers an interactive prompt
            accepts before giving up and returning to the menu.
        precision_warning_threshold: Absolute magnitude at or above which
            a conversion logs a precision warning (the result is still
            returned).
        log_level: Logging verbosity level.
        clear_screen: Clear the terminal before each interactive screen.
    """

    # -- Persistence ---------------------------------------------------------
    history_file: str = "conversion_history.txt"
    csv_file: str = "conversion_history.csv"

    # -- Capacity ------------------------------------------------------------
    max_history: int = MAX_HISTORY
    max_attempts: int = 3

    # -- Numerics ------------------------------------------------------------
    precision_warning_threshold: float = 1e15

    # -- Logging / terminal --------------------------------------------------
    log_level: str = "WARNING"
    clear_screen: bool = True

    def __post_init__(self) -> None:
        """Validate configuration constraints after initialisation.

        Raises:
            ValueError: If any value has the wrong type or is outside
                its valid range. The message lists every detected error,
                not just the first.
        """
        errors: list[str] = []

        if not str(self.history_file).strip():
            errors.append("history_file must not be empty")
        if not str(self.csv_file).strip():
            errors.append("csv_file must not be empty")

        if not _is_int(self.max_history):
            errors.append(
                f"max_history must be an integer, got {self.max_history!r}"
            )
        elif not (1 <= self.max_history <= 100_000):
            errors.append(
                f"max_history must be in [1, 100000], got {self.max_history}"
            )
        if not _is_int(self.max_attempts):
            errors.append(
                f"max_attempts must be an integer, got {self.max_attempts!r}"
            )
        elif not (1 <= self.max_attempts <= 20):
            errors.append(
                f"max_attempts must be in [1, 20], got {self.max_attempts}"
            )

        if not (_is_int(self.precision_warning_threshold)
                or isinstance(self.precision_warning_threshold, float)):
            errors.append(
                f"precision_warning_threshold must be a number, "
                f"got {self.precision_warning_threshold!r}"
            )
        elif self.precision_warning_threshold <= 0:
            errors.append(
                f"precision_warning_threshold must be > 0, "
                f"got {self.precision_warning_threshold}"
            )

        normalised_log = str(self.log_level).upper()
        if normalised_log not in _VALID_LOG_LEVELS:
            errors.append(
                f"log_level must be one of {sorted(_VALID_LOG_LEVELS)}, "
                f"got '{self.log_level}'"
            )
        else:
            self.log_level = normalised_log

        if not isinstance(self.clear_screen, bool):
            errors.append(
                f"clear_screen must be true or false, got {self.clear_screen!r}"
            )

        if errors:
            raise ValueError(
                "UnitConvConfig validation failed:\n"
                + "\n".join(f"  - {e}" for e in errors)
            )

        logger.debug(
            "UnitConvConfig validated: history_file=%s, max_history=%d, "
            "max_attempts=%d, log_level=%s",
            self.history_file,
            self.max_history,
            self.max_attempts,
            self.log_level,
        )

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> UnitConvConfig:
        """Build a UnitConvConfig from environment variables.

        Every field can be overridden via ``UNITCONV_<FIELD_UPPER>``.
        Boolean values accept ``true/1/yes`` (case-insensitive).
        Malformed numeric values fall back to the class-level default
        and emit a WARNING log.
        """
        prefix = _ENV_PREFIX

        def _env(name: str) -> Optional[str]:
            return os.environ.get(f"{prefix}{name}")

        def _bool(name: str, default: bool) -> bool:
            val = _env(name)
            if val is None:
                return default
            return val.strip().lower() in ("true", "1", "yes")

        def _int(name: str, default: int) -> int:
            val = _env(name)
            if val is None:
                return default
            try:
                return int(val.strip())
            except ValueError:
                logger.warning(
                    "Invalid integer for %s%s=%r, using default %d",
                    prefix, name, val, default,
                )
                return default

        def _float(name: str, default: float) -> float:
            val = _env(name)
            if val is None:
                return default
            try:
                return float(val.strip())
            except ValueError:
                logger.warning(
                    "Invalid float for %s%s=%r, using default %g",
                    prefix, name, val, default,
                )
                return default

        def _str(name: str, default: str) -> str:
            val = _env(name)
            if val is None:
                return default
            return val.strip()

        config = cls(
            history_file=_str("HISTORY_FILE", cls.history_file),
            csv_file=_str("CSV_FILE", cls.csv_file),
            max_history=_int("MAX_HISTORY", cls.max_history),
            max_attempts=_int("MAX_ATTEMPTS", cls.max_attempts),
            precision_warning_threshold=_float(
                "PRECISION_WARNING_THRESHOLD",
                cls.precision_warning_threshold,
            ),
            log_level=_str("LOG_LEVEL", cls.log_level),
            clear_screen=_bool("CLEAR_SCREEN", cls.clear_screen),
        )

        logger.info(
            "UnitConvConfig loaded from environment: history_file=%s, "
            "max_history=%d",
            config.history_file,
            config.max_history,
        )
        return config

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> UnitConvConfig:
        """Load configuration from a YAML file.

        The file holds a flat mapping of field names to values. Fields
        not present keep their defaults.

        Raises:
            ValueError: On unknown keys, a non-mapping document, or any
                value that fails validation.
            OSError: If the file cannot be read.
        """
        config_path = Path(config_path)
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(
                f"Config file {config_path} must contain a mapping, "
                f"got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(
                f"Unknown config keys in {config_path}: {', '.join(unknown)}"
            )

        config = cls(**data)
        logger.info("UnitConvConfig loaded from file: %s", config_path)
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the configuration to a plain dictionary."""
        return {
            "history_file": self.history_file,
            "csv_file": self.csv_file,
            "max_history": self.max_history,
            "max_attempts": self.max_attempts,
            "precision_warning_threshold": self.precision_warning_threshold,
            "log_level": self.log_level,
            "clear_screen": self.clear_screen,
        }


# ---------------------------------------------------------------------------
# Thread-safe singleton accessor
# ---------------------------------------------------------------------------

_config_instance: Optional[UnitConvConfig] = None
_config_lock = threading.Lock()


def get_config() -> UnitConvConfig:
    """Return the singleton UnitConvConfig, creating it from env if needed."""
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = UnitConvConfig.from_env()
    return _config_instance


def set_config(config: UnitConvConfig) -> None:
    """Replace the singleton UnitConvConfig (testing and CLI overrides)."""
    global _config_instance
    with _config_lock:
        _config_instance = config
    logger.debug("UnitConvConfig replaced via set_config")


def reset_config() -> None:
    """Drop the singleton so the next get_config() re-reads the environment."""
    global _config_instance
    with _config_lock:
        _config_instance = None
