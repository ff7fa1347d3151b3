"""Global configuration for neurite-paths.

This module provides a package-wide configuration surface for the defaults
shared by every path buffer (reserved capacity, growth factor, tangent
window and unit label). Defaults are read from the environment once and can
be overridden programmatically, either permanently via `configure` or
temporarily via the `use` context manager.
"""

from __future__ import annotations

import contextlib
import logging
import math
import os
from dataclasses import dataclass, fields, replace
from typing import Any, ContextManager, Iterator


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
_LOGGER = logging.getLogger("neurite_paths")


def _parse_log_level(val: str | int | None, default: int = logging.WARNING) -> int:
    """Parse a logging level string or int into a `logging` level constant.

    Args:
        val: The desired level (e.g., "DEBUG", 10). May be None.
        default: Fallback level if `val` cannot be parsed.

    Returns:
        An integer logging level (e.g., logging.DEBUG).
    """
    if val is None:
        return default
    if isinstance(val, int):
        return val
    lvl = getattr(logging, str(val).upper(), None)
    if isinstance(lvl, int):
        return lvl
    return default


def set_log_level(level: str | int = "WARNING") -> None:
    """Set the package logger level programmatically.

    Args:
        level: A standard logging level name or integer.
    """
    _LOGGER.setLevel(_parse_log_level(level))


# Default level can be overridden by env.
set_log_level(os.getenv("NEURITE_PATHS_LOGLEVEL", "WARNING"))


# -----------------------------------------------------------------------------
# Env helpers
# -----------------------------------------------------------------------------
def bool_env(varname: str, default: bool) -> bool:
    """Read an environment variable and interpret it as a boolean.

    True values: 'y', 'yes', 't', 'true', 'on', '1'.
    False values: 'n', 'no', 'f', 'false', 'off', '0'.

    Args:
        varname: The name of the environment variable.
        default: The default value if the variable is unset.

    Returns:
        A boolean value parsed from the environment.
    """
    val = os.getenv(varname, str(default))
    val = val.lower()
    if val in ("y", "yes", "t", "true", "on", "1"):
        return True
    if val in ("n", "no", "f", "false", "off", "0"):
        return False
    raise ValueError(f"invalid truth value {val!r} for environment {varname!r}")


def int_env(varname: str, default: int) -> int:
    """Read an environment variable and interpret it as an integer.

    Args:
        varname: The name of the environment variable.
        default: The default value if the variable is unset.

    Returns:
        The integer value parsed from the environment.
    """
    return int(os.getenv(varname, str(default)))


def float_env(varname: str, default: float) -> float:
    """Read an environment variable and interpret it as a float.

    Args:
        varname: The name of the environment variable.
        default: The default value if the variable is unset.

    Returns:
        The float value parsed from the environment.
    """
    return float(os.getenv(varname, str(default)))


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Settings:
    """Snapshot of the defaults applied to new path buffers."""

    reserve: int = 128
    growth_factor: float = 1.2
    tangent_half_window: int = 2
    default_unit: str = "um"

    def validated(self) -> Settings:
        """Return self after checking every field, raising ValueError otherwise."""
        if int(self.reserve) < 1:
            raise ValueError(f"reserve must be >= 1, got {self.reserve}")
        if not math.isfinite(self.growth_factor) or self.growth_factor <= 1.0:
            raise ValueError(f"growth_factor must be > 1, got {self.growth_factor}")
        if int(self.tangent_half_window) < 1:
            raise ValueError(
                f"tangent_half_window must be >= 1, got {self.tangent_half_window}"
            )
        if not str(self.default_unit).strip():
            raise ValueError("default_unit must be a non-empty label")
        return self


def _settings_from_env() -> Settings:
    settings = Settings(
        reserve=int_env("NEURITE_PATHS_RESERVE", Settings.reserve),
        growth_factor=float_env("NEURITE_PATHS_GROWTH", Settings.growth_factor),
        tangent_half_window=int_env(
            "NEURITE_PATHS_TANGENT_WINDOW", Settings.tangent_half_window
        ),
        default_unit=os.getenv("NEURITE_PATHS_UNIT", Settings.default_unit),
    )
    _LOGGER.debug("Settings read from environment: %s", settings)
    return settings.validated()


class Config:
    """Global configuration for neurite-paths.

    Holds the active `Settings`; code reading a default always goes through
    this object so overrides made with `configure`/`use` are seen everywhere.
    """

    def __init__(self) -> None:
        """Initialize config using environment defaults."""
        self._settings: Settings = _settings_from_env()
        _LOGGER.info("Config initialized: %s", self._settings)

    @property
    def settings(self) -> Settings:
        """Return the active settings snapshot."""
        return self._settings

    def configure(self, **overrides: Any) -> Config:
        """Override one or more settings.

        Args:
            **overrides: Field names of `Settings` and their new values.

        Returns:
            The `Config` instance (for chaining).

        Raises:
            ValueError: If a key is unknown or a value is invalid. The active
                settings are left untouched in that case.
        """
        known = {f.name for f in fields(Settings)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")
        new = replace(self._settings, **overrides).validated()
        _LOGGER.info("Reconfiguring: %s", overrides)
        self._settings = new
        return self

    @contextlib.contextmanager
    def use(self, **overrides: Any) -> Iterator[Settings]:
        """Temporarily override settings within a context manager.

        Args:
            **overrides: Field names of `Settings` and their new values.

        Yields:
            The temporary settings. Restores the previous settings on exit.
        """
        prev = self._settings
        try:
            self.configure(**overrides)
            yield self._settings
        finally:
            self._settings = prev
            _LOGGER.info("Restored previous settings: %s", self._settings)

    @property
    def reserve(self) -> int:
        """Return the default capacity reserved by new buffers."""
        return int(self._settings.reserve)

    @property
    def growth_factor(self) -> float:
        """Return the multiplicative growth factor used when a buffer is full."""
        return float(self._settings.growth_factor)

    @property
    def tangent_half_window(self) -> int:
        """Return the number of points either side used to guess tangents."""
        return int(self._settings.tangent_half_window)

    @property
    def default_unit(self) -> str:
        """Return the unit label used when none is supplied."""
        return str(self._settings.default_unit)


# Singleton & forwards
config = Config()


def configure(**overrides: Any) -> Config:
    """Override settings (module-level)."""
    return config.configure(**overrides)


def use(**overrides: Any) -> ContextManager[Settings]:
    """Temporarily override settings within a context manager (module-level)."""
    return config.use(**overrides)


def reserve() -> int:
    """Return the default reserved capacity (module-level)."""
    return config.reserve


def growth_factor() -> float:
    """Return the buffer growth factor (module-level)."""
    return config.growth_factor


def tangent_half_window() -> int:
    """Return the tangent half window (module-level)."""
    return config.tangent_half_window


def default_unit() -> str:
    """Return the default unit label (module-level)."""
    return config.default_unit
