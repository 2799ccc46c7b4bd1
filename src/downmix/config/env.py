"""Typed access to DOWNMIX_* environment overrides.

EnvReader takes an optional mapping so tests can inject variables without
touching os.environ.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class EnvReader:
    """Reads environment overrides with type conversion.

    Every getter returns ``fallback`` when the variable is unset, which
    lets callers pass the config file value straight through. A variable
    that is set but cannot be converted raises ValueError naming it.
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, fallback: str | None = None) -> str | None:
        """Return the raw value of var, or fallback if unset."""
        return self._env.get(var, fallback)

    def get_float(self, var: str, fallback: float | None = None) -> float | None:
        """Return var as a float (timeouts in seconds).

        Raises:
            ValueError: If var is set but is not a number.
        """
        raw = self._env.get(var)
        if raw is None:
            return fallback
        try:
            return float(raw)
        except ValueError as e:
            raise ValueError(f"{var} must be a number, got {raw!r}") from e

    def get_bool(self, var: str, fallback: bool | None = None) -> bool | None:
        """Return var as a flag.

        Accepts 1/0, true/false, yes/no and on/off in any case.

        Raises:
            ValueError: If var is set to anything else.
        """
        raw = self._env.get(var)
        if raw is None:
            return fallback
        value = raw.strip().casefold()
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise ValueError(f"{var} must be true or false, got {raw!r}")

    def get_path(self, var: str, fallback: Path | None = None) -> Path | None:
        """Return var as a tilde-expanded path; empty counts as unset.

        Existence is not checked here. Tool resolution reports a missing
        executable itself.
        """
        raw = self._env.get(var)
        if not raw:
            return fallback
        return Path(raw).expanduser()
