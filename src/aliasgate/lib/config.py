"""config: lazy-loaded, typed accessor for aliasgate defaults.

Reads ``config/defaults.yaml`` on first access and caches the result for the
lifetime of the process.  Typed accessor helpers (``get_str``, ``get_int``,
``get_bool``, ``get_list``) enforce expected types at the call-site so that
configuration mismatches surface at the first read.  No module-level side
effects; config is loaded lazily.

The ``reset()`` function exists solely for test isolation.
"""

from __future__ import annotations

from typing import Any

import yaml

from aliasgate._paths import defaults_path

_DEFAULTS: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_defaults() -> dict[str, Any]:
    """Load and cache the defaults.yaml configuration file.

    Returns:
        The full configuration dictionary.

    Raises:
        FileNotFoundError: If defaults.yaml is missing.
        yaml.YAMLError: If defaults.yaml contains invalid YAML.
    """
    global _DEFAULTS  # noqa: PLW0603
    if _DEFAULTS is None:
        with open(defaults_path(), encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        if not isinstance(data, dict):
            msg = f"defaults.yaml must be a YAML mapping, got {type(data).__name__}"
            raise TypeError(msg)
        _DEFAULTS = data
    return _DEFAULTS


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def get(dotted_key: str) -> Any:
    """Access a nested config value using dot notation.

    Args:
        dotted_key: A dot-separated path like ``"rules.SA1209.title"``.

    Returns:
        The value at the specified path.

    Raises:
        KeyError: If any segment of the path is missing.
    """
    node: Any = load_defaults()
    for part in dotted_key.split("."):
        if not isinstance(node, dict) or part not in node:
            msg = f"Config key not found: {dotted_key!r} (missing segment: {part!r})"
            raise KeyError(msg)
        node = node[part]
    return node


def _typed(dotted_key: str, expected: type) -> Any:
    value = get(dotted_key)
    # bool is an int subclass; keep the two apart.
    if expected is int and isinstance(value, bool):
        value_ok = False
    else:
        value_ok = isinstance(value, expected)
    if not value_ok:
        msg = (
            f"Expected {expected.__name__} for {dotted_key!r}, "
            f"got {type(value).__name__}"
        )
        raise TypeError(msg)
    return value


def get_str(dotted_key: str) -> str:
    """Return a config value as a string.

    Raises:
        KeyError: If the key is missing.
        TypeError: If the value is not a string.
    """
    return _typed(dotted_key, str)


def get_int(dotted_key: str) -> int:
    """Return a config value as an integer.

    Raises:
        KeyError: If the key is missing.
        TypeError: If the value is not an integer.
    """
    return _typed(dotted_key, int)


def get_bool(dotted_key: str) -> bool:
    """Return a config value as a boolean.

    Raises:
        KeyError: If the key is missing.
        TypeError: If the value is not a boolean.
    """
    return _typed(dotted_key, bool)


def get_list(dotted_key: str) -> list[Any]:
    """Return a config value as a list.

    Raises:
        KeyError: If the key is missing.
        TypeError: If the value is not a list.
    """
    return _typed(dotted_key, list)


# ---------------------------------------------------------------------------
# Test utilities
# ---------------------------------------------------------------------------


def reset() -> None:
    """Clear the cached config (used by tests)."""
    global _DEFAULTS  # noqa: PLW0603
    _DEFAULTS = None
