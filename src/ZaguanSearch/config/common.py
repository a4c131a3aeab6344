"""Shared helpers for configuration loading and validation.

Every helper takes the full dotted key (e.g. `search.hits_per_page`) so that
errors point at the offending config entry.
"""

from __future__ import annotations

from typing import Any, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a mapping section of the root config.

    Raises:
        ValueError: If a required section is missing.
        TypeError: If the section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    """Return `section[field]`, raising ValueError naming `config_key` if absent."""
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field]


def expect_str(value: Any, config_key: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_bool(value: Any, config_key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    """Validate an integer; booleans are rejected even though they are ints."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_positive_int(value: Any, config_key: str) -> int:
    number = expect_int(value, config_key)
    if number <= 0:
        raise ValueError(f"{config_key} must be positive")
    return number


def expect_str_list(value: Any, config_key: str) -> list[str]:
    """Validate a list of strings, reporting the first bad item by index."""
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise TypeError(f"{config_key}[{idx}] must be a string")
    return list(value)
