"""
=====================
Environment Variables
=====================

Configuration can be supplied through environment variables carrying a
common prefix, ``CONFIG`` by default. The prefix may be followed by a
single underscore, a double underscore or a colon, and the remainder of
the name is the configuration key::

    CONFIG_LOG_LEVEL=debug           -> log_level
    CONFIG__DATABASE__HOST=db.local  -> database:host
    CONFIG_PEOPLE='[{"id": "a"}]'    -> people (parsed as JSON)

"""
from __future__ import annotations

import json
from collections.abc import Iterator, Mapping

DEFAULT_PREFIX = "CONFIG"


def strip_config_prefix(name: str, prefix: str = DEFAULT_PREFIX) -> tuple[str, bool]:
    """Remove the configuration prefix from a variable name.

    The comparison ignores case.

    Returns
    -------
        The name without its prefix, and whether a prefix was found. A
        name without a prefix is returned unchanged.
    """
    upper_name = name.upper()
    for separator in ("__", "_", ":"):
        candidate = f"{prefix.upper()}{separator}"
        if upper_name.startswith(candidate):
            return name[len(candidate) :], True
    return name, False


def is_json(value: str) -> bool:
    """Whether ``value`` is a bracketed JSON object or array."""
    value = value.strip()
    bracketed = (value.startswith("{") and value.endswith("}")) or (
        value.startswith("[") and value.endswith("]")
    )
    if not bracketed:
        return False
    try:
        json.loads(value)
    except json.JSONDecodeError:
        return False
    return True


def environment_pairs(
    environ: Mapping[str, str], prefix: str = DEFAULT_PREFIX
) -> Iterator[tuple[str, str]]:
    """Yield ``(key, value)`` for every prefixed variable in ``environ``."""
    for name, value in environ.items():
        key, has_prefix = strip_config_prefix(name, prefix)
        if has_prefix and key:
            yield key, value
