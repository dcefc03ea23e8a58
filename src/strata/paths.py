"""
===============
Path Addressing
===============

Configuration values are addressed by colon-delimited keys such as
``database:primary:host``. Keys coming from environment variables use a
double underscore as the separator instead (``DATABASE__PRIMARY__HOST``)
so both spellings are folded onto one normalized form before the key is
split into segments.

"""
from __future__ import annotations

from strata.types import PathLike

SEPARATOR = ":"
ALTERNATE_SEPARATOR = "__"


def normalize_key(key: str) -> str:
    """Fold the case of ``key`` and rewrite alternate separators to colons.

    Normalization is idempotent, so keys can be normalized again at every
    layer they pass through without changing meaning.

    Parameters
    ----------
    key
        A raw configuration key, e.g. ``"CONFIG__Fridge__QUERY_SERVICE"``.

    Returns
    -------
        The normalized key, e.g. ``"config:fridge:query_service"``.
    """
    return key.lower().replace(ALTERNATE_SEPARATOR, SEPARATOR)


def split_path(key: PathLike) -> tuple[str, ...]:
    """Convert a key into its normalized path segments.

    Parameters
    ----------
    key
        Either colon-delimited text or an already split sequence of
        segments. Each segment of a sequence is normalized as well, so
        a segment may itself contain separators.

    Returns
    -------
        The tuple of lowercase path segments.
    """
    if isinstance(key, str):
        return tuple(normalize_key(key).split(SEPARATOR))
    segments: list[str] = []
    for segment in key:
        segments.extend(split_path(str(segment)))
    return tuple(segments)
