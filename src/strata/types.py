from __future__ import annotations

from collections.abc import Sequence
from typing import Union

Scalar = Union[None, bool, int, float, str]
Value = Union[Scalar, list["Value"], dict[str, "Value"]]
ConfigMap = dict[str, Value]

PathLike = Union[str, Sequence[str]]
"""A configuration key, either colon delimited text or pre-split segments."""
