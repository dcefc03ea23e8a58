"""
=====================
Key and Value Sources
=====================

Producers of ``(key, value)`` string pairs that are written into a
:class:`~strata.store.ConfigStore` one key at a time. Keys use the same
colon and double underscore path syntax as configuration documents.

"""
from strata.sources.arguments import parse_command_line_args
from strata.sources.environment import (
    environment_pairs,
    is_json,
    strip_config_prefix,
)
