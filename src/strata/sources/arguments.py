"""
======================
Command Line Arguments
======================

Turns a process's command line into configuration pairs following the
`docopt <http://docopt.org>`_ conventions. Each of these forms is
understood::

    -k              short flag, set to "1"
    -k value        short flag set to value
    -k=value        short flag set to value
    -klm            stacked short flags, each set to "1"
    -klm value      k and l set to "1", m set to value
    --key           long flag, set to "1"
    --key value     long flag set to value
    --key=value     long flag set to value

Positional arguments that come before the first flag are ignored. Keys
are lowercased; ``--db__host=x`` and ``--db:host=x`` both address
``db:host``.

"""
from __future__ import annotations

from collections.abc import Sequence

FLAG_VALUE = "1"


def parse_command_line_args(argv: Sequence[str]) -> list[tuple[str, str]]:
    """Parse command line arguments into ``(key, value)`` pairs.

    Parameters
    ----------
    argv
        The arguments to parse, without the program name.

    Returns
    -------
        The pairs in the order they appear on the command line. Flags
        given without a value are set to ``"1"``.
    """
    pairs: list[list[str]] = []
    # Whether the most recent flag may still take the next argument as its value.
    awaiting_value = False
    done_with_positional_args = False

    for arg in argv:
        if arg.startswith("--"):
            done_with_positional_args = True
            key, has_value, value = arg[2:].partition("=")
            if not key:
                awaiting_value = False
                continue
            pairs.append([key, value])
            awaiting_value = not has_value

        elif arg.startswith("-") and len(arg) > 1:
            done_with_positional_args = True
            flags, has_value, value = arg[1:].partition("=")
            flags = flags.replace("-", "")
            if not flags:
                awaiting_value = False
                continue
            for flag in flags:
                pairs.append([flag, FLAG_VALUE])
            if has_value:
                pairs[-1][1] = value
            awaiting_value = not has_value

        elif done_with_positional_args and awaiting_value:
            pairs[-1][1] = arg
            awaiting_value = False

    return [(key.lower(), value if value else FLAG_VALUE) for key, value in pairs]


def find_argument(pairs: Sequence[tuple[str, str]], *names: str) -> str | None:
    """Return the value of the first pair whose key is one of ``names``."""
    for key, value in pairs:
        if key in names:
            return value
    return None
