"""
=====================
Loading Configuration
=====================

:func:`load` populates a :class:`~strata.store.ConfigStore` from every
supported source, each later source overwriting the earlier ones:

1. The configuration documents named by the ``CONFIG_URI`` environment
   variable or the ``--config``/``-c`` command line argument (the
   argument wins). Several documents may be given, separated by ``;``,
   and are loaded in order.
2. Environment variables carrying the configuration prefix.
3. Command line arguments.

Once every source has been applied the store adopts the ``env`` value
found in the tree, or records its default environment there.

"""
from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence

from loguru import logger

from strata.loaders import loader_for_uri
from strata.sources.arguments import find_argument, parse_command_line_args
from strata.sources.environment import (
    DEFAULT_PREFIX,
    environment_pairs,
    is_json,
    strip_config_prefix,
)
from strata.store import ConfigStore

URI_SEPARATOR = ";"
CONFIG_ARGUMENTS = ("config", "c")


def get_config_uris(
    argv: Sequence[str], environ: Mapping[str, str], prefix: str = DEFAULT_PREFIX
) -> list[str]:
    """Find the configuration documents requested by the environment or arguments."""
    uris = environ.get(f"{prefix.upper()}_URI", "")
    from_arguments = find_argument(parse_command_line_args(argv), *CONFIG_ARGUMENTS)
    if from_arguments is not None:
        uris = from_arguments
    return [uri for uri in uris.split(URI_SEPARATOR) if uri]


def load_uris(store: ConfigStore, uris: Sequence[str]) -> None:
    """Load each configuration document into ``store`` in order.

    Raises
    ------
    SourceUnavailableError
        If a document cannot be retrieved.
    MalformedInputError
        If a document cannot be parsed.
    """
    for uri in uris:
        loader = loader_for_uri(uri)
        logger.bind(source=uri).info(f"Loading configuration from {loader!r}.")
        store.load_bytes(loader.load(), source=uri)


def load_environment_variables(
    store: ConfigStore, environ: Mapping[str, str], prefix: str = DEFAULT_PREFIX
) -> None:
    for key, value in environment_pairs(environ, prefix):
        if is_json(value):
            store.set_json(key, value)
        else:
            store.set(key, value)
        logger.debug(f"Set '{key}' from the environment.")


def load_command_line_args(
    store: ConfigStore, argv: Sequence[str], prefix: str = DEFAULT_PREFIX
) -> None:
    for key, value in parse_command_line_args(argv):
        key, _ = strip_config_prefix(key, prefix)
        store.set(key, value)
        logger.debug(f"Set '{key}' from the command line.")


def load(
    store: ConfigStore,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
    prefix: str = DEFAULT_PREFIX,
) -> ConfigStore:
    """Populate ``store`` from documents, environment variables and arguments.

    Parameters
    ----------
    store
        The store to populate.
    argv
        Command line arguments without the program name. Defaults to
        ``sys.argv[1:]``.
    environ
        Environment variables. Defaults to ``os.environ``.
    prefix
        The prefix marking configuration environment variables.

    Returns
    -------
        The populated store.

    Raises
    ------
    SourceUnavailableError
        If a configuration document cannot be retrieved.
    MalformedInputError
        If a configuration document cannot be parsed.
    """
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ

    load_uris(store, get_config_uris(argv, environ, prefix))
    load_environment_variables(store, environ, prefix)
    load_command_line_args(store, argv, prefix)
    store.sync_environment()
    return store


def load_component(
    store: ConfigStore,
    component: str,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
    prefix: str = DEFAULT_PREFIX,
) -> ConfigStore:
    """Select ``component`` and populate ``store`` with :func:`load`."""
    store.sync_component(component)
    return load(store, argv=argv, environ=environ, prefix=prefix)
