"""
=========================
Strata Command Line Tools
=========================

``strata`` provides the tool :command:`strata` for inspecting configuration
from the command line. It provides two subcommands:

.. list-table:: ``strata`` sub-commands
    :header-rows: 1
    :widths: 30, 40

    *   - Name
        - Description
    *   - | **show**
        - | Prints the raw configuration tree, before overrides and
          | templates are applied.
    *   - | **get**
        - | Prints the resolved value of a single key.

Configuration documents are given as arguments. Without any, the documents
named by the ``CONFIG_URI`` environment variable are used. Environment
variables prefixed with ``CONFIG_`` are applied on top of the documents in
both cases.

.. click:: strata.interface.cli:strata
   :prog: strata
   :show-nested:

"""
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
import yaml
from loguru import logger

from strata.interface.utilities import build_store, handle_exceptions
from strata.logging import configure_logging_to_file, configure_logging_to_terminal


def _common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option(
        "--pdb",
        "with_debugger",
        is_flag=True,
        help="Drop into python debugger if an error occurs.",
    )(func)
    func = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, resolve_path=True, path_type=Path),
        help="Also write debug logs to this file.",
    )(func)
    func = click.option(
        "--verbose",
        "-v",
        count=True,
        help="Logs verbosely. Repeat for debug output.",
    )(func)
    func = click.option(
        "--component",
        "-m",
        help="The component whose overrides are applied.",
    )(func)
    func = click.option(
        "--env",
        "-e",
        "environment",
        help="The environment whose overrides are applied.",
    )(func)
    return func


def _configure_logging(verbose: int, log_file: Path | None) -> None:
    configure_logging_to_terminal(verbosity=min(verbose, 2), long_format=False)
    if log_file:
        configure_logging_to_file(log_file)


@click.group()
def strata() -> None:
    """A command line utility for inspecting layered configuration.

    Print the raw configuration tree with the ``show`` sub-command or the
    resolved value of one key with the ``get`` sub-command.
    """
    pass


@strata.command()
@click.argument("uris", nargs=-1)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["yaml", "repr"]),
    default="yaml",
    show_default=True,
    help="How to print the tree.",
)
@_common_options
def show(
    uris: tuple[str, ...],
    output_format: str,
    environment: str | None,
    component: str | None,
    verbose: int,
    log_file: Path | None,
    with_debugger: bool,
) -> None:
    """Print the raw configuration tree loaded from URIS."""
    _configure_logging(verbose, log_file)
    main = handle_exceptions(build_store, logger, with_debugger)
    store = main(uris, environment, component)
    if output_format == "yaml":
        click.echo(store.to_yaml(), nl=False)
    else:
        click.echo(repr(store.tree))


@strata.command()
@click.argument("key")
@click.argument("uris", nargs=-1)
@click.option(
    "--any",
    "as_structure",
    is_flag=True,
    help="Print the resolved structure as YAML instead of a string.",
)
@_common_options
def get(
    key: str,
    uris: tuple[str, ...],
    as_structure: bool,
    environment: str | None,
    component: str | None,
    verbose: int,
    log_file: Path | None,
    with_debugger: bool,
) -> None:
    """Print the resolved value of KEY from the configuration in URIS.

    Environment and component overrides are applied, as are any templates.
    Missing keys print an empty line.
    """
    _configure_logging(verbose, log_file)
    main = handle_exceptions(build_store, logger, with_debugger)
    store = main(uris, environment, component)
    if as_structure:
        found, value = store.lookup(key)
        if found:
            click.echo(yaml.safe_dump(value, default_flow_style=False), nl=False)
        else:
            click.echo("")
    else:
        click.echo(store.get(key))
