"""
===========================
Interface Utility Functions
===========================

The functions defined here support the command line interface for
``strata``.

"""
from __future__ import annotations

import functools
import os
from bdb import BdbQuit
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from strata.loading import get_config_uris, load_environment_variables, load_uris
from strata.store import ConfigStore


def handle_exceptions(
    func: Callable[..., Any], logger: Any, with_debugger: bool
) -> Callable[..., Any]:
    """Wrap a command step so failures are logged with their source.

    Configuration errors carry the document they came from, which is
    included in the log message. With ``with_debugger`` set, the user is
    dropped into a post-mortem debugger instead of the error propagating.
    """

    @functools.wraps(func)
    def wrapped(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (BdbQuit, KeyboardInterrupt):
            raise
        except Exception as e:
            source = getattr(e, "source", None)
            where = f" while reading {source}" if source else ""
            logger.exception(f"strata {func.__name__} failed{where}: {e}")
            if not with_debugger:
                raise
            import pdb
            import traceback

            traceback.print_exc()
            pdb.post_mortem()

    return wrapped


def build_store(
    uris: Sequence[str],
    environment: str | None = None,
    component: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConfigStore:
    """Build a store from documents and prefixed environment variables.

    Parameters
    ----------
    uris
        The documents to load, in order. When empty, the documents named by
        ``CONFIG_URI`` are loaded instead.
    environment
        An environment to activate after loading, overriding any ``env``
        value found in the sources.
    component
        A component to activate after loading.
    environ
        Environment variables. Defaults to ``os.environ``.
    """
    environ = os.environ if environ is None else environ
    store = ConfigStore()
    load_uris(store, list(uris) or get_config_uris([], environ))
    load_environment_variables(store, environ)
    if environment:
        store.set_environment(environment)
    if component:
        store.set_component(component)
    store.sync_environment()
    store.sync_component()
    return store
