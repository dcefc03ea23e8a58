"""
=======================
The Configuration Store
=======================

:class:`ConfigStore` is the entry point for reading and writing
configuration. It owns a :class:`~strata.tree.PathTree`, the active
environment and component used for override resolution, and the
template table applied to every read.

.. code-block:: python

    >>> config = ConfigStore()
    >>> config.set("parent:child", "default")
    >>> config.set("environment:test:parent:child", "override")
    >>> config.get("parent:child")
    'default'
    >>> config.set_environment("test")
    >>> config.get("parent:child")
    'override'

The typed accessors (:meth:`ConfigStore.get`, :meth:`ConfigStore.get_int`,
:meth:`ConfigStore.get_bool`) never raise on a missing or mismatched
value; they return the type's zero value instead. Callers that need to
tell an absent value from an explicit zero use the ``lookup`` family,
which reports whether a value was found.

Stores are independent of one another. Nothing is shared between two
instances, so tests and multi-tenant processes can hold as many as they
need.

"""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, NamedTuple

import yaml
from loguru import logger

from strata.exceptions import MalformedInputError
from strata.paths import split_path
from strata.resolver import OverrideResolver
from strata.templates import TemplateEngine
from strata.tree import MISSING, PathTree
from strata.types import ConfigMap, PathLike, Value

DEFAULT_ENVIRONMENT = "dev"
ENVIRONMENT_KEY = "env"
COMPONENT_KEY = "comp"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_TRUE_STRINGS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_STRINGS = {"0", "f", "F", "FALSE", "false", "False"}


class Lookup(NamedTuple):
    """The outcome of a strict configuration read."""

    found: bool
    value: Any = None


NOT_FOUND = Lookup(False)


class ConfigStore:
    """A layered, templated configuration tree.

    Parameters
    ----------
    environment
        The initial active environment.
    component
        The initial active component. Component overrides are ignored
        while this is empty.
    """

    def __init__(self, environment: str = DEFAULT_ENVIRONMENT, component: str = ""):
        self._tree = PathTree()
        self._resolver = OverrideResolver(self._tree)
        self._templates = TemplateEngine()
        self._environment = environment
        self._component = component

    ##############
    # Properties #
    ##############

    @property
    def tree(self) -> PathTree:
        """The raw, unresolved configuration tree."""
        return self._tree

    @property
    def templates(self) -> TemplateEngine:
        return self._templates

    @property
    def environment(self) -> str:
        """The environment whose overrides are applied on read."""
        return self._environment

    @property
    def component(self) -> str:
        """The component whose overrides are applied on read."""
        return self._component

    #################
    # Write methods #
    #################

    def set(self, path: PathLike, value: Any) -> None:
        """Store ``value`` at ``path``, replacing anything already there.

        Writing the reserved ``env`` or ``comp`` keys also changes the
        active environment or component.
        """
        self._tree.set(path, value)
        self._track_context(path)

    def set_json(self, path: PathLike, document: str) -> None:
        """Parse ``document`` as JSON and store the result at ``path``.

        Raises
        ------
        MalformedInputError
            If the document is not valid JSON.
        """
        self._tree.set_json(path, document)
        self._track_context(path)

    def update(self, data: Mapping[str, Any]) -> None:
        """Store each top-level entry of ``data``, replacing existing values.

        Raises
        ------
        MalformedInputError
            If ``data`` is too large once YAML aliases are expanded.
        """
        self._tree.update(data)
        for key in data:
            self._track_context(str(key))

    def load_bytes(self, data: bytes | str, source: str | None = None) -> None:
        """Parse a YAML (or JSON) document and fold it into the tree.

        Parameters
        ----------
        data
            The raw document.
        source
            A description of where the document came from, used in error
            messages.

        Raises
        ------
        MalformedInputError
            If the document cannot be parsed or is not a mapping. Nothing
            from the document is stored in that case.
        """
        source = source if source else "<bytes>"
        try:
            document = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise MalformedInputError(f"Could not parse configuration from {source}: {e}", source) from e

        if document is None:
            logger.debug(f"Configuration source {source} is empty.")
            return
        if not isinstance(document, Mapping):
            raise MalformedInputError(
                f"Configuration from {source} must be a mapping. "
                f"You provided a {type(document).__name__}.",
                source,
            )
        logger.debug(f"Loading configuration from {source}.")
        self.update(document)

    def register_template(self, search: str, replace: str) -> None:
        """Substitute ``{search}`` with ``replace`` in every later read."""
        self._templates.register(search, replace)

    def set_environment(self, environment: str) -> None:
        self.set(ENVIRONMENT_KEY, environment)

    def set_component(self, component: str) -> None:
        self.set(COMPONENT_KEY, component)

    def sync_environment(self) -> None:
        """Adopt the environment stored in the tree.

        If the tree holds no environment, the active one is written back
        so it can be read like any other value.
        """
        stored = self._tree.get(ENVIRONMENT_KEY)
        if isinstance(stored, str) and stored:
            self._switch_environment(stored)
        else:
            self.set(ENVIRONMENT_KEY, self._environment)

    def sync_component(self, component: str = "") -> None:
        """Adopt ``component``, or the component stored in the tree if empty."""
        if component:
            self.set(COMPONENT_KEY, component)
            return
        stored = self._tree.get(COMPONENT_KEY)
        if isinstance(stored, str) and stored:
            self._switch_component(stored)

    def reset(self) -> None:
        """Clear the tree.

        The active environment, component and templates are kept.
        """
        self._tree.reset()

    def _track_context(self, path: PathLike) -> None:
        # Any write under env or comp may have replaced the stored name.
        head = split_path(path)[0]
        if head == ENVIRONMENT_KEY:
            self._switch_environment(_context_name(self._tree.get(ENVIRONMENT_KEY)))
        elif head == COMPONENT_KEY:
            self._switch_component(_context_name(self._tree.get(COMPONENT_KEY)))

    def _switch_environment(self, environment: str) -> None:
        if environment != self._environment:
            logger.debug(f"Switching configuration environment to '{environment}'.")
        self._environment = environment

    def _switch_component(self, component: str) -> None:
        if component != self._component:
            logger.debug(f"Switching configuration component to '{component}'.")
        self._component = component

    ################
    # Read methods #
    ################

    def get_any(self, path: PathLike) -> Value:
        """Return the resolved and templated value at ``path``.

        Returns
        -------
            A fresh copy of the resolved value, or ``None`` if the path is
            not set in any layer.
        """
        return self.lookup(path).value

    def get(self, path: PathLike) -> str:
        """Return the value at ``path`` as a string, or ``""``."""
        return self.lookup_str(path).value

    def get_int(self, path: PathLike) -> int:
        """Return the value at ``path`` as an integer, or ``0``."""
        return self.lookup_int(path).value

    def get_bool(self, path: PathLike) -> bool:
        """Return the value at ``path`` as a boolean, or ``False``."""
        return self.lookup_bool(path).value

    def lookup(self, path: PathLike) -> Lookup:
        """Resolve ``path`` and report whether any layer defines it."""
        value = self._resolver.resolve(path, self._environment, self._component)
        if value is MISSING:
            return NOT_FOUND
        return Lookup(True, self._templates.evaluate_all(value))

    def lookup_str(self, path: PathLike) -> Lookup:
        """Resolve ``path`` as a string.

        Integers are rendered in decimal. Any other shape is not found and
        carries ``""`` as its value.
        """
        found, value = self.lookup(path)
        if found and isinstance(value, str):
            return Lookup(True, value)
        elif found and isinstance(value, int) and not isinstance(value, bool):
            return Lookup(True, str(value))
        return Lookup(False, "")

    def lookup_int(self, path: PathLike) -> Lookup:
        """Resolve ``path`` as an integer.

        Strings holding a base 10 integer are parsed. Any other shape is
        not found and carries ``0`` as its value.
        """
        found, value = self.lookup(path)
        if found and isinstance(value, bool):
            return Lookup(False, 0)
        elif found and isinstance(value, int):
            return Lookup(True, value)
        elif found and isinstance(value, str) and _INTEGER.fullmatch(value):
            return Lookup(True, int(value))
        return Lookup(False, 0)

    def lookup_bool(self, path: PathLike) -> Lookup:
        """Resolve ``path`` as a boolean.

        Strings such as ``"true"``, ``"T"`` or ``"1"`` are parsed. Any other
        shape is not found and carries ``False`` as its value.
        """
        found, value = self.lookup(path)
        if found and isinstance(value, bool):
            return Lookup(True, value)
        elif found and isinstance(value, str):
            if value in _TRUE_STRINGS:
                return Lookup(True, True)
            elif value in _FALSE_STRINGS:
                return Lookup(True, False)
        return Lookup(False, False)

    ######################
    # Diagnostic methods #
    ######################

    def to_dict(self) -> ConfigMap:
        """Return a copy of the raw tree, without overrides or templates."""
        return self._tree.to_dict()

    def to_yaml(self) -> str:
        """Return the raw tree as a YAML document."""
        return self._tree.to_yaml()

    def __contains__(self, path: PathLike) -> bool:
        return self.lookup(path).found

    def __repr__(self) -> str:
        return (
            f"ConfigStore(environment={self._environment!r}, "
            f"component={self._component!r}, tree={self._tree!r})"
        )


def _context_name(value: Any) -> str:
    """The environment or component named by a stored value.

    Only scalars name a context. ``None``, maps and lists clear it.
    """
    if value is None or value is MISSING or isinstance(value, (dict, list)):
        return ""
    return str(value)
