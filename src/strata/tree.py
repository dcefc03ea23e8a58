"""
=============
The Path Tree
=============

The raw storage behind a :class:`~strata.store.ConfigStore`: a nested
dictionary addressed by normalized colon paths.

Writes create intermediate maps on demand and are serialized by a single
lock covering the whole tree. Reads are plain traversals that never
create nodes and take no lock. Callers are expected to finish loading
before they start reading; a read racing a write may observe either the
old or the new value but never a corrupted tree, since readers never
mutate what they find.

For example:

.. code-block:: python

    >>> tree = PathTree()
    >>> tree.set("section_a:item1", "value1")
    >>> tree.set("SECTION_A__ITEM2", "value2")
    >>> tree.get("section_a")
    {'item1': 'value1', 'item2': 'value2'}
    >>> tree.get("section_a:item1:deeper")
    MISSING

"""
from __future__ import annotations

import copy
import json
import threading
from collections.abc import Mapping
from typing import Any

import yaml

from strata.exceptions import MalformedInputError
from strata.paths import split_path
from strata.types import ConfigMap, PathLike, Value


class _Missing:
    """Sentinel for a path with no value in the tree.

    ``None`` is a legitimate configuration value (a YAML ``null``), so
    absence needs its own marker.
    """

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self


MISSING = _Missing()


MAX_NODES = 100_000


class _NodeBudget:
    """Counts the nodes copied into the tree by a single write.

    YAML aliases let a small document describe an exponentially large
    value, so a write that copies more than ``limit`` nodes is rejected.
    """

    def __init__(self, limit: int | None = None):
        self.limit = MAX_NODES if limit is None else limit
        self.spent = 0

    def spend(self) -> None:
        self.spent += 1
        if self.spent > self.limit:
            raise MalformedInputError(
                f"Configuration value expands to more than {self.limit} nodes."
            )


def normalize_value(value: Any, budget: _NodeBudget | None = None) -> Value:
    """Copy ``value`` into the tree's native shapes.

    Mapping keys are normalized the same way as paths given to
    :meth:`PathTree.set`, so nested keys loaded from documents are
    addressable by any spelling of their path. A key holding a separator
    (``"a:b"`` or ``"A__B"``) is nested as ``{"a": {"b": ...}}``. Tuples
    become lists. The result shares no containers with the input.

    Raises
    ------
    MalformedInputError
        If copying ``value`` produces more than :data:`MAX_NODES` nodes.
    """
    budget = _NodeBudget() if budget is None else budget
    budget.spend()
    if isinstance(value, Mapping):
        normalized: ConfigMap = {}
        for key, item in value.items():
            *parents, leaf = split_path(str(key))
            node = normalized
            for segment in parents:
                child = node.get(segment)
                if not isinstance(child, dict):
                    child = {}
                    node[segment] = child
                node = child
            node[leaf] = normalize_value(item, budget)
        return normalized
    elif isinstance(value, (list, tuple)):
        return [normalize_value(v, budget) for v in value]
    else:
        return value


class PathTree:
    """A mutable nested-map store addressed by colon paths."""

    def __init__(self) -> None:
        self._root: ConfigMap = {}
        self._lock = threading.Lock()

    #################
    # Write methods #
    #################

    def ensure_path(self, path: PathLike) -> tuple[ConfigMap, str]:
        """Create every intermediate map along ``path``.

        Parameters
        ----------
        path
            The key to prepare for writing.

        Returns
        -------
            The map that holds the final segment and the final segment
            itself.
        """
        segments = split_path(path)
        if len(segments) == 1:
            return self._root, segments[0]
        with self._lock:
            return self._walk(segments)

    def set(self, path: PathLike, value: Any) -> None:
        """Overwrite whatever is stored at ``path`` with ``value``.

        Any scalar found along the way is replaced by a map.
        """
        segments = split_path(path)
        value = normalize_value(value)
        with self._lock:
            parent, leaf = self._walk(segments)
            parent[leaf] = value

    def set_json(self, path: PathLike, document: str) -> None:
        """Parse ``document`` as JSON and store the result at ``path``.

        Raises
        ------
        MalformedInputError
            If the document is not valid JSON. The tree is left unchanged.
        """
        try:
            value = json.loads(document)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Invalid JSON for key '{path}': {e}") from e
        self.set(path, value)

    def update(self, data: Mapping[str, Any]) -> None:
        """Fold a parsed document into the tree.

        Each top-level key is written as with :meth:`set`, so a later
        document replaces earlier values at the same top-level key
        wholesale.

        Raises
        ------
        MalformedInputError
            If the document expands to more than :data:`MAX_NODES` nodes.
            Nothing from the document is stored in that case.
        """
        budget = _NodeBudget()
        entries = [
            (split_path(str(key)), normalize_value(value, budget))
            for key, value in data.items()
        ]
        with self._lock:
            for segments, value in entries:
                parent, leaf = self._walk(segments)
                parent[leaf] = value

    def reset(self) -> None:
        """Remove every value from the tree."""
        with self._lock:
            self._root = {}

    def _walk(self, segments: tuple[str, ...]) -> tuple[ConfigMap, str]:
        node = self._root
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        return node, segments[-1]

    ################
    # Read methods #
    ################

    def get(self, path: PathLike) -> Value | _Missing:
        """Return the raw value stored at ``path``.

        Returns
        -------
            The stored value, or :data:`MISSING` if any segment along the
            path is absent or is not a map.
        """
        node: Value = self._root
        for segment in split_path(path):
            if not isinstance(node, dict) or segment not in node:
                return MISSING
            node = node[segment]
        return node

    def __contains__(self, path: PathLike) -> bool:
        return self.get(path) is not MISSING

    def __len__(self) -> int:
        return len(self._root)

    ######################
    # Diagnostic methods #
    ######################

    def to_dict(self) -> ConfigMap:
        """Return a deep copy of the raw, unresolved tree."""
        return copy.deepcopy(self._root)

    def to_yaml(self) -> str:
        """Serialize the raw, unresolved tree as a YAML document."""
        return yaml.safe_dump(self.to_dict(), default_flow_style=False)

    def __repr__(self) -> str:
        return f"PathTree({self._root!r})"
