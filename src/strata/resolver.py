"""
===================
Override Resolution
===================

A single configuration tree can hold settings for several deployment
environments and several components (services sharing one document).
Overrides live in reserved branches of the same tree::

    parent:
      child: default
    environment:
      test:
        parent:
          child: used when the environment is "test"
    component:
      billing:
        parent:
          child: used by the "billing" component
        environment:
          test:
            parent:
              child: used by "billing" in "test"

At read time the value at a path is computed by merging these layers,
from lowest to highest precedence: base, environment, component, and
component within environment.

"""
from __future__ import annotations

from strata.paths import split_path
from strata.tree import MISSING, PathTree, _Missing
from strata.types import PathLike, Value

ENVIRONMENT_BRANCH = "environment"
COMPONENT_BRANCH = "component"


def merge(winner: Value, loser: Value | _Missing) -> Value:
    """Combine a higher precedence value over a lower precedence one.

    Maps are merged key by key, recursing where both sides hold a map, and
    keys only the loser defines are kept. Every other shape, lists
    included, is replaced wholesale by the winner. Neither argument is
    modified.

    Parameters
    ----------
    winner
        The value from the higher precedence layer.
    loser
        The value from the lower precedence layer, possibly missing.

    Returns
    -------
        The merged value.
    """
    if not isinstance(winner, dict) or not isinstance(loser, dict):
        return winner
    merged = dict(loser)
    for key, value in winner.items():
        if key in merged:
            merged[key] = merge(value, merged[key])
        else:
            merged[key] = value
    return merged


class OverrideResolver:
    """Computes the effective value at a path across the override layers."""

    def __init__(self, tree: PathTree):
        self._tree = tree

    def layers(
        self, path: PathLike, environment: str, component: str = ""
    ) -> list[tuple[str, ...]]:
        """The paths consulted for ``path``, lowest precedence first."""
        segments = split_path(path)
        env = split_path(environment) if environment else ()
        paths = [segments]
        if env:
            paths.append((ENVIRONMENT_BRANCH, *env, *segments))
        if component:
            comp = split_path(component)
            paths.append((COMPONENT_BRANCH, *comp, *segments))
            if env:
                paths.append((COMPONENT_BRANCH, *comp, ENVIRONMENT_BRANCH, *env, *segments))
        return paths

    def resolve(self, path: PathLike, environment: str, component: str = "") -> Value | _Missing:
        """Merge every override layer defined for ``path``.

        Parameters
        ----------
        path
            The key to resolve.
        environment
            The active environment name.
        component
            The active component name. Component layers are skipped when
            empty.

        Returns
        -------
            The resolved value, or :data:`~strata.tree.MISSING` if no
            layer defines the path.
        """
        base_path, *override_paths = self.layers(path, environment, component)
        value = self._tree.get(base_path)
        for override_path in override_paths:
            override = self._tree.get(override_path)
            if override is not MISSING:
                value = merge(override, value)
        return value
