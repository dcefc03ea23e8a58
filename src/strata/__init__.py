from strata.__about__ import (
    __author__,
    __copyright__,
    __email__,
    __license__,
    __summary__,
    __title__,
    __uri__,
    __version__,
)
from strata.exceptions import (
    ConfigurationError,
    MalformedInputError,
    SourceUnavailableError,
    StrataError,
)
from strata.loading import load, load_component
from strata.paths import normalize_key, split_path
from strata.resolver import merge
from strata.store import ConfigStore, Lookup
from strata.tree import MISSING, PathTree
