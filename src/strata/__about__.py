__all__ = [
    "__title__",
    "__summary__",
    "__uri__",
    "__version__",
    "__author__",
    "__email__",
    "__license__",
    "__copyright__",
]

__title__ = "strata"
__summary__ = "strata is a hierarchical configuration store with environment and component override layers."
__uri__ = "https://github.com/strata-config/strata"

__version__ = "0.4.0"

__author__ = "The strata developers"
__email__ = "strata.dev@gmail.com"

__license__ = "BSD-3-Clause"
__copyright__ = f"Copyright 2022 {__author__}"
