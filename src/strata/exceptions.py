"""
==========
Exceptions
==========

Module containing package-wide exception definitions.

"""


class StrataError(Exception):
    """Generic exception raised for errors in ``strata``."""

    pass


class ConfigurationError(StrataError):
    """Base class for configuration errors."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message)


class MalformedInputError(ConfigurationError, ValueError):
    """Error raised when a configuration payload cannot be parsed."""

    pass


class SourceUnavailableError(ConfigurationError):
    """Error raised when a loader cannot retrieve its configuration bytes."""

    pass
