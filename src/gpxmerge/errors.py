from __future__ import annotations


class GPXError(Exception):
    """Base class for problems with a single GPX input.

    These are recoverable: the caller reports the message and carries on with
    the remaining files.
    """

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class ParseError(GPXError, ValueError):
    pass


class EmptyResultError(GPXError):
    pass


class InvalidExtensionError(GPXError):
    pass
