#!/usr/bin/env python3
"""
Exception types raised by the DoubleCheck MediaWiki client.
"""

from typing import Optional


class DoubleCheckError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgument(DoubleCheckError, ValueError):
    """A caller violated a precondition. Raised before any network call."""


class RemoteQueryError(DoubleCheckError):
    """
    The remote wiki answered with an error, an unparseable body,
    or the request failed at the transport level.

    Attributes:
        code: MediaWiki error code when the API returned an error body
        info: MediaWiki error description when available
    """

    def __init__(self, message: str, code: Optional[str] = None, info: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.info = info


class Cancelled(DoubleCheckError):
    """
    A paginated traversal was stopped by the caller.

    Attributes:
        partial: Items accumulated before the traversal stopped
    """

    def __init__(self, message: str = "Traversal cancelled", partial: Optional[list] = None):
        super().__init__(message)
        self.partial = partial if partial is not None else []
