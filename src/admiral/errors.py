"""Exception types raised by the Admiral client."""

from __future__ import annotations

from typing import Optional


class AdmiralError(Exception):
    """Base class for all client errors."""


class NotFound(AdmiralError):
    """An identifier resolved to no document."""


class AmbiguousIdentifier(AdmiralError):
    """A short identifier resolved to more than one document."""


class DuplicateNameAmbiguity(AmbiguousIdentifier):
    """Several documents share the given name; the caller must pass an ID instead."""


class TagResolutionFailure(AdmiralError):
    """A tag could not be parsed, looked up or created in the tag registry."""


class MalformedStoredMetric(AdmiralError):
    """A system-written numeric custom property could not be parsed."""


class TransportFailure(AdmiralError):
    """An HTTP request to the document store failed.

    Parameters
    ----------
    message
        Human readable failure description.
    status_code
        HTTP status code when the server answered, otherwise ``None``.
    server_message
        Error text extracted from the response body, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        server_message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


__all__ = [
    "AdmiralError",
    "AmbiguousIdentifier",
    "DuplicateNameAmbiguity",
    "MalformedStoredMetric",
    "NotFound",
    "TagResolutionFailure",
    "TransportFailure",
]
