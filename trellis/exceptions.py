"""Exceptions raised by trellis."""

from __future__ import annotations


class TrellisError(Exception):
    """Base exception for all trellis errors."""


class InvalidArgumentError(TrellisError, ValueError):
    """Input could not be interpreted."""


class InvalidEventType(InvalidArgumentError):
    """A webhook action carried no ``type``."""

    def __init__(self, message: str = "Unable to determine event from request.") -> None:
        super().__init__(message)


class InvalidEventData(InvalidArgumentError):
    """A webhook action carried no ``data``, or data of the wrong shape."""

    def __init__(self, message: str = "Unable to retrieve data from request.") -> None:
        super().__init__(message)


class TrelloAPIError(TrellisError):
    """The Trello REST API answered with a non-success status."""

    def __init__(self, message: str, status_code: int, url: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ResourceNotFound(TrelloAPIError):
    """The requested card, member or board does not exist."""
