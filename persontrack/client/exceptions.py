"""
PersonTrack client exceptions.

Author: Yobie Benjamin
Date: 2026-10-19
"""


class PersonTrackError(Exception):
    """Base exception for all PersonTrack client errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransportError(PersonTrackError):
    """Raised when a request could not be dispatched."""
    pass


class TimeoutError(TransportError):
    """Raised when a request times out."""
    pass


class MalformedEnvelopeError(PersonTrackError):
    """Raised when a server reply cannot be parsed or lacks a required field."""

    def __init__(
        self,
        message: str,
        raw_response: str = "",
        details: dict | None = None
    ):
        super().__init__(message, details)
        self.raw_response = raw_response


class ProtocolError(PersonTrackError):
    """Raised when the server answers with a non-zero code."""

    def __init__(
        self,
        message: str,
        code: int,
        description: str | None = None,
        details: dict | None = None
    ):
        super().__init__(message, details)
        self.code = code
        self.description = description


class SessionError(PersonTrackError):
    """Raised when the session client is used outside its lifecycle."""
    pass
