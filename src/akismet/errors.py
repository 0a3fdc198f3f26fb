"""Exceptions raised by the Akismet client."""

from typing import Optional


class AkismetError(Exception):
    """Base class for all Akismet client errors."""


class UsageError(AkismetError):
    """The client was used incorrectly (e.g. opened twice, missing credentials)."""


class ArgumentError(AkismetError, ValueError):
    """An invalid option was passed to a comment method."""


class ProtocolError(AkismetError):
    """The Akismet service answered with an unexpected status or body."""

    UNKNOWN = 1
    INVALID_API_KEY = 2

    def __init__(
        self,
        message: str,
        code: int = UNKNOWN,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        debug_help: Optional[str] = None
    ):
        """
        Initialize a protocol error.

        Args:
            message: Human-readable description of the error
            code: One of ProtocolError.UNKNOWN or ProtocolError.INVALID_API_KEY
            status_code: HTTP status of the response, if one was received
            body: Raw response body
            debug_help: Value of the X-akismet-debug-help header, if any
        """
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.body = body
        self.debug_help = debug_help
