"""
Exceptions for the Centrifugo API client.
"""

from typing import Any, List, Optional


class CentError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(CentError):
    """Raised when the client configuration is missing or invalid."""
    pass


class ClientNotEmptyError(CentError):
    """Raised when a single-command call finds pending commands in the buffer."""

    def __init__(
        self,
        message: str = "client command buffer not empty, send commands or reset client",
        details: Optional[str] = None
    ):
        super().__init__(message, details)


class CommandError(CentError):
    """Raised when the server reports an error for a single command."""

    def __init__(self, error: str, result: Any = None):
        super().__init__(error)
        self.error = error
        self.result = result


class DecodeError(CentError):
    """Raised when a command response body does not have the expected shape."""
    pass


class BatchError(CentError):
    """
    Base class for failures on the send path.

    The buffer is already drained when these are raised, so the commands
    of the failed batch are attached for the caller to requeue.
    """

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        commands: Optional[List[Any]] = None
    ):
        super().__init__(message, details)
        self.commands = list(commands or [])


class SerializationError(BatchError):
    """Raised when command params cannot be encoded as JSON."""
    pass


class TransportError(BatchError):
    """Raised on connection failures, timeouts and non-200 responses."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
        commands: Optional[List[Any]] = None
    ):
        super().__init__(message, details, commands)
        self.status_code = status_code


class MalformedResponseError(BatchError):
    """Raised when the response is not an array with one result per command."""

    def __init__(
        self,
        message: str = "malformed response returned from server",
        details: Optional[str] = None,
        commands: Optional[List[Any]] = None
    ):
        super().__init__(message, details, commands)
