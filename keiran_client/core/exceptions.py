"""
Custom Exceptions.

Client-specific exception classes for consistent error handling.
Every failure a command can hit is one of these; nothing is retried.
"""


class ApplicationError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class UsageError(ApplicationError):
    """Raised when arguments are malformed, missing, or the intent is ambiguous."""

    def __init__(self, message: str = "Invalid usage", usage: str | None = None) -> None:
        self.usage = usage
        super().__init__(message, code="CLI_USAGE")


class FileError(ApplicationError):
    """Raised when a local file cannot be opened or stat'ed for upload."""

    def __init__(self, message: str = "Could not read file", path: str | None = None) -> None:
        self.path = path
        super().__init__(message, code="CLI_FILE_ERROR")


class NetworkError(ApplicationError):
    """Raised on transport failures: DNS, connection refused, timeouts."""

    def __init__(self, message: str = "Network error") -> None:
        super().__init__(message, code="NET_TRANSPORT_ERROR")


class ServerError(ApplicationError):
    """Raised when the server answers with a non-success status."""

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"server returned error {status}: {body}", code="SRV_HTTP_ERROR")


class ProtocolError(ApplicationError):
    """Raised when a success response is not the JSON shape we expect."""

    def __init__(self, message: str = "Unexpected response from server") -> None:
        super().__init__(message, code="SRV_PROTOCOL_ERROR")
