"""Custom exceptions for log-cache CLI functionality."""

from typing import Optional


class LogCacheError(Exception):
    """Base exception for all log-cache CLI errors."""


class InvalidArgumentsError(LogCacheError):
    """Raised when a command is invoked with malformed arguments."""


class ConfigurationError(LogCacheError):
    """Raised when endpoint or authentication settings cannot be resolved."""


class UnreachableError(LogCacheError):
    """Raised when the remote service cannot be reached."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to reach {url}: {reason}")


class UnexpectedStatusError(UnreachableError):
    """Raised when the remote answers with a non-success HTTP status."""

    def __init__(self, url: str, status: int, body: str = ""):
        self.status = status
        self.body = body
        reason = f"unexpected status {status}"
        if body:
            reason += f": {body[:200]}"
        super().__init__(url, reason)


class RequestTimeoutError(LogCacheError):
    """Raised when a request exceeds its deadline."""

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(
            f"Request to {url} timed out after {timeout}s: deadline exceeded"
        )


class MalformedResponseError(LogCacheError):
    """Raised when a response body cannot be decoded."""

    def __init__(self, reason: str, body: Optional[str] = None):
        self.reason = reason
        self.body = body
        super().__init__(f"Malformed response: {reason}")


class SinkWriteError(LogCacheError):
    """Raised when rendered output cannot be written."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to write output: {cause}")
