"""Contains exceptions raised when talking to the remote commit history provider.

These are transport-agnostic: the githubkit adapter translates library
exceptions into them so the retry policy and the release notes generator
never need to know about githubkit.
"""

from datetime import datetime


class RemoteCallError(Exception):
    """Base class for failures of a remote call."""

    pass


class RateLimitExceededError(RemoteCallError):
    """Raised when the remote reports that the rate limit has been exceeded."""

    def __init__(self, message: str, reset_at: datetime | None = None) -> None:
        """Initializes the exception with the time at which the rate limit resets."""
        super().__init__(message)
        self.reset_at = reset_at


class ServerError(RemoteCallError):
    """Raised when the remote answers with a 5xx status code."""

    def __init__(self, message: str, status_code: int) -> None:
        """Initializes the exception with the HTTP status code."""
        super().__init__(message)
        self.status_code = status_code


class TransportError(RemoteCallError):
    """Raised when the request never produced a response (network failure or timeout)."""

    pass


class RemoteRequestFailedError(RemoteCallError):
    """Raised for failed requests that are not worth retrying (auth, permissions, not found)."""

    def __init__(self, message: str, status_code: int) -> None:
        """Initializes the exception with the HTTP status code."""
        super().__init__(message)
        self.status_code = status_code


RETRYABLE_ERRORS: tuple[type[RemoteCallError], ...] = (RateLimitExceededError, ServerError, TransportError)
"""Error kinds the retry policy handles; everything else propagates immediately."""
