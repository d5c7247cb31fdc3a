"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_GITHUB_SERVER_URL,
    MAX_PAGINATION_PAGES,
    PAGE_SIZE,
)
from .retry import RetryPolicy, execute_with_retry, retry_on_transient_errors

__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_GITHUB_SERVER_URL",
    "MAX_PAGINATION_PAGES",
    "PAGE_SIZE",
    "RetryPolicy",
    "execute_with_retry",
    "retry_on_transient_errors",
]
