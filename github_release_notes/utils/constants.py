"""Shared constants used across the application."""

# GitHub Constants
# ----------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub REST API URL."""

DEFAULT_GITHUB_SERVER_URL = "https://github.com"
"""Default GitHub web URL used when building changelog links."""

# Pagination Constants
# --------------------

PAGE_SIZE = 100
"""Number of commits requested per page (GitHub's maximum)."""

MAX_PAGINATION_PAGES = 500
"""Hard cap on pages fetched when walking commit history."""

# Retry Constants
# ---------------

DEFAULT_MAX_RETRIES = 3
"""Number of retries after the first attempt for transient failures."""

DEFAULT_BASE_DELAY = 2.0
"""Base delay in seconds for exponential backoff."""

DEFAULT_JITTER = 0.25
"""Fraction of the backoff delay that is randomized in either direction."""

# Output Constants
# ----------------

DEFAULT_OUTPUT_NAME = "changelog"
"""Default variable name when writing release notes to GITHUB_OUTPUT."""

GITHUB_OUTPUT_DELIMITER_PREFIX = "ghadelimiter_"
"""Prefix of the heredoc delimiter used in the GITHUB_OUTPUT file."""
