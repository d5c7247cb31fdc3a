"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from github_release_notes.utils.constants import DEFAULT_GITHUB_API_URL

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]


def get_github_client(github_token: str, github_api_url: str = DEFAULT_GITHUB_API_URL) -> GitHubClient:
    """Returns a GitHub client authenticated with a token.

    Supports custom base URL for GitHub Enterprise Server (GHES). githubkit's
    own retrying is disabled since every adapter call goes through the
    project's retry policy.
    """
    if not github_token:
        raise RuntimeError("GitHub token authentication requires github_token in config.")
    # Disable HTTP caching to always get fresh data
    return GitHub(
        auth=TokenAuthStrategy(github_token),
        base_url=github_api_url,
        http_cache=False,
        auto_retry=False,
    )
