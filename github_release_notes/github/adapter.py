"""Commit history provider backed by the githubkit library."""

from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RateLimitExceeded, RequestError, RequestFailed, RequestTimeout

from github_release_notes.release_notes.models import CommitRecord, LatestRelease, ReleaseFound, ReleaseNotFound
from github_release_notes.utils.constants import DEFAULT_GITHUB_API_URL, PAGE_SIZE
from github_release_notes.utils.github import split_repository_in_configuration
from github_release_notes.utils.retry import retry_on_transient_errors

from .abc import CommitHistoryProvider
from .client import GitHubClient, get_github_client
from .exceptions import RateLimitExceededError, RemoteRequestFailedError, ServerError, TransportError

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def _rate_limit_reset(headers: Any, retry_after: timedelta | None = None) -> datetime | None:
    """Work out when a rate limit resets from response headers, falling back to ``retry_after``."""
    now = datetime.now(timezone.utc)
    reset = headers.get("x-ratelimit-reset")
    if reset:
        try:
            return datetime.fromtimestamp(int(reset), tz=timezone.utc)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=reset)
    retry_after_header = headers.get("retry-after")
    if retry_after_header:
        try:
            return now + timedelta(seconds=float(retry_after_header))
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after_header)
    if retry_after:
        return now + retry_after
    return None


def _is_rate_limit_response(status_code: int, headers: Any) -> bool:
    if status_code == 429:
        return True
    return status_code == 403 and (headers.get("x-ratelimit-remaining") == "0" or headers.get("retry-after") is not None)


def translate_github_errors(func: F) -> F:
    """Decorator translating githubkit exceptions into the provider's error taxonomy."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RateLimitExceeded as exc:
            reset_at = _rate_limit_reset(exc.response.headers, getattr(exc, "retry_after", None))
            raise RateLimitExceededError(f"GitHub rate limit exceeded in {func.__name__}", reset_at=reset_at) from exc
        except RequestFailed as exc:
            status_code = exc.response.status_code
            headers = exc.response.headers
            if _is_rate_limit_response(status_code, headers):
                raise RateLimitExceededError(
                    f"GitHub rate limit exceeded in {func.__name__} (status {status_code})",
                    reset_at=_rate_limit_reset(headers),
                ) from exc
            if status_code >= 500:
                raise ServerError(f"GitHub server error in {func.__name__} (status {status_code})", status_code) from exc
            raise RemoteRequestFailedError(f"GitHub request failed in {func.__name__} (status {status_code})", status_code) from exc
        except (RequestTimeout, RequestError) as exc:
            raise TransportError(f"GitHub request did not complete in {func.__name__} ({type(exc).__name__})") from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(CommitHistoryProvider):
    """Commit history provider for one GitHub repository using githubkit."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(cls, repo: str, github_token: str, github_api_url: str = DEFAULT_GITHUB_API_URL) -> Self:
        """Create a new adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_token: Token used to authenticate against the API
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance
        """
        owner, repo_name = split_repository_in_configuration(repo=repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = get_github_client(github_token=github_token, github_api_url=github_api_url)
        return cls(client, owner, repo_name)

    @retry_on_transient_errors()
    @translate_github_errors
    async def get_repository(self) -> Any:
        """Get the repository for the current client; the result exposes ``default_branch``."""
        response: Response[Any] = await self.client.rest.repos.async_get(owner=self.owner, repo=self.repo_name)
        return response.parsed_data

    @retry_on_transient_errors()
    @translate_github_errors
    async def _get_latest_release_tag(self) -> str:
        response = await self.client.rest.repos.async_get_latest_release(owner=self.owner, repo=self.repo_name)
        return response.parsed_data.tag_name

    async def get_latest_release(self) -> LatestRelease:
        """Get the latest release tag, or ``ReleaseNotFound`` when the repository has no releases."""
        try:
            tag_name = await self._get_latest_release_tag()
        except RemoteRequestFailedError as e:
            if e.status_code == 404:
                logger.info("No existing releases found", owner=self.owner, repo=self.repo_name)
                return ReleaseNotFound()
            raise
        logger.info("Latest release found", owner=self.owner, repo=self.repo_name, tag_name=tag_name)
        return ReleaseFound(tag=tag_name)

    async def compare_refs(self, base: str, head: str, per_page: int = PAGE_SIZE) -> list[CommitRecord]:
        """List the commits between two refs, handling pagination of the compare endpoint."""

        @retry_on_transient_errors()
        @translate_github_errors
        async def _fetch_page(page: int) -> list[dict[str, Any]]:
            response = await self.client.rest.repos.async_compare_commits(
                owner=self.owner,
                repo=self.repo_name,
                basehead=f"{base}...{head}",
                page=page,
                per_page=per_page,
            )
            # Raw JSON avoids model validation problems with commit verification data
            return response.json().get("commits", [])

        all_commits: list[CommitRecord] = []
        page: int = 1
        while True:
            logger.debug(f"Fetching compare page {page}", base=base, head=head)
            commits = await _fetch_page(page)
            all_commits.extend(CommitRecord.from_api(commit) for commit in commits)
            if len(commits) < per_page:
                break
            page += 1

        logger.info("Fetched compared commits", owner=self.owner, repo=self.repo_name, base=base, head=head, total_commits=len(all_commits))
        return all_commits

    @retry_on_transient_errors()
    @translate_github_errors
    async def list_commits(self, ref: str, page: int, per_page: int = PAGE_SIZE) -> list[CommitRecord]:
        """List one page of commits reachable from ``ref``."""
        response = await self.client.rest.repos.async_list_commits(
            owner=self.owner,
            repo=self.repo_name,
            sha=ref,
            page=page,
            per_page=per_page,
        )
        return [CommitRecord.from_api(commit) for commit in response.json()]
