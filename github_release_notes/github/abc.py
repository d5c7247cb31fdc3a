"""Base ABC for commit history providers."""

from abc import ABC, abstractmethod
from typing import Any

from github_release_notes.release_notes.models import CommitRecord, LatestRelease


class CommitHistoryProvider(ABC):
    """Read-only access to the commit history of one repository."""

    @abstractmethod
    async def get_repository(self) -> Any:
        """Get the repository; the result exposes ``default_branch``."""
        pass

    @abstractmethod
    async def get_latest_release(self) -> LatestRelease:
        """Get the tag of the latest release, or ``ReleaseNotFound`` if there is none."""
        pass

    @abstractmethod
    async def compare_refs(self, base: str, head: str) -> list[CommitRecord]:
        """List the commits reachable from ``head`` but not from ``base``."""
        pass

    @abstractmethod
    async def list_commits(self, ref: str, page: int, per_page: int) -> list[CommitRecord]:
        """List one page of the history reachable from ``ref``, newest first."""
        pass
