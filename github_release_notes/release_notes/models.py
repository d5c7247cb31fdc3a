"""Data models for release notes generation."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from .authors import AuthorSet


@dataclass(frozen=True)
class CategoryDefinition:
    """A commit category with its display properties and matching prefixes.

    Lower priority values are rendered earlier in the release notes.
    """

    name: str
    emoji: str
    priority: int
    prefixes: tuple[str, ...]


class CommitRecord(BaseModel):
    """The parts of a commit needed to classify and attribute it."""

    sha: str | None = None
    message: str = ""
    author_login: str | None = None
    committer_login: str | None = None
    author_name: str | None = None
    committer_name: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CommitRecord":
        """Build a commit record from the raw JSON of GitHub's commit endpoints."""
        git_commit = data.get("commit") or {}
        author = data.get("author") or {}
        committer = data.get("committer") or {}
        git_author = git_commit.get("author") or {}
        git_committer = git_commit.get("committer") or {}
        return cls(
            sha=data.get("sha"),
            message=git_commit.get("message") or "",
            author_login=author.get("login"),
            committer_login=committer.get("login"),
            author_name=git_author.get("name"),
            committer_name=git_committer.get("name"),
        )

    @property
    def primary_login(self) -> str | None:
        """The author login, falling back to the committer login."""
        return self.author_login or self.committer_login

    @property
    def summary(self) -> str:
        """The first line of the commit message."""
        return self.message.replace("\r\n", "\n").split("\n")[0]


@dataclass(frozen=True)
class ClassifiedCommit:
    """A commit assigned to a category, with its normalized authors."""

    commit: CommitRecord
    category: str
    priority: int
    authors: AuthorSet


@dataclass(frozen=True)
class ReleaseFound:
    """The repository has a latest release."""

    tag: str


@dataclass(frozen=True)
class ReleaseNotFound:
    """The repository has no releases yet."""


LatestRelease = ReleaseFound | ReleaseNotFound


@dataclass(frozen=True)
class ReleaseWindow:
    """The commit range being documented; no base ref means all reachable history."""

    head_ref: str
    base_ref: str | None = None


@dataclass
class AggregationResult:
    """Everything gathered for one release notes run."""

    window: ReleaseWindow
    grouped_commits: dict[str, list[ClassifiedCommit]] = field(default_factory=dict)
    authors_in_window: AuthorSet = field(default_factory=AuthorSet)
    authors_before_window: AuthorSet = field(default_factory=AuthorSet)
    new_authors: AuthorSet = field(default_factory=AuthorSet)
    pagination_limit_reached: bool = False


class ReleaseNotesResult(BaseModel):
    """Result of release notes generation."""

    version: str
    base_ref: str | None = None
    head_ref: str
    commit_count: int
    changelog_url: str
    content: str
