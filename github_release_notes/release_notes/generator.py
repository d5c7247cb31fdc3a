"""Main release notes generation orchestration."""

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from github_release_notes.utils.constants import DEFAULT_GITHUB_SERVER_URL, MAX_PAGINATION_PAGES, PAGE_SIZE
from github_release_notes.utils.github import build_changelog_url

from .authors import AuthorSet, extract_authors
from .categories import DEFAULT_CATEGORIES, OTHER_CATEGORY, build_category_index
from .classifier import CommitClassifier
from .markdown import MarkdownWriter
from .models import AggregationResult, CategoryDefinition, CommitRecord, ReleaseFound, ReleaseNotesResult, ReleaseWindow

if TYPE_CHECKING:
    from github_release_notes.github.abc import CommitHistoryProvider

logger = structlog.get_logger(__name__)


class ReleaseNotesGenerator:
    """Builds release notes for the commits between a base ref and a head ref.

    The base ref defaults to the latest release tag and the head ref to the
    repository's default branch. When the repository has no releases the
    whole history reachable from the head ref is documented and every
    contributor counts as new.

    Any remote failure that survives the retry policy aborts the run; no
    partial document is produced.
    """

    def __init__(
        self,
        provider: "CommitHistoryProvider",
        owner: str,
        repo: str,
        categories: Sequence[CategoryDefinition] = DEFAULT_CATEGORIES,
        classifier: CommitClassifier | None = None,
        server_url: str = DEFAULT_GITHUB_SERVER_URL,
        page_size: int = PAGE_SIZE,
        max_pages: int = MAX_PAGINATION_PAGES,
    ) -> None:
        """Initialize with a commit history provider for ``owner/repo``.

        Args:
            provider: Commit history provider bound to the repository
            owner: Repository owner, used in commit references and links
            repo: Repository name, used in commit references and links
            categories: Category table for classification and section order
            classifier: Classifier to use instead of one built from ``categories``
            server_url: Web URL of the GitHub instance for the changelog link
            page_size: Commits requested per history page
            max_pages: Hard cap on history pages fetched per walk
        """
        self.provider = provider
        self.owner = owner
        self.repo = repo
        self.categories = categories
        self.classifier = classifier or CommitClassifier(build_category_index(categories))
        self.server_url = server_url
        self.page_size = page_size
        self.max_pages = max_pages
        self.writer = MarkdownWriter(owner, repo, categories, OTHER_CATEGORY)

    async def resolve_base_ref(self, base_ref: str | None) -> str | None:
        """Use the given base ref, else the latest release tag, else ``None`` for all history."""
        if base_ref and base_ref.strip():
            return base_ref

        latest = await self.provider.get_latest_release()
        if isinstance(latest, ReleaseFound):
            logger.info("Latest release", tag_name=latest.tag)
            return latest.tag

        logger.info("No existing releases found - using entire commit history")
        return None

    async def resolve_head_ref(self, head_ref: str | None) -> str:
        """Use the given head ref, else the repository's default branch."""
        if head_ref:
            return head_ref
        repository = await self.provider.get_repository()
        return repository.default_branch

    async def resolve_window(self, base_ref: str | None = None, head_ref: str | None = None) -> ReleaseWindow:
        """Resolve both ends of the commit range being documented."""
        resolved_base = await self.resolve_base_ref(base_ref)
        resolved_head = await self.resolve_head_ref(head_ref)
        logger.info("Comparing refs", base_ref=resolved_base or "(all history)", head_ref=resolved_head)
        return ReleaseWindow(head_ref=resolved_head, base_ref=resolved_base)

    async def walk_history(self, ref: str) -> tuple[list[CommitRecord], bool]:
        """Page through the history reachable from ``ref``.

        Returns:
            The commits, and whether the page cap stopped the walk early
        """
        commits: list[CommitRecord] = []
        page = 1
        while page <= self.max_pages:
            logger.debug(f"Fetching history page {page}", ref=ref)
            batch = await self.provider.list_commits(ref, page, self.page_size)
            if not batch:
                return commits, False
            commits.extend(batch)
            if len(batch) < self.page_size:
                return commits, False
            page += 1

        logger.warning(f"Reached max pagination limit ({self.max_pages}) when walking commit history", ref=ref, max_pages=self.max_pages)
        return commits, True

    async def fetch_window_commits(self, window: ReleaseWindow) -> tuple[list[CommitRecord], bool]:
        """Commits in the window: a comparison when there is a base ref, else all history.

        Returns:
            The commits, and whether the page cap truncated the history walk
        """
        if window.base_ref is not None:
            return await self.provider.compare_refs(window.base_ref, window.head_ref), False
        return await self.walk_history(window.head_ref)

    async def collect_authors_before(self, base_ref: str | None) -> tuple[AuthorSet, bool]:
        """Every author reachable from the base ref; empty when there is no base ref."""
        authors = AuthorSet()
        if base_ref is None:
            return authors, False

        commits, limit_reached = await self.walk_history(base_ref)
        for commit in commits:
            authors.update(extract_authors(commit))
        return authors, limit_reached

    async def aggregate(self, base_ref: str | None = None, head_ref: str | None = None) -> AggregationResult:
        """Fetch, classify and attribute the commits in the release window."""
        window = await self.resolve_window(base_ref, head_ref)

        commits, window_limit_reached = await self.fetch_window_commits(window)
        logger.info(f"Found {len(commits)} commits since last release", commit_count=len(commits))

        authors_in_window = AuthorSet()
        for commit in commits:
            authors_in_window.update(extract_authors(commit))

        authors_before_window, before_limit_reached = await self.collect_authors_before(window.base_ref)
        new_authors = authors_in_window - authors_before_window

        return AggregationResult(
            window=window,
            grouped_commits=self.classifier.group(commits),
            authors_in_window=authors_in_window,
            authors_before_window=authors_before_window,
            new_authors=new_authors,
            pagination_limit_reached=window_limit_reached or before_limit_reached,
        )

    async def generate(self, version: str, base_ref: str | None = None, head_ref: str | None = None) -> ReleaseNotesResult:
        """Generate the release notes document for ``version``.

        Args:
            version: Version or heading string of the release being documented
            base_ref: Ref to compare from (defaults to the latest release tag)
            head_ref: Ref to compare to (defaults to the default branch)

        Returns:
            The rendered document and the refs it covers
        """
        logger.info("Generating release notes", owner=self.owner, repo=self.repo, version=version)
        result = await self.aggregate(base_ref, head_ref)

        changelog_url = build_changelog_url(self.server_url, self.owner, self.repo, version, result.window.base_ref)
        content = self.writer.render(
            grouped_commits=result.grouped_commits,
            authors_in_window=result.authors_in_window,
            new_authors=result.new_authors,
            changelog_url=changelog_url,
        )

        return ReleaseNotesResult(
            version=version,
            base_ref=result.window.base_ref,
            head_ref=result.window.head_ref,
            commit_count=sum(len(items) for items in result.grouped_commits.values()),
            changelog_url=changelog_url,
            content=content,
        )
