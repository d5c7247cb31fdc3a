"""Assigns commits to categories and groups them in priority order."""

import heapq
from collections.abc import Iterable, Mapping

import structlog

from .authors import extract_authors
from .categories import DEFAULT_BOT_OVERRIDES, PrefixCategoryIndex, build_category_index
from .models import ClassifiedCommit, CommitRecord

logger = structlog.get_logger(__name__)


class CommitClassifier:
    """Categorizes commits by bot authorship first, then by message prefix."""

    def __init__(
        self,
        index: PrefixCategoryIndex | None = None,
        bot_overrides: Mapping[str, str] = DEFAULT_BOT_OVERRIDES,
    ) -> None:
        """Initialize with a category index and a bot login to index key mapping."""
        self.index = index if index is not None else build_category_index()
        self.bot_overrides = {login.casefold(): key for login, key in bot_overrides.items()}

    def classify(self, commit: CommitRecord) -> tuple[int, str]:
        """Return the ``(priority, category)`` of a commit.

        Commits by a known bot are looked up by the bot's override key, so the
        message text is never consulted for them.
        """
        login = commit.primary_login
        if login:
            override_key = self.bot_overrides.get(login.casefold())
            if override_key is not None:
                return self.index.lookup(override_key)
        return self.index.lookup(commit.message)

    def classify_commit(self, commit: CommitRecord) -> ClassifiedCommit:
        """Classify a commit and attach its normalized authors."""
        priority, category = self.classify(commit)
        return ClassifiedCommit(commit=commit, category=category, priority=priority, authors=extract_authors(commit))

    def group(self, commits: Iterable[CommitRecord]) -> dict[str, list[ClassifiedCommit]]:
        """Group commits by category, with categories in ascending priority order.

        Commits keep their input order within a category.
        """
        queue: list[tuple[int, int, ClassifiedCommit]] = []
        for sequence, commit in enumerate(commits):
            classified = self.classify_commit(commit)
            heapq.heappush(queue, (classified.priority, sequence, classified))

        grouped: dict[str, list[ClassifiedCommit]] = {}
        while queue:
            _, _, classified = heapq.heappop(queue)
            grouped.setdefault(classified.category, []).append(classified)

        logger.debug("Grouped commits by category", counts={category: len(items) for category, items in grouped.items()})
        return grouped
