"""Markdown rendering of release notes."""

from collections.abc import Iterable, Mapping, Sequence

import structlog

from .authors import AuthorSet, is_bot
from .categories import DEFAULT_CATEGORIES, OTHER_CATEGORY, emoji_for
from .models import CategoryDefinition, ClassifiedCommit

logger = structlog.get_logger(__name__)

WHATS_CHANGED_HEADING = "## \U0001f5fa\ufe0f What's Changed"
CONTRIBUTIONS_HEADING = "### \U0001f64c Contributions"


def _mentions(authors: Iterable[str]) -> list[str]:
    return [f"@{author}" for author in authors]


class MarkdownWriter:
    """Renders grouped commits and contributor sets into the release notes document."""

    def __init__(
        self,
        owner: str,
        repo: str,
        categories: Sequence[CategoryDefinition] = DEFAULT_CATEGORIES,
        other_category: str = OTHER_CATEGORY,
    ) -> None:
        """Initialize with the repository used in commit references and the known categories."""
        self.owner = owner
        self.repo = repo
        self.categories = categories
        self.other_category = other_category

    def _section_order(self, grouped_commits: Mapping[str, Sequence[ClassifiedCommit]]) -> list[str]:
        """Known categories by priority, then the fallback, then anything unexpected."""
        by_key = {name.casefold(): name for name in grouped_commits}
        ordered: list[str] = []
        for definition in sorted(self.categories, key=lambda d: d.priority):
            name = by_key.get(definition.name.casefold())
            if name is not None:
                ordered.append(name)

        other = by_key.get(self.other_category.casefold())
        if other is not None:
            ordered.append(other)

        known = {definition.name.casefold() for definition in self.categories} | {self.other_category.casefold()}
        unexpected = [name for name in grouped_commits if name.casefold() not in known]
        if unexpected:
            logger.debug("Rendering categories missing from the category table", categories=unexpected)
        return ordered + unexpected

    def format_section(self, category: str, commits: Sequence[ClassifiedCommit]) -> list[str]:
        """Lines for one category heading and its commit entries."""
        lines = [f"### {emoji_for(category, self.categories)} {category}"]
        for classified in commits:
            sha = classified.commit.sha or "unknown"
            mentions = " ".join(_mentions(classified.authors))
            lines.append(f" * {self.owner}/{self.repo}@{sha} {classified.commit.summary} {mentions}")
        return lines

    def render(
        self,
        grouped_commits: Mapping[str, Sequence[ClassifiedCommit]],
        authors_in_window: Iterable[str],
        new_authors: Iterable[str],
        changelog_url: str,
    ) -> str:
        """Render the full release notes document.

        Empty categories are skipped. Bots are left out of the new and thanked
        contributor lists and get a line of their own.
        """
        lines = [WHATS_CHANGED_HEADING, ""]
        for category in self._section_order(grouped_commits):
            commits = grouped_commits[category]
            if commits:
                lines.extend(self.format_section(category, commits))
                lines.append("")

        lines.append(f"\U0001f517 **Full Changelog**: {changelog_url}")
        lines.append("")

        contributors = AuthorSet(authors_in_window)
        bots = AuthorSet(author for author in contributors if is_bot(author))
        humans = contributors - bots
        new_humans = AuthorSet(author for author in new_authors if not is_bot(author))

        lines.append(CONTRIBUTIONS_HEADING)
        if new_humans:
            lines.append("\U0001f331 New contributors since the last release: " + ", ".join(_mentions(new_humans)))
        if humans:
            lines.append("\U0001f496 Thanks to all the contributors: " + ", ".join(_mentions(humans)))
        if bots:
            lines.append("")
            lines.append("\U0001f916 Automated services that contributed: " + ", ".join(_mentions(bots)))

        return "\n".join(lines).rstrip()
