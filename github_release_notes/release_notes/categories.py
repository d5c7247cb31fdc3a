"""Commit categories and the prefix index used to match commit messages to them."""

import sys
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from .models import CategoryDefinition

MAX_PRIORITY = sys.maxsize
"""Priority of the fallback category; sorts after every registered category."""

OTHER_CATEGORY = "Other"
OTHER_EMOJI = "\U0001f4cc"
UNKNOWN_CATEGORY_EMOJI = "\U0001f539"

DEFAULT_CATEGORIES: tuple[CategoryDefinition, ...] = (
    CategoryDefinition("Breaking Changes", "\U0001f4a5", 1, ("break",)),
    CategoryDefinition("Features", "✨", 2, ("feat",)),
    CategoryDefinition("Refactoring", "♻\ufe0f", 3, ("refactor",)),
    CategoryDefinition("Fixes", "\U0001f41b", 4, ("fix", "bug")),
    CategoryDefinition("Performance", "⚡", 5, ("perf",)),
    CategoryDefinition("General Changes", "\U0001f9f9", 6, ("housekeeping", "chore", "update")),
    CategoryDefinition("Tests", "✅", 7, ("test",)),
    CategoryDefinition("Documentation", "\U0001f4dd", 8, ("doc",)),
    CategoryDefinition("Style Changes", "\U0001f485", 9, ("style",)),
    CategoryDefinition("Dependencies", "\U0001f4e6", 10, ("dep",)),
)

DEFAULT_BOT_OVERRIDES: Mapping[str, str] = {
    "renovate[bot]": "dep",
    "dependabot[bot]": "dep",
    "dependabot": "dep",
}
"""Bot logins whose commits are categorized by a fixed index key instead of their message."""


@dataclass
class _Node:
    children: dict[str, int] = field(default_factory=dict)
    category: str | None = None
    priority: int = MAX_PRIORITY


class PrefixCategoryIndex:
    """A prefix tree mapping lowercase message prefixes to ``(priority, category)``.

    Nodes live in a single list and edges are indexes into it; node 0 is the
    root and is never terminal. Lookup walks the message one character at a
    time and returns the first terminal node reached, so its cost depends on
    the matched prefix length only.

    Registering a prefix that is a proper prefix of another one is allowed,
    but then the shorter prefix always wins.
    """

    def __init__(self, other_category: str = OTHER_CATEGORY) -> None:
        self._nodes: list[_Node] = [_Node()]
        self._groups: list[tuple[int, str, tuple[str, ...]]] = []
        self._other_category = other_category

    @property
    def other(self) -> tuple[int, str]:
        """The fallback returned when no prefix matches."""
        return MAX_PRIORITY, self._other_category

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[tuple[int, str, tuple[str, ...]]]:
        """Registered ``(priority, category, prefixes)`` groups in insertion order."""
        return iter(self._groups)

    def __getitem__(self, message: str) -> tuple[int, str]:
        return self.lookup(message)

    def insert(self, priority: int, category: str, prefixes: Iterable[str]) -> None:
        """Register every prefix of a category."""
        prefixes = tuple(prefixes)
        self._groups.append((priority, category, prefixes))
        for prefix in prefixes:
            if not prefix:
                raise ValueError(f"Empty prefix registered for category {category!r}")
            self._insert_prefix(priority, category, prefix)

    def _insert_prefix(self, priority: int, category: str, prefix: str) -> None:
        index = 0
        for ch in prefix.lower():
            child = self._nodes[index].children.get(ch)
            if child is None:
                child = len(self._nodes)
                self._nodes.append(_Node())
                self._nodes[index].children[ch] = child
            index = child
        node = self._nodes[index]
        node.category = category
        node.priority = priority

    def lookup(self, message: str) -> tuple[int, str]:
        """Category of the shortest registered prefix of ``message``, or the fallback."""
        index = 0
        for ch in message.lower():
            child = self._nodes[index].children.get(ch)
            if child is None:
                return self.other
            node = self._nodes[child]
            if node.category is not None:
                return node.priority, node.category
            index = child
        return self.other


def build_category_index(
    categories: Iterable[CategoryDefinition] = DEFAULT_CATEGORIES,
    other_category: str = OTHER_CATEGORY,
) -> PrefixCategoryIndex:
    """Build a prefix index holding every category definition."""
    index = PrefixCategoryIndex(other_category)
    for definition in categories:
        index.insert(definition.priority, definition.name, definition.prefixes)
    return index


def emoji_for(category: str, categories: Iterable[CategoryDefinition] = DEFAULT_CATEGORIES) -> str:
    """The heading emoji for a category name (case-insensitive)."""
    wanted = category.casefold()
    for definition in categories:
        if definition.name.casefold() == wanted:
            return definition.emoji
    if wanted == OTHER_CATEGORY.casefold():
        return OTHER_EMOJI
    return UNKNOWN_CATEGORY_EMOJI
