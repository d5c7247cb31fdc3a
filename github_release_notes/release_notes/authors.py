"""Extraction and normalization of commit author identities.

Identities are compared case-insensitively everywhere: ``Octocat`` and
``octocat`` are the same contributor. The first spelling seen is the one
that is kept for display.
"""

import re
from collections.abc import Iterable, Iterator, MutableSet
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import CommitRecord

UNKNOWN_AUTHOR = "unknown"
BOT_MARKER = "[bot]"
CO_AUTHOR_TRAILER = "co-authored-by:"

_WHITESPACE = re.compile(r"\s+")


def identity_key(identity: str) -> str:
    """The comparison key for an author identity."""
    return identity.casefold()


class AuthorSet(MutableSet[str]):
    """A set of author identities with case-insensitive membership and ordering.

    Iteration sorts on the upper-cased identity, so ``_`` sorts after letters.
    """

    def __init__(self, identities: Iterable[str] = ()) -> None:
        self._items: dict[str, str] = {}
        for identity in identities:
            self.add(identity)

    def __contains__(self, identity: object) -> bool:
        return isinstance(identity, str) and identity_key(identity) in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._items.values(), key=str.upper))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"AuthorSet({list(self)!r})"

    def add(self, identity: str) -> None:
        self._items.setdefault(identity_key(identity), identity)

    def discard(self, identity: str) -> None:
        self._items.pop(identity_key(identity), None)

    def update(self, identities: Iterable[str]) -> None:
        """Add every identity from ``identities``."""
        for identity in identities:
            self.add(identity)

    @classmethod
    def _from_iterable(cls, identities: Iterable[str]) -> "AuthorSet":
        return cls(identities)


def normalize_author(raw: str | None) -> str:
    """Normalize a login, name or ``Name <email>`` string into an author identity.

    Everything from the first ``<`` onward is dropped and all whitespace is
    removed. Blank results become ``unknown``.
    """
    if not raw or not raw.strip():
        return UNKNOWN_AUTHOR

    email_start = raw.find("<")
    if email_start >= 0:
        raw = raw[:email_start]

    normalized = _WHITESPACE.sub("", raw).strip()
    return normalized or UNKNOWN_AUTHOR


def is_bot(identity: str) -> bool:
    """Whether the identity belongs to an automated contributor."""
    return BOT_MARKER in identity.lower()


def primary_identity(commit: "CommitRecord") -> str:
    """The raw primary identity: author login, committer login, author name, committer name."""
    for candidate in (commit.author_login, commit.committer_login, commit.author_name, commit.committer_name):
        if candidate and candidate.strip():
            return candidate
    return UNKNOWN_AUTHOR


def co_authors(message: str) -> list[str]:
    """Raw co-author values from ``Co-authored-by:`` trailer lines of a commit message."""
    found: list[str] = []
    for line in message.replace("\r\n", "\n").split("\n"):
        trimmed = line.strip()
        if trimmed.lower().startswith(CO_AUTHOR_TRAILER):
            found.append(trimmed[len(CO_AUTHOR_TRAILER) :].strip())
    return found


def extract_authors(commit: "CommitRecord") -> AuthorSet:
    """All normalized identities credited on a commit, co-authors included."""
    authors = AuthorSet([normalize_author(primary_identity(commit))])
    authors.update(normalize_author(co_author) for co_author in co_authors(commit.message))
    return authors
