"""Unit tests for author identity extraction and normalization."""

import pytest

from github_release_notes.release_notes.authors import AuthorSet, extract_authors, is_bot, normalize_author

from .factories import make_commit


@pytest.mark.parametrize(
    "raw,expected",
    [
        pytest.param(" John Doe <john@x.com> ", "JohnDoe", id="name with email and padding"),
        pytest.param("John Doe<john@x.com>", "JohnDoe", id="name with email"),
        pytest.param("octocat", "octocat", id="login"),
        pytest.param("Jane\tQ.  Public", "JaneQ.Public", id="inner whitespace"),
        pytest.param("", "unknown", id="empty"),
        pytest.param("   ", "unknown", id="blank"),
        pytest.param(None, "unknown", id="none"),
        pytest.param("<only@email.com>", "unknown", id="only email"),
    ],
)
def test_normalize_author(raw: str | None, expected: str) -> None:
    """Test normalization of raw author strings."""
    assert normalize_author(raw) == expected


@pytest.mark.parametrize(
    "identity,expected",
    [
        pytest.param("dependabot[bot]", True, id="bot"),
        pytest.param("Renovate[BOT]", True, id="upper case marker"),
        pytest.param("dependabot", False, id="no marker"),
        pytest.param("robot", False, id="bot without brackets"),
        pytest.param("octocat", False, id="human"),
    ],
)
def test_is_bot(identity: str, expected: bool) -> None:
    """Test bot detection by marker substring."""
    assert is_bot(identity) is expected


@pytest.mark.parametrize(
    "kwargs,expected",
    [
        pytest.param({"author_login": "alice", "committer_login": "bob", "author_name": "Alice A"}, "alice", id="author login"),
        pytest.param({"committer_login": "bob", "author_name": "Alice A"}, "bob", id="committer login"),
        pytest.param({"author_name": "Alice A", "committer_name": "Bob B"}, "AliceA", id="author name"),
        pytest.param({"committer_name": "Bob B"}, "BobB", id="committer name"),
        pytest.param({"author_login": "  ", "committer_name": "Bob B"}, "BobB", id="blank login skipped"),
        pytest.param({}, "unknown", id="nothing"),
    ],
)
def test_primary_author_resolution_order(kwargs: dict[str, str], expected: str) -> None:
    """Test that the primary identity follows login, then display name precedence."""
    assert list(extract_authors(make_commit("fix: x", **kwargs))) == [expected]


def test_co_author_on_indented_line() -> None:
    """Test that indented co-author trailers are picked up."""
    message = "feat: pairing\n\n    Co-authored-by: Jane <jane@x.com>"
    assert set(extract_authors(make_commit(message, author_login="octocat"))) == {"octocat", "Jane"}


def test_co_authors_with_crlf_and_mixed_case() -> None:
    """Test CRLF line endings and a case-insensitive trailer marker."""
    message = "fix: thing\r\n\r\nco-authored-by: Jane Doe <jane@x.com>\r\nCO-AUTHORED-BY: bob\r\n"
    assert list(extract_authors(make_commit(message, author_login="alice"))) == ["alice", "bob", "JaneDoe"]


def test_trailer_must_start_the_line() -> None:
    """Test that a trailer marker in the middle of a line is ignored."""
    message = "docs: mention Co-authored-by: nobody"
    assert list(extract_authors(make_commit(message, author_login="alice"))) == ["alice"]


def test_co_author_duplicates_are_case_insensitive() -> None:
    """Test that a co-author matching the primary author is not counted twice."""
    message = "fix: x\n\nCo-authored-by: Octocat <octo@x.com>"
    assert list(extract_authors(make_commit(message, author_login="octocat"))) == ["octocat"]


def test_empty_co_author_is_unknown() -> None:
    """Test that an empty trailer contributes the unknown identity."""
    authors = extract_authors(make_commit("fix: x\nCo-authored-by:", author_login="alice"))
    assert list(authors) == ["alice", "unknown"]


class TestAuthorSet:
    """Tests for the case-insensitive author set."""

    def test_membership_is_case_insensitive(self) -> None:
        """Test that membership ignores case and keeps the first spelling."""
        authors = AuthorSet(["Octocat", "octocat", "OCTOCAT"])
        assert len(authors) == 1
        assert "octoCAT" in authors
        assert list(authors) == ["Octocat"]

    def test_iterates_in_case_insensitive_order(self) -> None:
        """Test sorted iteration regardless of case."""
        assert list(AuthorSet(["bob", "Alice", "carol"])) == ["Alice", "bob", "carol"]

    def test_underscore_sorts_after_letters(self) -> None:
        """Test that identities are ordered by their upper-cased form."""
        assert list(AuthorSet(["a_b", "AAB", "a-b"])) == ["a-b", "AAB", "a_b"]

    def test_difference_is_case_insensitive(self) -> None:
        """Test set difference with differently cased members."""
        difference = AuthorSet(["alice", "Bob", "carol"]) - AuthorSet(["ALICE", "bob"])
        assert isinstance(difference, AuthorSet)
        assert list(difference) == ["carol"]

    def test_update_and_discard(self) -> None:
        """Test adding and removing members."""
        authors = AuthorSet()
        authors.update(["alice", "bob"])
        authors.discard("ALICE")
        assert list(authors) == ["bob"]
        assert authors == {"bob"}
