"""Integration tests for the CLI."""

import os
from pathlib import Path

from github_release_notes.release_notes.markdown import WHATS_CHANGED_HEADING

from .utils import run_cli


def test_help() -> None:
    """Test that the generate command documents its options."""
    result = run_cli(["generate", "--help"])
    assert result.returncode == 0
    assert "--release-version" in result.stdout
    assert "--github-output" in result.stdout


def test_missing_token(tmp_path: Path) -> None:
    """Test that the CLI exits with an error when no token is configured."""
    env = {key: value for key, value in os.environ.items() if key not in ("GITHUB_TOKEN", "GITHUB_REPOSITORY")}
    result = run_cli(["generate", "--owner", "octocat", "--repo", "Hello-World", "--release-version", "1.0.0"], env=env, cwd=tmp_path)
    assert result.returncode == 1
    assert "Missing required configuration element: GitHub token" in result.stderr


def test_generate_live(live_repository: str, tmp_path: Path) -> None:
    """Test generating release notes for a live repository."""
    output_file = tmp_path / "RELEASE_NOTES.md"
    github_output = tmp_path / "github_output"
    env = os.environ.copy()
    env["GITHUB_OUTPUT"] = str(github_output)

    result = run_cli(["generate", "--release-version", "0.0.0-integration", "--output-file", str(output_file), "--github-output"], env=env)

    assert result.returncode == 0, result.stderr
    content = output_file.read_text(encoding="utf-8")
    assert content.startswith(WHATS_CHANGED_HEADING)
    assert "**Full Changelog**:" in content
    assert "### \U0001f64c Contributions" in content
    assert content in result.stdout
    assert github_output.read_text(encoding="utf-8").startswith("changelog<<ghadelimiter_")
