"""Writes release notes to stdout, a file, and the GitHub Actions output file."""

import uuid
from pathlib import Path

import structlog
import typer

from github_release_notes.utils.constants import GITHUB_OUTPUT_DELIMITER_PREFIX

logger = structlog.get_logger(__name__)


def write_to_stdout(release_notes: str) -> None:
    """Print the release notes."""
    typer.echo(release_notes)


def write_to_file(release_notes: str, output_file: Path) -> None:
    """Write the release notes to ``output_file``, replacing its contents."""
    output_file.write_text(release_notes, encoding="utf-8")
    logger.info("Release notes written to file", file_path=str(output_file.absolute()))


def format_github_output(release_notes: str, output_name: str, delimiter: str | None = None) -> str:
    """Format a multi-line GITHUB_OUTPUT entry using a heredoc delimiter."""
    delimiter = delimiter or f"{GITHUB_OUTPUT_DELIMITER_PREFIX}{uuid.uuid4().hex}"
    return f"{output_name}<<{delimiter}\n{release_notes}\n{delimiter}\n"


def write_to_github_output(release_notes: str, output_name: str, github_output_path: str | Path | None) -> bool:
    """Append the release notes to the GITHUB_OUTPUT file.

    Returns:
        False when no GITHUB_OUTPUT path is configured and nothing was written
    """
    if not github_output_path:
        logger.warning("GITHUB_OUTPUT environment variable is not set, skipping GitHub output")
        return False

    with open(github_output_path, "a", encoding="utf-8") as f:
        f.write(format_github_output(release_notes, output_name))
    logger.info("Release notes written to GITHUB_OUTPUT", output_name=output_name)
    return True
