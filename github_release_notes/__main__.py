"""Allows running the CLI with ``python -m github_release_notes``."""

from github_release_notes.configuration.cli import typer_app

typer_app(prog_name="github-release-notes")
