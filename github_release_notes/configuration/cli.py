"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
import sys
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from github_release_notes.configuration.env import settings
from github_release_notes.configuration.models import ReleaseNotesConfig
from github_release_notes.configuration.reconcile import reconcile_release_notes_configuration
from github_release_notes.github.adapter import GitHubKitAdapter
from github_release_notes.release_notes.detector import VersionDetector
from github_release_notes.release_notes.generator import ReleaseNotesGenerator
from github_release_notes.release_notes.models import ReleaseNotesResult
from github_release_notes.release_notes.output import write_to_file, write_to_github_output, write_to_stdout

load_dotenv()

logger = structlog.get_logger(__name__)

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Generate categorized release notes from git commit history.")


def configure_logging(debug: bool) -> None:
    """Configure structlog to write to stderr, at debug level when requested."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


async def run_generate(config: ReleaseNotesConfig) -> ReleaseNotesResult:
    """Create the GitHub adapter and generate the release notes."""
    if config.version is None:
        raise ValueError("A release version is required to generate release notes.")
    adapter = await GitHubKitAdapter.create(
        repo=config.repository,
        github_token=config.github_token,
        github_api_url=config.github_api_url,
    )
    generator = ReleaseNotesGenerator(
        provider=adapter,
        owner=config.owner,
        repo=config.repo,
        server_url=config.github_server_url,
    )
    return await generator.generate(version=config.version, base_ref=config.base_ref, head_ref=config.head_ref)


@typer_app.callback()
def main() -> None:
    """Generate categorized release notes from git commit history."""


@typer_app.command(name="generate")
def generate_cli(
    token: Annotated[str | None, Option("--token", help="GitHub token (defaults to GITHUB_TOKEN).")] = None,
    owner: Annotated[str | None, Option("--owner", help="Repository owner (defaults to GITHUB_REPOSITORY).")] = None,
    repo: Annotated[str | None, Option("--repo", help="Repository name (defaults to GITHUB_REPOSITORY).")] = None,
    base_ref: Annotated[str | None, Option("--base-ref", help="Ref to compare from (defaults to the latest release tag).")] = None,
    head_ref: Annotated[str | None, Option("--head-ref", help="Ref to compare to (defaults to the default branch).")] = None,
    release_version: Annotated[
        str | None, Option("--release-version", help="Version string for the release notes (defaults to NBGV auto-detection).")
    ] = None,
    output_file: Annotated[Path | None, Option("--output-file", help="Write the release notes to a file.")] = None,
    github_output: Annotated[bool, Option("--github-output", help="Write the release notes to GITHUB_OUTPUT.")] = False,
    output_name: Annotated[str, Option("--output-name", help="Variable name when writing to GITHUB_OUTPUT.")] = "changelog",
    github_api_url: Annotated[str | None, Option("--github-api-url", help="GitHub API URL (defaults to GITHUB_API_URL).")] = None,
    debug: Annotated[bool, Option("--debug", help="Enable debug logging.")] = False,
) -> None:
    """Generate release notes for the commits since the last release."""
    configure_logging(debug or settings.DEBUG)
    try:
        config = reconcile_release_notes_configuration(
            cli_debug=debug,
            cli_github_api_url=github_api_url,
            cli_github_token=token,
            cli_owner=owner,
            cli_repo=repo,
            cli_base_ref=base_ref,
            cli_head_ref=head_ref,
            cli_version=release_version,
            cli_output_file=output_file,
            cli_github_output=github_output,
            cli_output_name=output_name,
        )
        if config.version is None:
            logger.info("No --release-version specified, detecting via NBGV")
            config.version = VersionDetector().detect(Path.cwd())
            if config.version is None:
                typer.echo("Error: Could not auto-detect version. Specify --release-version explicitly or install NBGV.", err=True)
                raise typer.Exit(1)
            logger.info("Detected version", version=config.version)

        typer.echo(f"Generating release notes for {config.repository} version {config.version}...", err=True)
        result = asyncio.run(run_generate(config))
        typer.echo(f"Release notes generated ({len(result.content)} characters)", err=True)

        write_to_stdout(result.content)
        if config.output_file is not None:
            write_to_file(result.content, config.output_file)
            typer.echo(f"Written to {config.output_file.absolute()}", err=True)
        if config.github_output:
            write_to_github_output(result.content, config.output_name, config.github_output_path)
    except typer.Exit:
        raise
    except Exception as e:
        logger.exception("Release note generation failed")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


if __name__ == "__main__":
    typer_app()
