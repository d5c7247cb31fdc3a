"""Reconciles configuration between CLI arguments and environment variables."""

from pathlib import Path

import structlog

from github_release_notes.configuration.env import settings
from github_release_notes.configuration.exceptions import RequiredConfigurationElementError
from github_release_notes.configuration.models import ReleaseNotesConfig
from github_release_notes.utils.constants import DEFAULT_OUTPUT_NAME
from github_release_notes.utils.github import split_repository_in_configuration

logger = structlog.get_logger(__name__)


def reconcile_repository(cli_owner: str | None, cli_repo: str | None) -> tuple[str, str]:
    """Resolve the repository owner and name.

    Explicit ``--owner``/``--repo`` values win; anything missing is taken from
    ``GITHUB_REPOSITORY`` (``owner/repo``).

    Raises:
        RequiredConfigurationElementError: If the owner or name cannot be resolved.
    """
    env_owner: str | None = None
    env_repo: str | None = None
    if settings.GITHUB_REPOSITORY:
        try:
            env_owner, env_repo = split_repository_in_configuration(settings.GITHUB_REPOSITORY)
        except ValueError:
            logger.warning("Ignoring malformed GITHUB_REPOSITORY", github_repository=settings.GITHUB_REPOSITORY)

    owner = cli_owner or env_owner
    repo = cli_repo or env_repo
    if not owner:
        raise RequiredConfigurationElementError(name="Repository owner", cli_name="--owner", env_name="GITHUB_REPOSITORY")
    if not repo:
        raise RequiredConfigurationElementError(name="Repository name", cli_name="--repo", env_name="GITHUB_REPOSITORY")
    return owner, repo


def reconcile_release_notes_configuration(
    cli_debug: bool = False,
    cli_github_api_url: str | None = None,
    cli_github_token: str | None = None,
    cli_owner: str | None = None,
    cli_repo: str | None = None,
    cli_base_ref: str | None = None,
    cli_head_ref: str | None = None,
    cli_version: str | None = None,
    cli_output_file: Path | None = None,
    cli_github_output: bool = False,
    cli_output_name: str | None = None,
) -> ReleaseNotesConfig:
    """Reconcile CLI arguments with environment settings; CLI values take precedence.

    The version may remain unset here; the caller is responsible for detecting it.

    Raises:
        RequiredConfigurationElementError: If the token or repository is missing.
    """
    github_token = cli_github_token or settings.GITHUB_TOKEN
    if not github_token:
        raise RequiredConfigurationElementError(name="GitHub token", cli_name="--token", env_name="GITHUB_TOKEN")

    owner, repo = reconcile_repository(cli_owner, cli_repo)

    return ReleaseNotesConfig(
        debug=cli_debug or settings.DEBUG,
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        github_server_url=settings.GITHUB_SERVER_URL,
        github_token=github_token,
        owner=owner,
        repo=repo,
        base_ref=cli_base_ref or None,
        head_ref=cli_head_ref or None,
        version=cli_version or None,
        output_file=cli_output_file,
        github_output=cli_github_output,
        github_output_path=settings.GITHUB_OUTPUT,
        output_name=cli_output_name or DEFAULT_OUTPUT_NAME,
    )
