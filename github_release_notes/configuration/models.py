"""Configuration models for the release notes CLI."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class ReleaseNotesConfig:
    """Reconciled configuration for the generate command."""

    debug: bool
    github_api_url: str
    github_server_url: str
    github_token: str
    owner: str
    repo: str
    base_ref: str | None
    head_ref: str | None
    version: str | None
    output_file: Path | None
    github_output: bool
    github_output_path: str | None
    output_name: str

    @property
    def repository(self) -> str:
        """The repository in 'owner/repo' format."""
        return f"{self.owner}/{self.repo}"
