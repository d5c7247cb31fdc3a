"""Contains utility functions for GitHub interactions."""


def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits an 'owner/repo' string into its owner and repository name."""
    if repo is None:
        raise ValueError("Repository is required in config.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Repository must look like 'owner/repo', got {repo!r}.")
    owner, repository = parts
    return owner, repository


def build_changelog_url(server_url: str, owner: str, repo: str, version: str, base_ref: str | None) -> str:
    """Builds the compare-view URL, or the commit-history URL when there is no base ref."""
    server_url = server_url.rstrip("/")
    if base_ref:
        return f"{server_url}/{owner}/{repo}/compare/{base_ref}...{version}"
    return f"{server_url}/{owner}/{repo}/commits/{version}"
