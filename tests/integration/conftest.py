"""Pytest configuration for integration tests."""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


@pytest.fixture(autouse=True, scope="session")
def load_env() -> None:
    """Load environment variables from .env.integration, then .env, before running integration tests.

    Values already in the environment are never overridden, so the first file
    to define a variable wins.
    """
    project_root = Path(__file__).parent.parent.parent
    for env_file in (project_root / ".env.integration", project_root / ".env"):
        if env_file.exists():
            load_dotenv(dotenv_path=env_file)


@pytest.fixture
def live_repository() -> str:
    """The repository to run live tests against, skipping when credentials are missing."""
    missing_vars = [var for var in ("GITHUB_TOKEN", "GITHUB_REPOSITORY") if not os.getenv(var)]
    if missing_vars:
        pytest.skip(f"Missing required environment variables: {', '.join(missing_vars)}")
    return os.environ["GITHUB_REPOSITORY"]
