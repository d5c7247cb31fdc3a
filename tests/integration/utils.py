"""Utility functions for integration tests."""

import os
import subprocess
import sys
from pathlib import Path


def run_cli(args: list[str], env: dict[str, str] | None = None, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """Run the CLI as a subprocess and capture its output.

    Args:
        args: Command line arguments passed after the program name.
        env: Environment for the subprocess (defaults to a copy of the current one).
        cwd: Working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: The result of running the CLI command.
    """
    complete_command = [sys.executable, "-m", "github_release_notes", *args]
    print(f"Running command: {' '.join(complete_command)}")
    result = subprocess.run(
        complete_command,
        capture_output=True,
        text=True,
        env=env if env is not None else os.environ.copy(),
        cwd=cwd,
    )
    print(f"Command result: {result.returncode}")
    print(f"Command stdout: {result.stdout}")
    print(f"Command stderr: {result.stderr}")
    return result
