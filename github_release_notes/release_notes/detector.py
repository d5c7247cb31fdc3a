"""Version detection through the Nerdbank.GitVersioning (nbgv) CLI."""

import subprocess
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

PACKAGE_VERSION_KEY = "NuGetPackageVersion"

NBGV_COMMANDS: tuple[list[str], ...] = (
    ["nbgv", "get-version"],
    ["dotnet", "nbgv", "get-version"],
)


class VersionDetector:
    """Detects the release version of a working copy via nbgv."""

    def __init__(self, commands: tuple[list[str], ...] = NBGV_COMMANDS, timeout: float = 60.0) -> None:
        """Initialize with the commands to try, in order."""
        self.commands = commands
        self.timeout = timeout

    def detect(self, working_directory: Path) -> str | None:
        """Return the package version reported by nbgv, or None if it cannot be determined."""
        for command in self.commands:
            output = self._run(command, working_directory)
            if output is not None:
                return parse_package_version(output)

        logger.warning("NBGV is not available - version auto-detection skipped")
        return None

    def _run(self, command: list[str], working_directory: Path) -> str | None:
        try:
            result = subprocess.run(
                command,
                cwd=working_directory,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("Failed to run command", command=" ".join(command), error=str(e))
            return None

        if result.returncode != 0:
            logger.debug("Command exited with an error", command=" ".join(command), exit_code=result.returncode, stderr=result.stderr)
            return None
        return result.stdout


def parse_package_version(output: str) -> str | None:
    """Extract the NuGetPackageVersion value from ``nbgv get-version`` output."""
    for line in output.splitlines():
        line = line.strip()
        if not line.lower().startswith(PACKAGE_VERSION_KEY.lower()):
            continue
        _, colon, value = line.partition(":")
        if colon and value.strip():
            return value.strip()

    logger.warning(f"Could not find {PACKAGE_VERSION_KEY} in nbgv output")
    return None
