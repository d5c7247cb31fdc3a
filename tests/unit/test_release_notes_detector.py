"""Unit tests for nbgv version detection."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from github_release_notes.release_notes.detector import VersionDetector, parse_package_version

NBGV_OUTPUT = """Version:                      1.2.3.4
AssemblyVersion:              1.2.0.0
AssemblyInformationalVersion: 1.2.3-beta+g1a2b3c4d5e
NuGetPackageVersion:          1.2.3-beta
NpmPackageVersion:            1.2.3-beta
"""


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


def test_parse_package_version() -> None:
    """Test that the NuGet package version is read from nbgv output."""
    assert parse_package_version(NBGV_OUTPUT) == "1.2.3-beta"


def test_parse_package_version_missing() -> None:
    """Test that output without a package version yields None."""
    assert parse_package_version("Version: 1.2.3.4\n") is None
    assert parse_package_version("NuGetPackageVersion:\n") is None


def test_detect_with_nbgv(tmp_path: Path) -> None:
    """Test detection with the global nbgv tool."""
    with patch("github_release_notes.release_notes.detector.subprocess.run", return_value=_completed(stdout=NBGV_OUTPUT)) as run:
        assert VersionDetector().detect(tmp_path) == "1.2.3-beta"
    run.assert_called_once()
    assert run.call_args.args[0] == ["nbgv", "get-version"]
    assert run.call_args.kwargs["cwd"] == tmp_path


def test_detect_falls_back_to_dotnet_tool(tmp_path: Path) -> None:
    """Test that the dotnet local tool is tried when nbgv is not on the path."""
    with patch(
        "github_release_notes.release_notes.detector.subprocess.run",
        side_effect=[FileNotFoundError("nbgv"), _completed(stdout=NBGV_OUTPUT)],
    ) as run:
        assert VersionDetector().detect(tmp_path) == "1.2.3-beta"
    assert [call.args[0] for call in run.call_args_list] == [["nbgv", "get-version"], ["dotnet", "nbgv", "get-version"]]


def test_detect_unavailable(tmp_path: Path) -> None:
    """Test that detection gives None when no command succeeds."""
    with patch(
        "github_release_notes.release_notes.detector.subprocess.run",
        side_effect=[_completed(returncode=1, stderr="not a git repo"), subprocess.TimeoutExpired("dotnet", 60)],
    ):
        assert VersionDetector().detect(tmp_path) is None
