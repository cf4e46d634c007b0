"""Git hash capture for graph provenance.

Cached graphs record the short SHA of the code that generated them, so a
graph on disk can be traced back to the generator version.
"""

import subprocess
from pathlib import Path


def _git_succeeds(args: list[str], cwd: Path | None) -> bool:
    try:
        subprocess.check_output(["git", *args], cwd=cwd, stderr=subprocess.DEVNULL)
    except subprocess.CalledProcessError:
        return False
    return True


def get_git_hash(cwd: Path | None = None) -> str:
    """Short SHA of HEAD, suffixed with '-dirty' for uncommitted changes.

    Args:
        cwd: Directory inside the repository (default: process cwd).

    Returns:
        "a3f9c1d", "a3f9c1d-dirty", or "unknown" outside a git checkout
        or without git installed.
    """
    try:
        sha = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=cwd,
            stderr=subprocess.DEVNULL,
        ).decode().strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "unknown"

    clean = _git_succeeds(["diff", "--quiet"], cwd) and _git_succeeds(
        ["diff", "--quiet", "--cached"], cwd
    )
    return sha if clean else f"{sha}-dirty"
