"""Staging and committing."""

from pathlib import Path

from rfcpub.git.runner import run_git, GitResult


def stage_all(repo: Path) -> GitResult:
    """Stage new, modified and deleted files."""
    return run_git(["add", "-A"], repo)


def commit(repo: Path, message: str) -> GitResult:
    return run_git(["commit", "-m", message], repo)


def set_identity(repo: Path, name: str, email: str) -> bool:
    """Set the committer identity for this repository only."""
    for key, value in (("user.name", name), ("user.email", email)):
        if not run_git(["config", key, value], repo).success:
            return False
    return True
