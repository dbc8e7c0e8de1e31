"""Branch queries."""

from pathlib import Path

from rfcpub.git.runner import run_git


def get_current_branch(repo: Path) -> str | None:
    """Current branch name, or None on a detached HEAD."""
    result = run_git(["branch", "--show-current"], repo)
    if result.success:
        return result.stdout.strip() or None
    return None


def is_repository(path: Path) -> bool:
    result = run_git(["rev-parse", "--is-inside-work-tree"], path)
    return result.success and result.stdout.strip() == "true"
