"""Remote operations."""

from pathlib import Path

from rfcpub.git.runner import run_git, GitResult, REMOTE_TIMEOUT


def has_remote(repo: Path, remote: str = "origin") -> bool:
    result = run_git(["remote"], repo)
    return remote in result.stdout.split()


def push(repo: Path, remote: str, branch: str) -> GitResult:
    """Push the current HEAD to `remote` as `branch`.

    No retry and no rebase: a rejected push is returned as a failure.
    """
    return run_git(["push", remote, f"HEAD:{branch}"], repo, timeout=REMOTE_TIMEOUT)
