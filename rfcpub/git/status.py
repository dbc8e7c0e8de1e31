"""Working tree status queries."""

from pathlib import Path

from rfcpub.git.runner import GitResult, run_git


def get_status(repo: Path) -> GitResult:
    """Run `git status --porcelain`. Empty stdout on success means a clean tree."""
    return run_git(["status", "--porcelain"], repo)


def get_changed_files(repo: Path) -> list[str]:
    """List changed paths, reporting the destination of renames.

    Reads the NUL-separated porcelain format so paths with spaces survive.
    """
    result = run_git(["status", "--porcelain", "-z"], repo)
    if not result.success or not result.stdout:
        return []

    files = []
    entries = result.stdout.split('\0')
    i = 0
    while i < len(entries):
        entry = entries[i]
        if len(entry) < 4:
            i += 1
            continue

        status, path = entry[:2], entry[3:]
        files.append(path)
        # "R  new\0old\0": the entry after a rename/copy is the source path
        i += 2 if status[0] in ("R", "C") else 1

    return files
