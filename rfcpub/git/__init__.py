"""Git operations for the publish step.

Helpers return GitResult (check .success) or a plain value that is
empty/False when git fails. None of them raise on git errors.
"""

from rfcpub.git.runner import GitResult, run_git
from rfcpub.git.status import (
    get_status,
    get_changed_files,
)
from rfcpub.git.branch import get_current_branch, is_repository
from rfcpub.git.commit import stage_all, commit, set_identity
from rfcpub.git.remote import has_remote, push

__all__ = [
    "GitResult",
    "run_git",
    # status
    "get_status",
    "get_changed_files",
    # branch
    "get_current_branch",
    "is_repository",
    # commit
    "stage_all",
    "commit",
    "set_identity",
    # remote
    "has_remote",
    "push",
]
