"""
Automation trigger: rebuild everything and commit what changed.

Run by CI on every push. If the rebuild leaves the working tree untouched
nothing is committed. Otherwise every change is staged, committed with the
configured message and pushed to the branch being built. Push rejections
and auth failures are not retried.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from rfcpub import git
from rfcpub.build import BuildReport, build_all
from rfcpub.lib.config import Settings
from rfcpub.lib.constants import EXIT_CONFIG, EXIT_FAILURE, EXIT_OK

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    exit_code: int
    build: Optional[BuildReport] = None
    committed: bool = False
    pushed: bool = False
    message: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == EXIT_OK


def _fail(exit_code: int, message: str, **kwargs) -> PublishResult:
    logger.error(message)
    return PublishResult(exit_code=exit_code, message=message, **kwargs)


def publish(
    settings: Settings,
    push: bool = True,
    branch: Optional[str] = None,
    echo=print,
) -> PublishResult:
    """
    Rebuild all drafts, then commit and push any resulting changes.

    Args:
        settings: Pipeline settings (settings.root must be a git work tree)
        push: Push the commit after creating it
        branch: Branch to push to; defaults to the current branch
        echo: Progress output
    """
    repo = settings.root
    if not git.is_repository(repo):
        return _fail(EXIT_CONFIG, f"Not a git repository: {repo}")

    report = build_all(settings, echo=echo)
    if not report.success:
        return _fail(
            report.exit_code,
            f"Build failed on {report.failed}: {report.error}",
            build=report,
        )

    status = git.get_status(repo)
    if not status.success:
        detail = "timed out" if status.timed_out else status.stderr.strip()
        return _fail(
            EXIT_FAILURE, f"git status failed: {detail}",
            build=report,
        )
    if not status.stdout.strip():
        echo("No changes to commit")
        return PublishResult(exit_code=EXIT_OK, build=report, message="No changes")

    changed = git.get_changed_files(repo)
    logger.info(f"{len(changed)} changed file(s) after build")

    if settings.git_user_name and settings.git_user_email:
        if not git.set_identity(repo, settings.git_user_name, settings.git_user_email):
            return _fail(EXIT_FAILURE, "Failed to configure git identity", build=report)

    staged = git.stage_all(repo)
    if not staged.success:
        return _fail(EXIT_FAILURE, f"git add failed: {staged.stderr.strip()}", build=report)

    committed = git.commit(repo, settings.commit_message)
    if not committed.success:
        return _fail(EXIT_FAILURE, f"git commit failed: {committed.stderr.strip()}", build=report)
    echo(f"Committed {len(changed)} file(s): {settings.commit_message}")

    if not push:
        return PublishResult(exit_code=EXIT_OK, build=report, committed=True, message="Committed")

    if not git.has_remote(repo, settings.remote):
        return _fail(
            EXIT_FAILURE, f"No remote named '{settings.remote}'",
            build=report, committed=True,
        )

    target = branch or git.get_current_branch(repo)
    if not target:
        return _fail(
            EXIT_FAILURE, "Cannot push from a detached HEAD without a branch",
            build=report, committed=True,
        )

    pushed = git.push(repo, settings.remote, target)
    if not pushed.success:
        return _fail(
            EXIT_FAILURE,
            f"git push to {settings.remote}/{target} failed: {pushed.stderr.strip()}",
            build=report, committed=True,
        )

    echo(f"Pushed to {settings.remote}/{target}")
    return PublishResult(
        exit_code=EXIT_OK, build=report, committed=True, pushed=True, message="Pushed",
    )
