"""
Batch driver: convert every draft into the publish directory.

Drafts are processed one at a time in sorted order. A failed draft doesn't
stop the run; the first failure's exit code is reported at the end.
Incremental mode skips drafts whose published file is at least as new as
the draft. Published files without a draft are left alone
unless pruning is requested.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rfcpub.convert import ConversionError, convert_draft
from rfcpub.drafts import display_path, list_drafts, list_published, published_path_for
from rfcpub.lib.config import Settings
from rfcpub.lib.constants import EXIT_OK

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """What a batch run did."""
    converted: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    pruned: list[Path] = field(default_factory=list)
    failures: list[Path] = field(default_factory=list)
    # First failure; its error decides the exit code
    failed: Optional[Path] = None
    error: Optional[ConversionError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        """0 on success, else the first failure's return code."""
        if self.error is None:
            return EXIT_OK
        return self.error.returncode


def is_up_to_date(draft: Path, published: Path) -> bool:
    """True if `published` exists and isn't older than `draft`."""
    if not published.exists():
        return False
    return published.stat().st_mtime >= draft.stat().st_mtime


def find_orphans(settings: Settings) -> list[Path]:
    """Published files whose draft no longer exists."""
    stems = {d.stem for d in list_drafts(settings)}
    return [p for p in list_published(settings) if p.stem not in stems]


def prune_orphans(settings: Settings) -> list[Path]:
    removed = []
    for path in find_orphans(settings):
        path.unlink()
        logger.info(f"Removed orphaned {path}")
        removed.append(path)
    return removed


def build_all(
    settings: Settings,
    incremental: bool = False,
    prune: Optional[bool] = None,
    echo=print,
) -> BuildReport:
    """
    Convert all drafts.

    Args:
        settings: Pipeline settings
        incremental: Skip drafts whose output is up to date
        prune: Remove orphaned published files if every conversion succeeded.
            None means use settings.prune_orphans.
        echo: Progress output, one line per draft

    Returns:
        BuildReport; check .success / .exit_code
    """
    if prune is None:
        prune = settings.prune_orphans

    report = BuildReport()
    settings.published_dir.mkdir(parents=True, exist_ok=True)

    drafts = list_drafts(settings)
    if not drafts:
        logger.warning(f"No drafts found in {settings.drafts_dir}")

    for draft in drafts:
        output = published_path_for(draft, settings)
        if incremental and is_up_to_date(draft, output):
            logger.debug(f"Up to date: {output}")
            report.skipped.append(draft)
            continue

        echo(f"converting {display_path(draft, settings.root)}")
        try:
            convert_draft(draft, output, settings)
        except ConversionError as e:
            report.failures.append(draft)
            if report.error is None:
                report.failed = draft
                report.error = e
            continue
        report.converted.append(draft)

    if prune and report.success:
        report.pruned = prune_orphans(settings)

    return report
