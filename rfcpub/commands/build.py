"""
rfcpub build - convert every draft; rfcpub orphans - list stale output.
"""

from rfcpub.build import build_all, find_orphans
from rfcpub.drafts import display_path
from rfcpub.lib.config import Settings


def cmd_build(args, settings: Settings) -> int:
    """Convert all drafts into the publish directory."""
    prune = True if args.prune else None
    report = build_all(settings, incremental=args.incremental, prune=prune)

    summary = f"{len(report.converted)} converted"
    if report.failures:
        summary += f", {len(report.failures)} failed"
    if report.skipped:
        summary += f", {len(report.skipped)} up to date"
    if report.pruned:
        summary += f", {len(report.pruned)} orphan(s) removed"
    print(summary)

    if not report.success:
        print(f"ERROR: {report.error}")
        if report.error.stderr:
            print(report.error.stderr)
        return report.exit_code

    if not args.prune and not settings.prune_orphans:
        orphans = find_orphans(settings)
        if orphans:
            print()
            print(f"[!] {len(orphans)} published file(s) have no draft:")
            for path in orphans:
                print(f"    {display_path(path, settings.root)}")
            print("    rfcpub build --prune to remove them")
    return 0


def cmd_orphans(args, settings: Settings) -> int:
    """List published files with no matching draft."""
    orphans = find_orphans(settings)
    for path in orphans:
        print(display_path(path, settings.root))
    if not orphans:
        print("No orphaned published files")
    return 0
