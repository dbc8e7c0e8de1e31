"""
rfcpub list - list drafts with their RFC header fields.
"""

from rfcpub.build import is_up_to_date
from rfcpub.drafts import list_drafts, load_draft, published_path_for
from rfcpub.lib.config import Settings


def _truncate(text: str, width: int) -> str:
    return text[:width - 3] + "..." if len(text) > width else text


def cmd_list(args, settings: Settings) -> int:
    """List drafts, their status, and whether the published copy is current."""
    paths = list_drafts(settings)
    if not paths:
        print(f"Drafts: none in {settings.drafts_dir}")
        return 0

    print("Drafts")
    print("-" * 78)
    for path in paths:
        draft = load_draft(path)
        published = published_path_for(path, settings)
        if not published.exists():
            state = "unpublished"
        elif is_up_to_date(path, published):
            state = "current"
        else:
            state = "stale"
        status = draft.status or "-"
        print(f"  {draft.slug:<28} {_truncate(status, 18):<18} {state:<12} {_truncate(draft.title, 40)}")
        if args.verbose and (draft.author or draft.version):
            print(f"  {'':<28} version {draft.version or '-'}, by {draft.author or '-'}")
    print()
    print(f"{len(paths)} draft(s)")
    return 0
