"""
Draft store: enumerate RFC drafts and map them to published paths.

The RFC header is a human convention, not a schema. Fields are read for
listing only and anything missing is None.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rfcpub.lib.config import Settings
from rfcpub.lib.constants import DRAFT_EXT

# "# PHP RFC: Title" (the wiki template heading)
RFC_TITLE_PATTERN = re.compile(r'^#[ \t]+PHP RFC:[ \t]*(.+?)[ \t#]*$', re.MULTILINE)
HEADING_PATTERN = re.compile(r'^#{1,6}[ \t]+(.+?)[ \t#]*$', re.MULTILINE)
# "* Version: 0.9" / "- Author: Jane <jane@php.net>"
FIELD_PATTERN = re.compile(
    r'^[ \t]*[*-][ \t]+(Version|Author|Status)[ \t]*:[ \t]*(.*?)[ \t]*$',
    re.MULTILINE | re.IGNORECASE,
)

HEADER_SCAN_LINES = 40


@dataclass
class Draft:
    """One proposal draft, identified by its slug (filename stem)."""
    slug: str
    path: Path
    title: str
    version: Optional[str] = None
    author: Optional[str] = None
    status: Optional[str] = None


def list_drafts(settings: Settings) -> list[Path]:
    """Draft files in sorted order. Empty if the drafts dir is missing."""
    if not settings.drafts_dir.is_dir():
        return []
    return sorted(
        p for p in settings.drafts_dir.iterdir()
        if p.is_file() and p.suffix == DRAFT_EXT
    )


def published_path_for(draft: Path, settings: Settings) -> Path:
    """Published file mirroring `draft` by stem."""
    return settings.published_dir / f"{draft.stem}{settings.published_ext}"


def list_published(settings: Settings) -> list[Path]:
    if not settings.published_dir.is_dir():
        return []
    return sorted(
        p for p in settings.published_dir.iterdir()
        if p.is_file() and p.suffix == settings.published_ext
    )


def parse_header(text: str, slug: str) -> dict:
    """Pull title/version/author/status from the top of a draft."""
    head = "\n".join(text.splitlines()[:HEADER_SCAN_LINES])

    match = RFC_TITLE_PATTERN.search(head) or HEADING_PATTERN.search(head)
    fields = {"title": match.group(1) if match else slug}

    for name, value in FIELD_PATTERN.findall(head):
        key = name.lower()
        # First occurrence wins; later bullets are usually body text
        if key not in fields and value:
            fields[key] = value

    return fields


def load_draft(path: Path) -> Draft:
    """Read a draft's header. Undecodable bytes become U+FFFD."""
    path = Path(path)
    fields = parse_header(path.read_text(encoding="utf-8", errors="replace"), path.stem)
    return Draft(slug=path.stem, path=path, **fields)


def display_path(path: Path, root: Path) -> str:
    """`path` relative to `root` when it lives under it."""
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return str(path)
