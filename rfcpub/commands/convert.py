"""
rfcpub convert / rfcpub import - convert a single file.
"""

from pathlib import Path

from rfcpub.convert import ConversionError, convert_draft, import_published
from rfcpub.lib.config import Settings


def cmd_convert(args, settings: Settings) -> int:
    """Convert one draft into its published form."""
    source, destination = Path(args.source), Path(args.destination)
    print(f"Converting {source} to {destination}")
    try:
        result = convert_draft(source, destination, settings)
    except ConversionError as e:
        print(f"ERROR: {e}")
        if e.stderr:
            print(e.stderr)
        return e.returncode

    if result.stripped:
        print(f"  Removed {result.stripped} byte(s) of HTML markers/comments")
    return 0


def cmd_import(args, settings: Settings) -> int:
    """Create a markdown draft from wiki text (e.g. template.txt)."""
    source, destination = Path(args.source), Path(args.destination)
    if destination.exists() and not args.force:
        print(f"ERROR: {destination} already exists")
        print("  Use --force to overwrite")
        return 2

    print(f"Creating draft {destination} from {source}")
    try:
        import_published(source, destination, settings)
    except ConversionError as e:
        print(f"ERROR: {e}")
        if e.stderr:
            print(e.stderr)
        return e.returncode
    return 0
