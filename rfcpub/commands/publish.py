"""
rfcpub publish - rebuild and commit changed output (CI entry point).
"""

from rfcpub.lib.config import Settings
from rfcpub.publish import publish


def cmd_publish(args, settings: Settings) -> int:
    result = publish(settings, push=not args.no_push, branch=args.branch)
    if not result.success:
        print(f"ERROR: {result.message}")
    return result.exit_code
