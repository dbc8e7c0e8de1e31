#!/usr/bin/env python3
"""rfcpub CLI entrypoint."""

import argparse
import logging
import sys
from pathlib import Path

from rfcpub import __version__
from rfcpub.lib.config import Settings, load_settings
from rfcpub.lib.converter_config import ConverterConfigError
from rfcpub.lib.validate import ValidationError
from rfcpub.commands import build as cmd_build_module
from rfcpub.commands import convert as cmd_convert_module
from rfcpub.commands import list as cmd_list_module
from rfcpub.commands import publish as cmd_publish_module


def get_settings(args) -> Settings:
    """Load settings for --root (default: current directory) or exit 2."""
    root = Path(args.root) if args.root else Path.cwd()
    if not root.is_dir():
        print(f"ERROR: Repository root not found: {root}")
        sys.exit(2)
    try:
        return load_settings(root)
    except (ValueError, ValidationError) as e:
        print(f"ERROR: Invalid configuration: {e}")
        sys.exit(2)


def _with_settings(handler):
    def run(args):
        settings = get_settings(args)
        try:
            return handler(args, settings)
        except ConverterConfigError as e:
            print(f"ERROR: {e}")
            return 2
    return run


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv=None):
    parser = argparse.ArgumentParser(prog='rfcpub', description='Publish RFC drafts as wiki text')
    parser.add_argument('--root', '-C', help='Repository root (default: current directory)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # rfcpub convert
    p_convert = subparsers.add_parser('convert', help='Convert one draft to wiki text')
    p_convert.add_argument('source', help='Draft markdown file')
    p_convert.add_argument('destination', help='Published output file')
    p_convert.set_defaults(func=_with_settings(cmd_convert_module.cmd_convert))

    # rfcpub import
    p_import = subparsers.add_parser('import', help='Create a markdown draft from wiki text')
    p_import.add_argument('source', help='Wiki text file (e.g. template.txt)')
    p_import.add_argument('destination', help='Draft markdown file to write')
    p_import.add_argument('--force', action='store_true', help='Overwrite an existing draft')
    p_import.set_defaults(func=_with_settings(cmd_convert_module.cmd_import))

    # rfcpub build
    p_build = subparsers.add_parser('build', help='Convert all drafts')
    p_build.add_argument('--incremental', '-i', action='store_true',
                         help='Skip drafts whose published file is newer')
    p_build.add_argument('--prune', action='store_true',
                         help='Remove published files that have no draft')
    p_build.set_defaults(func=_with_settings(cmd_build_module.cmd_build))

    # rfcpub orphans
    p_orphans = subparsers.add_parser('orphans', help='List published files with no draft')
    p_orphans.set_defaults(func=_with_settings(cmd_build_module.cmd_orphans))

    # rfcpub publish
    p_publish = subparsers.add_parser('publish', help='Build, then commit and push any changes')
    p_publish.add_argument('--no-push', action='store_true', help='Commit but do not push')
    p_publish.add_argument('--branch', '-b', help='Branch to push to (default: current)')
    p_publish.set_defaults(func=_with_settings(cmd_publish_module.cmd_publish))

    # rfcpub list
    p_list = subparsers.add_parser('list', help='List drafts and publish state')
    p_list.set_defaults(func=_with_settings(cmd_list_module.cmd_list))

    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
