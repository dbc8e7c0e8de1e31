"""
Converter command configuration.

Loads converter.yaml to decide which command converts a draft into its
published form and back. If no config file exists the defaults run pandoc in
the pandoc/latex container, mounting the repository root at /data.

COMMAND TEMPLATES
=================

Each direction maps to a command template. Templates are split with shell
lexing rules first and placeholders are substituted per argument afterwards,
so paths containing spaces stay a single argument.

Placeholders:
- {input}:  source path, relative to the repository root
- {output}: destination path, relative to the repository root
- {root}:   absolute repository root (the container mount source)
- {uid}, {gid}: current user and group ids, so container output isn't root-owned

Directions:
- to_publish:   GitHub-flavoured markdown draft -> DokuWiki text
- from_publish: DokuWiki text -> markdown draft (template import)
"""

import logging
import os
import re
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .constants import CONVERTER_FILE
from . import validate

logger = logging.getLogger(__name__)


TO_PUBLISH = "to_publish"
FROM_PUBLISH = "from_publish"

DEFAULT_COMMANDS = {
    # Always pulls so CI picks up the current pandoc release
    TO_PUBLISH: (
        "docker run --rm -v {root}:/data --pull always --user {uid}:{gid} "
        "pandoc/latex -f gfm -t dokuwiki {input} -o {output}"
    ),
    FROM_PUBLISH: (
        "docker run --rm -v {root}:/data --user {uid}:{gid} "
        "pandoc/latex -f dokuwiki -t gfm {input} -o {output}"
    ),
}

REQUIRED_VARIABLES = ("input", "output")

PLACEHOLDER = re.compile(r'\{(\w+)\}')


class ConverterConfigError(ValueError):
    """A converter command template can't be built."""


@dataclass
class ConverterConfig:
    """Converter commands from converter.yaml."""
    commands: dict[str, str] = field(default_factory=lambda: DEFAULT_COMMANDS.copy())


def load_converter_config(root: Optional[Path]) -> ConverterConfig:
    """Load converter.yaml from `root`, falling back to defaults.

    A file that isn't valid YAML is logged and ignored. A file that parses
    but doesn't match the schema raises ValidationError.
    """
    if root is None:
        return ConverterConfig()

    config_path = Path(root) / CONVERTER_FILE
    if not config_path.exists():
        return ConverterConfig()

    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse {config_path}: {e}")
        return ConverterConfig()

    if data is None:
        return ConverterConfig()

    validate.validate(data, "converter")

    commands = DEFAULT_COMMANDS.copy()
    commands.update(data.get("commands") or {})
    return ConverterConfig(commands=commands)


def default_context(root: Path) -> dict[str, str]:
    """Placeholders that don't depend on the file being converted."""
    getuid = getattr(os, "getuid", None)
    getgid = getattr(os, "getgid", None)
    return {
        "root": str(root),
        "uid": str(getuid()) if getuid else "0",
        "gid": str(getgid()) if getgid else "0",
    }


def build_command(
    config: ConverterConfig,
    direction: str,
    context: dict[str, str],
) -> list[str]:
    """Build the argv for a conversion direction.

    Raises:
        ConverterConfigError: unknown direction, missing input/output, or a placeholder
            with no value in context.

    Example:
        >>> config = ConverterConfig(commands={"to_publish": "pandoc {input} -o {output}"})
        >>> build_command(config, "to_publish", {"input": "drafts/a b.md", "output": "out.txt"})
        ['pandoc', 'drafts/a b.md', '-o', 'out.txt']
    """
    if direction not in config.commands:
        raise ConverterConfigError(f"Unknown converter direction: {direction}")

    missing = [v for v in REQUIRED_VARIABLES if v not in context]
    if missing:
        raise ConverterConfigError(f"Converter direction '{direction}' needs {missing} in context")

    template = config.commands[direction]
    unknown = sorted(set(PLACEHOLDER.findall(template)) - set(context))
    if unknown:
        raise ConverterConfigError(
            f"Converter command for '{direction}' uses unknown placeholders {unknown}: {template}"
        )

    def substitute(arg: str) -> str:
        return PLACEHOLDER.sub(lambda m: context[m.group(1)], arg)

    return [substitute(arg) for arg in shlex.split(template)]

