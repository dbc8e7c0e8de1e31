"""
Conversion step: one draft in, one published file out.

The conversion itself is delegated to the configured external converter.
Afterwards two fixed cleanups are applied to the converter's output:
the <HTML>/</HTML> passthrough markers are dropped and HTML comments are
removed. Nothing about the draft's structure is validated.
"""

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from rfcpub.lib.config import Settings
from rfcpub.lib.constants import EXIT_FAILURE, EXIT_NOT_FOUND, EXIT_TIMEOUT
from rfcpub.lib.converter_config import (
    TO_PUBLISH,
    FROM_PUBLISH,
    build_command,
    default_context,
)

logger = logging.getLogger(__name__)

HTML_MARKERS = ("<HTML>", "</HTML>")
HTML_COMMENT = re.compile(r'<!--.*?-->', re.DOTALL)

PARTIAL_SUFFIX = ".partial"


class ConversionError(Exception):
    """The external converter failed."""

    def __init__(self, message: str, returncode: int = EXIT_FAILURE, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class ConverterNotFound(ConversionError):
    """The converter executable isn't installed or not on PATH."""

    def __init__(self, binary: str):
        super().__init__(f"Converter not found: {binary}", returncode=EXIT_NOT_FOUND)


@dataclass
class ConversionResult:
    source: Path
    destination: Path
    # Characters removed by the cleanups
    stripped: int = 0


def clean_published_text(text: str) -> str:
    """Remove passthrough markers and HTML comment spans.

    Repeats until nothing changes: removing one can splice the text around
    it into the other (e.g. "<HT<!-- x -->ML>").
    """
    while True:
        cleaned = text
        for marker in HTML_MARKERS:
            cleaned = cleaned.replace(marker, "")
        cleaned = HTML_COMMENT.sub("", cleaned)
        if cleaned == text:
            return cleaned
        text = cleaned


def _relative_to_root(path: Path, root: Path) -> str:
    """Path as the converter sees it. Container mounts only cover the root."""
    path = Path(path).resolve()
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def run_converter(
    settings: Settings,
    direction: str,
    source: Path,
    destination: Path,
) -> None:
    """
    Invoke the converter for one file and wait for it.

    The converter writes to a hidden partial file next to `destination`,
    which replaces `destination` only once the converter has succeeded and
    actually written it. On failure an existing destination is left as is.

    Raises:
        ConverterNotFound: converter binary missing
        ConversionError: non-zero exit, timeout, or no output written
    """
    destination = Path(destination)
    partial = partial_path_for(destination)
    partial.unlink(missing_ok=True)

    context = default_context(settings.root)
    context["input"] = _relative_to_root(source, settings.root)
    context["output"] = _relative_to_root(partial, settings.root)
    cmd = build_command(settings.converter, direction, context)

    try:
        _run(cmd, settings, source)
        if not partial.exists():
            raise ConversionError(f"Converter produced no output for {source}")
        partial.replace(destination)
    finally:
        partial.unlink(missing_ok=True)


def partial_path_for(destination: Path) -> Path:
    return destination.with_name(f".{destination.name}{PARTIAL_SUFFIX}")


def _run(cmd: list[str], settings: Settings, source: Path) -> None:
    logger.debug("Running converter: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            cwd=settings.root,
            capture_output=True,
            text=True,
            timeout=settings.convert_timeout,
        )
    except FileNotFoundError:
        raise ConverterNotFound(cmd[0]) from None
    except subprocess.TimeoutExpired:
        raise ConversionError(
            f"Converter timed out after {settings.convert_timeout}s on {source}",
            returncode=EXIT_TIMEOUT,
        ) from None

    if result.returncode != 0:
        stderr = result.stderr.strip()
        logger.error(f"Converter exited {result.returncode} on {source}: {stderr}")
        raise ConversionError(
            f"Converter exited {result.returncode} on {source}",
            returncode=result.returncode,
            stderr=stderr,
        )


def convert_draft(source: Path, destination: Path, settings: Settings) -> ConversionResult:
    """Convert a markdown draft into its published form.

    Creates the destination's parent directories and overwrites any
    existing file.
    """
    source = Path(source)
    destination = Path(destination)
    if not source.is_file():
        raise ConversionError(f"Draft not found: {source}", returncode=EXIT_NOT_FOUND)

    destination.parent.mkdir(parents=True, exist_ok=True)
    run_converter(settings, TO_PUBLISH, source, destination)

    raw = destination.read_text(encoding="utf-8")
    cleaned = clean_published_text(raw)
    if cleaned != raw:
        destination.write_text(cleaned, encoding="utf-8")

    logger.info(f"Converted {source} -> {destination}")
    return ConversionResult(source=source, destination=destination, stripped=len(raw) - len(cleaned))


def import_published(source: Path, destination: Path, settings: Settings) -> ConversionResult:
    """Convert wiki text back into a markdown draft (e.g. the RFC template).

    No cleanups: the output is meant to be edited by hand.
    """
    source = Path(source)
    destination = Path(destination)
    if not source.is_file():
        raise ConversionError(f"Source not found: {source}", returncode=EXIT_NOT_FOUND)

    destination.parent.mkdir(parents=True, exist_ok=True)
    run_converter(settings, FROM_PUBLISH, source, destination)
    logger.info(f"Imported {source} -> {destination}")
    return ConversionResult(source=source, destination=destination)
