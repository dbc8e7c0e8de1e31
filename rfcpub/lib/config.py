"""
Configuration loaders for rfcpub.

Pipeline settings come from rfcpub.env at the repository root. Every key is
optional; a repository without the file uses the historical layout
(drafts/*.md -> published/*.txt).
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from . import envparse
from .constants import (
    SETTINGS_FILE,
    DEFAULT_DRAFTS_DIR,
    DEFAULT_PUBLISHED_DIR,
    DEFAULT_PUBLISHED_EXT,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_REMOTE,
    DEFAULT_CONVERT_TIMEOUT,
    EXT_PATTERN,
)
from .converter_config import ConverterConfig, load_converter_config

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Resolved pipeline settings for one repository."""
    root: Path
    drafts_dir: Path
    published_dir: Path
    published_ext: str = DEFAULT_PUBLISHED_EXT
    prune_orphans: bool = False
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    remote: str = DEFAULT_REMOTE
    git_user_name: str = ""  # Empty: leave git identity alone
    git_user_email: str = ""
    convert_timeout: int = DEFAULT_CONVERT_TIMEOUT
    converter: ConverterConfig = field(default_factory=ConverterConfig)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_ext(value: str) -> str:
    ext = value if value.startswith(".") else f".{value}"
    if not EXT_PATTERN.match(ext):
        logger.warning(
            f"Unknown PUBLISHED_EXT '{value}', using '{DEFAULT_PUBLISHED_EXT}'"
        )
        return DEFAULT_PUBLISHED_EXT
    return ext


def _parse_timeout(value: str) -> int:
    try:
        timeout = int(value)
    except ValueError:
        raise ValueError(f"CONVERT_TIMEOUT must be an integer, got '{value}'") from None
    if timeout <= 0:
        raise ValueError(f"CONVERT_TIMEOUT must be positive, got {timeout}")
    return timeout


def _resolve(root: Path, value: str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else root / path


def load_settings(root: Path) -> Settings:
    """Load rfcpub.env and converter.yaml from `root`.

    Raises:
        ValueError: malformed rfcpub.env or bad value
        ValidationError: converter.yaml doesn't match its schema
    """
    root = Path(root).resolve()
    env_path = root / SETTINGS_FILE
    if env_path.exists():
        env = envparse.load_env(env_path)
        logger.debug(f"Loaded {env_path}")
    else:
        env = {}

    return Settings(
        root=root,
        drafts_dir=_resolve(root, env.get("DRAFTS_DIR", DEFAULT_DRAFTS_DIR)),
        published_dir=_resolve(root, env.get("PUBLISHED_DIR", DEFAULT_PUBLISHED_DIR)),
        published_ext=_parse_ext(env.get("PUBLISHED_EXT", DEFAULT_PUBLISHED_EXT)),
        prune_orphans=_parse_bool(env.get("PRUNE_ORPHANS", "false")),
        commit_message=env.get("COMMIT_MESSAGE", DEFAULT_COMMIT_MESSAGE) or DEFAULT_COMMIT_MESSAGE,
        remote=env.get("REMOTE", DEFAULT_REMOTE),
        git_user_name=env.get("GIT_USER_NAME", ""),
        git_user_email=env.get("GIT_USER_EMAIL", ""),
        convert_timeout=_parse_timeout(env.get("CONVERT_TIMEOUT", str(DEFAULT_CONVERT_TIMEOUT))),
        converter=load_converter_config(root),
    )
