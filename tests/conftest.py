"""Shared fixtures: a settings object and a stand-in for the converter."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from rfcpub.lib.config import Settings
from rfcpub.lib.converter_config import ConverterConfig

FAKE_COMMANDS = {
    "to_publish": "pandoc -f gfm -t dokuwiki {input} -o {output}",
    "from_publish": "pandoc -f dokuwiki -t gfm {input} -o {output}",
}


@pytest.fixture
def settings(tmp_path):
    root = tmp_path.resolve()
    (root / "drafts").mkdir()
    return Settings(
        root=root,
        drafts_dir=root / "drafts",
        published_dir=root / "published",
        converter=ConverterConfig(commands=dict(FAKE_COMMANDS)),
    )


@pytest.fixture
def fake_converter():
    """Replacement for subprocess.run that copies input to output verbatim.

    Commands look like `pandoc ... <input> -o <output>`, relative to cwd.
    Every call is recorded on the returned object's `.calls`.
    """
    calls = []

    def run(cmd, cwd=None, **kwargs):
        calls.append(cmd)
        source = Path(cwd) / cmd[-3]
        destination = Path(cwd) / cmd[-1]
        destination.write_text(source.read_text())
        return MagicMock(returncode=0, stdout="", stderr="")

    run.calls = calls
    return run
