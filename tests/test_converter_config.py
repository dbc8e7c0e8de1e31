"""Tests for rfcpub.lib.converter_config module."""

import pytest

from rfcpub.lib.converter_config import (
    ConverterConfig,
    ConverterConfigError,
    DEFAULT_COMMANDS,
    build_command,
    default_context,
    load_converter_config,
)
from rfcpub.lib.validate import ValidationError


def _context(**extra):
    context = {"root": "/repo", "uid": "1000", "gid": "1000",
               "input": "drafts/foo.md", "output": "published/foo.txt"}
    context.update(extra)
    return context


class TestLoadConverterConfig:
    """Tests for load_converter_config()."""

    def test_defaults_when_no_root(self):
        assert load_converter_config(None).commands == DEFAULT_COMMANDS

    def test_defaults_when_file_missing(self, tmp_path):
        assert load_converter_config(tmp_path).commands == DEFAULT_COMMANDS

    def test_loads_custom_command(self, tmp_path):
        (tmp_path / "converter.yaml").write_text(
            "commands:\n"
            "  to_publish: pandoc -f gfm -t dokuwiki {input} -o {output}\n"
        )
        config = load_converter_config(tmp_path)
        assert config.commands["to_publish"] == "pandoc -f gfm -t dokuwiki {input} -o {output}"
        assert config.commands["from_publish"] == DEFAULT_COMMANDS["from_publish"]

    def test_empty_file_uses_defaults(self, tmp_path):
        (tmp_path / "converter.yaml").write_text("")
        assert load_converter_config(tmp_path).commands == DEFAULT_COMMANDS

    def test_invalid_yaml_uses_defaults(self, tmp_path, caplog):
        (tmp_path / "converter.yaml").write_text("commands: [unclosed\n")
        assert load_converter_config(tmp_path).commands == DEFAULT_COMMANDS
        assert "Failed to parse" in caplog.text

    def test_unknown_direction_rejected(self, tmp_path):
        (tmp_path / "converter.yaml").write_text("commands:\n  to_html: pandoc {input}\n")
        with pytest.raises(ValidationError, match="converter"):
            load_converter_config(tmp_path)

    def test_non_string_command_rejected(self, tmp_path):
        (tmp_path / "converter.yaml").write_text("commands:\n  to_publish: 42\n")
        with pytest.raises(ValidationError) as exc_info:
            load_converter_config(tmp_path)
        assert exc_info.value.path == "commands.to_publish"


class TestBuildCommand:
    """Tests for build_command()."""

    def test_default_docker_invocation(self):
        cmd = build_command(ConverterConfig(), "to_publish", _context())
        assert cmd[:2] == ["docker", "run"]
        assert "/repo:/data" in cmd
        assert "1000:1000" in cmd
        assert cmd[-3:] == ["drafts/foo.md", "-o", "published/foo.txt"]
        assert ["-f", "gfm", "-t", "dokuwiki"] == cmd[cmd.index("-f"):cmd.index("-f") + 4]

    def test_default_import_reverses_formats(self):
        cmd = build_command(ConverterConfig(), "from_publish", _context())
        assert ["-f", "dokuwiki", "-t", "gfm"] == cmd[cmd.index("-f"):cmd.index("-f") + 4]
        assert "--pull" not in cmd

    def test_path_with_spaces_stays_one_argument(self):
        config = ConverterConfig(commands={"to_publish": "pandoc {input} -o {output}"})
        cmd = build_command(config, "to_publish", _context(input="drafts/my rfc.md"))
        assert cmd == ["pandoc", "drafts/my rfc.md", "-o", "published/foo.txt"]

    def test_raises_on_unknown_direction(self):
        with pytest.raises(ConverterConfigError, match="Unknown converter direction"):
            build_command(ConverterConfig(), "to_html", _context())

    def test_raises_on_missing_output(self):
        context = _context()
        del context["output"]
        with pytest.raises(ConverterConfigError, match="output"):
            build_command(ConverterConfig(), "to_publish", context)

    def test_raises_on_unknown_placeholder(self):
        config = ConverterConfig(commands={"to_publish": "pandoc --lua-filter {filter} {input} -o {output}"})
        with pytest.raises(ConverterConfigError, match="filter"):
            build_command(config, "to_publish", _context())


class TestDefaultContext:
    def test_default_context_has_ids(self, tmp_path):
        context = default_context(tmp_path)
        assert context["root"] == str(tmp_path)
        assert context["uid"].isdigit()
        assert context["gid"].isdigit()
