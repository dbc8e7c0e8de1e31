"""Tests for the rfcpub command line."""

from unittest.mock import patch, MagicMock

import pytest

from rfcpub.cli import main


def _repo(tmp_path, **drafts):
    root = tmp_path.resolve()
    (root / "drafts").mkdir()
    for slug, text in drafts.items():
        (root / "drafts" / f"{slug}.md").write_text(text)
    return root


class TestBuildCommand:
    def test_build_converts_all(self, tmp_path, fake_converter, capsys):
        root = _repo(tmp_path, foo="<!-- note -->Hello<HTML>world</HTML>")

        with patch("rfcpub.convert.subprocess.run", side_effect=fake_converter):
            exit_code = main(["--root", str(root), "build"])

        assert exit_code == 0
        assert (root / "published" / "foo.txt").read_text() == "Helloworld"
        out = capsys.readouterr().out
        assert "converting drafts/foo.md" in out
        assert "1 converted" in out

    def test_build_failure_returns_converter_code(self, tmp_path, capsys):
        root = _repo(tmp_path, foo="x")
        mock_run = MagicMock(return_value=MagicMock(returncode=125, stdout="", stderr="docker: daemon not running"))

        with patch("rfcpub.convert.subprocess.run", mock_run):
            exit_code = main(["--root", str(root), "build"])

        assert exit_code == 125
        out = capsys.readouterr().out
        assert "ERROR" in out
        assert "daemon not running" in out

    def test_build_warns_about_orphans(self, tmp_path, fake_converter, capsys):
        root = _repo(tmp_path, foo="x")
        (root / "published").mkdir()
        (root / "published" / "gone.txt").write_text("stale")

        with patch("rfcpub.convert.subprocess.run", side_effect=fake_converter):
            main(["--root", str(root), "build"])

        assert (root / "published" / "gone.txt").exists()
        assert "published/gone.txt" in capsys.readouterr().out

    def test_build_prune(self, tmp_path, fake_converter):
        root = _repo(tmp_path, foo="x")
        (root / "published").mkdir()
        (root / "published" / "gone.txt").write_text("stale")

        with patch("rfcpub.convert.subprocess.run", side_effect=fake_converter):
            exit_code = main(["--root", str(root), "build", "--prune"])

        assert exit_code == 0
        assert not (root / "published" / "gone.txt").exists()


    def test_build_continues_past_failed_draft(self, tmp_path, fake_converter, capsys):
        root = _repo(tmp_path, alpha="a", beta="b")

        def run(cmd, cwd=None, **kwargs):
            if cmd[-3] == "drafts/alpha.md":
                return MagicMock(returncode=3, stdout="", stderr="boom")
            return fake_converter(cmd, cwd=cwd, **kwargs)

        with patch("rfcpub.convert.subprocess.run", side_effect=run):
            exit_code = main(["--root", str(root), "build"])

        assert exit_code == 3
        assert (root / "published" / "beta.txt").read_text() == "b"
        assert "ERROR" in capsys.readouterr().out


class TestConvertCommands:
    def test_convert_single_file(self, tmp_path, fake_converter):
        root = _repo(tmp_path, foo="a<HTML>b</HTML>")

        with patch("rfcpub.convert.subprocess.run", side_effect=fake_converter):
            exit_code = main(["--root", str(root), "convert",
                              str(root / "drafts" / "foo.md"), str(root / "out" / "foo.txt")])

        assert exit_code == 0
        assert (root / "out" / "foo.txt").read_text() == "ab"

    def test_convert_missing_converter(self, tmp_path, capsys):
        root = _repo(tmp_path, foo="x")

        with patch("rfcpub.convert.subprocess.run", side_effect=FileNotFoundError("docker")):
            exit_code = main(["--root", str(root), "convert",
                              str(root / "drafts" / "foo.md"), str(root / "published" / "foo.txt")])

        assert exit_code == 127
        assert "Converter not found: docker" in capsys.readouterr().out

    def test_import_refuses_to_overwrite(self, tmp_path, capsys):
        root = _repo(tmp_path, template="existing")
        (root / "template.txt").write_text("====== PHP RFC: Your Title Here ======")

        exit_code = main(["--root", str(root), "import",
                          str(root / "template.txt"), str(root / "drafts" / "template.md")])

        assert exit_code == 2
        assert "already exists" in capsys.readouterr().out
        assert (root / "drafts" / "template.md").read_text() == "existing"

    def test_import_with_force(self, tmp_path, fake_converter):
        root = _repo(tmp_path, template="existing")
        (root / "template.txt").write_text("====== PHP RFC: Your Title Here ======")

        with patch("rfcpub.convert.subprocess.run", side_effect=fake_converter):
            exit_code = main(["--root", str(root), "import", "--force",
                              str(root / "template.txt"), str(root / "drafts" / "template.md")])

        assert exit_code == 0
        assert "dokuwiki" in fake_converter.calls[0]


class TestConfigErrors:
    def test_invalid_env_file_exits_2(self, tmp_path, capsys):
        root = _repo(tmp_path)
        (root / "rfcpub.env").write_text("PUBLISHED_DIR=$(rm -rf /)\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["--root", str(root), "build"])

        assert exc_info.value.code == 2
        assert "Invalid configuration" in capsys.readouterr().out

    def test_bad_converter_template_exits_2(self, tmp_path, capsys):
        root = _repo(tmp_path, foo="x")
        (root / "converter.yaml").write_text("commands:\n  to_publish: pandoc {filter} {input} -o {output}\n")

        exit_code = main(["--root", str(root), "build"])

        assert exit_code == 2
        assert "filter" in capsys.readouterr().out

    def test_other_value_errors_are_not_reported_as_config(self, tmp_path):
        root = _repo(tmp_path)

        with patch("rfcpub.commands.list.list_drafts", side_effect=ValueError("boom")):
            with pytest.raises(ValueError, match="boom"):
                main(["--root", str(root), "list"])


class TestListCommand:
    def test_lists_drafts_with_state(self, tmp_path, capsys):
        root = _repo(
            tmp_path,
            pipes="# PHP RFC: Pipe Operator\n\n* Status: Accepted\n",
            records="# PHP RFC: Records\n",
        )

        exit_code = main(["--root", str(root), "list"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "Pipe Operator" in out
        assert "Accepted" in out
        assert "unpublished" in out
        assert "2 draft(s)" in out

    def test_non_utf8_draft_is_listed(self, tmp_path, capsys):
        root = _repo(tmp_path)
        (root / "drafts" / "latin1.md").write_bytes("# PHP RFC: Caf\xe9\n\n* Status: Draft\n".encode("latin-1"))

        exit_code = main(["--root", str(root), "list"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "latin1" in out
        assert "Caf\ufffd" in out
        assert "ERROR" not in out

    def test_orphans_command(self, tmp_path, capsys):
        root = _repo(tmp_path, foo="x")
        (root / "published").mkdir()
        (root / "published" / "foo.txt").write_text("x")
        (root / "published" / "bar.txt").write_text("x")

        main(["--root", str(root), "orphans"])

        out = capsys.readouterr().out
        assert "published/bar.txt" in out
        assert "published/foo.txt" not in out
