"""Tests for challenge_checker/cli.py: argument handling, dispatch and exit codes."""

import pytest

from challenge_checker.cli import main
from challenge_checker.config import CONFIG_FILENAME
from challenge_checker.errors import (
    ConfigNotFound,
    ConfigParseError,
    DirectoryReadError,
    TemplateRenderError,
)


V2_DOC = """\
language: rust
project: RustBook
chapters:
  '01':
    name: basics
  '02':
    name: loops
  '03':
    name: recursion
"""


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    for var in ("FORCE_COLOR", "TTY_COMPATIBLE", "CHALLENGE_CHECKER_REPORT"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def project(tmp_path):
    (tmp_path / CONFIG_FILENAME).write_text(V2_DOC, encoding="utf-8")
    (tmp_path / "01.basics").mkdir()
    (tmp_path / "02.loops").mkdir()
    (tmp_path / ".git").mkdir()
    return tmp_path


class TestCliReport:

    def test_all_good(self, project, capsys):
        (project / "03.recursion").mkdir()
        assert main(["--path", str(project)]) == 0
        assert capsys.readouterr().out == "All good!\n"

    def test_missing_reported(self, project, capsys):
        assert main(["-p", str(project)]) == 0
        out = capsys.readouterr().out
        assert "Error: Found 1 Missing directories" in out
        assert "03.recursion" in out
        assert ".git" not in out

    def test_include_hidden(self, project, capsys):
        main(["-p", str(project), "--include-hidden"])
        out = capsys.readouterr().out
        assert "Found 1 Extra directories" in out
        assert ".git" in out

    def test_config_file_path(self, project, capsys):
        assert main(["-p", str(project / CONFIG_FILENAME)]) == 0
        assert "03.recursion" in capsys.readouterr().out

    def test_strict(self, project, capsys):
        assert main(["-p", str(project), "--strict"]) == 1
        (project / "03.recursion").mkdir()
        assert main(["-p", str(project), "--strict"]) == 0

    def test_check_readmes(self, project, capsys):
        (project / "01.basics" / "README.md").write_text("# basics", encoding="utf-8")
        main(["-p", str(project), "--check-readmes"])
        out = capsys.readouterr().out
        assert "README missing in 02.loops" in out
        assert "README missing in 01.basics" not in out

    def test_verbose_goes_to_stderr(self, project, capsys):
        main(["-p", str(project), "-v"])
        captured = capsys.readouterr()
        assert "missing dirs: ['03.recursion']" in captured.err
        assert "DEBUG" not in captured.out


class TestOrgReport:

    def test_org_output(self, project, capsys):
        (project / "notes").mkdir()
        assert main(["-p", str(project), "--report", "org"]) == 0
        assert capsys.readouterr().out == "\n* TODO [rust] RustBook :: Learn 03.recursion\n"

    def test_org_from_env(self, project, capsys, monkeypatch):
        monkeypatch.setenv("CHALLENGE_CHECKER_REPORT", "org")
        main(["-p", str(project)])
        assert capsys.readouterr().out.startswith("\n* TODO [rust]")

    def test_flag_beats_env(self, project, capsys, monkeypatch):
        monkeypatch.setenv("CHALLENGE_CHECKER_REPORT", "org")
        main(["-p", str(project), "-r", "cli"])
        assert "Missing directories" in capsys.readouterr().out

    def test_nothing_missing_prints_nothing(self, project, capsys):
        (project / "03.recursion").mkdir()
        main(["-p", str(project), "-r", "org"])
        assert capsys.readouterr().out == ""

    def test_bad_env_value(self, project, monkeypatch):
        monkeypatch.setenv("CHALLENGE_CHECKER_REPORT", "html")
        with pytest.raises(SystemExit) as exc:
            main(["-p", str(project)])
        assert exc.value.code == 2


class TestExitCodes:

    def test_config_not_found(self, tmp_path, capsys):
        assert main(["-p", str(tmp_path)]) == ConfigNotFound.exit_code
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("ERROR: config file not found")

    def test_config_parse_error(self, tmp_path, capsys):
        (tmp_path / CONFIG_FILENAME).write_text("chapters: [\n", encoding="utf-8")
        assert main(["-p", str(tmp_path)]) == ConfigParseError.exit_code
        assert capsys.readouterr().out == ""

    def test_config_validation_error(self, tmp_path, capsys):
        (tmp_path / CONFIG_FILENAME).write_text("language: rust\nproject: P\n", encoding="utf-8")
        assert main(["-p", str(tmp_path)]) == ConfigParseError.exit_code
        assert "schema validation error" in capsys.readouterr().err

    def test_directory_read_error(self, project, capsys, monkeypatch):
        def unreadable(path, exclude_hidden=True):
            raise DirectoryReadError(f"cannot list {path}: permission denied")

        monkeypatch.setattr("challenge_checker.folders.list_directories", unreadable)
        assert main(["-p", str(project)]) == DirectoryReadError.exit_code
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "permission denied" in captured.err

    def test_template_render_error(self, project, capsys, monkeypatch):
        def broken(missing, config):
            raise TemplateRenderError("boom")

        monkeypatch.setattr("challenge_checker.cli.todo_do_chapter", broken)
        assert main(["-p", str(project), "-r", "org"]) == TemplateRenderError.exit_code
        assert capsys.readouterr().out == ""

    def test_exit_codes_distinct(self):
        codes = {
            ConfigNotFound.exit_code,
            ConfigParseError.exit_code,
            DirectoryReadError.exit_code,
            TemplateRenderError.exit_code,
        }
        assert len(codes) == 4
        assert not codes & {0, 1, 2}

    def test_bad_report_choice(self, project):
        with pytest.raises(SystemExit) as exc:
            main(["-p", str(project), "-r", "html"])
        assert exc.value.code == 2
