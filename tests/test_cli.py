from pathlib import Path

import pytest

from templar.cli import _build_parser, _cmd_run, _parse_vars, main
from templar.config import ConfigError
from templar.version import tool_version

from tests.infrastructure.cli_utils import run_cli
from tests.infrastructure.file_utils import write


def test_cli_run_uses_config(tmpproj: Path):
    cp = run_cli(tmpproj, "run")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == "ReportInternal notes.FINALEND OF REPORT"


def test_cli_run_var_overrides(tmpproj: Path):
    cp = run_cli(tmpproj, "run", "--var", "audience=public", "--var", "draft=yes")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == "ReportDRAFTEND OF REPORT"


def test_cli_generate_writes_output(tmpproj: Path):
    cp = run_cli(tmpproj, "generate")
    assert cp.returncode == 0, cp.stderr
    out = tmpproj / "out" / "report.txt"
    assert out.read_text(encoding="utf-8") == "ReportInternal notes.FINALEND OF REPORT"
    assert cp.stdout == ""


def test_cli_generate_output_flag(tmpproj: Path):
    cp = run_cli(tmpproj, "generate", "-o", "elsewhere/r.txt")
    assert cp.returncode == 0, cp.stderr
    assert (tmpproj / "elsewhere" / "r.txt").is_file()
    assert not (tmpproj / "out" / "report.txt").exists()


def test_cli_error_reporting(tmp_path: Path):
    write(tmp_path / "bad.tpl", "!!% if x\nunclosed")
    cp = run_cli(tmp_path, "run", "--template", "bad.tpl")
    assert cp.returncode == 2
    assert "Failed to execute command 'run'" in cp.stderr
    assert "Unclosed directive 'if x'" in cp.stderr


def test_cli_version(tmp_path: Path):
    cp = run_cli(tmp_path, "--version")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout.strip() == f"templar {tool_version()}"


def test_cli_requires_subcommand(tmp_path: Path):
    cp = run_cli(tmp_path)
    assert cp.returncode != 0


class TestCliInProcess:
    """main() called directly, output captured by pytest."""

    def test_template_flag_without_config(self, tmp_path: Path, monkeypatch, capsys):
        write(tmp_path / "t.tpl", "!!% transform name: name | title\n!!% if who == 'x'\nada lovelace%!!%!!")
        monkeypatch.chdir(tmp_path)

        rc = main(["run", "--template", "t.tpl", "--var", "who=x"])

        assert rc == 0
        assert capsys.readouterr().out == "Ada Lovelace"

    def test_dump_ast(self, tmpproj: Path, monkeypatch, capsys):
        monkeypatch.chdir(tmpproj)

        rc = main(["run", "--dump-ast"])

        assert rc == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[:3] == [
            "Text('Report')",
            "Directive(if audience == \"internal\")",
            "  Text('Internal notes.')",
        ]
        assert "Directive(include parts/footer.tpl)" in [line.strip() for line in lines]

    def test_no_template(self, tmp_path: Path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        rc = main(["run"])

        assert rc == 2
        assert "No template specified" in capsys.readouterr().err

    def test_dump_ast_without_template(self, tmp_path: Path, monkeypatch):
        """Missing template is a configuration error for every subcommand."""
        monkeypatch.chdir(tmp_path)
        ns = _build_parser().parse_args(["run", "--dump-ast"])

        with pytest.raises(ConfigError, match="No template specified"):
            _cmd_run(ns)

    def test_bad_variable(self, tmpproj: Path, monkeypatch, capsys):
        monkeypatch.chdir(tmpproj)

        rc = main(["generate", "--var", "novalue"])

        assert rc == 2
        assert "Expected 'NAME=VALUE'" in capsys.readouterr().err

    def test_explicit_config(self, tmpproj: Path, tmp_path: Path, monkeypatch, capsys):
        elsewhere = tmp_path / "cwd"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)

        rc = main(["run", "--config", str(tmpproj / "templar.yaml")])

        assert rc == 0
        assert capsys.readouterr().out.startswith("ReportInternal notes.")


@pytest.mark.parametrize(
    "specs, expected",
    [
        (None, {}),
        (["a=1"], {"a": "1"}),
        (["a=1=2", " b =x"], {"a": "1=2", "b": "x"}),
        (["a="], {"a": ""}),
    ],
)
def test_parse_vars(specs, expected):
    assert _parse_vars(specs) == expected


@pytest.mark.parametrize("spec", ["novalue", "=x"])
def test_parse_vars_rejects(spec):
    with pytest.raises(ValueError):
        _parse_vars([spec])
