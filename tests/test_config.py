from pathlib import Path

import pytest

from templar.config import ConfigError, TemplarConfig, load_config
from templar.config.paths import CONFIG_FILE, find_config
from templar.template.markers import DEFAULT_MAX_DEPTH

from tests.infrastructure.file_utils import write, write_config


def test_load_config_from_project(tmpproj: Path):
    cfg = load_config(tmpproj)

    assert cfg.template == tmpproj.resolve() / "templates" / "main.tpl"
    assert cfg.output == tmpproj.resolve() / "out" / "report.txt"
    assert cfg.variables == {"audience": "internal", "draft": "no"}
    assert cfg.max_depth == DEFAULT_MAX_DEPTH


def test_missing_config_gives_defaults(tmp_path: Path):
    cfg = load_config(tmp_path)

    assert cfg.template is None
    assert cfg.output is None
    assert cfg.variables == {}
    assert cfg.base_dir == tmp_path.resolve()


def test_explicit_config_must_exist(tmp_path: Path):
    with pytest.raises(ConfigError, match="Config file not found"):
        load_config(tmp_path, tmp_path / "other.yaml")


def test_explicit_config_sets_base_dir(tmp_path: Path):
    path = write_config(tmp_path / "conf", {"template": "t.tpl", "max_depth": 7}, name="custom.yaml")

    cfg = load_config(tmp_path, path)

    assert cfg.template == path.resolve().parent / "t.tpl"
    assert cfg.max_depth == 7


def test_find_config(tmp_path: Path):
    assert find_config(tmp_path) is None
    write(tmp_path / CONFIG_FILE, "{}\n")
    assert find_config(tmp_path) == (tmp_path / CONFIG_FILE).resolve()


def test_empty_config_file(tmp_path: Path):
    write(tmp_path / CONFIG_FILE, "")

    assert load_config(tmp_path).template is None


@pytest.mark.parametrize(
    "text, message",
    [
        ("- a\n- b\n", "must be a mapping"),
        ("template: [unclosed\n", "Invalid YAML"),
        ("unknown: 1\n", "Unexpected configuration keys"),
        ("template: 5\n", "'template' must be a string"),
        ("output: true\n", "'output' must be a string"),
        ("variables: [a, b]\n", "'variables' must be a mapping"),
        ("variables:\n  n: 1\n", "Variable 'n'"),
        ("max_depth: 0\n", "'max_depth' must be a positive integer"),
        ("max_depth: true\n", "'max_depth' must be a positive integer"),
    ],
)
def test_invalid_config(tmp_path: Path, text: str, message: str):
    write(tmp_path / CONFIG_FILE, text)

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)


def test_with_overrides_merges_variables(tmp_path: Path):
    cfg = TemplarConfig(
        template=tmp_path / "a.tpl",
        variables={"a": "1", "b": "2"},
        base_dir=tmp_path,
    )

    out = cfg.with_overrides(output=tmp_path / "o.txt", variables={"b": "override"})

    assert out.template == tmp_path / "a.tpl"
    assert out.output == tmp_path / "o.txt"
    assert out.variables == {"a": "1", "b": "override"}
    assert cfg.variables == {"a": "1", "b": "2"}
