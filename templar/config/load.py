from __future__ import annotations

from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import ConfigError, TemplarConfig
from .paths import find_config

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file and returns its top-level mapping."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(root: Path, explicit: Optional[Path] = None) -> TemplarConfig:
    """
    Loads the run configuration.

    Args:
        root: Working directory (searched for templar.yaml)
        explicit: Config path given on the command line

    Returns:
        Parsed configuration; defaults when no config file exists
        and none was requested explicitly
    """
    path = find_config(root, explicit)
    if path is None:
        return TemplarConfig(base_dir=root.resolve())
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    return TemplarConfig.from_dict(_read_yaml_map(path), base_dir=path.parent)


__all__ = ["load_config"]
