from __future__ import annotations

from pathlib import Path
from typing import Optional

# Single source of truth for configuration file naming.
CONFIG_FILE = "templar.yaml"


def default_config_path(root: Path) -> Path:
    """Path to the configuration file in `root`: <root>/templar.yaml."""
    return (root / CONFIG_FILE).resolve()


def find_config(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    """
    Configuration file to use: the explicit path if given,
    otherwise templar.yaml in `root` when it exists.
    """
    if explicit is not None:
        return explicit.resolve()
    candidate = default_config_path(root)
    return candidate if candidate.is_file() else None
