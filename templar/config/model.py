from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import TemplarUserError
from ..template.markers import DEFAULT_MAX_DEPTH


class ConfigError(TemplarUserError):
    """Invalid or missing configuration."""
    pass


@dataclass(frozen=True)
class TemplarConfig:
    """
    Run configuration: which template to render, where to write it
    and the initial variable bindings.

    Relative paths are resolved against `base_dir` (the directory
    holding the configuration file).
    """
    template: Optional[Path] = None
    output: Optional[Path] = None
    variables: Dict[str, str] = field(default_factory=dict)
    max_depth: int = DEFAULT_MAX_DEPTH
    base_dir: Path = field(default_factory=Path.cwd)

    @staticmethod
    def from_dict(raw: Dict[str, Any], base_dir: Path) -> "TemplarConfig":
        allowed = {"template", "output", "variables", "max_depth"}
        extras = set(raw.keys()) - allowed
        if extras:
            raise ConfigError(f"Unexpected configuration keys: {sorted(extras)!r}")

        template = raw.get("template")
        if template is not None and not isinstance(template, str):
            raise ConfigError(f"'template' must be a string, got {type(template).__name__}")

        output = raw.get("output")
        if output is not None and not isinstance(output, str):
            raise ConfigError(f"'output' must be a string, got {type(output).__name__}")

        variables = raw.get("variables") or {}
        if not isinstance(variables, dict):
            raise ConfigError(f"'variables' must be a mapping, got {type(variables).__name__}")
        for name, value in variables.items():
            if not isinstance(name, str) or not isinstance(value, str):
                raise ConfigError(
                    f"Variable '{name}' must map a string name to a string value, "
                    f"got {type(value).__name__}"
                )

        max_depth = raw.get("max_depth", DEFAULT_MAX_DEPTH)
        # bool is an int subclass
        if not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 1:
            raise ConfigError(f"'max_depth' must be a positive integer, got {max_depth!r}")

        return TemplarConfig(
            template=(base_dir / template) if template else None,
            output=(base_dir / output) if output else None,
            variables=dict(variables),
            max_depth=max_depth,
            base_dir=base_dir,
        )

    def with_overrides(
        self,
        template: Optional[Path] = None,
        output: Optional[Path] = None,
        variables: Optional[Dict[str, str]] = None,
    ) -> "TemplarConfig":
        """Copy with command line overrides applied (variables are merged)."""
        merged = dict(self.variables)
        merged.update(variables or {})
        return TemplarConfig(
            template=template if template is not None else self.template,
            output=output if output is not None else self.output,
            variables=merged,
            max_depth=self.max_depth,
            base_dir=self.base_dir,
        )
