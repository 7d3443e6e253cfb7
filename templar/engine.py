"""
High-level entry points wiring parser, loader, evaluation context and generator.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

from .config.model import ConfigError, TemplarConfig
from .evaluation.context import EvaluationContext
from .evaluation.jinja_context import JinjaEvaluationContext
from .template.errors import TemplateNotFoundError
from .template.generator import TemplateGenerator
from .template.loader import FileTemplateLoader
from .template.markers import DEFAULT_MAX_DEPTH
from .template.nodes import Template
from .template.parser import parse_template

logger = logging.getLogger(__name__)


def render_text(
    text: str,
    variables: Optional[Mapping[str, str]] = None,
    base_dir: Optional[Path] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    context: Optional[EvaluationContext] = None,
) -> str:
    """
    Parses and generates template text in one step.

    Args:
        text: Template source
        variables: Initial bindings (ignored when `context` is given)
        base_dir: Root for `include` paths; includes are unsupported without it
        max_depth: Nesting bound for parsing and generation
        context: Evaluation context to use instead of a fresh Jinja2 one
    """
    template = parse_template(text, max_depth=max_depth)
    if context is None:
        context = JinjaEvaluationContext(variables)
    loader = FileTemplateLoader(base_dir) if base_dir is not None else None
    return TemplateGenerator(loader=loader, max_depth=max_depth).generate(template, context)


def render_file(
    path: Path,
    variables: Optional[Mapping[str, str]] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """
    Renders a template file; includes resolve relative to its directory.
    """
    path = Path(path)
    loader = FileTemplateLoader(path.parent)
    text = loader.load(path.name)
    return render_text(text, variables, base_dir=loader.base_dir, max_depth=max_depth)


def load_template(path: Path, max_depth: int = DEFAULT_MAX_DEPTH) -> Template:
    """Parses a template file without generating it."""
    path = Path(path)
    if not path.is_file():
        raise TemplateNotFoundError(path.name, str(path.parent.resolve()))
    return parse_template(path.read_text(encoding="utf-8"), max_depth=max_depth)


def render_config(config: TemplarConfig) -> str:
    """Renders the template named by a run configuration."""
    if config.template is None:
        raise ConfigError("No template specified (set 'template' in templar.yaml or pass --template)")
    logger.debug(
        "Rendering %s with %d variable(s)", config.template, len(config.variables)
    )
    return render_file(config.template, config.variables, max_depth=config.max_depth)


__all__ = ["render_text", "render_file", "render_config", "load_template"]
