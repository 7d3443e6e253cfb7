"""
Templar: a template compiler for nested directive blocks.

    !!% if audience == "internal"
      Internal notes.
    %!!

Templates are parsed into an immutable AST and generated against an
evaluation context that supplies boolean conditions and string transforms.
"""

from __future__ import annotations

from .engine import load_template, render_config, render_file, render_text
from .errors import TemplarUserError
from .evaluation import EvaluationContext, EvaluationError, JinjaEvaluationContext
from .template import (
    FileTemplateLoader,
    IncludeCycleError,
    NestingLimitError,
    Template,
    TemplateGenerator,
    TemplateNotFoundError,
    TemplateParseError,
    UnimplementedFeatureError,
    generate,
    parse_template,
)

__all__ = [
    "parse_template",
    "generate",
    "render_text",
    "render_file",
    "render_config",
    "load_template",
    "Template",
    "TemplateGenerator",
    "FileTemplateLoader",
    "EvaluationContext",
    "JinjaEvaluationContext",
    "TemplarUserError",
    "TemplateParseError",
    "EvaluationError",
    "NestingLimitError",
    "UnimplementedFeatureError",
    "TemplateNotFoundError",
    "IncludeCycleError",
]
