"""
Template language core: marker syntax, AST, parser and generator.
"""

from __future__ import annotations

from .errors import (
    IncludeCycleError,
    NestingLimitError,
    TemplateNotFoundError,
    TemplateParseError,
    UnimplementedFeatureError,
)
from .generator import TemplateGenerator, generate
from .loader import FileTemplateLoader, MappingTemplateLoader, TemplateLoader
from .markers import CLOSE_MARK, DEFAULT_MAX_DEPTH, OPEN_MARK
from .nodes import (
    Block,
    DirectiveBlock,
    DirectiveKind,
    If,
    IfElse,
    Include,
    NoOp,
    Template,
    TextBlock,
    Transform,
    format_ast_tree,
)
from .parser import TemplateParser, parse_template

__all__ = [
    # Parsing and generation
    "parse_template",
    "generate",
    "TemplateParser",
    "TemplateGenerator",

    # AST
    "Template",
    "Block",
    "TextBlock",
    "DirectiveBlock",
    "DirectiveKind",
    "NoOp",
    "If",
    "IfElse",
    "Include",
    "Transform",
    "format_ast_tree",

    # Loaders
    "TemplateLoader",
    "FileTemplateLoader",
    "MappingTemplateLoader",

    # Markers
    "OPEN_MARK",
    "CLOSE_MARK",
    "DEFAULT_MAX_DEPTH",

    # Errors
    "TemplateParseError",
    "NestingLimitError",
    "UnimplementedFeatureError",
    "TemplateNotFoundError",
    "IncludeCycleError",
]
