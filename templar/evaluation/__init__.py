"""
Evaluation contexts: variable bindings plus an embedded expression engine.
"""

from __future__ import annotations

from .context import EvaluationContext
from .errors import EvaluationError
from .jinja_context import JinjaEvaluationContext, create_sandbox

__all__ = [
    "EvaluationContext",
    "EvaluationError",
    "JinjaEvaluationContext",
    "create_sandbox",
]
