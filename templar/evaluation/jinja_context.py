"""
Evaluation context backed by the Jinja2 sandbox.

Conditions and transforms are Jinja2 expressions, e.g.

    audience == "internal" and not draft
    body | upper
    body | replace("\\n", " ") | trim

Every Jinja2 failure is translated into EvaluationError so that no
engine-specific exception reaches the generator.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from jinja2 import StrictUndefined, TemplateSyntaxError, Undefined, UndefinedError
from jinja2.exceptions import SecurityError
from jinja2.sandbox import SandboxedEnvironment

from .errors import EvaluationError

logger = logging.getLogger(__name__)


def create_sandbox() -> SandboxedEnvironment:
    """
    Creates the sandboxed environment used for expressions.

    Undefined variables raise instead of rendering as empty strings,
    and no globals are exposed to expressions.
    """
    env = SandboxedEnvironment(undefined=StrictUndefined)
    env.globals = {}
    return env


class JinjaEvaluationContext:
    """
    Variable scope plus Jinja2 expression evaluator.

    Compiled expressions are cached per context; variable values are
    always strings.
    """

    def __init__(
        self,
        variables: Optional[Mapping[str, str]] = None,
        environment: Optional[SandboxedEnvironment] = None,
    ):
        self._env = environment if environment is not None else create_sandbox()
        self._variables: Dict[str, str] = {}
        self._compiled: Dict[str, Callable[..., Any]] = {}
        for name, value in (variables or {}).items():
            self.set(name, value)

    @property
    def variables(self) -> Dict[str, str]:
        """Snapshot of the current bindings."""
        return dict(self._variables)

    # ---- Bindings ----

    def get(self, name: str) -> Optional[str]:
        return self._variables.get(name)

    def set(self, name: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Variable '{name}' must be a string, got {type(value).__name__}")
        self._variables[name] = value

    def unset(self, name: str) -> None:
        self._variables.pop(name, None)

    # ---- Evaluation ----

    def evaluate_as_boolean(self, expression: str) -> bool:
        value = self._evaluate(expression)
        if not isinstance(value, bool):
            raise EvaluationError(
                f"Condition must evaluate to a boolean, got {type(value).__name__}",
                expression,
            )
        return value

    def evaluate_as_string(self, expression: str) -> str:
        value = self._evaluate(expression)
        if not isinstance(value, str):
            raise EvaluationError(
                f"Expression must evaluate to a string, got {type(value).__name__}",
                expression,
            )
        return value

    def _compile(self, expression: str) -> Callable[..., Any]:
        compiled = self._compiled.get(expression)
        if compiled is not None:
            return compiled
        try:
            compiled = self._env.compile_expression(expression, undefined_to_none=False)
        except TemplateSyntaxError as e:
            raise EvaluationError(f"Syntax error: {e.message}", expression, e) from e
        self._compiled[expression] = compiled
        return compiled

    def _evaluate(self, expression: str) -> Any:
        compiled = self._compile(expression)
        try:
            value = compiled(**self._variables)
        except UndefinedError as e:
            raise EvaluationError(f"Undefined variable: {e.message}", expression, e) from e
        except SecurityError as e:
            raise EvaluationError(f"Operation rejected by sandbox: {e}", expression, e) from e
        except Exception as e:
            raise EvaluationError(f"Evaluation failed: {e}", expression, e) from e

        if isinstance(value, Undefined):
            raise EvaluationError("Expression refers to an undefined variable", expression)

        logger.debug("Evaluated %r -> %r", expression, value)
        return value


__all__ = ["JinjaEvaluationContext", "create_sandbox"]
