"""
Protocol for evaluation contexts.

The generator depends on the expression engine only through this
interface, so the engine can be replaced without touching the parser
or the AST.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class EvaluationContext(Protocol):
    """
    Mutable variable-binding scope plus an embedded expression evaluator.

    A context belongs to a single render; it must never be shared between
    concurrent renders.
    """

    def evaluate_as_boolean(self, expression: str) -> bool:
        """
        Evaluates an expression that must yield a boolean.

        Raises:
            EvaluationError: On syntax errors, runtime faults or a non-boolean result
        """
        ...

    def evaluate_as_string(self, expression: str) -> str:
        """
        Evaluates an expression that must yield a string.

        Raises:
            EvaluationError: On syntax errors, runtime faults or a non-string result
        """
        ...

    def get(self, name: str) -> Optional[str]:
        """Current value bound to `name`, or None when unbound."""
        ...

    def set(self, name: str, value: str) -> None:
        """Binds `name` to `value`, replacing any previous binding."""
        ...

    def unset(self, name: str) -> None:
        """Removes the binding of `name`; unbound names are ignored."""
        ...


__all__ = ["EvaluationContext"]
