from __future__ import annotations

from typing import Optional

from ..errors import TemplarUserError


class EvaluationError(TemplarUserError):
    """
    Raised when the expression engine rejects an expression:
    syntax error, wrong result type or a runtime fault.
    """
    def __init__(self, message: str, expression: str = "", cause: Optional[Exception] = None):
        self.expression = expression
        self.cause = cause
        if expression:
            message = f"{message} (expression: {expression!r})"
        super().__init__(message)


__all__ = ["EvaluationError"]
