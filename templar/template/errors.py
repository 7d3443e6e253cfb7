from __future__ import annotations

from typing import Optional, Sequence

from ..errors import TemplarUserError


def _remainder_preview(remainder: str, limit: int = 40) -> str:
    preview = remainder[:limit]
    if len(remainder) > limit:
        preview += "..."
    return repr(preview)


class TemplateParseError(TemplarUserError):
    """Raised when template text does not follow the marker syntax."""
    def __init__(self, message: str, line: int, column: int, remainder: str = ""):
        self.message = message
        self.line = line
        self.column = column
        self.remainder = remainder
        text = f"{message} at {line}:{column}"
        if remainder:
            text += f" (remaining input: {_remainder_preview(remainder)})"
        super().__init__(text)


class NestingLimitError(TemplarUserError):
    """Raised when directives (or includes) nest deeper than the configured bound."""
    def __init__(self, limit: int, where: str):
        self.limit = limit
        self.where = where
        super().__init__(f"Nesting depth limit of {limit} exceeded while {where}")


class UnimplementedFeatureError(TemplarUserError):
    """Raised when generation reaches a directive it cannot evaluate."""
    def __init__(self, feature: str, detail: Optional[str] = None):
        self.feature = feature
        message = f"Directive '{feature}' is not supported"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class TemplateNotFoundError(TemplarUserError):
    """Raised when an included template cannot be located."""
    def __init__(self, path: str, base_dir: str, reason: str = "file not found"):
        self.path = path
        self.base_dir = base_dir
        super().__init__(f"Template '{path}' could not be loaded from {base_dir}: {reason}")


class IncludeCycleError(TemplarUserError):
    """Raised when a template includes itself directly or transitively."""
    def __init__(self, path: str, chain: Sequence[str]):
        self.path = path
        self.chain = list(chain)
        super().__init__(
            f"Include cycle detected: {' -> '.join([*self.chain, path])}"
        )


__all__ = [
    "TemplateParseError",
    "NestingLimitError",
    "UnimplementedFeatureError",
    "TemplateNotFoundError",
    "IncludeCycleError",
]
