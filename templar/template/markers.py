from __future__ import annotations

# Single source of truth for the template marker syntax.
OPEN_MARK = "!!%"
CLOSE_MARK = "%!!"

# Header keywords recognized by the parser.
KW_IF = "if"
KW_IFELSE = "ifelse"
KW_ELSE = "else"
KW_INCLUDE = "include"
KW_TRANSFORM = "transform"

# Upper bound for directive nesting (parser) and directive + include nesting (generator).
DEFAULT_MAX_DEPTH = 100


__all__ = [
    "OPEN_MARK",
    "CLOSE_MARK",
    "KW_IF",
    "KW_IFELSE",
    "KW_ELSE",
    "KW_INCLUDE",
    "KW_TRANSFORM",
    "DEFAULT_MAX_DEPTH",
]
