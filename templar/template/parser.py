"""
Template parser.

Turns the token stream into a Template. Nested directive bodies are
resolved with an explicit stack of open frames rather than recursion, so
nesting depth is bounded only by `max_depth`, never by the interpreter's
call stack.

Header dispatch (first word of the header):

    if <condition>               -> If
    ifelse <condition>           -> IfElse (body split by an `else` directive)
    else                         -> branch separator, only directly inside ifelse
    include <path>               -> Include (no body)
    transform <name>: <expr>     -> Transform
    anything else                -> NoOp carrying the header verbatim
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .errors import NestingLimitError, TemplateParseError
from .lexer import Token, TokenType, TemplateLexer
from .markers import (
    DEFAULT_MAX_DEPTH,
    KW_ELSE,
    KW_IF,
    KW_IFELSE,
    KW_INCLUDE,
    KW_TRANSFORM,
)
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
    count_blocks,
)

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"^(\S+)(?:\s+(.*))?$", re.DOTALL)
_TRANSFORM_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\s*:\s*(\S.*)$", re.DOTALL)


@dataclass(frozen=True)
class _ElseSeparator:
    """Marks the `else` split point inside an ifelse body; never leaves the parser."""
    token: Token


_Item = Union[Block, _ElseSeparator]


@dataclass
class _Frame:
    """An open directive waiting for its closing marker."""
    token: Token
    children: List[_Item] = field(default_factory=list)


class TemplateParser:
    """
    Parser for Templar templates.

    Failure is all-or-nothing: any structural problem raises
    TemplateParseError and no partial tree is returned.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        if max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self.max_depth = max_depth

    def parse(self, text: str) -> Template:
        """
        Parses template text into a Template.

        Raises:
            TemplateParseError: On malformed marker structure or headers
            NestingLimitError: If directives nest deeper than max_depth
        """
        tokens = TemplateLexer(text).tokenize()

        root: List[_Item] = []
        stack: List[_Frame] = []

        for token in tokens:
            current = stack[-1].children if stack else root

            if token.type == TokenType.TEXT:
                stripped = token.value.strip()
                if stripped:
                    current.append(TextBlock(text=stripped))

            elif token.type == TokenType.DIRECTIVE_OPEN:
                if len(stack) >= self.max_depth:
                    raise NestingLimitError(self.max_depth, f"parsing line {token.line}")
                if not token.value:
                    raise self._error("Empty directive header", token, text)
                stack.append(_Frame(token=token))

            elif token.type == TokenType.DIRECTIVE_CLOSE:
                if not stack:
                    raise self._error("Unmatched closing marker", token, text)
                frame = stack.pop()
                parent = stack[-1].children if stack else root
                parent.append(self._build_directive(frame, text, inside_ifelse=self._is_ifelse(stack)))

            elif token.type == TokenType.EOF:
                if stack:
                    frame = stack[-1]
                    raise self._error(
                        f"Unclosed directive '{frame.token.value}'", frame.token, text
                    )

        blocks = self._plain_blocks(root, text)
        template = Template(blocks=blocks)
        logger.debug("Parsed template: %d top-level blocks, %d total", len(blocks), count_blocks(blocks))
        return template

    # ---- Header dispatch ----

    def _build_directive(self, frame: _Frame, text: str, inside_ifelse: bool) -> _Item:
        token = frame.token
        keyword, argument = self._split_header(token.value)

        if keyword == KW_ELSE:
            if not inside_ifelse:
                raise self._error("'else' is only allowed directly inside an 'ifelse' directive", token, text)
            if argument:
                raise self._error("'else' takes no arguments", token, text)
            if frame.children:
                raise self._error("'else' directive must have an empty body", token, text)
            return _ElseSeparator(token=token)

        if keyword == KW_IFELSE:
            condition = self._require_argument(keyword, argument, token, text)
            if_items, else_items = self._split_branches(frame, text)
            return DirectiveBlock(
                kind=IfElse(condition=condition, else_blocks=self._plain_blocks(else_items, text)),
                children=self._plain_blocks(if_items, text),
            )

        kind = self._dispatch_kind(keyword, argument, token, text)
        if isinstance(kind, Include) and frame.children:
            raise self._error("'include' directive must have an empty body", token, text)
        return DirectiveBlock(kind=kind, children=self._plain_blocks(frame.children, text))

    def _dispatch_kind(self, keyword: str, argument: str, token: Token, text: str) -> DirectiveKind:
        if keyword == KW_IF:
            return If(condition=self._require_argument(keyword, argument, token, text))

        if keyword == KW_INCLUDE:
            return Include(path=self._require_argument(keyword, argument, token, text))

        if keyword == KW_TRANSFORM:
            spec = self._require_argument(keyword, argument, token, text)
            match = _TRANSFORM_RE.match(spec)
            if not match:
                raise self._error(
                    "Invalid transform header, expected 'transform <name>: <expression>'", token, text
                )
            return Transform(binding_name=match.group(1), expression=match.group(2).strip())

        return NoOp(raw_header=token.value)

    @staticmethod
    def _split_header(header: str) -> Tuple[str, str]:
        match = _HEADER_RE.match(header)
        if not match:
            return header, ""
        return match.group(1), (match.group(2) or "").strip()

    def _require_argument(self, keyword: str, argument: str, token: Token, text: str) -> str:
        if not argument:
            raise self._error(f"'{keyword}' directive requires an argument", token, text)
        return argument

    def _split_branches(self, frame: _Frame, text: str) -> Tuple[List[_Item], List[_Item]]:
        separators = [
            i for i, item in enumerate(frame.children) if isinstance(item, _ElseSeparator)
        ]
        if not separators:
            raise self._error("'ifelse' directive requires an 'else' separator", frame.token, text)
        if len(separators) > 1:
            extra = frame.children[separators[1]]
            assert isinstance(extra, _ElseSeparator)
            raise self._error("Multiple 'else' separators in one 'ifelse'", extra.token, text)
        split = separators[0]
        return frame.children[:split], frame.children[split + 1:]

    # ---- Helpers ----

    @staticmethod
    def _is_ifelse(stack: List[_Frame]) -> bool:
        if not stack:
            return False
        return TemplateParser._split_header(stack[-1].token.value)[0] == KW_IFELSE

    def _plain_blocks(self, items: List[_Item], text: str) -> Tuple[Block, ...]:
        for item in items:
            if isinstance(item, _ElseSeparator):
                # Only reachable when an else separator escaped its ifelse
                raise self._error("Unexpected 'else' separator", item.token, text)
        return tuple(items)  # type: ignore[arg-type]

    @staticmethod
    def _error(message: str, token: Token, text: str) -> TemplateParseError:
        return TemplateParseError(message, token.line, token.column, text[token.position:])


def parse_template(text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Template:
    """
    Convenience function to parse template text.

    Raises:
        TemplateParseError: On malformed template text
        NestingLimitError: If directives nest deeper than max_depth
    """
    return TemplateParser(max_depth=max_depth).parse(text)


__all__ = ["TemplateParser", "parse_template"]
