"""
Lexical analyzer for Templar templates.

Splits the source text into text runs, directive openings (with their
header line) and directive closings. Nesting is not tracked here; the
parser checks the marker balance.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List

from .errors import TemplateParseError
from .markers import OPEN_MARK, CLOSE_MARK


class TokenType(enum.Enum):
    """Token types of the template language."""

    # Literal content between markers (untrimmed)
    TEXT = "TEXT"

    # OPEN_MARK + header line; value holds the trimmed header
    DIRECTIVE_OPEN = "DIRECTIVE_OPEN"

    # CLOSE_MARK
    DIRECTIVE_CLOSE = "DIRECTIVE_CLOSE"

    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Token with position info for precise error reporting.
    """
    type: TokenType
    value: str
    position: int       # Offset in the source text
    line: int           # Line number (1-based)
    column: int         # Column number (1-based)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class TemplateLexer:
    """
    Template tokenizer.

    An opening marker consumes the rest of its line as the directive header;
    the header must be terminated by a newline. Everything else up to the
    next marker is a text run.
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Tokenizes the whole source text.

        Returns:
            Token list terminated by an EOF token

        Raises:
            TemplateParseError: If a directive header has no terminating newline
        """
        tokens: List[Token] = []

        while self.position < self.length:
            tokens.append(self.next_token())

        tokens.append(Token(TokenType.EOF, "", self.position, self.line, self.column))
        return tokens

    def next_token(self) -> Token:
        """Extracts the next token from the input."""
        start_pos = self.position
        start_line = self.line
        start_column = self.column

        if self.text.startswith(OPEN_MARK, self.position):
            header_start = self.position + len(OPEN_MARK)
            newline = self.text.find("\n", header_start)
            if newline == -1:
                raise TemplateParseError(
                    "Directive header is missing its terminating newline",
                    start_line, start_column, self.text[start_pos:],
                )
            header = self.text[header_start:newline].strip()
            self._advance(newline + 1 - self.position)
            return Token(TokenType.DIRECTIVE_OPEN, header, start_pos, start_line, start_column)

        if self.text.startswith(CLOSE_MARK, self.position):
            self._advance(len(CLOSE_MARK))
            return Token(TokenType.DIRECTIVE_CLOSE, CLOSE_MARK, start_pos, start_line, start_column)

        text_end = self._find_next_marker()
        value = self.text[self.position:text_end]
        self._advance(len(value))
        return Token(TokenType.TEXT, value, start_pos, start_line, start_column)

    def _advance(self, count: int) -> None:
        """
        Moves the position forward by `count` characters,
        keeping line and column numbers up to date.
        """
        chunk = self.text[self.position:self.position + count]
        newlines = chunk.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(chunk) - chunk.rfind("\n")
        else:
            self.column += len(chunk)
        self.position += len(chunk)

    def _find_next_marker(self) -> int:
        """Position of the next opening or closing marker, or the end of text."""
        candidates = [
            pos for pos in (
                self.text.find(OPEN_MARK, self.position),
                self.text.find(CLOSE_MARK, self.position),
            )
            if pos != -1
        ]
        return min(candidates) if candidates else self.length


def tokenize_template(text: str) -> List[Token]:
    """
    Convenience function to tokenize a template.

    Raises:
        TemplateParseError: On a header without terminating newline
    """
    return TemplateLexer(text).tokenize()


__all__ = ["TokenType", "Token", "TemplateLexer", "tokenize_template"]
