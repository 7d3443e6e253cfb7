"""
AST nodes for Templar templates.

A template is an ordered sequence of blocks. A block is either a literal
text run or a directive node that owns its child blocks. Directive nodes
carry one of five directive kinds; the set of kinds is closed and the
generator dispatches on it exhaustively.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union


# ---- Directive kinds ----

@dataclass(frozen=True)
class NoOp:
    """
    Inert grouping directive.

    Produced for every header that does not start with a directive keyword.
    The header text is kept verbatim (already trimmed by the parser).
    """
    raw_header: str


@dataclass(frozen=True)
class If:
    """Includes the node's children only when the condition is true."""
    condition: str


@dataclass(frozen=True)
class IfElse:
    """
    Two-branch conditional.

    The owning node's children form the if branch, `else_blocks`
    is the else branch.
    """
    condition: str
    else_blocks: Tuple["Block", ...] = ()


@dataclass(frozen=True)
class Include:
    """Renders another template, sharing the current evaluation context."""
    path: str


@dataclass(frozen=True)
class Transform:
    """
    Binds the rendered body to `binding_name` and yields the result
    of `expression` evaluated as a string.
    """
    binding_name: str
    expression: str


DirectiveKind = Union[NoOp, If, IfElse, Include, Transform]


# ---- Blocks ----

@dataclass(frozen=True)
class TextBlock:
    """A literal text run, trimmed during parsing."""
    text: str


@dataclass(frozen=True)
class DirectiveBlock:
    """A directive node owning its child blocks."""
    kind: DirectiveKind
    children: Tuple["Block", ...] = ()


Block = Union[TextBlock, DirectiveBlock]


@dataclass(frozen=True)
class Template:
    """
    Parse result: an immutable ordered sequence of blocks.

    May be generated any number of times against independent contexts.
    """
    blocks: Tuple[Block, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)


def describe_kind(kind: DirectiveKind) -> str:
    """Short human-readable form of a directive kind (header-like)."""
    if isinstance(kind, NoOp):
        return f"noop {kind.raw_header!r}"
    if isinstance(kind, If):
        return f"if {kind.condition}"
    if isinstance(kind, IfElse):
        return f"ifelse {kind.condition}"
    if isinstance(kind, Include):
        return f"include {kind.path}"
    if isinstance(kind, Transform):
        return f"transform {kind.binding_name}: {kind.expression}"
    return type(kind).__name__


def count_blocks(blocks: Tuple[Block, ...]) -> int:
    """Counts all blocks in the tree, including nested ones."""
    total = 0
    pending: List[Block] = list(blocks)
    while pending:
        block = pending.pop()
        total += 1
        if isinstance(block, DirectiveBlock):
            pending.extend(block.children)
            if isinstance(block.kind, IfElse):
                pending.extend(block.kind.else_blocks)
    return total


def format_ast_tree(blocks: Tuple[Block, ...], indent: int = 0) -> str:
    """Formats the AST as an indented tree for debugging."""
    lines: List[str] = []
    # Entries are blocks or branch labels (plain strings), with their indent
    pending: List[Tuple[Union[Block, str], int]] = [(block, indent) for block in reversed(blocks)]

    while pending:
        item, level = pending.pop()
        prefix = "  " * level

        if isinstance(item, str):
            lines.append(f"{prefix}{item}")
        elif isinstance(item, TextBlock):
            # Only the beginning of long texts, for readability
            text_preview = repr(item.text[:50] + "..." if len(item.text) > 50 else item.text)
            lines.append(f"{prefix}Text({text_preview})")
        elif isinstance(item, DirectiveBlock):
            lines.append(f"{prefix}Directive({describe_kind(item.kind)})")
            nested: List[Tuple[Union[Block, str], int]] = []
            if isinstance(item.kind, IfElse):
                if item.children:
                    nested.append(("then:", level + 1))
                    nested.extend((child, level + 2) for child in item.children)
                if item.kind.else_blocks:
                    nested.append(("else:", level + 1))
                    nested.extend((child, level + 2) for child in item.kind.else_blocks)
            else:
                nested.extend((child, level + 1) for child in item.children)
            pending.extend(reversed(nested))
        else:
            lines.append(f"{prefix}{type(item).__name__}")

    return "\n".join(lines)


__all__ = [
    "NoOp",
    "If",
    "IfElse",
    "Include",
    "Transform",
    "DirectiveKind",
    "TextBlock",
    "DirectiveBlock",
    "Block",
    "Template",
    "describe_kind",
    "count_blocks",
    "format_ast_tree",
]
