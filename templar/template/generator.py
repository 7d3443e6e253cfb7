"""
Generation engine.

Walks the template AST depth-first and concatenates the output of every
block. Directive semantics are resolved through the evaluation context;
the set of directive kinds is closed and dispatched exhaustively.

Like the parser, the walk keeps its own stack of open frames instead of
recursing, so nesting is bounded only by `max_depth`.
"""

from __future__ import annotations

import functools
import logging
import posixpath
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .errors import IncludeCycleError, NestingLimitError, UnimplementedFeatureError
from .loader import TemplateLoader
from .markers import DEFAULT_MAX_DEPTH
from .nodes import (
    Block,
    DirectiveBlock,
    If,
    IfElse,
    Include,
    NoOp,
    Template,
    TextBlock,
    Transform,
)
from .parser import TemplateParser
from ..evaluation.context import EvaluationContext

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """A block sequence being generated, with the output collected so far."""
    blocks: Tuple[Block, ...]
    depth: int
    include_chain: Tuple[str, ...]
    # Applied to the joined output when the frame completes
    finish: Optional[Callable[[str], str]] = None
    index: int = 0
    parts: List[str] = field(default_factory=list)


class TemplateGenerator:
    """
    Renders templates against an evaluation context.

    The generator itself holds no per-render state, so one instance can
    serve many renders as long as each render gets its own context.
    """

    def __init__(self, loader: Optional[TemplateLoader] = None, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Args:
            loader: Resolves `include` paths; without it includes are unsupported
            max_depth: Bound on directive nesting plus include nesting
        """
        if max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self.loader = loader
        self.max_depth = max_depth
        self._parser = TemplateParser(max_depth=max_depth)

    def generate(self, template: Template, context: EvaluationContext) -> str:
        """
        Generates the output of a whole template.

        Raises:
            EvaluationError: If an expression fails
            UnimplementedFeatureError: If a directive cannot be evaluated
            NestingLimitError: If max_depth is exceeded
            TemplateParseError, TemplateNotFoundError, IncludeCycleError: From includes
        """
        stack: List[_Frame] = [_Frame(blocks=template.blocks, depth=0, include_chain=())]

        while True:
            frame = stack[-1]

            if frame.index < len(frame.blocks):
                block = frame.blocks[frame.index]
                frame.index += 1
                child = self._step(block, frame, context)
                if child is not None:
                    stack.append(child)
                continue

            stack.pop()
            output = "".join(frame.parts)
            if frame.finish is not None:
                output = frame.finish(output)
            if not stack:
                return output
            stack[-1].parts.append(output)

    def _step(self, block: Block, frame: _Frame, context: EvaluationContext) -> Optional[_Frame]:
        """
        Handles one block of `frame`.

        Text goes straight to the frame output. A directive either produces
        nothing or returns the frame for the blocks it expands to.
        """
        if isinstance(block, TextBlock):
            frame.parts.append(block.text)
            return None
        if isinstance(block, DirectiveBlock):
            if frame.depth >= self.max_depth:
                raise NestingLimitError(self.max_depth, "generating output")
            return self._expand_directive(block, context, frame.depth + 1, frame.include_chain)
        raise UnimplementedFeatureError(type(block).__name__, "unknown block type")

    def _expand_directive(
        self,
        block: DirectiveBlock,
        context: EvaluationContext,
        depth: int,
        include_chain: Tuple[str, ...],
    ) -> Optional[_Frame]:
        kind = block.kind

        if isinstance(kind, NoOp):
            return _Frame(block.children, depth, include_chain)

        if isinstance(kind, If):
            if context.evaluate_as_boolean(kind.condition):
                return _Frame(block.children, depth, include_chain)
            return None

        if isinstance(kind, IfElse):
            branch = block.children if context.evaluate_as_boolean(kind.condition) else kind.else_blocks
            return _Frame(branch, depth, include_chain)

        if isinstance(kind, Include):
            return self._expand_include(kind, depth, include_chain)

        if isinstance(kind, Transform):
            # Body first; the binding only exists while the expression runs
            return _Frame(
                block.children, depth, include_chain,
                finish=functools.partial(self._apply_transform, kind, context),
            )

        raise UnimplementedFeatureError(type(kind).__name__, "no generation rule for this directive kind")

    def _expand_include(self, kind: Include, depth: int, include_chain: Tuple[str, ...]) -> _Frame:
        if self.loader is None:
            raise UnimplementedFeatureError("include", f"no template loader configured for '{kind.path}'")
        key = posixpath.normpath(kind.path.replace("\\", "/"))
        if key in include_chain:
            raise IncludeCycleError(key, include_chain)

        logger.debug("Including template '%s' (depth %d)", kind.path, depth)
        text = self.loader.load(kind.path)
        included = self._parser.parse(text)
        return _Frame(included.blocks, depth, (*include_chain, key))

    @staticmethod
    def _apply_transform(kind: Transform, context: EvaluationContext, body: str) -> str:
        previous = context.get(kind.binding_name)
        context.set(kind.binding_name, body)
        try:
            result = context.evaluate_as_string(kind.expression)
        finally:
            # Unbind on every exit path so the binding never leaks into siblings
            if previous is None:
                context.unset(kind.binding_name)
            else:
                context.set(kind.binding_name, previous)

        logger.debug("Transform '%s': %d chars -> %d chars", kind.binding_name, len(body), len(result))
        return result


def generate(
    template: Template,
    context: EvaluationContext,
    loader: Optional[TemplateLoader] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Convenience function: generates `template` with a one-off generator."""
    return TemplateGenerator(loader=loader, max_depth=max_depth).generate(template, context)


__all__ = ["TemplateGenerator", "generate"]
