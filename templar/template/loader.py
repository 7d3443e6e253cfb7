"""
Template loaders used to resolve `include` directives.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Protocol, runtime_checkable

from .errors import TemplateNotFoundError

logger = logging.getLogger(__name__)


@runtime_checkable
class TemplateLoader(Protocol):
    """Resolves an include path to template text."""

    def load(self, path: str) -> str:
        """
        Returns the text of the template at `path`.

        Raises:
            TemplateNotFoundError: If the template cannot be loaded
        """
        ...


class FileTemplateLoader:
    """
    Loads templates from the filesystem.

    Paths are resolved relative to `base_dir` and must stay inside it.
    """

    def __init__(self, base_dir: Path, encoding: str = "utf-8"):
        self.base_dir = Path(base_dir).resolve()
        self.encoding = encoding

    def resolve(self, path: str) -> Path:
        """Absolute location of `path`, confined to base_dir."""
        candidate = (self.base_dir / path).resolve()
        try:
            candidate.relative_to(self.base_dir)
        except ValueError:
            raise TemplateNotFoundError(path, str(self.base_dir), "path escapes the template root")
        return candidate

    def load(self, path: str) -> str:
        target = self.resolve(path)
        if not target.is_file():
            raise TemplateNotFoundError(path, str(self.base_dir))
        try:
            text = target.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateNotFoundError(path, str(self.base_dir), str(e)) from e
        logger.debug("Loaded template %s (%d chars)", target, len(text))
        return text


class MappingTemplateLoader:
    """In-memory loader: include paths are keys of a mapping."""

    def __init__(self, templates: Mapping[str, str]):
        self.templates: Dict[str, str] = dict(templates)

    def load(self, path: str) -> str:
        try:
            return self.templates[path]
        except KeyError:
            raise TemplateNotFoundError(path, "<memory>")


__all__ = ["TemplateLoader", "FileTemplateLoader", "MappingTemplateLoader"]
