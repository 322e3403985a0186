"""Template library loading and template selection.

A library is an ordered tuple of raw template strings, one per file of the library directory.
Templates are opaque text; selection only looks for keywords in their lowercased content and the
first matching template wins.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from src.intent.schema import IntentType, UPDATE_TYPES

logger = logging.getLogger(__name__)

Library = tuple[str, ...]


class TemplateLibraryError(RuntimeError):
    """Raised when the template library directory cannot be read."""


def load_library(directory: str | Path) -> Library:
    """Read every regular, non-hidden file of `directory` (sorted by file name)."""

    root = Path(directory)
    if not root.is_dir():
        raise TemplateLibraryError(f"Template library directory does not exist: {root}")

    try:
        files = sorted(p for p in root.iterdir() if p.is_file() and not p.name.startswith("."))
        templates = tuple(p.read_text(encoding="utf-8") for p in files)
    except OSError as exc:
        raise TemplateLibraryError(f"Cannot read template library {root}: {exc}") from exc

    logger.info("loaded template library dir=%s templates=%d", root, len(templates))
    return templates


class TemplateLibrary:
    """Template provider backed by a directory.

    With `cache=True` the directory is read once and the resulting tuple is shared read-only;
    otherwise every call re-reads the directory.
    """

    def __init__(self, directory: str | Path, *, cache: bool = True) -> None:
        self.directory = Path(directory)
        self.cache = cache
        self._cached: Library | None = None

    def templates(self) -> Library:
        if not self.cache:
            return load_library(self.directory)
        if self._cached is None:
            self._cached = load_library(self.directory)
        return self._cached


def _template_matches(template: str, intent_type: IntentType) -> bool:
    content = template.lower()
    if intent_type in UPDATE_TYPES:
        return intent_type.value in content and ("set" in content or "update" in content)
    return intent_type.value in content


def match_template(library: Sequence[str], intent_type: IntentType) -> str | None:
    """Return the first template relevant to `intent_type`, or `None`."""

    for template in library:
        if _template_matches(template, intent_type):
            return template
    return None
