"""Turn a marker token taken from rendered HTML back into a file location.

This is the contract a source-editing API builds on: decode the token,
resolve its template id against the configured roots, and read the lines
around the referenced tag. Transport, backups and cache handling belong to
the caller.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from refine.core.codec import decode
from refine.core.paths import DEFAULT_EXTENSION, StrPath, to_absolute_path
from refine.errors import InvalidReferenceError, TemplateNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_LINES = 5


@dataclass(frozen=True)
class ResolvedReference:
    template_id: str
    line: int
    path: str


@dataclass(frozen=True)
class SourceExcerpt:
    path: str
    line: int
    start_line: int
    end_line: int
    lines: tuple[str, ...]
    total_lines: int

    @property
    def target_line(self) -> str:
        index = self.line - self.start_line
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return ""


def lookup(token: str, roots: Sequence[StrPath], extension: str = DEFAULT_EXTENSION) -> ResolvedReference:
    reference = decode(token)
    if reference is None:
        raise InvalidReferenceError(token)

    path = to_absolute_path(reference.template_id, roots, extension)
    if path is None:
        logger.debug("Template %s not found under %d root(s)", reference.template_id, len(roots))
        raise TemplateNotFoundError(reference.template_id)

    return ResolvedReference(template_id=reference.template_id, line=reference.line, path=path)


def excerpt(path: StrPath, line: int, context: int = DEFAULT_CONTEXT_LINES) -> SourceExcerpt:
    """Read the lines around *line* (1-based) from *path*, clamped to the file."""
    if line < 1:
        raise ValueError(f"line must be >= 1, got {line}")
    if context < 0:
        raise ValueError(f"context must be >= 0, got {context}")

    lines = Path(path).read_text(encoding="utf-8").split("\n")
    total = len(lines)
    start = max(0, line - context - 1)
    end = min(total, line + context)
    if start >= end:
        start = max(0, end - 1)

    return SourceExcerpt(
        path=str(path),
        line=line,
        start_line=start + 1,
        end_line=end,
        lines=tuple(lines[start:end]),
        total_lines=total,
    )
