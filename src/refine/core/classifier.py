import re
from functools import lru_cache

from refine.core.dialects import BLADE, Dialect

_QUOTED_SPAN = re.compile(r"\"[^\"]*\"|'[^']*'")
_DYNAMIC_ATTRIBUTE = re.compile(r"(?:^|\s):[\w.:-]+\s*=")


def strip_quoted(text: str) -> str:
    """Blank out the contents of every quoted span, keeping the quotes."""
    return _QUOTED_SPAN.sub(lambda m: m.group(0)[0] * 2, text)


@lru_cache(maxsize=None)
def _directive_pattern(dialect: Dialect) -> re.Pattern[str] | None:
    return dialect.directive_pattern()


def unsafe_reason(tag_text: str, dialect: Dialect = BLADE) -> str | None:
    """Return why annotating *tag_text* could corrupt the template, or None if it is safe."""
    for marker in dialect.raw_code_markers:
        if marker in tag_text:
            return f"raw code {marker!r}"

    structural = strip_quoted(tag_text)

    for marker in dialect.unquoted_markers:
        if marker in structural:
            return f"unquoted {marker!r}"

    if dialect.dynamic_attributes:
        match = _DYNAMIC_ATTRIBUTE.search(structural)
        if match:
            return f"dynamic attribute {match.group(0).strip()!r}"

    pattern = _directive_pattern(dialect)
    if pattern is not None:
        match = pattern.search(structural)
        if match:
            return f"directive {match.group(0)!r}"

    return None


def is_unsafe(tag_text: str, dialect: Dialect = BLADE) -> bool:
    return unsafe_reason(tag_text, dialect) is not None
