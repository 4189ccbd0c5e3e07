import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from refine.core.dialects import Dialect

# Attribute region of a raw-text element's opening tag: quoted spans are
# opaque and a bare `<` means it is not a tag.
_ATTRIBUTES = r"""(?:"[^"]*"|'[^']*'|[^'"<>])*"""

# Raw-text elements whose bodies are never markup.
_RAW_TEXT_ELEMENTS = ("script", "style")

_QUOTES = "\"'"


def _quote_end(buffer: str, pos: int, escapes: bool) -> int | None:
    """Index just past the quoted span opening at *pos*, or None if it is never closed."""
    quote = buffer[pos]
    index = pos + 1
    while True:
        close = buffer.find(quote, index)
        if close == -1:
            return None
        start = close
        while escapes and start > pos + 1 and buffer[start - 1] == "\\":
            start -= 1
        if (close - start) % 2 == 0:
            return close + 1
        index = close + 1


@dataclass(frozen=True)
class TagMatch:
    name: str
    text: str
    attributes: str
    start: int
    end: int
    # A `>` sat inside an unquoted expression such as `{{ $n > 1 }}`.
    nested_gt: bool = False


class TagScanner:
    """Find opening tags whose name matches *name_pattern*.

    The scanner owns its cursor. Text inside a raw-text element, inside one
    of the dialect's opaque blocks, or inside the argument list of a
    directive such as ``@include(...)`` is consumed without yielding
    anything. The attribute region of a tag is walked with quoted spans and
    the dialect's nested regions (``{{ }}``, ``( )`` ...) treated as opaque,
    so a `>` inside them never closes the tag and scanning resumes after
    the real end of the tag.
    """

    def __init__(self, name_pattern: str, dialect: Dialect | None = None) -> None:
        raw_text = "|".join(_RAW_TEXT_ELEMENTS)
        opaque = [rf"<(?P<raw>{raw_text})\b{_ATTRIBUTES}>[\s\S]*?</(?P=raw)\s*>"]
        alternatives = []
        self._nested: dict[str, str] = {}
        if dialect is not None:
            opaque.extend(rf"{re.escape(start)}[\s\S]*?{re.escape(end)}" for start, end in dialect.opaque_blocks)
            opaque.extend(dialect.opaque_patterns)
            self._nested = dict(dialect.nested_regions)
            call = dialect.call_pattern()
            if call:
                alternatives.append(rf"(?P<call>{call})")
        alternatives.insert(0, rf"(?P<opaque>{'|'.join(opaque)})")
        alternatives.append(rf"<(?P<name>{name_pattern})(?=[\s/>])")
        self._regex = re.compile("|".join(alternatives), re.IGNORECASE)
        self._openers = sorted(self._nested, key=len, reverse=True)

    @classmethod
    def build(
        cls,
        tag_names: Iterable[str],
        component_prefix: str | None = None,
        dialect: Dialect | None = None,
    ) -> "TagScanner":
        alternatives = [rf"{re.escape(component_prefix)}[\w.:-]+"] if component_prefix else []
        alternatives.extend(re.escape(n) for n in tag_names if n)
        if not alternatives:
            raise ValueError("At least one tag name or a component prefix is required")
        return cls("|".join(alternatives), dialect)

    @property
    def pattern(self) -> str:
        return self._regex.pattern

    def scan(self, buffer: str) -> Iterator[TagMatch]:
        """Yield tags left to right; each search resumes after the region just consumed."""
        pos = 0
        while pos <= len(buffer):
            match = self._regex.search(buffer, pos)
            if match is None:
                return
            pos = match.end()
            if match.lastgroup == "call":
                # An unbalanced argument list leaves the rest of the text scannable.
                pos = self._close(buffer, match.end(), [")"]) or match.end()
            elif match.lastgroup == "name":
                tag = self._tag(buffer, match)
                if tag is not None:
                    pos = tag.end
                    yield tag

    def _opener_at(self, buffer: str, pos: int) -> str | None:
        for opener in self._openers:
            if buffer.startswith(opener, pos):
                return opener
        return None

    def _advance(self, buffer: str, pos: int, stack: list[str]) -> int | None:
        """Step over the token at *pos*, pushing or popping nested regions on *stack*."""
        if buffer[pos] in _QUOTES:
            # Backslash escapes exist in code regions only, never in HTML attribute values.
            return _quote_end(buffer, pos, escapes=bool(stack))
        if stack and buffer.startswith(stack[-1], pos):
            return pos + len(stack.pop())
        opener = self._opener_at(buffer, pos)
        if opener is not None:
            stack.append(self._nested[opener])
            return pos + len(opener)
        return pos + 1

    def _close(self, buffer: str, pos: int, stack: list[str]) -> int | None:
        """Index just past the region whose closers are on *stack*, or None if it never closes."""
        while stack:
            if pos >= len(buffer):
                return None
            pos = self._advance(buffer, pos, stack)
            if pos is None:
                return None
        return pos

    def _tag(self, buffer: str, match: re.Match[str]) -> TagMatch | None:
        stack: list[str] = []
        nested_gt = False
        pos = match.end()
        while pos < len(buffer):
            char = buffer[pos]
            if not stack:
                if char == ">":
                    return TagMatch(
                        name=match.group("name"),
                        text=buffer[match.start() : pos + 1],
                        attributes=buffer[match.end() : pos],
                        start=match.start(),
                        end=pos + 1,
                        nested_gt=nested_gt,
                    )
                if char == "<" and self._opener_at(buffer, pos) is None:
                    return None
            elif char == ">":
                nested_gt = True
            pos = self._advance(buffer, pos, stack)
            if pos is None:
                return None
        return None
