"""Inject source-location markers into the opening tags of a template.

Two independent passes run over the evolving buffer: first the configured
plain tags, then component tags (``<x-alert>``, ``<x-card.header>``). Each
pass scans left to right and, for every tag that is not already annotated
and that the safety classifier accepts, appends one attribute whose value
encodes the template id and the tag's line in the file on disk. Anything
that cannot be classified as safe is left byte-for-byte untouched.
"""

import logging
import re
from collections.abc import Callable, Iterator

from refine.config import Settings
from refine.core.classifier import unsafe_reason
from refine.core.codec import encode
from refine.core.lines import resolve_line
from refine.core.scanner import TagMatch, TagScanner
from refine.models import AnnotatedTag

logger = logging.getLogger(__name__)


class Instrumenter:
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._dialect = self.settings.template_dialect
        self._scanner = TagScanner.build(
            self.settings.target_tags,
            self.settings.component_prefix,
            self._dialect,
        )
        self._plain_tags = frozenset(self.settings.target_tags)
        self._component_name = re.compile(rf"{re.escape(self.settings.component_prefix)}[\w.:-]+", re.IGNORECASE)
        # Plain tags first: when both passes select a tag, the first one annotates it.
        self._passes: list[Callable[[str], bool]] = [self._is_plain_tag]
        if self.settings.instrument_components:
            self._passes.append(self._is_component_tag)

    def _is_plain_tag(self, name: str) -> bool:
        return name.lower() in self._plain_tags

    def _is_component_tag(self, name: str) -> bool:
        return self._component_name.fullmatch(name) is not None

    @property
    def attribute_name(self) -> str:
        return self.settings.attribute_name

    def instrument(self, raw_source: str, template_id: str, original_contents: str | None = None) -> str:
        """Return *raw_source* with a marker attribute added to every safe opening tag."""
        if not template_id:
            raise ValueError("template_id must not be empty")

        buffer = raw_source
        annotated = skipped = 0
        for selects in self._passes:
            pieces: list[str] = []
            cursor = 0
            for tag in self._tags(selects, buffer, original_contents):
                if not tag.is_eligible:
                    skipped += 1
                    continue
                pieces.append(buffer[cursor : tag.start_offset])
                pieces.append(self._rewrite(tag, encode(template_id, tag.line)))
                cursor = tag.end_offset
                annotated += 1
            pieces.append(buffer[cursor:])
            buffer = "".join(pieces)

        logger.debug("Instrumented %s: %d tag(s) annotated, %d skipped", template_id, annotated, skipped)
        return buffer

    def scan(self, raw_source: str, original_contents: str | None = None) -> list[AnnotatedTag]:
        """Classify every candidate tag of both passes without rewriting anything."""
        tags: list[AnnotatedTag] = []
        seen: set[int] = set()
        for selects in self._passes:
            for tag in self._tags(selects, raw_source, original_contents):
                if tag.start_offset not in seen:
                    seen.add(tag.start_offset)
                    tags.append(tag)
        return sorted(tags, key=lambda t: t.start_offset)

    def _tags(
        self, selects: Callable[[str], bool], buffer: str, original_contents: str | None
    ) -> Iterator[AnnotatedTag]:
        for match in self._scanner.scan(buffer):
            if not selects(match.name):
                continue
            tag = self._classify(match, buffer, original_contents)
            if tag.reason is not None:
                logger.debug("Skipping <%s> on line %d: %s", tag.tag_name, tag.line, tag.reason)
            yield tag

    def _classify(self, match: TagMatch, buffer: str, original_contents: str | None) -> AnnotatedTag:
        text = match.text
        already_annotated = self.attribute_name in match.attributes
        if already_annotated:
            reason = "already annotated"
        else:
            reason = unsafe_reason(text, self._dialect)
            if reason is None and match.nested_gt:
                reason = "'>' inside an unquoted expression"
        return AnnotatedTag(
            tag_name=match.name,
            raw_match_text=text,
            start_offset=match.start,
            end_offset=match.end,
            attributes_region=match.attributes,
            is_self_closing=text.rstrip()[:-1].rstrip().endswith("/"),
            already_annotated=already_annotated,
            is_unsafe=not already_annotated and reason is not None,
            line=resolve_line(text, match.start, buffer, original_contents),
            reason=reason,
        )

    def _rewrite(self, tag: AnnotatedTag, token: str) -> str:
        marker = f'{self.attribute_name}="{token}"'
        text = tag.raw_match_text
        # Only horizontal whitespace is trimmed so the tag keeps its line count.
        if tag.is_self_closing:
            head = text[: text.rindex("/")].rstrip(" \t")
            return f"{head} {marker} />"
        head = text[:-1].rstrip(" \t")
        return f"{head} {marker}>"


def instrument(
    raw_source: str,
    template_id: str,
    original_contents: str | None = None,
    settings: Settings | None = None,
) -> str:
    return Instrumenter(settings).instrument(raw_source, template_id, original_contents)
