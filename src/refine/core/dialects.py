"""Template-language vocabularies consumed by the tag scanner and safety classifier.

Only the quote-aware scan-then-classify strategy is shared between
languages. Which sequences count as host-language code, and which prefixed
words are structural directives, is specific to each templating ecosystem.
"""

import re
from dataclasses import dataclass, field

_BLADE_DIRECTIVES = (
    # conditionals and guards
    "if", "elseif", "else", "endif", "unless", "endunless",
    "isset", "endisset", "empty", "endempty",
    "auth", "endauth", "guest", "endguest",
    "can", "endcan", "cannot", "endcannot", "canany", "endcanany",
    "env", "endenv", "production", "endproduction",
    "hasSection", "sectionMissing", "session", "endsession", "context", "endcontext",
    "error", "enderror",
    # loops and switches
    "for", "endfor", "foreach", "endforeach", "forelse", "endforelse",
    "while", "endwhile", "continue", "break",
    "switch", "case", "default", "endswitch",
    # composition
    "include", "includeIf", "includeWhen", "includeUnless", "includeFirst", "each",
    "extends", "section", "endsection", "yield", "show", "stop", "overwrite", "append", "parent",
    "component", "endcomponent", "slot", "endslot", "props", "aware",
    "push", "endpush", "pushOnce", "endPushOnce", "pushIf", "endPushIf",
    "prepend", "endprepend", "prependOnce", "endPrependOnce", "stack",
    "once", "endonce", "fragment", "endfragment",
    # attribute and output helpers
    "class", "style", "checked", "selected", "disabled", "readonly", "required",
    "js", "json", "csrf", "method", "lang", "choice", "vite", "viteReactRefresh",
    "livewire", "livewireStyles", "livewireScripts", "entangle", "this",
    "inject", "use", "dd", "dump",
    # raw blocks
    "php", "endphp", "verbatim", "endverbatim",
)


@dataclass(frozen=True)
class Dialect:
    name: str
    raw_code_markers: tuple[str, ...] = ()
    unquoted_markers: tuple[str, ...] = ()
    opaque_blocks: tuple[tuple[str, str], ...] = ()
    # Regexes for code regions that are not a plain delimiter pair.
    opaque_patterns: tuple[str, ...] = ()
    # Opener/closer pairs of expressions that may contain a bare `>`.
    nested_regions: tuple[tuple[str, str], ...] = ()
    directive_prefix: str | None = None
    directive_keywords: frozenset[str] = field(default_factory=frozenset)
    dynamic_attributes: bool = False

    def _directive_source(self) -> str | None:
        if not self.directive_prefix or not self.directive_keywords:
            return None
        keywords = sorted(self.directive_keywords, key=lambda k: (-len(k), k))
        alternation = "|".join(re.escape(k) for k in keywords)
        return rf"(?<![\w@]){re.escape(self.directive_prefix)}(?:{alternation})(?![\w.:=-])"

    def directive_pattern(self) -> re.Pattern[str] | None:
        """Match a directive token: prefix + keyword, not continuing as an attribute name."""
        source = self._directive_source()
        return re.compile(source) if source else None

    def call_pattern(self) -> str | None:
        """Regex source for a directive followed by the `(` of its argument list."""
        source = self._directive_source()
        return rf"{source}[ \t]*\(" if source else None


BLADE = Dialect(
    name="blade",
    raw_code_markers=("<?php", "<?="),
    unquoted_markers=("{{", "{!!", "=>"),
    opaque_blocks=(("{{--", "--}}"), ("{{", "}}"), ("{!!", "!!}"), ("<?php", "?>"), ("<?=", "?>")),
    # `@php(...)` without a block body is an argument list, not an opener.
    opaque_patterns=(r"(?<![\w@])@php\b(?![ \t]*\()[\s\S]*?(?<![\w@])@endphp\b",),
    nested_regions=(("{{", "}}"), ("{!!", "!!}"), ("<?php", "?>"), ("<?=", "?>"), ("(", ")")),
    directive_prefix="@",
    directive_keywords=frozenset(_BLADE_DIRECTIVES),
    dynamic_attributes=True,
)

JINJA = Dialect(
    name="jinja",
    unquoted_markers=("{{", "{%", "{#"),
    opaque_blocks=(("{#", "#}"), ("{{", "}}"), ("{%", "%}")),
    nested_regions=(("{{", "}}"), ("{%", "%}"), ("{#", "#}"), ("(", ")")),
)

_DIALECTS: dict[str, Dialect] = {d.name: d for d in (BLADE, JINJA)}


def get_dialect(name: str) -> Dialect:
    try:
        return _DIALECTS[name.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown dialect '{name}'. Supported: {sorted(_DIALECTS)}") from None


def dialect_names() -> list[str]:
    return sorted(_DIALECTS)
