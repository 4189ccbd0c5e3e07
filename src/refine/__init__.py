from refine.config import DEFAULT_TARGET_TAGS, Settings
from refine.core.classifier import is_unsafe, unsafe_reason
from refine.core.codec import decode, encode
from refine.core.dialects import BLADE, JINJA, Dialect, get_dialect
from refine.core.instrument import Instrumenter, instrument
from refine.core.lines import resolve_line
from refine.core.paths import to_absolute_path, to_template_id
from refine.core.reference import ResolvedReference, SourceExcerpt, excerpt, lookup
from refine.errors import InvalidReferenceError, RefineError, TemplateNotFoundError
from refine.models import AnnotatedTag, SourceReference

__all__ = [
    "BLADE",
    "DEFAULT_TARGET_TAGS",
    "JINJA",
    "AnnotatedTag",
    "Dialect",
    "Instrumenter",
    "InvalidReferenceError",
    "RefineError",
    "ResolvedReference",
    "Settings",
    "SourceExcerpt",
    "SourceReference",
    "TemplateNotFoundError",
    "decode",
    "encode",
    "excerpt",
    "get_dialect",
    "instrument",
    "is_unsafe",
    "lookup",
    "resolve_line",
    "to_absolute_path",
    "to_template_id",
    "unsafe_reason",
]
