"""Map template files to dot-delimited template ids and back.

Roots are searched in order. For path -> id the first root containing the
file wins; for id -> path the first root where the derived file exists wins.
"""

import os
from collections.abc import Sequence

DEFAULT_EXTENSION = ".blade.php"

StrPath = str | os.PathLike[str]


def _normalize_root(root: StrPath) -> str:
    text = os.fspath(root)
    stripped = text.rstrip("/\\")
    return stripped or text


def _strip_extension(name: str, extension: str) -> str:
    if extension and name.endswith(extension) and len(name) > len(extension):
        return name[: -len(extension)]
    return os.path.splitext(name)[0]


def _relative_to_root(path: str, root: str) -> str | None:
    if path == root:
        return None
    for separator in ("/", os.sep):
        prefix = root if root.endswith(separator) else root + separator
        if path.startswith(prefix):
            return path[len(prefix) :]
    return None


def to_template_id(absolute_path: StrPath, roots: Sequence[StrPath], extension: str = DEFAULT_EXTENSION) -> str:
    """Return the template id for *absolute_path*, or its bare file name when no root contains it."""
    path = os.fspath(absolute_path)
    for root in roots:
        relative = _relative_to_root(path, _normalize_root(root))
        if relative:
            relative = _strip_extension(relative, extension)
            return relative.replace(os.sep, ".").replace("/", ".")
    return _strip_extension(os.path.basename(path), extension)


def to_absolute_path(template_id: str, roots: Sequence[StrPath], extension: str = DEFAULT_EXTENSION) -> str | None:
    """Return the first existing file for *template_id* under *roots*, or None."""
    segments = template_id.split(".")
    if not template_id or any(s in ("", "..") or "/" in s or "\\" in s for s in segments):
        return None
    relative = os.path.join(*segments) + extension
    for root in roots:
        candidate = os.path.join(_normalize_root(root), relative)
        if os.path.isfile(candidate):
            return candidate
    return None
