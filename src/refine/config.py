import os
import re

from pydantic import BaseModel, ConfigDict, field_validator

from refine.core.dialects import Dialect, get_dialect

DEFAULT_TARGET_TAGS = (
    "div", "section", "article", "header", "footer", "main", "aside", "nav",
    "form", "table", "ul", "ol", "li", "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "button", "a", "span", "input", "textarea", "select", "label",
)

_ATTRIBUTE_NAME = re.compile(r"^[A-Za-z_:][-A-Za-z0-9_:.]*$")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    attribute_name: str = "data-source"
    target_tags: tuple[str, ...] = DEFAULT_TARGET_TAGS
    instrument_components: bool = True
    component_prefix: str = "x-"
    template_roots: tuple[str, ...] = ()
    template_extension: str = ".blade.php"
    dialect: str = "blade"

    @field_validator("attribute_name")
    @classmethod
    def _check_attribute_name(cls, value: str) -> str:
        if not _ATTRIBUTE_NAME.match(value):
            raise ValueError(f"Invalid attribute name: {value!r}")
        return value

    @field_validator("target_tags")
    @classmethod
    def _normalize_tags(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for tag in value:
            name = tag.strip().lower()
            if name:
                seen.setdefault(name, None)
        return tuple(seen)

    @field_validator("component_prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if not value:
            raise ValueError("component_prefix must not be empty")
        return value

    @field_validator("template_extension")
    @classmethod
    def _check_extension(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError(f"template_extension must start with '.': {value!r}")
        return value

    @field_validator("dialect")
    @classmethod
    def _check_dialect(cls, value: str) -> str:
        try:
            return get_dialect(value).name
        except KeyError as exc:
            raise ValueError(str(exc)) from None

    @property
    def template_dialect(self) -> Dialect:
        return get_dialect(self.dialect)

    @classmethod
    def from_env(cls, **overrides: object) -> "Settings":
        """Build settings from ``REFINE_*`` environment variables; keyword overrides win."""
        values: dict[str, object] = {}

        enabled = os.getenv("REFINE_ENABLED")
        if enabled is not None:
            values["enabled"] = _parse_bool("REFINE_ENABLED", enabled)

        attribute_name = os.getenv("REFINE_ATTRIBUTE_NAME")
        if attribute_name:
            values["attribute_name"] = attribute_name

        target_tags = os.getenv("REFINE_TARGET_TAGS")
        if target_tags:
            values["target_tags"] = tuple(t for t in target_tags.split(",") if t.strip())

        components = os.getenv("REFINE_INSTRUMENT_COMPONENTS")
        if components is not None:
            values["instrument_components"] = _parse_bool("REFINE_INSTRUMENT_COMPONENTS", components)

        prefix = os.getenv("REFINE_COMPONENT_PREFIX")
        if prefix:
            values["component_prefix"] = prefix

        roots = os.getenv("REFINE_TEMPLATE_ROOTS")
        if roots:
            values["template_roots"] = tuple(r for r in roots.split(os.pathsep) if r)

        extension = os.getenv("REFINE_TEMPLATE_EXTENSION")
        if extension:
            values["template_extension"] = extension

        dialect = os.getenv("REFINE_DIALECT")
        if dialect:
            values["dialect"] = dialect

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)


def _parse_bool(name: str, raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")
