from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class SourceReference(BaseModel):
    """Payload of a marker attribute: where a rendered element came from."""

    model_config = ConfigDict(frozen=True, strict=True)

    template_id: str = Field(min_length=1)
    line: int = Field(ge=1)


@dataclass(frozen=True)
class AnnotatedTag:
    """An opening tag found in the working buffer during one pass."""

    tag_name: str
    raw_match_text: str
    start_offset: int
    end_offset: int
    attributes_region: str
    is_self_closing: bool
    already_annotated: bool
    is_unsafe: bool
    line: int
    reason: str | None = None

    @property
    def is_eligible(self) -> bool:
        return not (self.already_annotated or self.is_unsafe)
