class RefineError(Exception):
    """Base class for errors surfaced to consumers of source references."""


class InvalidReferenceError(RefineError):
    def __init__(self, token: str) -> None:
        super().__init__("Invalid source reference")
        self.token = token


class TemplateNotFoundError(RefineError):
    def __init__(self, template_id: str) -> None:
        super().__init__(f"File not found: {template_id}")
        self.template_id = template_id
