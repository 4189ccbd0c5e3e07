import base64
import binascii

from pydantic import ValidationError

from refine.models import SourceReference


def encode(template_id: str, line: int) -> str:
    """Encode a template id and line into an attribute-safe token.

    Raises ``ValueError`` for an empty id or a line below 1; those are
    caller bugs rather than data conditions.
    """
    reference = SourceReference(template_id=template_id, line=line)
    return encode_reference(reference)


def encode_reference(reference: SourceReference) -> str:
    payload = reference.model_dump_json().encode("utf-8")
    return base64.b64encode(payload).decode("ascii")


def decode(token: str) -> SourceReference | None:
    """Decode a marker token, returning None for anything malformed."""
    if not token or not isinstance(token, str):
        return None
    try:
        payload = base64.b64decode(token.strip(), validate=True)
        return SourceReference.model_validate_json(payload)
    except (binascii.Error, ValueError, ValidationError):
        return None
