"""Prefixed identifiers for persisted records (``app-1a2b3c4d5e6f``)."""
import re
import uuid

from services.errors import ValidationError

USER_PREFIX = "usr"
APPLICATION_PREFIX = "app"
DOCUMENT_PREFIX = "doc"

_ID_PATTERN = re.compile(r"^(?P<prefix>[a-z]+)-[0-9a-f]{12}$")


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def parse_id(raw: object, prefix: str, entity: str) -> str:
    """Return ``raw`` if it is a well-formed ``<prefix>-<hex>`` id, else raise ValidationError."""
    if not isinstance(raw, str):
        raise ValidationError(f"Invalid {entity} id: {raw!r}")
    match = _ID_PATTERN.match(raw.strip())
    if not match or match.group("prefix") != prefix:
        raise ValidationError(f"Invalid {entity} id: {raw!r}")
    return raw.strip()
