"""
Key-case conversion for stored JSON payloads.
Records keep snake_case internally; API responses use camelCase.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic.alias_generators import to_camel


def dict_keys_to_camel(obj: Any) -> Any:
    """Recursively convert dict keys from snake_case to camelCase."""
    if isinstance(obj, dict):
        return {to_camel(k): dict_keys_to_camel(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [dict_keys_to_camel(x) for x in obj]
    return obj


def iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
