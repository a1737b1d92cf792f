"""Shared utilities for the backend."""
from utils.case import dict_keys_to_camel, iso
from utils.ids import new_id, parse_id

__all__ = [
    "dict_keys_to_camel",
    "iso",
    "new_id",
    "parse_id",
]
