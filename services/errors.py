"""Domain errors raised by services and translated to HTTP responses in main.py."""
from typing import Optional


class DomainError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Malformed identity reference or request payload."""

    status_code = 400


class NotFoundError(DomainError):
    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[str] = None):
        label = entity.capitalize()
        message = f"{label} not found" if entity_id is None else f"No {entity} with id of {entity_id}"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(DomainError):
    """Concurrent write lost an optimistic version check; the caller may retry."""

    status_code = 409
    retryable = True
