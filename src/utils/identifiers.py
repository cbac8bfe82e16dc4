"""Store-assigned identifiers."""

import uuid

from core.exceptions import InvalidInputError


def new_id() -> str:
    return uuid.uuid4().hex


def validate_id(value: str, kind: str = "resource") -> str:
    """Return ``value`` normalized, or raise InvalidInputError for a bad id."""
    try:
        return uuid.UUID(value).hex
    except (ValueError, TypeError, AttributeError):
        raise InvalidInputError(f"Invalid {kind} id")
