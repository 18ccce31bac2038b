"""
Field-level invariants shared by every entity mapper.

All checks run BEFORE any database access and raise ValidationError naming
the offending field, so callers can report it back unchanged.
"""
from typing import Any

from ..errors import ValidationError


def require_text(value: str | None, field: str, label: str) -> None:
    """Required text must be non-empty after trimming whitespace."""
    if value is None or not value.strip():
        raise ValidationError(field, f"{label} must not be empty")


def require_positive_id(value: int | None, field: str, label: str) -> None:
    """Foreign keys in association records must reference a real row id."""
    if value is None or value <= 0:
        raise ValidationError(field, f"{label} must be greater than zero")


def optional_positive_id(value: int | None, field: str, label: str) -> None:
    if value is not None and value <= 0:
        raise ValidationError(field, f"{label} must be greater than zero")


def require_present(dto: Any, entity_name: str) -> None:
    if dto is None:
        raise ValidationError(entity_name, f"{entity_name} payload is required")


def require_positive_number(value: int | None, field: str, label: str) -> None:
    if value is None or value <= 0:
        raise ValidationError(field, f"{label} must be greater than zero")
