"""Free-text reason validation shared by reject, edit and nominate."""

from __future__ import annotations

from bandgov.domain.errors.validation import ValidationError

MIN_REASON_LENGTH: int = 10


def require_reason(value: str | None, field: str) -> str:
    """Return the trimmed reason.

    Raises:
        ValidationError: If missing or shorter than MIN_REASON_LENGTH
            once trimmed.
    """
    trimmed = (value or "").strip()
    if len(trimmed) < MIN_REASON_LENGTH:
        raise ValidationError(
            f"{field.replace('_', ' ').capitalize()} must be at least "
            f"{MIN_REASON_LENGTH} characters",
            field=field,
        )
    return trimmed
