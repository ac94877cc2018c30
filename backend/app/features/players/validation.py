"""Field validation for player create and update payloads.

Each ``is_*_valid`` check looks at a single field and returns a bool. The
``validate_*`` helpers turn failed checks into ``ClientInputError``.
"""

from datetime import datetime
from typing import Any, Optional

import structlog

from app.core.exceptions import ClientInputError

from .schemas import PlayerBase

logger = structlog.get_logger(__name__)

NAME_MAX_LENGTH = 12
TITLE_MAX_LENGTH = 30
EXPERIENCE_MIN = 0
EXPERIENCE_MAX = 10_000_000
BIRTHDAY_MIN_YEAR = 2000
BIRTHDAY_MAX_YEAR = 3000

# Integer columns are 32-bit on Postgres
INT_COLUMN_MIN = -(2**31)
INT_COLUMN_MAX = 2**31 - 1

REQUIRED_CREATE_FIELDS = (
    "name",
    "title",
    "race",
    "profession",
    "birthday",
    "experience",
)


def is_name_valid(name: str) -> bool:
    """Check 0 < trimmed length <= 12."""
    return 0 < len(name.strip()) <= NAME_MAX_LENGTH


def is_title_valid(title: str) -> bool:
    """Check 0 < trimmed length <= 30."""
    return 0 < len(title.strip()) <= TITLE_MAX_LENGTH


def is_experience_valid(experience: int) -> bool:
    """Check 0 <= experience <= 10,000,000."""
    return EXPERIENCE_MIN <= experience <= EXPERIENCE_MAX


def is_birthday_valid(birthday_ms: int) -> bool:
    """Check the epoch value is non-negative and its local year is in [2000, 3000]."""
    if birthday_ms < 0:
        return False
    try:
        year = datetime.fromtimestamp(birthday_ms / 1000).year
    except (OverflowError, OSError, ValueError):
        return False
    return BIRTHDAY_MIN_YEAR <= year <= BIRTHDAY_MAX_YEAR


def missing_create_fields(candidate: PlayerBase) -> list[str]:
    """Return the mandatory creation fields that are absent."""
    return [
        field for field in REQUIRED_CREATE_FIELDS if getattr(candidate, field) is None
    ]


# Field name -> value check, for fields that have one
_FIELD_CHECKS = {
    "name": is_name_valid,
    "title": is_title_valid,
    "experience": is_experience_valid,
    "birthday": is_birthday_valid,
}


def validate_field(field: str, value: Any, operation: Optional[str] = None) -> None:
    """Validate a single supplied field value.

    Fields without a value rule (race, profession, banned) always pass.

    :raises ClientInputError: If the value is rejected
    """
    check = _FIELD_CHECKS.get(field)
    if check is not None and not check(value):
        logger.debug("Field rejected", field=field, operation=operation)
        raise ClientInputError(
            message=f"{field} is out of range",
            service="PlayerService",
            operation=operation,
            field=field,
            value=value,
        )


def validate_player_for_create(candidate: PlayerBase) -> None:
    """Validate the full creation contract: every mandatory field present and valid.

    :raises ClientInputError: On the first missing or invalid field
    """
    missing = missing_create_fields(candidate)
    if missing:
        raise ClientInputError(
            message=f"missing required fields: {', '.join(missing)}",
            service="PlayerService",
            operation="create_player",
            context={"missing_fields": missing},
        )

    for field in _FIELD_CHECKS:
        validate_field(field, getattr(candidate, field), operation="create_player")


def validate_id(player_id: int, operation: Optional[str] = None) -> None:
    """Reject ids that can never identify a stored player.

    Existence is checked separately by the service so that a missing record
    is reported as not-found rather than as bad input.

    :raises ClientInputError: If the id is not positive
    """
    if player_id <= 0:
        raise ClientInputError(
            message="id must be a positive integer",
            service="PlayerService",
            operation=operation,
            field="id",
            value=player_id,
        )
