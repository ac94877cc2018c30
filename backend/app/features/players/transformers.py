"""Transformers for converting between layers in players feature.

This module provides transformation functions for:
- ORM models → Pydantic schemas (API responses)
- Validated create payloads → ORM models

Following the Data Mapper pattern to keep layers decoupled.
"""

from datetime import datetime, timezone

from .orm_models import PlayerORM
from .schemas import PlayerCreate, PlayerResponse


def datetime_to_millis(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds.

    Naive values (SQLite drops the offset) are read as UTC, which is how
    birthdays are written.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def millis_to_datetime(millis: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


def player_orm_to_response(player: PlayerORM) -> PlayerResponse:
    """Transform PlayerORM domain model to PlayerResponse API schema.

    :param player: Player domain model from database
    :returns: Player response schema for API
    """
    return PlayerResponse(
        id=player.id,
        name=player.name,
        title=player.title,
        race=player.race,
        profession=player.profession,
        birthday=datetime_to_millis(player.birthday),
        banned=player.banned,
        experience=player.experience,
        level=player.level,
        until_next_level=player.until_next_level,
    )


def player_create_to_orm(candidate: PlayerCreate) -> PlayerORM:
    """Build a new PlayerORM from an already validated create payload.

    Level and until-next-level are derived from experience here; the caller
    never supplies them.

    :param candidate: Create payload that passed creation validation
    :returns: Transient player without an id
    """
    player = PlayerORM(
        name=candidate.name.strip(),
        title=candidate.title.strip(),
        race=candidate.race,
        profession=candidate.profession,
        birthday=millis_to_datetime(candidate.birthday),
        banned=bool(candidate.banned),
    )
    player.apply_experience(candidate.experience)
    return player
