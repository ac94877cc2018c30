"""Pydantic schemas for Player model.

All request fields are optional at the schema level: presence and value rules
are enforced by the players validation module, so a missing field yields a
client-input error rather than a decoding error.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import Profession, Race


class PlayerBase(BaseModel):
    """Base player schema with common fields."""

    name: Optional[str] = Field(None, description="Character name (1-12 chars)")
    title: Optional[str] = Field(None, description="Character title (1-30 chars)")
    race: Optional[Race] = Field(None, description="Character race")
    profession: Optional[Profession] = Field(None, description="Character profession")
    birthday: Optional[int] = Field(
        None, description="Birthday as milliseconds since the epoch"
    )
    banned: Optional[bool] = Field(None, description="Whether the player is banned")
    experience: Optional[int] = Field(
        None, description="Raw experience (0-10,000,000)"
    )


class PlayerCreate(PlayerBase):
    """Schema for creating a new player."""

    pass


class PlayerUpdate(PlayerBase):
    """Schema for partially updating an existing player.

    Fields left as ``None`` are not touched.
    """

    def is_empty(self) -> bool:
        """Return True when no field is supplied."""
        return all(value is None for value in self.model_dump().values())


class PlayerResponse(BaseModel):
    """Schema for player response data."""

    id: int = Field(..., description="Database ID")
    name: str
    title: str
    race: Race
    profession: Profession
    birthday: int = Field(..., description="Birthday as milliseconds since the epoch")
    banned: bool
    experience: int
    level: int
    until_next_level: int = Field(
        ...,
        alias="untilNextLevel",
        description="Experience missing before the next level",
    )

    model_config = ConfigDict(populate_by_name=True)
