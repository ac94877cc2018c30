"""SQLAlchemy 2.0 ORM models for players feature with Rich Domain Model pattern.

The player entity owns its progression invariant: experience, level and
experience-to-next-level are stored as private columns exposed through
read-only hybrid properties, and ``apply_experience`` is the only way to
change them.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime as SQLDateTime,
    Enum as SQLEnum,
    Index,
    Integer,
    String,
)
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column

from app.core.enums import Profession, Race
from app.core.models import Base

from .experience import progression


class PlayerORM(Base):
    """Player domain model (Rich Domain Model pattern).

    Combines data and behavior:
    - Database fields with type safety (SQLAlchemy 2.0 Mapped types)
    - Progression rule tying level to experience
    """

    __tablename__ = "players"
    __table_args__ = (
        Index("idx_players_level", "level"),
        Index("idx_players_experience", "experience"),
    )

    # ========================================================================
    # DATABASE FIELDS
    # ========================================================================

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-assigned identifier",
    )

    name: Mapped[str] = mapped_column(
        String(12),
        nullable=False,
        index=True,
        comment="Character name",
    )

    title: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        comment="Character title",
    )

    race: Mapped[Race] = mapped_column(
        SQLEnum(Race, name="race", native_enum=False, length=16),
        nullable=False,
        index=True,
    )

    profession: Mapped[Profession] = mapped_column(
        SQLEnum(Profession, name="profession", native_enum=False, length=16),
        nullable=False,
        index=True,
    )

    birthday: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        index=True,
        comment="Character birthday",
    )

    banned: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )

    # Progression columns, written only through apply_experience()
    _experience: Mapped[int] = mapped_column(
        "experience",
        Integer,
        nullable=False,
        default=0,
    )

    _level: Mapped[int] = mapped_column(
        "level",
        Integer,
        nullable=False,
        default=0,
    )

    _until_next_level: Mapped[int] = mapped_column(
        "until_next_level",
        Integer,
        nullable=False,
        default=100,
    )

    # ========================================================================
    # RICH DOMAIN MODEL - Progression
    # ========================================================================

    @hybrid_property
    def experience(self) -> int:
        """Raw experience points."""
        return self._experience

    @hybrid_property
    def level(self) -> int:
        """Level derived from experience."""
        return self._level

    @hybrid_property
    def until_next_level(self) -> int:
        """Experience missing before the next level."""
        return self._until_next_level

    def apply_experience(self, experience: int) -> None:
        """Set experience and recompute level and until-next-level together."""
        level, until_next_level = progression(experience)
        self._experience = experience
        self._level = level
        self._until_next_level = until_next_level

    def __repr__(self) -> str:
        """Return string representation of the player."""
        return f"<PlayerORM(id={self.id}, name='{self.name}', level={self._level})>"
