"""Repository pattern implementation for players feature.

Provides collection-like interface for accessing player domain objects.
Isolates data access logic from business logic following Martin Fowler's Repository Pattern.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement

from .orm_models import PlayerORM

logger = structlog.get_logger(__name__)


class PlayerRepositoryInterface(ABC):
    """Interface for player repository.

    Defines contract for data access operations.
    Enables mocking and potential swap of implementations.
    """

    @abstractmethod
    async def get_by_id(self, player_id: int) -> Optional[PlayerORM]:
        """Get player by id.

        :param player_id: Store-assigned identifier
        :returns: PlayerORM if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, player: PlayerORM) -> PlayerORM:
        """Add new player to repository.

        :param player: Player domain object to add
        :returns: Created player with generated id populated
        """
        pass

    @abstractmethod
    async def save(self, player: PlayerORM) -> PlayerORM:
        """Save existing player changes.

        :param player: Player domain object with changes
        :returns: Updated player with refreshed state
        """
        pass

    @abstractmethod
    async def delete(self, player: PlayerORM) -> None:
        """Remove player from repository.

        :param player: Player to delete
        """
        pass

    @abstractmethod
    async def find_page(
        self,
        predicates: Sequence[ColumnElement[bool]],
        order_by: Any,
        page_number: int,
        page_size: int,
    ) -> list[PlayerORM]:
        """Get one page of players matching every predicate.

        :param predicates: Conjunction of filter predicates (may be empty)
        :param order_by: Single sort clause
        :param page_number: Zero-based page index
        :param page_size: Players per page
        :returns: Players on the requested page, in sort order
        """
        pass

    @abstractmethod
    async def count_matching(
        self, predicates: Sequence[ColumnElement[bool]]
    ) -> int:
        """Count players matching every predicate, ignoring pagination.

        :param predicates: Conjunction of filter predicates (may be empty)
        :returns: Number of matching players
        """
        pass


class SQLAlchemyPlayerRepository(PlayerRepositoryInterface):
    """SQLAlchemy implementation of player repository.

    Handles all database operations for players using SQLAlchemy async sessions.
    Translates repository interface to SQLAlchemy queries.
    """

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session.

        :param db: Async database session
        """
        self.db = db

    async def get_by_id(self, player_id: int) -> Optional[PlayerORM]:
        """Get player by id."""
        player = await self.db.get(PlayerORM, player_id)

        logger.debug("player_lookup", player_id=player_id, found=player is not None)

        return player

    async def create(self, player: PlayerORM) -> PlayerORM:
        """Create new player record."""
        self.db.add(player)
        await self.db.commit()
        await self.db.refresh(player)

        logger.info(
            "player_created",
            player_id=player.id,
            name=player.name,
            level=player.level,
        )

        return player

    async def save(self, player: PlayerORM) -> PlayerORM:
        """Save existing player changes."""
        await self.db.commit()
        await self.db.refresh(player)

        logger.debug("player_saved", player_id=player.id)

        return player

    async def delete(self, player: PlayerORM) -> None:
        """Hard delete player."""
        await self.db.delete(player)
        await self.db.commit()

        logger.info("player_deleted", player_id=player.id)

    async def find_page(
        self,
        predicates: Sequence[ColumnElement[bool]],
        order_by: Any,
        page_number: int,
        page_size: int,
    ) -> list[PlayerORM]:
        """Get one page of filtered, sorted players."""
        stmt = (
            select(PlayerORM)
            .where(*predicates)
            .order_by(order_by)
            .offset(page_number * page_size)
            .limit(page_size)
        )

        result = await self.db.execute(stmt)
        players = list(result.scalars().all())

        logger.debug(
            "player_page_retrieved",
            predicate_count=len(predicates),
            page_number=page_number,
            page_size=page_size,
            results_count=len(players),
        )

        return players

    async def count_matching(
        self, predicates: Sequence[ColumnElement[bool]]
    ) -> int:
        """Count players matching the filter predicates."""
        stmt = select(func.count()).select_from(PlayerORM).where(*predicates)

        result = await self.db.execute(stmt)
        total = result.scalar_one()

        logger.debug(
            "players_counted", predicate_count=len(predicates), total=total
        )

        return total
