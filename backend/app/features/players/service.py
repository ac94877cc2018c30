"""Player service for handling player data operations.

Thin orchestration layer:
- Field validation lives in the validation module
- Level progression lives in the domain model (PlayerORM.apply_experience)
- Query building lives in the predicates module
- All database access is delegated to PlayerRepository
"""

import structlog

from app.core.decorators import service_error_handler
from app.core.exceptions import PlayerNotFoundError

from .filters import FilterRequest
from .orm_models import PlayerORM
from .predicates import compose_order, compose_predicates
from .repository import PlayerRepositoryInterface
from .schemas import PlayerCreate, PlayerResponse, PlayerUpdate
from .transformers import (
    millis_to_datetime,
    player_create_to_orm,
    player_orm_to_response,
)
from .validation import (
    INT_COLUMN_MAX,
    validate_field,
    validate_id,
    validate_player_for_create,
)

logger = structlog.get_logger(__name__)


class PlayerService:
    """Service for handling player data operations.

    Responsibilities:
    - Validate inputs and raise client-input or not-found errors
    - Keep experience, level and until-next-level consistent on every write
    - Transform between domain models and API schemas

    Holds no per-request state: filters are passed through each call.
    """

    def __init__(self, repository: PlayerRepositoryInterface):
        """Initialize player service with its repository.

        :param repository: Player repository
        """
        self.repository = repository

    async def _get_existing(self, player_id: int, operation: str) -> PlayerORM:
        """Validate the id shape, then fetch the player or raise not-found."""
        validate_id(player_id, operation=operation)

        # Ids beyond the column range can never have been assigned
        if player_id > INT_COLUMN_MAX:
            raise PlayerNotFoundError(player_id, operation=operation)

        player = await self.repository.get_by_id(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id, operation=operation)
        return player

    @service_error_handler("PlayerService")
    async def create_player(self, candidate: PlayerCreate) -> PlayerResponse:
        """Create a player from a complete create payload.

        :param candidate: Create payload; every mandatory field must be present
        :returns: Stored player including its new id and derived level
        :raises ClientInputError: If a field is missing or invalid
        """
        validate_player_for_create(candidate)

        player = await self.repository.create(player_create_to_orm(candidate))

        return player_orm_to_response(player)

    @service_error_handler("PlayerService")
    async def get_player(self, player_id: int) -> PlayerResponse:
        """Get a single player.

        :raises ClientInputError: If the id is not positive
        :raises PlayerNotFoundError: If no player has this id
        """
        player = await self._get_existing(player_id, "get_player")
        return player_orm_to_response(player)

    @service_error_handler("PlayerService")
    async def update_player(
        self, player_id: int, changes: PlayerUpdate
    ) -> PlayerResponse:
        """Apply a partial update.

        Only supplied fields are validated and overwritten. A new experience
        value always goes through ``apply_experience`` so that level and
        until-next-level move with it.

        :raises ClientInputError: If the id or a supplied field is invalid
        :raises PlayerNotFoundError: If no player has this id
        """
        player = await self._get_existing(player_id, "update_player")

        if changes.is_empty():
            return player_orm_to_response(player)

        # Validate every supplied field before touching the entity
        supplied = changes.model_dump(exclude_none=True)
        for field, value in supplied.items():
            validate_field(field, value, operation="update_player")

        if changes.name is not None:
            player.name = changes.name.strip()
        if changes.title is not None:
            player.title = changes.title.strip()
        if changes.race is not None:
            player.race = changes.race
        if changes.profession is not None:
            player.profession = changes.profession
        if changes.birthday is not None:
            player.birthday = millis_to_datetime(changes.birthday)
        if changes.banned is not None:
            player.banned = changes.banned
        if changes.experience is not None:
            player.apply_experience(changes.experience)

        player = await self.repository.save(player)

        logger.info(
            "player_updated",
            player_id=player_id,
            fields=sorted(supplied),
        )

        return player_orm_to_response(player)

    @service_error_handler("PlayerService")
    async def delete_player(self, player_id: int) -> None:
        """Delete a player.

        Deleting an id that does not exist is an error, not a no-op.

        :raises ClientInputError: If the id is not positive
        :raises PlayerNotFoundError: If no player has this id
        """
        player = await self._get_existing(player_id, "delete_player")
        await self.repository.delete(player)

    @service_error_handler("PlayerService")
    async def list_players(self, filter_request: FilterRequest) -> list[PlayerResponse]:
        """Get one page of players matching a filter.

        :param filter_request: Normalized filter, sort key and paging
        :returns: Players on the requested page in ascending sort-key order
        """
        players = await self.repository.find_page(
            compose_predicates(filter_request),
            compose_order(filter_request.order),
            filter_request.page_number,
            filter_request.page_size,
        )
        return [player_orm_to_response(player) for player in players]

    @service_error_handler("PlayerService")
    async def count_players(self, filter_request: FilterRequest) -> int:
        """Count every player matching a filter; paging is ignored."""
        return await self.repository.count_matching(
            compose_predicates(filter_request)
        )
