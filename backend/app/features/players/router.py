"""Player API endpoints.

Client-input and not-found errors raised by the service are translated to
HTTP 400 and 404 by the exception handlers registered in ``app.main``.
"""

from typing import Annotated, Optional

import structlog
from fastapi import APIRouter, Depends, Query, Response

from app.core.enums import PlayerOrder, Profession, Race

from .dependencies import PlayerServiceDep
from .filters import FilterRequest, build_filter_request
from .schemas import PlayerCreate, PlayerResponse, PlayerUpdate

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/players", tags=["players"])


async def get_filter_request(
    name: Optional[str] = Query(None, description="Name substring"),
    title: Optional[str] = Query(None, description="Title substring"),
    race: Optional[Race] = Query(None),
    profession: Optional[Profession] = Query(None),
    after: Optional[int] = Query(None, description="Born at or after (epoch ms)"),
    before: Optional[int] = Query(None, description="Born at or before (epoch ms)"),
    banned: Optional[bool] = Query(None),
    min_experience: Optional[int] = Query(None, alias="minExperience"),
    max_experience: Optional[int] = Query(None, alias="maxExperience"),
    min_level: Optional[int] = Query(None, alias="minLevel"),
    max_level: Optional[int] = Query(None, alias="maxLevel"),
    order: Optional[PlayerOrder] = Query(None, description="Sort key"),
    page_number: Optional[int] = Query(None, alias="pageNumber"),
    page_size: Optional[int] = Query(None, alias="pageSize"),
) -> FilterRequest:
    """Decode list/count query parameters into a FilterRequest."""
    return build_filter_request(
        name=name,
        title=title,
        race=race,
        profession=profession,
        after=after,
        before=before,
        banned=banned,
        min_experience=min_experience,
        max_experience=max_experience,
        min_level=min_level,
        max_level=max_level,
        order=order,
        page_number=page_number,
        page_size=page_size,
    )


FilterRequestDep = Annotated[FilterRequest, Depends(get_filter_request)]


@router.get("", response_model=list[PlayerResponse])
async def list_players(
    player_service: PlayerServiceDep,
    filter_request: FilterRequestDep,
):
    """
    Get one page of players.

    Range parameters treat 0 as "no bound". A reversed experience or birthday
    range, or an equal level range, is ignored rather than rejected.

    Examples:
        GET /rest/players?name=ar&race=ELF&order=LEVEL&pageNumber=1&pageSize=10
        GET /rest/players?minExperience=1000&banned=false
    """
    return await player_service.list_players(filter_request)


@router.get("/count", response_model=int)
async def count_players(
    player_service: PlayerServiceDep,
    filter_request: FilterRequestDep,
):
    """Count players matching the same filters as the list endpoint (paging ignored)."""
    return await player_service.count_players(filter_request)


@router.post("", response_model=PlayerResponse)
async def create_player(player: PlayerCreate, player_service: PlayerServiceDep):
    """Create a player; name, title, race, profession, birthday and experience are required."""
    return await player_service.create_player(player)


@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(player_id: int, player_service: PlayerServiceDep):
    """Get player information by id."""
    return await player_service.get_player(player_id)


@router.post("/{player_id}", response_model=PlayerResponse)
async def update_player(
    player_id: int, changes: PlayerUpdate, player_service: PlayerServiceDep
):
    """Partially update a player; omitted or null fields are left unchanged."""
    return await player_service.update_player(player_id, changes)


@router.delete("/{player_id}")
async def delete_player(player_id: int, player_service: PlayerServiceDep):
    """Delete a player by id."""
    await player_service.delete_player(player_id)
    logger.debug("player_delete_request_completed", player_id=player_id)
    return Response(status_code=200)
