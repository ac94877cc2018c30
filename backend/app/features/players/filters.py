"""Filter requests for player listing and counting.

Numeric and time range bounds use 0 as the "unbounded" sentinel, so a literal
bound of 0 (experience 0, level 0, the epoch itself) cannot be expressed.
Values that are genuinely zero are still reachable through the opposite
bound or by omitting the filter.
"""

from dataclasses import dataclass
from typing import Optional

from app.core.enums import PlayerOrder, Profession, Race
from app.core.exceptions import ClientInputError

from .transformers import millis_to_datetime
from .validation import INT_COLUMN_MAX, INT_COLUMN_MIN

DEFAULT_PAGE_NUMBER = 0
DEFAULT_PAGE_SIZE = 3
DEFAULT_ORDER = PlayerOrder.ID


@dataclass(frozen=True)
class FilterRequest:
    """Canonical filter for a single list or count call."""

    name: Optional[str] = None
    title: Optional[str] = None
    race: Optional[Race] = None
    profession: Optional[Profession] = None
    banned: Optional[bool] = None
    after: int = 0
    before: int = 0
    min_experience: int = 0
    max_experience: int = 0
    min_level: int = 0
    max_level: int = 0
    order: PlayerOrder = DEFAULT_ORDER
    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE


def _or_zero(value: Optional[int]) -> int:
    return 0 if value is None else value


def _check_int_bound(field: str, value: int) -> None:
    if not INT_COLUMN_MIN <= value <= INT_COLUMN_MAX:
        raise ClientInputError(
            message=f"{field} is outside the storable integer range",
            operation="list_players",
            field=field,
            value=value,
        )


def _check_instant(field: str, value: int) -> None:
    if value == 0:
        return
    try:
        millis_to_datetime(value)
    except (OverflowError, OSError, ValueError) as e:
        raise ClientInputError(
            message=f"{field} is not a representable instant",
            operation="list_players",
            field=field,
            value=value,
        ) from e


def build_filter_request(
    name: Optional[str] = None,
    title: Optional[str] = None,
    race: Optional[Race] = None,
    profession: Optional[Profession] = None,
    after: Optional[int] = None,
    before: Optional[int] = None,
    banned: Optional[bool] = None,
    min_experience: Optional[int] = None,
    max_experience: Optional[int] = None,
    min_level: Optional[int] = None,
    max_level: Optional[int] = None,
    order: Optional[PlayerOrder] = None,
    page_number: Optional[int] = None,
    page_size: Optional[int] = None,
) -> FilterRequest:
    """Build a FilterRequest from loose, possibly-absent parameters.

    Absent range bounds become 0 (unbounded), absent order becomes ``ID`` and
    absent paging falls back to page 0 of size 3.

    :raises ClientInputError: If paging parameters or numeric bounds are out
        of range, or a birthday bound cannot be represented as a date
    """
    page_number = DEFAULT_PAGE_NUMBER if page_number is None else page_number
    page_size = DEFAULT_PAGE_SIZE if page_size is None else page_size

    if not 0 <= page_number <= INT_COLUMN_MAX:
        raise ClientInputError(
            message=f"page number must be between 0 and {INT_COLUMN_MAX}",
            operation="list_players",
            field="pageNumber",
            value=page_number,
        )
    if not 1 <= page_size <= INT_COLUMN_MAX:
        raise ClientInputError(
            message=f"page size must be between 1 and {INT_COLUMN_MAX}",
            operation="list_players",
            field="pageSize",
            value=page_size,
        )

    for field, value in (
        ("minExperience", min_experience),
        ("maxExperience", max_experience),
        ("minLevel", min_level),
        ("maxLevel", max_level),
    ):
        _check_int_bound(field, _or_zero(value))
    _check_instant("after", _or_zero(after))
    _check_instant("before", _or_zero(before))

    return FilterRequest(
        name=name,
        title=title,
        race=race,
        profession=profession,
        banned=banned,
        after=_or_zero(after),
        before=_or_zero(before),
        min_experience=_or_zero(min_experience),
        max_experience=_or_zero(max_experience),
        min_level=_or_zero(min_level),
        max_level=_or_zero(max_level),
        order=order or DEFAULT_ORDER,
        page_number=page_number,
        page_size=page_size,
    )
