"""Translate a FilterRequest into SQLAlchemy predicates and a sort clause.

The filter is always passed in explicitly; nothing here keeps state between
calls, so concurrent requests never see each other's filters.

Range families differ on purpose and must stay that way:

- experience: ``min < max`` alone selects the between case, so ``min=0``
  with a positive ``max`` becomes ``between(0, max)``.
- birthday and level: the between case additionally needs both bounds
  non-zero, and level equality (``min == max``) drops the filter.
- In every family a reversed pair with both bounds set (``min > max``)
  matches none of the branches and silently drops the filter.
"""

from typing import Any

from sqlalchemy.sql.expression import ColumnElement, UnaryExpression

from app.core.enums import PlayerOrder

from .filters import FilterRequest
from .orm_models import PlayerORM
from .transformers import millis_to_datetime

_ORDER_COLUMNS = {
    PlayerOrder.ID: PlayerORM.id,
    PlayerOrder.NAME: PlayerORM.name,
    PlayerOrder.EXPERIENCE: PlayerORM.experience,
    PlayerOrder.BIRTHDAY: PlayerORM.birthday,
    PlayerOrder.LEVEL: PlayerORM.level,
}


def _experience_predicate(request: FilterRequest) -> ColumnElement[bool] | None:
    low, high = request.min_experience, request.max_experience
    if low < high:
        return PlayerORM.experience.between(low, high)
    if low != 0 and high == 0:
        return PlayerORM.experience >= low
    if low == 0 and high != 0:
        return PlayerORM.experience <= high
    return None


def _birthday_predicate(request: FilterRequest) -> ColumnElement[bool] | None:
    after, before = request.after, request.before
    if after != 0 and before != 0 and after < before:
        return PlayerORM.birthday.between(
            millis_to_datetime(after), millis_to_datetime(before)
        )
    if after != 0 and before == 0:
        return PlayerORM.birthday >= millis_to_datetime(after)
    if after == 0 and before != 0:
        return PlayerORM.birthday <= millis_to_datetime(before)
    return None


def _level_predicate(request: FilterRequest) -> ColumnElement[bool] | None:
    low, high = request.min_level, request.max_level
    if low != 0 and high != 0 and low < high:
        return PlayerORM.level.between(low, high)
    if low != 0 and high == 0:
        return PlayerORM.level >= low
    if low == 0 and high != 0:
        return PlayerORM.level <= high
    return None


def compose_predicates(request: FilterRequest) -> list[ColumnElement[bool]]:
    """Build the conjunction of field predicates for a filter request.

    :param request: Normalized filter request
    :returns: Predicates in a fixed field order; empty when nothing filters
    """
    predicates: list[Any] = []

    if request.name is not None:
        predicates.append(PlayerORM.name.icontains(request.name, autoescape=True))
    if request.title is not None:
        predicates.append(PlayerORM.title.icontains(request.title, autoescape=True))

    if request.race is not None:
        predicates.append(PlayerORM.race == request.race)
    if request.profession is not None:
        predicates.append(PlayerORM.profession == request.profession)

    for build in (_experience_predicate, _birthday_predicate):
        predicate = build(request)
        if predicate is not None:
            predicates.append(predicate)

    if request.banned is not None:
        predicates.append(PlayerORM.banned == request.banned)

    level_predicate = _level_predicate(request)
    if level_predicate is not None:
        predicates.append(level_predicate)

    return predicates


def compose_order(order: PlayerOrder) -> UnaryExpression[Any]:
    """Return the single ascending sort clause for a sort key."""
    return _ORDER_COLUMNS[order].asc()
