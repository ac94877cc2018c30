"""
Tests for predicate composition and the filtered scan it drives.
"""

import pytest
import pytest_asyncio

from app.core.enums import PlayerOrder, Profession, Race
from app.features.players.filters import build_filter_request
from app.features.players.predicates import compose_order, compose_predicates

BIRTHDAY_2001 = 983577600000
BIRTHDAY_2005 = 1104537600000
BIRTHDAY_2010 = 1276560000000
BIRTHDAY_2015 = 1420070400000
BIRTHDAY_2020 = 1577836800000


@pytest_asyncio.fixture
async def seeded(player_service, make_player):
    """Five players with distinct experience, level and birthday.

    Levels: Aragorn 0, Eowyn 1, Boromir 2, Celeborn 9, Dain 19.
    """
    roster = [
        dict(name="Aragorn", race=Race.HUMAN, profession=Profession.WARRIOR,
             experience=50, birthday=BIRTHDAY_2005),
        dict(name="Boromir", race=Race.HUMAN, profession=Profession.WARRIOR,
             experience=500, birthday=BIRTHDAY_2010, banned=True),
        dict(name="Celeborn", race=Race.ELF, profession=Profession.DRUID,
             experience=5000, birthday=BIRTHDAY_2015),
        dict(name="Dain", race=Race.DWARF, profession=Profession.WARRIOR,
             experience=20000, birthday=BIRTHDAY_2020),
        dict(name="Eowyn", title="Shieldmaiden of Rohan", race=Race.HUMAN,
             profession=Profession.PALADIN, experience=100, birthday=BIRTHDAY_2001),
    ]
    return [await player_service.create_player(make_player(**fields)) for fields in roster]


async def _names(repository, **params):
    request = build_filter_request(page_size=100, **params)
    players = await repository.find_page(
        compose_predicates(request),
        compose_order(request.order),
        request.page_number,
        request.page_size,
    )
    return [player.name for player in players]


class TestComposePredicates:
    """Which predicates are produced for a request."""

    def test_empty_request_has_no_predicates(self):
        assert compose_predicates(build_filter_request()) == []

    def test_one_predicate_per_supplied_family(self):
        request = build_filter_request(
            name="a",
            title="b",
            race=Race.ORC,
            profession=Profession.ROGUE,
            min_experience=1,
            after=BIRTHDAY_2005,
            banned=False,
            max_level=3,
        )
        assert len(compose_predicates(request)) == 8

    def test_reversed_experience_range_dropped(self):
        request = build_filter_request(min_experience=100, max_experience=50)
        assert compose_predicates(request) == []

    def test_equal_level_range_dropped(self):
        request = build_filter_request(min_level=5, max_level=5)
        assert compose_predicates(request) == []

    def test_reversed_birthday_range_dropped(self):
        request = build_filter_request(after=BIRTHDAY_2020, before=BIRTHDAY_2005)
        assert compose_predicates(request) == []

    def test_equal_experience_bounds_dropped(self):
        request = build_filter_request(min_experience=500, max_experience=500)
        assert compose_predicates(request) == []

    def test_filter_is_not_retained_between_calls(self):
        compose_predicates(build_filter_request(name="x", banned=True))
        assert compose_predicates(build_filter_request()) == []


@pytest.mark.asyncio
class TestFilteredScan:
    """Predicates applied by the repository against stored players."""

    async def test_no_filter_returns_all_by_id(self, seeded, player_repository):
        assert await _names(player_repository) == [
            "Aragorn", "Boromir", "Celeborn", "Dain", "Eowyn",
        ]

    async def test_name_is_case_insensitive_substring(self, seeded, player_repository):
        assert await _names(player_repository, name="AR") == ["Aragorn"]
        assert await _names(player_repository, name="bor") == ["Boromir", "Celeborn"]

    async def test_wildcards_match_literally(self, seeded, player_repository):
        assert await _names(player_repository, name="%") == []
        assert await _names(player_repository, name="_") == []

    async def test_title_substring(self, seeded, player_repository):
        assert await _names(player_repository, title="ROHAN") == ["Eowyn"]

    async def test_race_and_profession(self, seeded, player_repository):
        names = await _names(
            player_repository, race=Race.HUMAN, profession=Profession.WARRIOR
        )
        assert names == ["Aragorn", "Boromir"]

    async def test_experience_between_is_inclusive(self, seeded, player_repository):
        names = await _names(player_repository, min_experience=100, max_experience=5000)
        assert names == ["Boromir", "Celeborn", "Eowyn"]

    async def test_experience_zero_min_with_max(self, seeded, player_repository):
        names = await _names(player_repository, min_experience=0, max_experience=500)
        assert names == ["Aragorn", "Boromir", "Eowyn"]

    async def test_experience_min_only(self, seeded, player_repository):
        names = await _names(player_repository, min_experience=500)
        assert names == ["Boromir", "Celeborn", "Dain"]

    async def test_experience_max_only(self, seeded, player_repository):
        names = await _names(player_repository, max_experience=100)
        assert names == ["Aragorn", "Eowyn"]

    async def test_reversed_experience_range_matches_unfiltered(
        self, seeded, player_repository
    ):
        unfiltered = await _names(player_repository)
        reversed_range = await _names(
            player_repository, min_experience=100, max_experience=50
        )
        assert reversed_range == unfiltered

    async def test_equal_level_range_matches_unfiltered(
        self, seeded, player_repository
    ):
        unfiltered = await _names(player_repository)
        equal_range = await _names(player_repository, min_level=5, max_level=5)
        assert equal_range == unfiltered

    async def test_level_between(self, seeded, player_repository):
        assert await _names(player_repository, min_level=2, max_level=9) == [
            "Boromir", "Celeborn",
        ]

    async def test_level_min_only(self, seeded, player_repository):
        assert await _names(player_repository, min_level=9) == ["Celeborn", "Dain"]

    async def test_level_max_only(self, seeded, player_repository):
        assert await _names(player_repository, max_level=1) == ["Aragorn", "Eowyn"]

    async def test_birthday_after(self, seeded, player_repository):
        assert await _names(player_repository, after=BIRTHDAY_2010) == [
            "Boromir", "Celeborn", "Dain",
        ]

    async def test_birthday_before(self, seeded, player_repository):
        assert await _names(player_repository, before=BIRTHDAY_2005) == [
            "Aragorn", "Eowyn",
        ]

    async def test_birthday_between(self, seeded, player_repository):
        names = await _names(
            player_repository, after=BIRTHDAY_2005, before=BIRTHDAY_2015
        )
        assert names == ["Aragorn", "Boromir", "Celeborn"]

    async def test_banned_tri_state(self, seeded, player_repository):
        assert await _names(player_repository, banned=True) == ["Boromir"]
        assert len(await _names(player_repository, banned=False)) == 4
        assert len(await _names(player_repository, banned=None)) == 5

    @pytest.mark.parametrize(
        "order, expected",
        [
            (PlayerOrder.NAME, ["Aragorn", "Boromir", "Celeborn", "Dain", "Eowyn"]),
            (PlayerOrder.EXPERIENCE, ["Aragorn", "Eowyn", "Boromir", "Celeborn", "Dain"]),
            (PlayerOrder.LEVEL, ["Aragorn", "Eowyn", "Boromir", "Celeborn", "Dain"]),
            (PlayerOrder.BIRTHDAY, ["Eowyn", "Aragorn", "Boromir", "Celeborn", "Dain"]),
        ],
    )
    async def test_sort_ascending(self, seeded, player_repository, order, expected):
        assert await _names(player_repository, order=order) == expected

    async def test_count_ignores_paging(self, seeded, player_repository):
        request = build_filter_request(race=Race.HUMAN, page_number=3, page_size=1)
        assert await player_repository.count_matching(compose_predicates(request)) == 3
