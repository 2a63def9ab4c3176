"""Game rules and the catalog of configured games.

The catalog is built once and passed explicitly to the fetcher, the
scheduler and the services, so tests can hand in their own rulesets and
URLs without touching module state.
"""

from datetime import time
from decimal import Decimal
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, Field

from aus_lotto.exceptions import UnknownGameError


class LottoType(str, Enum):
    MONDAY_LOTTO = "MondayLotto"        # Monday X Lotto (SA), Monday Gold Lotto (QLD)
    WEDNESDAY_LOTTO = "WednesdayLotto"  # Wednesday X Lotto (SA), Wednesday Gold Lotto (QLD)
    SATURDAY_LOTTO = "SaturdayLotto"    # Saturday TattsLotto / X Lotto / Gold Lotto
    OZ_LOTTO = "OzLotto"
    POWERBALL = "Powerball"
    SET_FOR_LIFE = "SetForLife"         # daily, not scheduled weekly
    STRIKE = "Strike"                   # NSW only

    def __str__(self) -> str:
        return self.value


# Python weekday numbers (Monday == 0)
MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)


class GameRuleset(BaseModel):
    """Fixed constants of one lottery game."""

    model_config = {"frozen": True}

    game_type: LottoType
    name: str
    numbers_drawn: int = Field(gt=0)
    max_number: int = Field(gt=0)
    supplementary_count: int = Field(default=0, ge=0)
    powerball_count: int | None = None
    powerball_max: int | None = None
    standard_cost: Decimal
    draw_weekday: int = Field(ge=0, le=6)
    draw_time: time
    minimum_division_1_prize: int

    @property
    def has_powerball(self) -> bool:
        return bool(self.powerball_count)


class GameCatalog:
    """Immutable lookup of rulesets and result page URLs by game type."""

    def __init__(self, rulesets, base_urls):
        self._rulesets = MappingProxyType({r.game_type: r for r in rulesets})
        self._base_urls = MappingProxyType(dict(base_urls))

    def __contains__(self, game_type) -> bool:
        return game_type in self._rulesets

    @property
    def configured_games(self) -> list[LottoType]:
        return list(self._rulesets)

    def rulesets(self) -> list[GameRuleset]:
        return list(self._rulesets.values())

    def ruleset(self, game_type: LottoType) -> GameRuleset:
        try:
            return self._rulesets[game_type]
        except KeyError:
            raise UnknownGameError(game_type, self._rulesets) from None

    def base_url(self, game_type: LottoType) -> str:
        try:
            return self._base_urls[game_type]
        except KeyError:
            raise UnknownGameError(game_type, self._base_urls) from None


_DRAW_TIME = time(19, 30)  # 7:30 PM AEST/AEDT

DEFAULT_RULESETS = (
    GameRuleset(
        game_type=LottoType.MONDAY_LOTTO,
        name="Monday Lotto",
        numbers_drawn=6,
        max_number=45,
        supplementary_count=2,
        standard_cost=Decimal("0.60"),
        draw_weekday=MONDAY,
        draw_time=_DRAW_TIME,
        minimum_division_1_prize=1_000_000,
    ),
    GameRuleset(
        game_type=LottoType.OZ_LOTTO,
        name="Oz Lotto",
        numbers_drawn=7,
        max_number=47,
        supplementary_count=2,
        standard_cost=Decimal("1.30"),
        draw_weekday=TUESDAY,
        draw_time=_DRAW_TIME,
        minimum_division_1_prize=2_000_000,
    ),
    GameRuleset(
        game_type=LottoType.WEDNESDAY_LOTTO,
        name="Wednesday Lotto",
        numbers_drawn=6,
        max_number=45,
        supplementary_count=2,
        standard_cost=Decimal("0.60"),
        draw_weekday=WEDNESDAY,
        draw_time=_DRAW_TIME,
        minimum_division_1_prize=1_000_000,
    ),
    GameRuleset(
        game_type=LottoType.POWERBALL,
        name="Powerball",
        numbers_drawn=7,
        max_number=35,
        powerball_count=1,
        powerball_max=20,
        standard_cost=Decimal("1.35"),
        draw_weekday=THURSDAY,
        draw_time=_DRAW_TIME,
        minimum_division_1_prize=4_000_000,
    ),
    GameRuleset(
        game_type=LottoType.SATURDAY_LOTTO,
        name="Saturday TattsLotto",
        numbers_drawn=6,
        max_number=45,
        supplementary_count=2,
        standard_cost=Decimal("0.70"),
        draw_weekday=SATURDAY,
        draw_time=_DRAW_TIME,
        minimum_division_1_prize=5_000_000,
    ),
)

_RESULTS_SITE = "https://australia.national-lottery.com"

DEFAULT_BASE_URLS = {
    LottoType.MONDAY_LOTTO: f"{_RESULTS_SITE}/monday-lotto/past-results/",
    LottoType.WEDNESDAY_LOTTO: f"{_RESULTS_SITE}/wednesday-lotto/past-results/",
    LottoType.SATURDAY_LOTTO: f"{_RESULTS_SITE}/saturday-lotto/past-results/",
    LottoType.OZ_LOTTO: f"{_RESULTS_SITE}/oz-lotto/past-results/",
    LottoType.POWERBALL: f"{_RESULTS_SITE}/powerball/past-results/",
}


def default_catalog() -> GameCatalog:
    return GameCatalog(DEFAULT_RULESETS, DEFAULT_BASE_URLS)
