"""Pydantic schemas for statistics."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, computed_field

from aus_lotto.games import LottoType

HOT_PROBABILITY = 0.15
DUE_AFTER_DAYS = 60


class NumberStatistic(BaseModel):
    model_config = {"frozen": True}

    number: int
    frequency: int
    last_appearance: datetime | None = None  # None: never drawn
    probability: float

    @computed_field
    @property
    def is_hot(self) -> bool:
        return self.probability > HOT_PROBABILITY

    def days_since(self, now: datetime) -> float | None:
        if self.last_appearance is None:
            return None
        return (now - self.last_appearance).total_seconds() / 86400

    def is_due(self, now: datetime) -> bool:
        """True when the number was drawn before, but not within the last 60 days."""
        days = self.days_since(now)
        return days is not None and days > DUE_AFTER_DAYS


class PairFrequency(BaseModel):
    number_1: int
    number_2: int
    count: int


class PrizePoint(BaseModel):
    draw_date: datetime
    prize: Decimal


class DrawStatistics(BaseModel):
    model_config = {"frozen": True}

    game_type: LottoType
    total_draws: int
    first_draw_date: datetime | None = None
    last_draw_date: datetime | None = None
    average_division_1_prize: Decimal = Decimal(0)
    highest_division_1_prize: Decimal = Decimal(0)
    highest_prize_date: datetime | None = None
    total_division_1_winners: int = 0
    number_frequency: dict[int, int]
    supplementary_frequency: dict[int, int] = {}
    powerball_frequency: dict[int, int] = {}
    common_pairs: list[PairFrequency] = []
    prize_history: list[PrizePoint] = []
    prize_trend: str = "insufficient data"
