"""Pydantic schemas for draw results."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, computed_field, field_validator

from aus_lotto.exceptions import InvalidDrawError
from aus_lotto.games import GameRuleset, LottoType


class DrawResult(BaseModel):
    """One historical draw of a game."""

    model_config = {"frozen": True}

    game_type: LottoType
    draw_date: datetime
    draw_number: int = Field(ge=0)
    winning_numbers: tuple[int, ...]
    supplementary_numbers: tuple[int, ...] = ()
    powerball_number: int | None = None
    division_1_prize: Decimal = Field(default=Decimal(0), ge=0)
    division_1_winners: int = Field(default=0, ge=0)

    @field_validator("winning_numbers")
    @classmethod
    def _distinct_numbers(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if len(set(value)) != len(value):
            raise ValueError(f"winning numbers contain duplicates: {list(value)}")
        return value

    @computed_field
    @property
    def has_winners(self) -> bool:
        return self.division_1_winners > 0

    def validate_against(self, ruleset: GameRuleset) -> "DrawResult":
        """Check this draw against the rules of its game; returns self."""
        if self.game_type != ruleset.game_type:
            raise InvalidDrawError(
                f"Draw {self.draw_number} belongs to {self.game_type}, not {ruleset.game_type}"
            )
        if len(self.winning_numbers) != ruleset.numbers_drawn:
            raise InvalidDrawError(
                f"Draw {self.draw_number}: expected {ruleset.numbers_drawn} numbers, "
                f"got {len(self.winning_numbers)}"
            )
        out_of_range = [n for n in self.winning_numbers if not 1 <= n <= ruleset.max_number]
        if out_of_range:
            raise InvalidDrawError(
                f"Draw {self.draw_number}: numbers {out_of_range} outside 1-{ruleset.max_number}"
            )
        if len(self.supplementary_numbers) != ruleset.supplementary_count:
            raise InvalidDrawError(
                f"Draw {self.draw_number}: expected {ruleset.supplementary_count} "
                f"supplementary numbers, got {len(self.supplementary_numbers)}"
            )
        if ruleset.has_powerball:
            if self.powerball_number is None:
                raise InvalidDrawError(f"Draw {self.draw_number}: missing powerball")
            if not 1 <= self.powerball_number <= (ruleset.powerball_max or 0):
                raise InvalidDrawError(
                    f"Draw {self.draw_number}: powerball {self.powerball_number} "
                    f"outside 1-{ruleset.powerball_max}"
                )
        elif self.powerball_number is not None:
            raise InvalidDrawError(
                f"Draw {self.draw_number}: {ruleset.name} has no powerball"
            )
        return self
