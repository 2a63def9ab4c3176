"""Pydantic schemas for predictions and full game analysis."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from aus_lotto.games import GameRuleset, LottoType
from aus_lotto.schemas.lottery import DrawResult
from aus_lotto.schemas.statistics import DrawStatistics


class Prediction(BaseModel):
    model_config = {"frozen": True}

    game_type: LottoType
    next_draw_date: datetime
    recommended_numbers: list[int]
    recommended_powerball: int | None = None
    number_confidence: dict[int, float]
    reasoning: list[str]
    estimated_division_1_prize: Decimal


class GameAnalysis(BaseModel):
    game_type: LottoType
    rules: GameRuleset
    statistics: DrawStatistics
    prediction: Prediction
    last_results: list[DrawResult]


class HistoryResponse(BaseModel):
    success: bool = True
    data: list[DrawResult]


class PredictionResponse(BaseModel):
    success: bool = True
    data: Prediction


class NextDrawResponse(BaseModel):
    game_type: LottoType
    next_draw_date: datetime
