"""Game analysis API endpoints."""

import random
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from aus_lotto.api.deps import get_catalog, get_fetcher, get_now, get_rng
from aus_lotto.config import settings
from aus_lotto.exceptions import UnknownGameError
from aus_lotto.games import GameCatalog, GameRuleset, LottoType
from aus_lotto.schemas.prediction import (
    GameAnalysis,
    HistoryResponse,
    NextDrawResponse,
    PredictionResponse,
)
from aus_lotto.scraper.fetcher import ResultFetcher
from aus_lotto.services import lottery_service

router = APIRouter()


def _resolve_game(game: str, catalog: GameCatalog) -> LottoType:
    try:
        game_type = LottoType(game)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid game. Valid: {[g.value for g in LottoType]}",
        ) from None
    if game_type not in catalog:
        raise HTTPException(status_code=404, detail=str(UnknownGameError(game_type, catalog.configured_games)))
    return game_type


@router.get("", response_model=list[GameRuleset])
async def list_games(catalog: GameCatalog = Depends(get_catalog)):
    """All configured games and their rules."""
    return catalog.rulesets()


@router.get("/{game}/analysis", response_model=GameAnalysis)
async def game_analysis(
    game: str,
    years: int = Query(settings.DEFAULT_HISTORY_YEARS, ge=1, le=settings.HISTORY_MAX_YEARS),
    fetcher: ResultFetcher = Depends(get_fetcher),
    rng: random.Random = Depends(get_rng),
    now: datetime = Depends(get_now),
):
    """Statistics, recommendation and latest results for one game."""
    game_type = _resolve_game(game, fetcher.catalog)
    return await lottery_service.analyze_game(fetcher, game_type, rng, now, years)


@router.get("/{game}/history", response_model=HistoryResponse)
async def history(
    game: str,
    years: int = Query(5, ge=1, le=settings.HISTORY_MAX_YEARS),
    fetcher: ResultFetcher = Depends(get_fetcher),
):
    """Past draws, newest first."""
    game_type = _resolve_game(game, fetcher.catalog)
    results = await lottery_service.get_history(fetcher, game_type, years)
    return HistoryResponse(data=results)


@router.get("/{game}/prediction", response_model=PredictionResponse)
async def prediction(
    game: str,
    years: int = Query(settings.DEFAULT_HISTORY_YEARS, ge=1, le=settings.HISTORY_MAX_YEARS),
    fetcher: ResultFetcher = Depends(get_fetcher),
    rng: random.Random = Depends(get_rng),
    now: datetime = Depends(get_now),
):
    """Recommended numbers for the next draw."""
    game_type = _resolve_game(game, fetcher.catalog)
    result = await lottery_service.get_prediction(fetcher, game_type, rng, now, years)
    return PredictionResponse(data=result)


@router.get("/{game}/next-draw", response_model=NextDrawResponse)
async def next_draw(
    game: str,
    fetcher: ResultFetcher = Depends(get_fetcher),
):
    """Date and time of the next scheduled draw."""
    game_type = _resolve_game(game, fetcher.catalog)
    return NextDrawResponse(
        game_type=game_type,
        next_draw_date=fetcher.fetch_next_draw_date(game_type),
    )
