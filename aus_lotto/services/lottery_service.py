"""Lottery service: orchestrates fetching, statistics and recommendations.

Each call runs its own fetch-then-compute pipeline. Fetching awaits the
network and the pacing sleep; the CPU-bound statistics step runs in an
executor so other games' requests keep being served meanwhile.
"""

import asyncio
import random
from datetime import datetime
from functools import partial

from loguru import logger

from aus_lotto.games import GameRuleset, LottoType
from aus_lotto.schemas.lottery import DrawResult
from aus_lotto.schemas.prediction import GameAnalysis, Prediction
from aus_lotto.scraper.fetcher import ResultFetcher
from aus_lotto.services.recommendation_service import RecommendationEngine
from aus_lotto.services.schedule_service import next_draw
from aus_lotto.services.statistics_service import StatisticsEngine

LAST_RESULTS = 10


async def _run_sync(func, *args, **kwargs):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args, **kwargs))


def _build_prediction(
    ruleset: GameRuleset,
    results: list[DrawResult],
    next_draw_date: datetime,
    rng: random.Random,
    now: datetime,
) -> tuple[StatisticsEngine, Prediction]:
    engine = StatisticsEngine(ruleset, results)
    prediction = RecommendationEngine(rng).recommend(
        engine, next_draw_date, target_count=ruleset.numbers_drawn, now=now,
    )
    return engine, prediction


def _build_analysis(
    ruleset: GameRuleset,
    results: list[DrawResult],
    next_draw_date: datetime,
    rng: random.Random,
    now: datetime,
) -> GameAnalysis:
    engine, prediction = _build_prediction(ruleset, results, next_draw_date, rng, now)
    latest = sorted(results, key=lambda r: r.draw_date, reverse=True)[:LAST_RESULTS]
    return GameAnalysis(
        game_type=ruleset.game_type,
        rules=ruleset,
        statistics=engine.draw_statistics(),
        prediction=prediction,
        last_results=latest,
    )


async def get_history(fetcher: ResultFetcher, game_type: LottoType, years: int) -> list[DrawResult]:
    results = await fetcher.fetch_years(game_type, years)
    return sorted(results, key=lambda r: r.draw_date, reverse=True)


async def get_prediction(
    fetcher: ResultFetcher,
    game_type: LottoType,
    rng: random.Random,
    now: datetime,
    years: int,
) -> Prediction:
    ruleset = fetcher.catalog.ruleset(game_type)
    results = await fetcher.fetch_years(game_type, years)
    next_draw_date = next_draw(ruleset, now, fetcher.tz)
    _, prediction = await _run_sync(
        _build_prediction, ruleset, results, next_draw_date, rng, now,
    )
    return prediction


async def analyze_game(
    fetcher: ResultFetcher,
    game_type: LottoType,
    rng: random.Random,
    now: datetime,
    years: int,
) -> GameAnalysis:
    """Fetch ``years`` of history and build statistics plus a recommendation."""
    ruleset = fetcher.catalog.ruleset(game_type)
    results = await fetcher.fetch_years(game_type, years)
    next_draw_date = next_draw(ruleset, now, fetcher.tz)
    analysis = await _run_sync(
        _build_analysis, ruleset, results, next_draw_date, rng, now,
    )
    logger.info(
        "[{}] analysis built from {} draws, next draw {}",
        game_type, len(results), next_draw_date,
    )
    return analysis
