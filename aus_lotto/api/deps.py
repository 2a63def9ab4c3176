"""Dependency injection for FastAPI."""

import random
from datetime import datetime
from functools import lru_cache

from fastapi import Depends

from aus_lotto.games import GameCatalog, default_catalog
from aus_lotto.scraper.fetcher import ResultFetcher
from aus_lotto.services.schedule_service import local_now


@lru_cache
def get_catalog() -> GameCatalog:
    return default_catalog()


def get_fetcher(catalog: GameCatalog = Depends(get_catalog)) -> ResultFetcher:
    return ResultFetcher(catalog)


def get_rng() -> random.Random:
    """Fresh, OS-seeded random source per request."""
    return random.Random()


def get_now() -> datetime:
    return local_now()
