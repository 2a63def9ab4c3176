"""Year-by-year retrieval of past results pages.

Requests go out one at a time with a fixed pause between years; the
results site is a shared service with no published rate allowance.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime
from functools import partial

import aiohttp
from loguru import logger

from aus_lotto.config import settings
from aus_lotto.games import GameCatalog, LottoType
from aus_lotto.schemas.lottery import DrawResult
from aus_lotto.scraper.parser import parse_page
from aus_lotto.services.schedule_service import draw_timezone, local_now, next_draw

FETCH_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError, ValueError)


class ResultFetcher:
    """Fetches and parses results pages for the games in a catalog."""

    def __init__(
        self,
        catalog: GameCatalog,
        *,
        clock: Callable[[], datetime] = local_now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        delay: float | None = None,
    ):
        self.catalog = catalog
        self._clock = clock
        self._sleep = sleep
        self.delay = settings.FETCH_DELAY_SECONDS if delay is None else delay
        self.tz = draw_timezone()

    def _headers(self) -> dict:
        return {
            "User-Agent": settings.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml",
        }

    async def _get_page(self, url: str) -> str:
        """GET one results page and return its body."""
        timeout = aiohttp.ClientTimeout(total=settings.REQUEST_TIMEOUT_SECONDS)
        async with aiohttp.ClientSession(headers=self._headers(), timeout=timeout) as client:
            async with client.get(url) as resp:
                resp.raise_for_status()
                return await resp.text()

    async def _run_sync(self, func, *args, **kwargs):
        """Run a synchronous function in executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args, **kwargs))

    async def fetch_year(self, game_type: LottoType, year: int) -> list[DrawResult]:
        """Results for one calendar year; any failure yields an empty list."""
        ruleset = self.catalog.ruleset(game_type)
        url = f"{self.catalog.base_url(game_type)}{year}"
        logger.debug("Fetching {} results for {} from {}", game_type, year, url)

        try:
            markup = await self._get_page(url)
            results = await self._run_sync(lambda: list(parse_page(markup, ruleset, self.tz)))
        except FETCH_ERRORS as e:
            logger.warning("Error fetching results for {} {}: {}", ruleset.name, year, e)
            return []

        if not results:
            logger.info("No {} results for {}", game_type, year)
        return results

    async def fetch_years(self, game_type: LottoType, years: int) -> list[DrawResult]:
        """Results for the current year and the ``years - 1`` before it."""
        if years < 1:
            raise ValueError(f"years must be at least 1, got {years}")
        # Fail on unconfigured games before touching the network.
        self.catalog.ruleset(game_type)
        self.catalog.base_url(game_type)

        current_year = self._clock().year
        results: list[DrawResult] = []
        for offset in range(years):
            if offset:
                await self._sleep(self.delay)
            year_results = await self.fetch_year(game_type, current_year - offset)
            results.extend(year_results)

        logger.info(
            "[{}] fetched {} draws over {} year(s)", game_type, len(results), years,
        )
        return results

    def fetch_next_draw_date(self, game_type: LottoType) -> datetime:
        return next_draw(self.catalog.ruleset(game_type), self._clock(), self.tz)
