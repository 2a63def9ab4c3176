"""Shared fixtures: rulesets, draw builders, canned results pages, fake fetcher."""

from datetime import datetime, time, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from aus_lotto.games import LottoType, default_catalog
from aus_lotto.schemas.lottery import DrawResult
from aus_lotto.scraper.fetcher import ResultFetcher

SYDNEY = ZoneInfo("Australia/Sydney")
DRAW_TIME = time(19, 30)


class FakeFetcher(ResultFetcher):
    """ResultFetcher serving canned pages; an Exception value is raised instead."""

    def __init__(self, catalog, pages, now):
        self.sleeps = []
        self.requested = []

        async def _sleep(seconds):
            self.sleeps.append(seconds)

        super().__init__(catalog, clock=lambda: now, sleep=_sleep, delay=1.0)
        self.pages = pages

    async def _get_page(self, url):
        self.requested.append(url)
        page = self.pages.get(url, "<html><body><p>No results</p></body></html>")
        if isinstance(page, Exception):
            raise page
        return page


@pytest.fixture
def tz():
    return SYDNEY


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def saturday(catalog):
    return catalog.ruleset(LottoType.SATURDAY_LOTTO)


@pytest.fixture
def powerball(catalog):
    return catalog.ruleset(LottoType.POWERBALL)


@pytest.fixture
def now():
    # A Saturday, half an hour after the 19:30 draw.
    return datetime(2024, 6, 1, 20, 0, tzinfo=SYDNEY)


@pytest.fixture
def make_draw():
    counter = {"draw": 4000}

    def _make(
        numbers,
        when,
        game_type=LottoType.SATURDAY_LOTTO,
        supplementary=(44, 45),
        powerball=None,
        prize=0,
        winners=0,
    ):
        counter["draw"] += 1
        if isinstance(when, datetime):
            draw_date = when
        else:
            draw_date = datetime.combine(when, DRAW_TIME, tzinfo=SYDNEY)
        return DrawResult(
            game_type=game_type,
            draw_date=draw_date,
            draw_number=counter["draw"],
            winning_numbers=tuple(numbers),
            supplementary_numbers=tuple(supplementary),
            powerball_number=powerball,
            division_1_prize=Decimal(prize),
            division_1_winners=winners,
        )

    return _make


@pytest.fixture
def days_before(now):
    def _before(days):
        return now - timedelta(days=days)

    return _before


def _balls(numbers):
    return "<ul>" + "".join(f"<li>{n}</li>" for n in numbers) + "</ul>"


@pytest.fixture
def results_page():
    """Build a results page; each row is a list of raw cell contents."""

    def _page(rows):
        body = [
            "<tr><th>Draw Date</th><th>Draw</th><th>Numbers</th>"
            "<th>Supps</th><th>Division 1</th><th>Winners</th></tr>"
        ]
        for cells in rows:
            body.append("<tr>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>")
        return (
            "<html><body><h1>Past results</h1>"
            '<table class="table table-striped">'
            + "".join(body)
            + "</table></body></html>"
        )

    return _page


@pytest.fixture
def balls():
    return _balls


@pytest.fixture
def saturday_page(results_page, balls):
    return results_page([
        ["Saturday 27th Jan 2024", "Draw 4432", balls([3, 11, 19, 24, 36, 41]),
         balls([9, 40]), "$5,000,000.00", "2"],
        ["Saturday 20th Jan 2024", "Draw 4430", balls([1, 3, 8, 15, 22, 45]),
         balls([2, 30]), "$5,000,000.00", "0"],
        ["Saturday 13th Jan 2024", "Draw 4428", balls([3, 7, 11, 28, 33, 44]),
         balls([5, 6]), "$10,000,000.00", "1"],
    ])


@pytest.fixture
def fake_fetcher(catalog, now):
    def _build(pages):
        return FakeFetcher(catalog, pages, now)

    return _build
