"""Parser for the past-results tables on australia.national-lottery.com.

Each results page holds one ``table.table-striped`` whose data rows look like::

    <tr>
      <td>Saturday 27th Jan 2024</td>
      <td>Draw 4432</td>
      <td><ul><li>3</li><li>11</li>...</ul></td>   winning numbers
      <td><ul><li>9</li><li>40</li></ul></td>       supplementaries / powerball
      <td>$5,000,000</td>                           division 1 prize
      <td>2</td>                                     division 1 winners
    </tr>
"""

import re
from collections.abc import Iterator
from datetime import date, datetime, tzinfo
from decimal import Decimal, InvalidOperation
from zoneinfo import ZoneInfo

from bs4 import BeautifulSoup
from loguru import logger

from aus_lotto.config import settings
from aus_lotto.exceptions import RowParseError
from aus_lotto.games import GameRuleset
from aus_lotto.schemas.lottery import DrawResult

MIN_CELLS = 4

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# "Saturday 27th Jan 2024", "Sat 3rd February, 2024", "27 Jan 2024"
_DATE_RE = re.compile(
    r"^(?:[A-Za-z]+,?\s+)?(\d{1,2})(?:st|nd|rd|th)?\s+([A-Za-z]+)\.?,?\s+(\d{4})$",
    re.IGNORECASE,
)
_NON_DIGIT_RE = re.compile(r"\D")
_NON_AMOUNT_RE = re.compile(r"[^0-9.]")
_TOKEN_SPLIT_RE = re.compile(r"[\s,]+")


def parse_draw_date(text: str) -> date:
    """Parse ``<weekday> <day><ordinal> <month> <year>`` into a date.

    Month names are matched on their English three-letter prefix so the
    result never depends on the process locale.
    """
    match = _DATE_RE.match(" ".join(text.split()))
    if not match:
        raise RowParseError(f"Unrecognised draw date: {text!r}")
    day, month_name, year = match.groups()
    month = _MONTHS.get(month_name[:3].lower())
    if month is None:
        raise RowParseError(f"Unrecognised month in draw date: {text!r}")
    try:
        return date(int(year), month, int(day))
    except ValueError as e:
        raise RowParseError(f"Invalid draw date {text!r}: {e}") from e


def parse_draw_number(text: str) -> int:
    digits = _NON_DIGIT_RE.sub("", text)
    if not digits:
        raise RowParseError(f"No draw number in {text!r}")
    return int(digits)


def parse_numbers(text: str) -> list[int]:
    """Split a ball cell on whitespace/commas; every token must hold digits."""
    numbers = []
    for token in _TOKEN_SPLIT_RE.split(text.strip()):
        if not token:
            continue
        digits = _NON_DIGIT_RE.sub("", token)
        if not digits:
            raise RowParseError(f"Non-numeric token {token!r} in {text!r}")
        numbers.append(int(digits))
    return numbers


def parse_prize(text: str) -> Decimal:
    """Strip currency symbols and separators; unparsable amounts are 0."""
    try:
        return Decimal(_NON_AMOUNT_RE.sub("", text))
    except InvalidOperation:
        return Decimal(0)


def parse_winners(text: str) -> int:
    digits = _NON_DIGIT_RE.sub("", text)
    return int(digits) if digits else 0


def _cell_text(cell) -> str:
    # Ball cells are lists of <li>/<span>; keep a separator between them.
    return cell.get_text(" ", strip=True)


def parse_row(cells: list[str], ruleset: GameRuleset, tz: tzinfo) -> DrawResult:
    """Build a validated DrawResult from the text of one row's cells."""
    draw_day = parse_draw_date(cells[0])
    draw_date = datetime.combine(draw_day, ruleset.draw_time, tzinfo=tz)

    supplementary: list[int] = []
    powerball = None
    if ruleset.has_powerball:
        pb_numbers = parse_numbers(cells[3])
        powerball = pb_numbers[0] if pb_numbers else None
    else:
        supplementary = parse_numbers(cells[3])

    result = DrawResult(
        game_type=ruleset.game_type,
        draw_date=draw_date,
        draw_number=parse_draw_number(cells[1]),
        winning_numbers=tuple(parse_numbers(cells[2])),
        supplementary_numbers=tuple(supplementary),
        powerball_number=powerball,
        division_1_prize=parse_prize(cells[4]) if len(cells) > 4 else Decimal(0),
        division_1_winners=parse_winners(cells[5]) if len(cells) > 5 else 0,
    )
    return result.validate_against(ruleset)


def _result_rows(soup: BeautifulSoup) -> list:
    rows = soup.select("table.table-striped tr")
    if not rows:
        table = soup.find("table")
        rows = table.find_all("tr") if table else []
    return rows


def parse_page(
    markup: str, ruleset: GameRuleset, tz: tzinfo | None = None
) -> Iterator[DrawResult]:
    """Lazily yield the draws found in one results page.

    The first table row is the header. Rows with fewer than four cells are
    skipped; rows that fail to parse or break the game rules are logged and
    dropped without affecting the rest of the page.
    """
    tz = tz or ZoneInfo(settings.TIMEZONE)
    soup = BeautifulSoup(markup, "html.parser")

    for index, row in enumerate(_result_rows(soup)[1:], start=1):
        cells = [_cell_text(td) for td in row.find_all("td")]
        if len(cells) < MIN_CELLS:
            logger.debug("[{}] row {} has {} cells, skipped", ruleset.game_type, index, len(cells))
            continue
        try:
            result = parse_row(cells, ruleset, tz)
        except ValueError as e:
            logger.warning("[{}] Failed to parse row {}: {} - {}", ruleset.game_type, index, cells, e)
            continue
        yield result
