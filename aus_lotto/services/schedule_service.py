"""Next draw time calculation from a game's weekly schedule."""

from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from aus_lotto.config import settings
from aus_lotto.games import GameRuleset

# Worst case: draw day today, draw time already passed -> 7 more days.
MAX_STEPS = 8


def draw_timezone() -> tzinfo:
    return ZoneInfo(settings.TIMEZONE)


def local_now(tz: tzinfo | None = None) -> datetime:
    """Current time in the draw timezone."""
    return datetime.now(tz or draw_timezone())


def to_local(now: datetime, tz: tzinfo | None = None) -> datetime:
    """Read a naive ``now`` as wall-clock time in the draw timezone; convert an aware one."""
    tz = tz or draw_timezone()
    return now.replace(tzinfo=tz) if now.tzinfo is None else now.astimezone(tz)


def next_draw(ruleset: GameRuleset, now: datetime, tz: tzinfo | None = None) -> datetime:
    """Return the first draw of ``ruleset`` strictly after ``now``.

    A naive ``now`` is read as wall-clock time in the draw timezone. The
    result is timezone-aware, on the configured weekday and time of day.
    """
    tz = tz or draw_timezone()
    now = to_local(now, tz)

    candidate = datetime.combine(now.date(), ruleset.draw_time, tzinfo=tz)
    steps = 0
    while candidate <= now or candidate.weekday() != ruleset.draw_weekday:
        # Same tzinfo arithmetic keeps the wall-clock time across DST changes.
        candidate += timedelta(days=1)
        steps += 1
        if steps > MAX_STEPS:
            raise RuntimeError(f"No draw found for {ruleset.name} within {MAX_STEPS} days")
    return candidate
