"""Statistics service: frequency, recency, pairs and prize analysis."""

from collections import Counter, defaultdict
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from itertools import combinations
from types import MappingProxyType

from loguru import logger

from aus_lotto.config import settings
from aus_lotto.games import GameRuleset
from aus_lotto.schemas.lottery import DrawResult
from aus_lotto.schemas.statistics import (
    DrawStatistics,
    NumberStatistic,
    PairFrequency,
    PrizePoint,
)

AFFINITY_SIZE = 3
COMMON_PAIRS = 10
TREND_MIN_DRAWS = 4
TREND_THRESHOLD = Decimal("0.10")

Pair = tuple[int, int]


def _count_pairs(draws: list[DrawResult]) -> Counter:
    counter: Counter = Counter()
    for draw in draws:
        counter.update(combinations(sorted(draw.winning_numbers), 2))
    return counter


def _chunks(items: list, parts: int) -> list[list]:
    size = -(-len(items) // parts)
    return [items[i:i + size] for i in range(0, len(items), size)]


def _prize_trend(prizes: list[Decimal]) -> str:
    if len(prizes) < TREND_MIN_DRAWS:
        return "insufficient data"
    half = len(prizes) // 2
    earlier = sum(prizes[:half]) / half
    recent = sum(prizes[half:]) / (len(prizes) - half)
    if earlier == 0:
        return "rising" if recent > 0 else "stable"
    change = (recent - earlier) / earlier
    if change > TREND_THRESHOLD:
        return "rising"
    if change < -TREND_THRESHOLD:
        return "falling"
    return "stable"


class StatisticsEngine:
    """Per-number and per-pair statistics over one set of draws.

    Every statistic is computed from the full result set handed in; nothing
    is updated incrementally. Results that break the game rules raise
    ``InvalidDrawError``.
    """

    def __init__(
        self,
        ruleset: GameRuleset,
        results: Iterable[DrawResult] = (),
        *,
        workers: int | None = None,
    ):
        self.ruleset = ruleset
        self.workers = max(1, workers or settings.PAIR_WORKERS)
        self.results = tuple(results)
        self._numbers = MappingProxyType(self.compute(self.results))

    @property
    def numbers(self) -> MappingProxyType:
        return self._numbers

    @property
    def total_draws(self) -> int:
        return len(self.results)

    def compute(self, results: Iterable[DrawResult]) -> dict[int, NumberStatistic]:
        """NumberStatistic for every number in the game's range."""
        results = list(results)
        total_draws = len(results)
        frequency: Counter = Counter()
        last_seen = {}

        for result in results:
            result.validate_against(self.ruleset)
            for number in result.winning_numbers:
                frequency[number] += 1
                if number not in last_seen or result.draw_date > last_seen[number]:
                    last_seen[number] = result.draw_date

        return {
            number: NumberStatistic(
                number=number,
                frequency=frequency[number],
                last_appearance=last_seen.get(number),
                probability=frequency[number] / total_draws if total_draws else 0.0,
            )
            for number in range(1, self.ruleset.max_number + 1)
        }

    def top(self, n: int = 10) -> list[NumberStatistic]:
        return sorted(self._numbers.values(), key=lambda s: (-s.probability, s.number))[:n]

    def bottom(self, n: int = 10) -> list[NumberStatistic]:
        return sorted(self._numbers.values(), key=lambda s: (s.probability, s.number))[:n]

    def pair_counts(self) -> dict[Pair, int]:
        """Co-occurrence count for every (low, high) pair drawn together.

        Draws are split across a thread pool, each chunk counted into its own
        Counter; the chunk counters are then summed, so the total does not
        depend on scheduling order.
        """
        draws = list(self.results)
        if not draws:
            return {}
        totals: Counter = Counter()
        chunks = _chunks(draws, self.workers)
        with ThreadPoolExecutor(max_workers=len(chunks)) as pool:
            for partial_counts in pool.map(_count_pairs, chunks):
                totals.update(partial_counts)
        return dict(totals)

    def pair_affinities(self) -> dict[int, list[int]]:
        """Up to three most frequent partners of each number.

        Ranked by co-occurrence count, then by the lower partner number.
        """
        partners = defaultdict(list)
        for (low, high), count in self.pair_counts().items():
            partners[low].append((count, high))
            partners[high].append((count, low))

        return {
            number: [
                partner
                for _, partner in sorted(partners[number], key=lambda p: (-p[0], p[1]))[:AFFINITY_SIZE]
            ]
            for number in range(1, self.ruleset.max_number + 1)
        }

    def common_pairs(self, n: int = COMMON_PAIRS) -> list[PairFrequency]:
        ranked = sorted(self.pair_counts().items(), key=lambda item: (-item[1], item[0]))
        return [
            PairFrequency(number_1=low, number_2=high, count=count)
            for (low, high), count in ranked[:n]
        ]

    def _frequency(self, values: Iterable[int], max_number: int) -> dict[int, int]:
        counter = Counter(values)
        return {number: counter[number] for number in range(1, max_number + 1)}

    def draw_statistics(self) -> DrawStatistics:
        """Aggregate view of the result set for presentation."""
        ordered = sorted(self.results, key=lambda r: r.draw_date)
        ruleset = self.ruleset

        powerball_frequency = {}
        if ruleset.has_powerball and ruleset.powerball_max:
            powerball_frequency = self._frequency(
                (r.powerball_number for r in ordered if r.powerball_number is not None),
                ruleset.powerball_max,
            )

        stats = DrawStatistics(
            game_type=ruleset.game_type,
            total_draws=len(ordered),
            number_frequency={n: s.frequency for n, s in self._numbers.items()},
            supplementary_frequency=self._frequency(
                (n for r in ordered for n in r.supplementary_numbers),
                ruleset.max_number,
            ) if ruleset.supplementary_count else {},
            powerball_frequency=powerball_frequency,
            common_pairs=self.common_pairs(),
        )
        if not ordered:
            logger.info("[{}] no draws to summarise", ruleset.game_type)
            return stats

        prizes = [r.division_1_prize for r in ordered]
        # Earliest draw wins ties for the highest prize.
        highest = max(ordered, key=lambda r: r.division_1_prize)
        average = (sum(prizes) / len(prizes)).quantize(Decimal("0.01"))

        return stats.model_copy(update={
            "first_draw_date": ordered[0].draw_date,
            "last_draw_date": ordered[-1].draw_date,
            "average_division_1_prize": average,
            "highest_division_1_prize": highest.division_1_prize,
            "highest_prize_date": highest.draw_date,
            "total_division_1_winners": sum(r.division_1_winners for r in ordered),
            "prize_history": [
                PrizePoint(draw_date=r.draw_date, prize=r.division_1_prize) for r in ordered
            ],
            "prize_trend": _prize_trend(prizes),
        })
