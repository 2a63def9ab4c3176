"""Number recommendation heuristic.

Not a prediction model: two hot numbers, two overdue numbers and random
picks for the rest. The random source is injected so a seeded
``random.Random`` reproduces a recommendation exactly.
"""

import random
from collections import Counter
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from loguru import logger

from aus_lotto.schemas.prediction import Prediction
from aus_lotto.services.schedule_service import local_now, to_local
from aus_lotto.services.statistics_service import StatisticsEngine

HOT_PICKS = 2
DUE_PICKS = 2


class RecommendationEngine:
    def __init__(self, rng: random.Random, clock: Callable[[], datetime] = local_now):
        self.rng = rng
        self._clock = clock

    def recommend(
        self,
        statistics: StatisticsEngine,
        next_draw_date: datetime,
        target_count: int = 6,
        now: datetime | None = None,
    ) -> Prediction:
        ruleset = statistics.ruleset
        if not 1 <= target_count <= ruleset.max_number:
            raise ValueError(
                f"target_count must be between 1 and {ruleset.max_number}, got {target_count}"
            )
        now = to_local(now or self._clock())
        numbers = statistics.numbers
        chosen: list[int] = []
        reasoning: list[str] = []

        hot = sorted(
            (s for s in numbers.values() if s.is_hot),
            key=lambda s: (-s.probability, s.number),
        )
        for stat in hot[:min(HOT_PICKS, target_count)]:
            chosen.append(stat.number)
            reasoning.append(
                f"{stat.number} is a hot number, drawn in {stat.probability:.1%} of "
                f"{statistics.total_draws} draws"
            )

        due = sorted(
            (s for s in numbers.values() if s.number not in chosen and s.is_due(now)),
            key=lambda s: (-s.days_since(now), s.number),
        )
        for stat in due[:min(DUE_PICKS, target_count - len(chosen))]:
            chosen.append(stat.number)
            reasoning.append(
                f"{stat.number} is due, not drawn for {int(stat.days_since(now))} days"
            )

        random_picks = []
        while len(chosen) < target_count:
            number = self.rng.randint(1, ruleset.max_number)
            if number not in chosen:
                chosen.append(number)
                random_picks.append(number)
        if random_picks:
            reasoning.append(
                "Random picks to complete the selection: "
                + ", ".join(str(n) for n in sorted(random_picks))
            )

        recommended = sorted(chosen)
        powerball = self._recommend_powerball(statistics, reasoning)
        logger.debug("[{}] recommended {} pb={}", ruleset.game_type, recommended, powerball)

        return Prediction(
            game_type=ruleset.game_type,
            next_draw_date=next_draw_date,
            recommended_numbers=recommended,
            recommended_powerball=powerball,
            number_confidence={n: numbers[n].probability for n in recommended},
            reasoning=reasoning,
            estimated_division_1_prize=self._estimate_prize(statistics),
        )

    def _recommend_powerball(self, statistics: StatisticsEngine, reasoning: list[str]) -> int | None:
        ruleset = statistics.ruleset
        if not ruleset.has_powerball or not ruleset.powerball_max:
            return None

        counter = Counter(
            r.powerball_number for r in statistics.results if r.powerball_number is not None
        )
        if not counter:
            powerball = self.rng.randint(1, ruleset.powerball_max)
            reasoning.append(f"Powerball {powerball} picked at random, no history available")
            return powerball

        powerball, count = min(counter.items(), key=lambda item: (-item[1], item[0]))
        reasoning.append(f"Powerball {powerball} is the most drawn powerball ({count} times)")
        return powerball

    @staticmethod
    def _estimate_prize(statistics: StatisticsEngine) -> Decimal:
        minimum = Decimal(statistics.ruleset.minimum_division_1_prize)
        prizes = [r.division_1_prize for r in statistics.results]
        if not prizes:
            return minimum
        average = (sum(prizes) / len(prizes)).quantize(Decimal("0.01"))
        return max(minimum, average)
