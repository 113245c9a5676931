"""ScoreAggregator — folds a metric scorecard into one weighted total."""

from collections.abc import Mapping

from ze_bench.scoring.domain.score import (
    BASE_WEIGHTS,
    DEFAULT_WEIGHT,
    WEIGHTED_MAX,
    WeightedTotal,
)


def compute_weighted_total(
    score_card: Mapping[str, float],
    weight_overrides: Mapping[str, float] | None = None,
) -> WeightedTotal:
    """Return the weighted mean of the scorecard, scaled to 0-10.

    Scenario overrides replace base weights by metric name. Metrics whose
    effective weight is <= 0 are dropped from numerator and denominator alike.
    An empty effective weight sum yields 0.
    """
    overrides = weight_overrides or {}
    total_weight = 0.0
    achieved = 0.0
    for metric, score in score_card.items():
        weight = overrides.get(metric, BASE_WEIGHTS.get(metric, DEFAULT_WEIGHT))
        if weight <= 0:
            continue
        total_weight += weight
        achieved += _clamp(score) * weight

    if total_weight == 0:
        return WeightedTotal(weighted=0.0)
    return WeightedTotal(weighted=round(achieved / total_weight * WEIGHTED_MAX, 4))


def average_score(score_card: Mapping[str, float]) -> float:
    """Unweighted mean of the scorecard (0 when empty)."""
    if not score_card:
        return 0.0
    return sum(_clamp(score) for score in score_card.values()) / len(score_card)


def _clamp(score: float) -> float:
    # Out-of-range scores are clamped to [0, 1].
    return min(max(float(score), 0.0), 1.0)
