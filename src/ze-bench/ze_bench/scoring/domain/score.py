"""ScoreCard and WeightedTotal — the scoring value objects of a run."""

from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, Field

type ScoreCard = dict[str, float]

WEIGHTED_MAX = 10.0

# Weight applied to each known metric; unknown metrics weigh 1.
BASE_WEIGHTS: MappingProxyType[str, float] = MappingProxyType(
    {
        "install_success": 1.5,
        "tests_nonregression": 2.5,
        "manager_correctness": 1.0,
        "dependency_targets": 2.0,
        "integrity_guard": 1.5,
    }
)
DEFAULT_WEIGHT = 1.0


class WeightedTotal(BaseModel, frozen=True):
    """Single 0-10 score derived from a scorecard. Recomputed, never mutated."""

    weighted: float = Field(ge=0.0, le=WEIGHTED_MAX)
    max: Literal[10.0] = WEIGHTED_MAX


def default_score_card() -> ScoreCard:
    """Scorecard every run starts from: each base metric at 0."""
    return {metric: 0.0 for metric in BASE_WEIGHTS}
