"""EvaluatorPipeline — runs registered evaluators and merges their scorecards."""

from importlib.metadata import entry_points

from ze_bench.evaluation.domain.context import (
    EvaluationContext,
    EvaluationOutcome,
    EvaluatorResult,
)
from ze_bench.evaluation.domain.evaluator import Evaluator
from ze_bench.evaluation.domain.observer import EvaluationObserver
from ze_bench.evaluation.infrastructure.errors import (
    DiffOrEvaluationError,
    EvaluatorLoadError,
)
from ze_bench.scoring.domain.score import ScoreCard

ENTRY_POINT_GROUP = "ze_bench.evaluators"


class EvaluatorPipeline:
    """Satisfies the Evaluators protocol over an ordered list of Evaluator plug-ins.

    Evaluators run sequentially in registration order. The first failure aborts
    the pipeline with DiffOrEvaluationError so the run records a degraded
    evaluation stage.
    """

    def __init__(
        self, evaluators: list[Evaluator], observer: EvaluationObserver
    ) -> None:
        self._evaluators = evaluators
        self._observer = observer

    @property
    def names(self) -> list[str]:
        return [evaluator.name for evaluator in self._evaluators]

    async def run(self, context: EvaluationContext) -> EvaluationOutcome:
        """
        Raises:
            DiffOrEvaluationError: if any evaluator raises.
        """
        merged: ScoreCard = {}
        results: list[EvaluatorResult] = []
        for evaluator in self._evaluators:
            try:
                result = await evaluator.evaluate(context)
            except Exception as exc:
                reason = f"{evaluator.name}: {exc}"
                self._observer.evaluator_failed(name=evaluator.name, reason=str(exc))
                raise DiffOrEvaluationError(stage="evaluation", reason=reason) from exc
            self._observer.evaluator_completed(
                name=result.name, metrics=sorted(result.score_card)
            )
            merged.update(result.score_card)
            results.append(result)
        return EvaluationOutcome(score_card=merged, results=results)


def load_entry_point_evaluators(observer: EvaluationObserver) -> list[Evaluator]:
    """Instantiate every evaluator registered under the ``ze_bench.evaluators`` group.

    Each entry point must reference a zero-argument callable (usually a class)
    returning an Evaluator.

    Raises:
        EvaluatorLoadError: if an entry point cannot be imported or constructed.
    """
    evaluators: list[Evaluator] = []
    for entry_point in sorted(
        entry_points(group=ENTRY_POINT_GROUP), key=lambda ep: ep.name
    ):
        try:
            factory = entry_point.load()
            evaluator = factory()
        except Exception as exc:
            raise EvaluatorLoadError(name=entry_point.name, reason=str(exc)) from exc
        observer.evaluator_registered(name=evaluator.name, source=entry_point.value)
        evaluators.append(evaluator)
    return evaluators
