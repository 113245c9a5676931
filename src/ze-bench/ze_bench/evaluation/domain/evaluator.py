"""Evaluator and Evaluators Protocols — pluggable scoring of finished runs."""

from typing import Protocol

from ze_bench.evaluation.domain.context import (
    EvaluationContext,
    EvaluationOutcome,
    EvaluatorResult,
)


class Evaluator(Protocol):
    """A single scoring plug-in contributing metrics in [0, 1]."""

    @property
    def name(self) -> str: ...

    async def evaluate(self, context: EvaluationContext) -> EvaluatorResult: ...


class Evaluators(Protocol):
    """Runs every registered evaluator for one run."""

    async def run(self, context: EvaluationContext) -> EvaluationOutcome: ...
