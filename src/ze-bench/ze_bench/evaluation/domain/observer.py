"""EvaluationObserver port — domain events emitted while evaluators run."""

from typing import Protocol


class EvaluationObserver(Protocol):
    def evaluator_registered(self, name: str, source: str) -> None: ...

    def evaluator_completed(self, name: str, metrics: list[str]) -> None: ...

    def evaluator_failed(self, name: str, reason: str) -> None: ...
