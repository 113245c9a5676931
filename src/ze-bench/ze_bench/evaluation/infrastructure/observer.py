"""Structlog implementation of the EvaluationObserver port."""

import structlog


class StructlogEvaluationObserver:
    """Delegates evaluation domain events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def evaluator_registered(self, name: str, source: str) -> None:
        self._log.debug("evaluation.evaluator_registered", name=name, source=source)

    def evaluator_completed(self, name: str, metrics: list[str]) -> None:
        self._log.info("evaluation.evaluator_completed", name=name, metrics=metrics)

    def evaluator_failed(self, name: str, reason: str) -> None:
        self._log.warning("evaluation.evaluator_failed", name=name, reason=reason)
