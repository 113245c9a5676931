"""Oracle Protocol — scripted stand-in for a human answering agent questions."""

from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel

from ze_bench.scenario.domain.scenario import Scenario


class QuestionAnswer(BaseModel, frozen=True):
    question: str
    answer: str


class Oracle(Protocol):
    def ask(self, question: str) -> str: ...

    def question_log(self) -> list[QuestionAnswer]: ...


type OracleResolver = Callable[[Scenario, Path], Oracle | None]
