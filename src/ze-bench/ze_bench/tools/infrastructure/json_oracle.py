"""JsonOracle — answers agent questions from a scripted JSON answers file."""

import json
from pathlib import Path

from ze_bench.scenario.domain.scenario import Scenario
from ze_bench.tools.domain.observer import ToolObserver
from ze_bench.tools.domain.oracle import QuestionAnswer
from ze_bench.tools.infrastructure.errors import OracleAnswersError

DEFAULT_ANSWER = "Proceed with your best judgment based on the constraints provided."
# Leading characters of a question that a key may contain to count as a match.
_QUESTION_PREFIX_LEN = 20


class JsonOracle:
    """Satisfies the Oracle protocol from a ``{key: answer}`` JSON object.

    Matching, first hit wins:

    1. the lowercased, stripped question equals a key exactly;
    2. a key, lowercased with ``_`` and ``-`` read as spaces, is contained in
       the question, or contains the question's first 20 characters;
    3. otherwise DEFAULT_ANSWER.

    Every question asked is logged with the answer given.
    """

    def __init__(self, answers: dict[str, str], observer: ToolObserver) -> None:
        self._answers = answers
        self._observer = observer
        self._log: list[QuestionAnswer] = []

    @classmethod
    def from_file(cls, path: Path, observer: ToolObserver) -> "JsonOracle":
        """
        Raises:
            OracleAnswersError: if the file is unreadable, not JSON, or not an
                object of string answers.
        """
        try:
            with open(path, encoding="utf-8") as fh:
                raw = json.load(fh)
        except FileNotFoundError as exc:
            raise OracleAnswersError(path=path, reason="file not found") from exc
        except json.JSONDecodeError as exc:
            raise OracleAnswersError(path=path, reason=f"invalid JSON ({exc})") from exc

        if not isinstance(raw, dict):
            raise OracleAnswersError(path=path, reason="top level must be an object")
        bad_keys = [key for key, value in raw.items() if not isinstance(value, str)]
        if bad_keys:
            raise OracleAnswersError(
                path=path, reason=f"answers must be strings: {', '.join(bad_keys)}"
            )
        return cls(answers=raw, observer=observer)

    def ask(self, question: str) -> str:
        answer, matched = self._match(question=question)
        self._log.append(QuestionAnswer(question=question, answer=answer))
        self._observer.oracle_answered(question=question, matched=matched)
        return answer

    def question_log(self) -> list[QuestionAnswer]:
        return list(self._log)

    def _match(self, question: str) -> tuple[str, bool]:
        normalized = question.lower().strip()
        exact = self._answers.get(normalized)
        if exact:
            return exact, True

        prefix = normalized[:_QUESTION_PREFIX_LEN]
        for key, answer in self._answers.items():
            normalized_key = key.lower().replace("_", " ").replace("-", " ")
            if normalized_key in normalized or prefix in normalized_key:
                return answer, True

        return DEFAULT_ANSWER, False


def resolve_oracle(
    scenario: Scenario, scenario_dir: Path, observer: ToolObserver
) -> JsonOracle | None:
    """Return an oracle for the scenario, or None if it declares no usable answers file.

    The answers file is resolved relative to the scenario directory and only
    used when it exists.

    Raises:
        OracleAnswersError: if the declared file exists but cannot be parsed.
    """
    if scenario.oracle is None or not scenario.oracle.answers_file:
        return None
    path = scenario_dir / scenario.oracle.answers_file
    if not path.is_file():
        return None
    return JsonOracle.from_file(path=path, observer=observer)
