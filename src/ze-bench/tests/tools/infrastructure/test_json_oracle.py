"""Tests for JsonOracle and resolve_oracle."""

import json
from pathlib import Path

import pytest

from ze_bench.scenario.domain.scenario import OracleSpec, Scenario
from ze_bench.tools.infrastructure.errors import OracleAnswersError
from ze_bench.tools.infrastructure.json_oracle import (
    DEFAULT_ANSWER,
    JsonOracle,
    resolve_oracle,
)
from tests.tools.fake_observer import FakeToolObserver

ANSWERS = {
    "should i upgrade react?": "Yes, upgrade to 19.",
    "major_version": "Major upgrades are allowed.",
    "peer-deps": "Keep peer dependencies untouched.",
}


def _make_oracle(
    answers: dict[str, str] | None = None,
) -> tuple[JsonOracle, FakeToolObserver]:
    observer = FakeToolObserver()
    return JsonOracle(answers=answers or ANSWERS, observer=observer), observer


class TestMatching:
    """Exact key, then fuzzy key containment, then the default answer."""

    def test_exact_match_ignores_case_and_whitespace(self) -> None:
        oracle, observer = _make_oracle()
        assert oracle.ask("  Should I upgrade React?  ") == "Yes, upgrade to 19."
        assert observer.answered[0].matched is True

    def test_key_contained_in_question(self) -> None:
        oracle, _ = _make_oracle()
        answer = oracle.ask("Is a major version bump acceptable here?")
        assert answer == "Major upgrades are allowed."

    def test_hyphenated_key_matches_spaced_question(self) -> None:
        oracle, _ = _make_oracle()
        assert oracle.ask("What about peer deps?") == (
            "Keep peer dependencies untouched."
        )

    def test_question_prefix_contained_in_key(self) -> None:
        oracle, _ = _make_oracle(
            answers={"can we drop node 16 support entirely": "Yes."}
        )
        assert oracle.ask("can we drop node 16 please") == "Yes."

    def test_unmatched_question_gets_default(self) -> None:
        oracle, observer = _make_oracle()
        assert oracle.ask("What colour is the sky?") == DEFAULT_ANSWER
        assert observer.answered[0].matched is False

    def test_every_question_is_logged(self) -> None:
        oracle, _ = _make_oracle()
        oracle.ask("What colour is the sky?")
        oracle.ask("should i upgrade react?")

        log = oracle.question_log()

        assert [qa.question for qa in log] == [
            "What colour is the sky?",
            "should i upgrade react?",
        ]
        assert log[0].answer == DEFAULT_ANSWER

    def test_question_log_is_a_copy(self) -> None:
        oracle, _ = _make_oracle()
        oracle.ask("anything")
        oracle.question_log().clear()
        assert len(oracle.question_log()) == 1


class TestFromFile:
    def test_loads_answers(self, tmp_path: Path) -> None:
        path = tmp_path / "answers.json"
        path.write_text(json.dumps(ANSWERS))

        oracle = JsonOracle.from_file(path=path, observer=FakeToolObserver())

        assert oracle.ask("should i upgrade react?") == "Yes, upgrade to 19."

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OracleAnswersError, match="file not found"):
            JsonOracle.from_file(path=tmp_path / "nope.json", observer=FakeToolObserver())

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "answers.json"
        path.write_text("{not json")
        with pytest.raises(OracleAnswersError, match="invalid JSON"):
            JsonOracle.from_file(path=path, observer=FakeToolObserver())

    def test_non_object_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "answers.json"
        path.write_text("[1, 2]")
        with pytest.raises(OracleAnswersError, match="object"):
            JsonOracle.from_file(path=path, observer=FakeToolObserver())

    def test_non_string_answer_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "answers.json"
        path.write_text('{"q": 1}')
        with pytest.raises(OracleAnswersError, match="strings"):
            JsonOracle.from_file(path=path, observer=FakeToolObserver())


class TestResolveOracle:
    """An oracle exists only when the scenario declares an existing answers file."""

    def _scenario(self, answers_file: str | None) -> Scenario:
        return Scenario(
            suite="pnpm",
            name="upgrade",
            oracle=OracleSpec(answers_file=answers_file) if answers_file else None,
        )

    def test_no_oracle_section(self, tmp_path: Path) -> None:
        assert (
            resolve_oracle(
                scenario=self._scenario(None),
                scenario_dir=tmp_path,
                observer=FakeToolObserver(),
            )
            is None
        )

    def test_declared_file_missing(self, tmp_path: Path) -> None:
        assert (
            resolve_oracle(
                scenario=self._scenario("answers.json"),
                scenario_dir=tmp_path,
                observer=FakeToolObserver(),
            )
            is None
        )

    def test_declared_file_present(self, tmp_path: Path) -> None:
        (tmp_path / "answers.json").write_text(json.dumps(ANSWERS))

        oracle = resolve_oracle(
            scenario=self._scenario("answers.json"),
            scenario_dir=tmp_path,
            observer=FakeToolObserver(),
        )

        assert oracle is not None

    def test_declared_file_invalid_raises(self, tmp_path: Path) -> None:
        (tmp_path / "answers.json").write_text("[]")
        with pytest.raises(OracleAnswersError):
            resolve_oracle(
                scenario=self._scenario("answers.json"),
                scenario_dir=tmp_path,
                observer=FakeToolObserver(),
            )
