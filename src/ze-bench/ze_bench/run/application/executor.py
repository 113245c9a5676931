"""RunExecutor — sequences one combination through its full run lifecycle."""

import asyncio
import time
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path
from typing import Literal, NoReturn

from ze_bench.agent.application.session import AgentSession
from ze_bench.agent.domain.backend import AgentBackend
from ze_bench.diff.domain.collector import DiffCollector
from ze_bench.diff.domain.diff import DiffArtifacts
from ze_bench.evaluation.domain.context import EvaluationContext, EvaluationOutcome
from ze_bench.evaluation.domain.evaluator import Evaluators
from ze_bench.evaluation.infrastructure.errors import DiffOrEvaluationError
from ze_bench.harness.application.context import HarnessContext
from ze_bench.run.domain.combination import BenchmarkCombination
from ze_bench.run.domain.observer import RunObserver
from ze_bench.run.domain.recorder import RunRecorder
from ze_bench.run.domain.run import (
    DegradedStage,
    RunMetadata,
    RunRecord,
    RunTelemetry,
)
from ze_bench.run.infrastructure.errors import PromptMissingError, RunFinalizedError
from ze_bench.scenario.domain.loader import ScenarioLoader
from ze_bench.scenario.domain.scenario import Scenario
from ze_bench.scenario.infrastructure.errors import ScenarioLoadError
from ze_bench.scoring.application.aggregator import (
    average_score,
    compute_weighted_total,
)
from ze_bench.scoring.domain.score import default_score_card
from ze_bench.tools.application.bridge import ToolBridge
from ze_bench.tools.domain.oracle import OracleResolver
from ze_bench.tools.infrastructure.errors import OracleAnswersError
from ze_bench.validation.application.runner import ValidationRunner
from ze_bench.validation.domain.command import CommandResult
from ze_bench.workspace.application.provisioner import WorkspaceProvisioner
from ze_bench.workspace.infrastructure.errors import WorkspaceProvisionError


def _no_oracle(scenario: Scenario, scenario_dir: Path) -> None:
    return None


class _RunAborted(Exception):
    """Internal signal: the run has been failed and the remaining stages are skipped."""


class RunExecutor:
    """Turns one BenchmarkCombination into a finished RunRecord.

    Stage order: scenario/prompt, workspace, agent, validation, diff,
    evaluation, scoring. Prompt, workspace and agent failures fail the run.
    Diff and evaluation failures are recorded as DegradedStage entries and the
    run still completes. execute() never raises: anything unexpected fails
    the run with stage ``unknown``.
    """

    def __init__(
        self,
        scenario_loader: ScenarioLoader,
        provisioner: WorkspaceProvisioner,
        session: AgentSession,
        tool_bridge: ToolBridge,
        validation_runner: ValidationRunner,
        diff_collector: DiffCollector,
        evaluators: Evaluators,
        recorder: RunRecorder,
        observer: RunObserver,
        oracle_resolver: OracleResolver = _no_oracle,
        harness: HarnessContext | None = None,
    ) -> None:
        self._scenario_loader = scenario_loader
        self._provisioner = provisioner
        self._session = session
        self._tool_bridge = tool_bridge
        self._validation_runner = validation_runner
        self._diff_collector = diff_collector
        self._evaluators = evaluators
        self._recorder = recorder
        self._observer = observer
        self._oracle_resolver = oracle_resolver
        self._harness = harness

    async def execute(
        self, combination: BenchmarkCombination, batch_id: str | None = None
    ) -> RunRecord:
        record = self._recorder.start_run(combination=combination, batch_id=batch_id)
        run_id = record.run_id
        self._observer.run_started(
            run_id=run_id, label=combination.label, batch_id=batch_id
        )

        tracking: AbstractContextManager[None] = (
            self._harness.track(run_id) if self._harness is not None else nullcontext()
        )
        with tracking:
            try:
                await self._run_stages(run_id=run_id, combination=combination)
            except _RunAborted:
                pass
            except Exception as exc:
                self._fail(
                    run_id=run_id,
                    stage="unknown",
                    reason=f"{type(exc).__name__}: {exc}",
                )
        return self._recorder.get_run(run_id=run_id)

    async def _run_stages(
        self, run_id: str, combination: BenchmarkCombination
    ) -> None:
        started = time.monotonic()
        suite, scenario_name = combination.suite, combination.scenario

        self._observer.run_stage_entered(run_id=run_id, stage="scenario")
        try:
            scenario = self._scenario_loader.load(suite=suite, scenario=scenario_name)
        except ScenarioLoadError as exc:
            self._abort(run_id=run_id, stage="scenario", reason=str(exc))
        prompt = self._scenario_loader.load_prompt(
            suite=suite, scenario=scenario_name, tier=combination.tier
        )
        uses_agent = combination.agent is not AgentBackend.ECHO
        if prompt is None and uses_agent:
            error = PromptMissingError(
                suite=suite, scenario=scenario_name, tier=combination.tier
            )
            self._abort(run_id=run_id, stage="prompt", reason=str(error))

        self._observer.run_stage_entered(run_id=run_id, stage="workspace")
        workspace = await self._provisioner.prepare(suite=suite, scenario=scenario_name)
        if workspace is None:
            error = WorkspaceProvisionError(
                suite=suite,
                scenario=scenario_name,
                reason="fixture missing or copy failed",
            )
            self._abort(run_id=run_id, stage="workspace", reason=str(error))
        workspace_dir = workspace.workspace_dir

        agent_response: str | None = None
        if prompt is not None and uses_agent:
            self._observer.run_stage_entered(run_id=run_id, stage="agent")
            agent_response = await self._run_agent(
                run_id=run_id,
                combination=combination,
                scenario=scenario,
                workspace_dir=workspace_dir,
                prompt=prompt,
            )
        else:
            self._recorder.log_telemetry(
                run_id=run_id, telemetry=RunTelemetry(workspace_dir=workspace_dir)
            )

        self._observer.run_stage_entered(run_id=run_id, stage="validation")
        command_log = await self._validation_runner.run(
            workspace_dir=workspace_dir, commands=scenario.validation.commands
        )

        degraded: list[DegradedStage] = []
        self._observer.run_stage_entered(run_id=run_id, stage="diff")
        diff = await self._collect_diff(
            run_id=run_id,
            fixture_dir=workspace.fixture_dir,
            workspace_dir=workspace_dir,
            degraded=degraded,
        )

        self._observer.run_stage_entered(run_id=run_id, stage="evaluation")
        outcome = await self._evaluate(
            run_id=run_id,
            context=EvaluationContext(
                scenario=scenario,
                workspace_dir=workspace_dir,
                agent_response=agent_response,
                command_log=command_log,
                diff_summary=diff.diff_summary if diff is not None else [],
                deps_delta=diff.deps_delta if diff is not None else [],
            ),
            degraded=degraded,
        )

        self._complete(
            run_id=run_id,
            combination=combination,
            scenario=scenario,
            outcome=outcome,
            command_log=command_log,
            degraded=degraded,
            diff=diff,
            duration_ms=int((time.monotonic() - started) * 1000),
        )

    async def _run_agent(
        self,
        run_id: str,
        combination: BenchmarkCombination,
        scenario: Scenario,
        workspace_dir: Path,
        prompt: str,
    ) -> str:
        scenario_dir = self._scenario_loader.scenario_dir(
            suite=combination.suite, scenario=combination.scenario
        )
        try:
            oracle = self._oracle_resolver(scenario, scenario_dir)
        except OracleAnswersError as exc:
            self._abort(run_id=run_id, stage="oracle", reason=str(exc))
        toolkit = self._tool_bridge.build(workspace_dir=workspace_dir, oracle=oracle)

        result = await self._session.run(
            combination=combination,
            workspace_dir=workspace_dir,
            prompt_text=prompt,
            toolkit=toolkit,
        )
        if result.error is not None:
            self._abort(run_id=run_id, stage="agent", reason=str(result.error))
        assert result.response is not None  # error is None

        telemetry = RunTelemetry(
            tool_calls=result.response.tool_calls,
            tokens_in=result.response.tokens_in,
            tokens_out=result.response.tokens_out,
            cost_usd=result.response.cost_usd,
            duration_ms=result.duration_ms,
            workspace_dir=workspace_dir,
            prompt_sent=result.prompt_sent,
        )
        self._recorder.log_telemetry(
            run_id=run_id, telemetry=telemetry, question_log=toolkit.question_log()
        )
        return result.response.content

    async def _collect_diff(
        self,
        run_id: str,
        fixture_dir: Path,
        workspace_dir: Path,
        degraded: list[DegradedStage],
    ) -> DiffArtifacts | None:
        try:
            return await asyncio.to_thread(
                self._diff_collector.build,
                fixture_dir=fixture_dir,
                workspace_dir=workspace_dir,
            )
        except Exception as exc:
            self._degrade(
                run_id=run_id,
                stage="diff",
                reason=f"{type(exc).__name__}: {exc}",
                degraded=degraded,
            )
            return None

    async def _evaluate(
        self,
        run_id: str,
        context: EvaluationContext,
        degraded: list[DegradedStage],
    ) -> EvaluationOutcome:
        try:
            outcome = await self._evaluators.run(context)
        except DiffOrEvaluationError as exc:
            self._degrade(
                run_id=run_id, stage="evaluation", reason=exc.reason, degraded=degraded
            )
            return EvaluationOutcome()
        except Exception as exc:
            self._degrade(
                run_id=run_id,
                stage="evaluation",
                reason=f"{type(exc).__name__}: {exc}",
                degraded=degraded,
            )
            return EvaluationOutcome()

        for result in outcome.results:
            self._recorder.log_evaluation(run_id=run_id, result=result)
        return outcome

    def _complete(
        self,
        run_id: str,
        combination: BenchmarkCombination,
        scenario: Scenario,
        outcome: EvaluationOutcome,
        command_log: list[CommandResult],
        degraded: list[DegradedStage],
        diff: DiffArtifacts | None,
        duration_ms: int,
    ) -> None:
        score_card = {**default_score_card(), **outcome.score_card}
        weighted_total = compute_weighted_total(
            score_card=score_card,
            weight_overrides=scenario.rubric_overrides.weights,
        )
        self._recorder.complete_run(
            run_id=run_id,
            total_score=average_score(score_card=score_card),
            weighted_total=weighted_total,
            metadata=RunMetadata(
                score_card=score_card,
                command_log=command_log,
                degraded_stages=degraded,
                diff=diff,
            ),
        )
        self._observer.run_completed(
            run_id=run_id,
            label=combination.label,
            weighted=weighted_total.weighted,
            duration_ms=duration_ms,
        )

    def _degrade(
        self,
        run_id: str,
        stage: Literal["diff", "evaluation"],
        reason: str,
        degraded: list[DegradedStage],
    ) -> None:
        degraded.append(DegradedStage(stage=stage, reason=reason))
        self._observer.run_degraded(run_id=run_id, stage=stage, reason=reason)

    def _abort(self, run_id: str, stage: str, reason: str) -> NoReturn:
        self._fail(run_id=run_id, stage=stage, reason=reason)
        raise _RunAborted()

    def _fail(self, run_id: str, stage: str, reason: str) -> None:
        try:
            self._recorder.fail_run(run_id=run_id, stage=stage, reason=reason)
        except RunFinalizedError:
            # Marked incomplete by an interrupt while this stage was running.
            return
        self._observer.run_failed(run_id=run_id, stage=stage, reason=reason)
