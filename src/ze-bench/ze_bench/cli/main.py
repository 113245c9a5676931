"""CLI entrypoint for ze-bench — typer app with `run` and `tiers` commands."""

import asyncio
import sys
from functools import partial
from pathlib import Path

import structlog
import typer

from ze_bench.agent.application.session import AgentSession
from ze_bench.agent.infrastructure.factory import BackendAdapterFactory, parse_backend
from ze_bench.agent.infrastructure.observer import StructlogAgentObserver
from ze_bench.batch.application.scheduler import BatchScheduler
from ze_bench.batch.domain.observer import BatchObserver
from ze_bench.batch.domain.selection import BatchSelection
from ze_bench.batch.domain.summary import BatchSummary
from ze_bench.batch.infrastructure.composite_observer import CompositeBatchObserver
from ze_bench.batch.infrastructure.observer import StructlogBatchObserver
from ze_bench.batch.infrastructure.progress_observer import ProgressBatchObserver
from ze_bench.cli.output.report import print_summary
from ze_bench.config.domain.config import BenchConfig
from ze_bench.config.infrastructure.observer import StructlogConfigObserver
from ze_bench.config.infrastructure.yaml_loader import YamlConfigLoader
from ze_bench.core.errors import ZeBenchError
from ze_bench.diff.infrastructure.filesystem import FilesystemDiffCollector
from ze_bench.diff.infrastructure.observer import StructlogDiffObserver
from ze_bench.evaluation.infrastructure.observer import StructlogEvaluationObserver
from ze_bench.evaluation.infrastructure.pipeline import (
    EvaluatorPipeline,
    load_entry_point_evaluators,
)
from ze_bench.harness.application.context import HarnessContext
from ze_bench.harness.infrastructure.observer import StructlogHarnessObserver
from ze_bench.run.application.executor import RunExecutor
from ze_bench.run.infrastructure.memory_recorder import InMemoryRunRecorder
from ze_bench.run.infrastructure.observer import StructlogRunObserver
from ze_bench.scenario.infrastructure.observer import StructlogScenarioObserver
from ze_bench.scenario.infrastructure.yaml_loader import YamlScenarioLoader
from ze_bench.tools.application.bridge import ToolBridge
from ze_bench.tools.infrastructure.json_oracle import resolve_oracle
from ze_bench.tools.infrastructure.observer import StructlogToolObserver
from ze_bench.validation.application.runner import ValidationRunner
from ze_bench.validation.infrastructure.observer import StructlogValidationObserver
from ze_bench.workspace.application.provisioner import WorkspaceProvisioner
from ze_bench.workspace.infrastructure.observer import StructlogWorkspaceObserver

app = typer.Typer(add_completion=False)


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _load_config(config_path: Path | None) -> BenchConfig:
    loader = YamlConfigLoader(observer=StructlogConfigObserver())
    return loader.load(path=config_path)


def _build_scheduler(
    config: BenchConfig,
    recorder: InMemoryRunRecorder,
    harness: HarnessContext,
    show_progress: bool,
) -> BatchScheduler:
    """Wire every collaborator of a batch from config."""
    scenario_loader = YamlScenarioLoader(
        suites_dir=config.suites_dir, observer=StructlogScenarioObserver()
    )
    tool_observer = StructlogToolObserver()
    evaluation_observer = StructlogEvaluationObserver()
    executor = RunExecutor(
        scenario_loader=scenario_loader,
        provisioner=WorkspaceProvisioner(
            workspaces_root=harness.workspaces_root,
            scenario_loader=scenario_loader,
            observer=StructlogWorkspaceObserver(),
        ),
        session=AgentSession(
            adapter_factory=BackendAdapterFactory(config=config.agents),
            observer=StructlogAgentObserver(),
            max_turns=config.agents.max_turns,
            max_tokens=config.agents.max_tokens,
        ),
        tool_bridge=ToolBridge(observer=tool_observer),
        validation_runner=ValidationRunner(
            observer=StructlogValidationObserver(),
            timeout_seconds=config.execution.validation_timeout_seconds,
        ),
        diff_collector=FilesystemDiffCollector(observer=StructlogDiffObserver()),
        evaluators=EvaluatorPipeline(
            evaluators=load_entry_point_evaluators(observer=evaluation_observer),
            observer=evaluation_observer,
        ),
        recorder=recorder,
        observer=StructlogRunObserver(),
        oracle_resolver=partial(resolve_oracle, observer=tool_observer),
        harness=harness,
    )

    observers: list[BatchObserver] = [StructlogBatchObserver()]
    if show_progress:
        observers.append(ProgressBatchObserver())
    return BatchScheduler(
        executor=executor,
        recorder=recorder,
        scenario_loader=scenario_loader,
        observer=CompositeBatchObserver(observers=observers),
    )


async def _run_batch(
    scheduler: BatchScheduler, harness: HarnessContext, selection: BatchSelection
) -> BatchSummary:
    harness.start()
    harness.install_signal_handlers()
    try:
        return await scheduler.run(selection=selection)
    finally:
        harness.stop()


@app.command()
def run(
    suites: list[str] = typer.Option(
        ..., "--suite", "-s", help="Suite to run (repeatable)"
    ),
    scenarios: list[str] | None = typer.Option(
        None, "--scenario", help="Scenario to run (repeatable; default: all)"
    ),
    tiers: list[str] | None = typer.Option(
        None, "--tier", "-t", help="Difficulty tier, e.g. L1 (repeatable; default: all)"
    ),
    agents: list[str] | None = typer.Option(
        None,
        "--agent",
        "-a",
        help="Agent backend: echo, anthropic, openrouter, claude-code (repeatable)",
    ),
    models: list[str] | None = typer.Option(
        None, "--model", "-m", help="Model for model-using backends (repeatable)"
    ),
    max_concurrency: int | None = typer.Option(
        None, "--max-concurrency", min=1, help="Upper bound on concurrent runs"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to bench.yaml"
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Directory for batch output files"
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
) -> None:
    """Run a batch of benchmark combinations."""
    try:
        _configure_structlog(log_format=log_format)
        config = _load_config(config_path=config_path)

        selection = BatchSelection(
            suites=suites,
            scenarios=scenarios or [],
            tiers=tiers or [],
            agents=[parse_backend(name) for name in (agents or ["echo"])],
            models=models or [],
            max_concurrency=(
                max_concurrency
                if max_concurrency is not None
                else config.execution.max_concurrency
            ),
        )

        recorder = InMemoryRunRecorder()
        harness = HarnessContext(
            recorder=recorder,
            workspaces_root=config.workspaces_dir,
            observer=StructlogHarnessObserver(),
        )
        scheduler = _build_scheduler(
            config=config,
            recorder=recorder,
            harness=harness,
            show_progress=log_format != "json",
        )

        try:
            summary = asyncio.run(
                _run_batch(scheduler=scheduler, harness=harness, selection=selection)
            )
        except asyncio.CancelledError as exc:
            raise KeyboardInterrupt from exc

        json_path, jsonl_path = recorder.export_batch(
            batch_id=summary.batch.batch_id,
            output_dir=output_dir or config.results_dir,
            extra={
                "selection": selection.model_dump(mode="json"),
                "concurrency": summary.concurrency,
                "analytics": summary.analytics.model_dump(mode="json"),
            },
        )
        print_summary(summary=summary, json_path=json_path, jsonl_path=jsonl_path)

    except KeyboardInterrupt:
        typer.echo("Benchmark interrupted.")
        sys.exit(1)
    except ZeBenchError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except typer.Exit:
        raise
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)


@app.command("tiers")
def list_tiers(
    suite: str = typer.Option(..., "--suite", "-s", help="Suite to inspect"),
    scenario: str | None = typer.Option(
        None, "--scenario", help="Scenario to inspect (default: all)"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to bench.yaml"
    ),
) -> None:
    """List the difficulty tiers that have prompts, per scenario."""
    try:
        _configure_structlog(log_format="console")
        config = _load_config(config_path=config_path)
        loader = YamlScenarioLoader(
            suites_dir=config.suites_dir, observer=StructlogScenarioObserver()
        )
        names = [scenario] if scenario else loader.list_scenarios(suite=suite)
        if not names:
            typer.echo(f"No scenarios found for suite '{suite}'.")
            return
        for name in names:
            found = loader.available_tiers(suite=suite, scenario=name)
            typer.echo(f"{suite}/{name}: {', '.join(found) if found else '(none)'}")
    except ZeBenchError as exc:
        typer.echo(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    app()
