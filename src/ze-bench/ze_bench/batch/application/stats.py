"""Batch statistics and breakdowns derived from a batch's run records."""

from collections import Counter
from statistics import fmean

from ze_bench.agent.domain.backend import AgentBackend
from ze_bench.batch.domain.analytics import (
    AgentPerformance,
    BatchAnalytics,
    FailureCount,
    ScenarioBreakdown,
)
from ze_bench.batch.domain.batch import BatchStats
from ze_bench.run.domain.run import RunRecord, RunStatus

type ScenarioKey = tuple[str, str]  # (suite, scenario)
type AgentKey = tuple[AgentBackend, str | None]  # (agent, model)


def compute_batch_stats(runs: list[RunRecord], duration_ms: int) -> BatchStats:
    """Every run counts toward total_runs; only completed runs feed the averages."""
    completed = [run for run in runs if run.status is RunStatus.COMPLETED]
    scores = [run.total_score for run in completed if run.total_score is not None]
    return BatchStats(
        total_runs=len(runs),
        successful_runs=len(completed),
        avg_score=round(fmean(scores), 4) if scores else None,
        avg_weighted_score=_avg_weighted(runs=completed),
        duration_ms=duration_ms,
    )


def compute_batch_analytics(runs: list[RunRecord]) -> BatchAnalytics:
    """Group a batch's runs by failure stage, by scenario and by agent/model."""
    return BatchAnalytics(
        failure_breakdown=failure_breakdown(runs=runs),
        scenario_breakdown=scenario_breakdown(runs=runs),
        agent_performance=agent_performance(runs=runs),
    )


def failure_breakdown(runs: list[RunRecord]) -> list[FailureCount]:
    """Count failed and incomplete runs per stage, most frequent first."""
    counts = Counter(
        run.failure.stage
        for run in runs
        if run.status is not RunStatus.COMPLETED and run.failure is not None
    )
    return [
        FailureCount(stage=stage, count=count)
        for stage, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    ]


def scenario_breakdown(runs: list[RunRecord]) -> list[ScenarioBreakdown]:
    """One entry per (suite, scenario), sorted by suite then scenario."""
    groups: dict[ScenarioKey, list[RunRecord]] = {}
    for run in runs:
        key: ScenarioKey = (run.combination.suite, run.combination.scenario)
        groups.setdefault(key, []).append(run)

    return [
        ScenarioBreakdown(
            suite=suite,
            scenario=scenario,
            runs=len(group_runs),
            successful_runs=_count_completed(runs=group_runs),
            avg_weighted_score=_avg_weighted(runs=group_runs),
        )
        for (suite, scenario), group_runs in sorted(groups.items())
    ]


def agent_performance(runs: list[RunRecord]) -> list[AgentPerformance]:
    """One entry per (agent, model), ranked by average weighted score.

    Groups without a scored run rank last; ties keep first-seen order.
    """
    groups: dict[AgentKey, list[RunRecord]] = {}
    for run in runs:
        key: AgentKey = (run.combination.agent, run.combination.model)
        groups.setdefault(key, []).append(run)

    entries = [
        AgentPerformance(
            agent=agent,
            model=model,
            runs=len(group_runs),
            successful_runs=_count_completed(runs=group_runs),
            avg_weighted_score=_avg_weighted(runs=group_runs),
        )
        for (agent, model), group_runs in groups.items()
    ]
    return sorted(
        entries,
        key=lambda entry: (
            entry.avg_weighted_score is None,
            -(entry.avg_weighted_score or 0.0),
        ),
    )


def _count_completed(runs: list[RunRecord]) -> int:
    return sum(1 for run in runs if run.status is RunStatus.COMPLETED)


def _avg_weighted(runs: list[RunRecord]) -> float | None:
    weighted = [
        run.weighted_total.weighted
        for run in runs
        if run.status is RunStatus.COMPLETED and run.weighted_total is not None
    ]
    return round(fmean(weighted), 4) if weighted else None
