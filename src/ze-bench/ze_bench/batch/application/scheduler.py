"""BatchScheduler — fans combinations out over a bounded pool of workers."""

import asyncio
import time
from collections import Counter

from ze_bench.batch.application.concurrency import select_concurrency
from ze_bench.batch.application.expander import expand_combinations
from ze_bench.batch.application.stats import (
    compute_batch_analytics,
    compute_batch_stats,
)
from ze_bench.batch.domain.observer import BatchObserver
from ze_bench.batch.domain.selection import BatchSelection
from ze_bench.batch.domain.summary import BatchSummary
from ze_bench.run.application.executor import RunExecutor
from ze_bench.run.domain.combination import BenchmarkCombination
from ze_bench.run.domain.recorder import BatchRecorder
from ze_bench.scenario.domain.loader import ScenarioLoader


def agent_label(combination: BenchmarkCombination) -> str:
    if combination.model:
        return f"{combination.agent.value}:{combination.model}"
    return combination.agent.value


class BatchScheduler:
    """Runs every combination of a selection as one batch.

    A fixed number of worker tasks, chosen by select_concurrency(), drain a
    shared queue inside a TaskGroup. Completion order is unspecified.
    RunExecutor never raises, so one run's failure cannot stop its siblings.
    """

    def __init__(
        self,
        executor: RunExecutor,
        recorder: BatchRecorder,
        scenario_loader: ScenarioLoader,
        observer: BatchObserver,
    ) -> None:
        self._executor = executor
        self._recorder = recorder
        self._scenario_loader = scenario_loader
        self._observer = observer

    async def run(self, selection: BatchSelection) -> BatchSummary:
        combinations = expand_combinations(
            selection=selection,
            scenario_loader=self._scenario_loader,
            observer=self._observer,
        )
        concurrency = select_concurrency(
            num_combinations=len(combinations),
            max_concurrency=selection.max_concurrency,
        )
        batch = self._recorder.start_batch()
        batch_id = batch.batch_id
        self._observer.batch_started(
            batch_id=batch_id,
            total_runs=len(combinations),
            concurrency=concurrency,
            agent_totals=dict(Counter(agent_label(c) for c in combinations)),
        )
        started = time.monotonic()

        queue: asyncio.Queue[BenchmarkCombination] = asyncio.Queue()
        for combination in combinations:
            queue.put_nowait(combination)
        worker_count = min(concurrency or 1, len(combinations))
        async with asyncio.TaskGroup() as tg:
            for _ in range(worker_count):
                tg.create_task(self._worker(queue=queue, batch_id=batch_id))

        duration_ms = int((time.monotonic() - started) * 1000)
        details = self._recorder.get_batch_details(batch_id=batch_id)
        stats = compute_batch_stats(runs=details.runs, duration_ms=duration_ms)
        completed = self._recorder.complete_batch(batch_id=batch_id, stats=stats)
        self._observer.batch_completed(
            batch_id=batch_id,
            total_runs=stats.total_runs,
            successful_runs=stats.successful_runs,
            avg_weighted_score=stats.avg_weighted_score,
            duration_ms=duration_ms,
        )
        return BatchSummary(
            batch=completed,
            selection=selection,
            concurrency=concurrency,
            runs=details.runs,
            analytics=compute_batch_analytics(runs=details.runs),
        )

    async def _worker(
        self, queue: asyncio.Queue[BenchmarkCombination], batch_id: str
    ) -> None:
        while True:
            try:
                combination = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            label = agent_label(combination)
            self._observer.batch_run_started(
                batch_id=batch_id, label=combination.label, agent_label=label
            )
            record = await self._executor.execute(
                combination=combination, batch_id=batch_id
            )
            self._observer.batch_run_finished(
                batch_id=batch_id,
                label=combination.label,
                agent_label=label,
                status=record.status.value,
                weighted=(
                    record.weighted_total.weighted
                    if record.weighted_total is not None
                    else None
                ),
            )
            queue.task_done()
