"""ProgressBatchObserver — renders per-agent Rich progress bars to stderr."""

from __future__ import annotations

import sys

from rich.console import Console, Group
from rich.live import Live
from rich.progress import (
    Progress,
    ProgressColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

_OVERALL = "Overall"

# Rich markup colours cycled over agent rows.
_AGENT_COLORS: list[str] = [
    "cyan",
    "green",
    "yellow",
    "magenta",
    "blue",
]


class _CountsColumn(ProgressColumn):
    """Renders done+inflight/total, with failures appended in red."""

    def render(self, task: Task) -> Text:
        done = int(task.fields.get("done", 0))
        inflight = int(task.fields.get("inflight", 0))
        failed = int(task.fields.get("failed", 0))
        total = int(task.total or 0)
        text = Text.assemble(
            (str(done), "bright_green"),
            ("+", "dim white"),
            (str(inflight), "grey50"),
            ("/", "dim white"),
            (str(total), "default"),
        )
        if failed:
            text.append(f" ({failed} failed)", style="red")
        return text


class _ThreeSegmentBarColumn(ProgressColumn):
    """Three segments: done, in-flight, remaining."""

    def __init__(self, bar_width: int = 40) -> None:
        super().__init__()
        self.bar_width = bar_width

    def render(self, task: Task) -> Text:
        bar_width = self.bar_width or 40
        total = task.total or 0
        if total > 0:
            done_cells = int(task.completed / total * bar_width)
            inflight = int(task.fields.get("inflight", 0))
            # In-flight fills from where done ends, capped at the bar width.
            inflight_cells = min(
                int(inflight / total * bar_width),
                bar_width - done_cells,
            )
        else:
            done_cells = 0
            inflight_cells = 0
        remaining_cells = bar_width - done_cells - inflight_cells

        result = Text()
        result.append("█" * done_cells, style="bright_green")
        result.append("▒" * inflight_cells, style="grey50")
        result.append("░" * remaining_cells, style="dim white")
        return result


def _make_progress(console: Console) -> Progress:
    return Progress(
        TextColumn("{task.description}"),
        _ThreeSegmentBarColumn(bar_width=40),
        _CountsColumn(),
        TimeElapsedColumn(),
        console=console,
        refresh_per_second=10,
        transient=False,
    )


class ProgressBatchObserver:
    """Renders one progress row per agent label plus an Overall row on stderr.

    Only batch_started, batch_run_started, batch_run_finished and
    batch_completed produce output; other events are no-ops.

    Pass ``disabled=True`` to keep the counters without any terminal output
    (useful in tests).

    Does NOT inherit from BatchObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._done: dict[str, int] = {}
        self._inflight: dict[str, int] = {}
        self._failed: dict[str, int] = {}
        self._task_ids: dict[str, TaskID] = {}
        self._overall_progress: Progress | None = None
        self._agent_progress: Progress | None = None
        self._live: Live | None = None

    @property
    def done(self) -> dict[str, int]:
        return dict(self._done)

    @property
    def inflight(self) -> dict[str, int]:
        return dict(self._inflight)

    @property
    def failed(self) -> dict[str, int]:
        return dict(self._failed)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _make_desc(self, name: str, index: int, pad_width: int) -> str:
        if name == _OVERALL:
            return f"[bold]{_OVERALL:<{pad_width}}[/bold]"
        if sys.stderr.isatty():
            color = _AGENT_COLORS[index % len(_AGENT_COLORS)]
            return f"[{color}]{name:<{pad_width}}[/{color}]"
        return f"{name:<{pad_width}}"

    def _progress_for(self, key: str) -> Progress | None:
        if key == _OVERALL:
            return self._overall_progress
        return self._agent_progress

    def _update_task(self, key: str) -> None:
        progress = self._progress_for(key=key)
        if progress is None or key not in self._task_ids:
            return
        done = self._done.get(key, 0)
        progress.update(
            self._task_ids[key],
            completed=done,
            done=done,
            inflight=self._inflight.get(key, 0),
            failed=self._failed.get(key, 0),
        )

    def _reset(self) -> None:
        self._done = {}
        self._inflight = {}
        self._failed = {}
        self._task_ids = {}
        self._overall_progress = None
        self._agent_progress = None
        self._live = None

    # ------------------------------------------------------------------
    # Observer events
    # ------------------------------------------------------------------

    def batch_scenario_skipped(self, suite: str, scenario: str, reason: str) -> None:
        pass

    def batch_started(
        self,
        batch_id: str,
        total_runs: int,
        concurrency: int | None,
        agent_totals: dict[str, int],
    ) -> None:
        self._reset()
        names = sorted(agent_totals)
        for name in [*names, _OVERALL]:
            self._done[name] = 0
            self._inflight[name] = 0
            self._failed[name] = 0

        if self._disabled:
            return

        pad_width = max((len(name) for name in [*names, _OVERALL]), default=0)
        console = Console(stderr=True)
        legend = Text.assemble(
            "  Legend:  ",
            ("█", "bright_green"),
            " done  ",
            ("▒", "grey50"),
            " in-flight  ",
            ("░", "dim white"),
            " remaining",
        )

        self._overall_progress = _make_progress(console=console)
        self._agent_progress = _make_progress(console=console)

        self._task_ids[_OVERALL] = self._overall_progress.add_task(
            description=self._make_desc(name=_OVERALL, index=0, pad_width=pad_width),
            total=float(total_runs),
            inflight=0,
            done=0,
            failed=0,
        )
        for i, name in enumerate(names):
            self._task_ids[name] = self._agent_progress.add_task(
                description=self._make_desc(name=name, index=i, pad_width=pad_width),
                total=float(agent_totals[name]),
                inflight=0,
                done=0,
                failed=0,
            )

        renderable = Group(
            self._overall_progress,
            Text(""),
            self._agent_progress,
            Text(""),
            legend,
        )
        self._live = Live(renderable, console=console, refresh_per_second=10)
        self._live.start()

    def batch_run_started(self, batch_id: str, label: str, agent_label: str) -> None:
        for key in (agent_label, _OVERALL):
            if key in self._inflight:
                self._inflight[key] += 1
            if not self._disabled:
                self._update_task(key=key)

    def batch_run_finished(
        self,
        batch_id: str,
        label: str,
        agent_label: str,
        status: str,
        weighted: float | None,
    ) -> None:
        for key in (agent_label, _OVERALL):
            if key in self._done:
                self._done[key] += 1
                self._inflight[key] = max(0, self._inflight[key] - 1)
                if status != "completed":
                    self._failed[key] += 1
            if not self._disabled:
                self._update_task(key=key)

    def batch_completed(
        self,
        batch_id: str,
        total_runs: int,
        successful_runs: int,
        avg_weighted_score: float | None,
        duration_ms: int,
    ) -> None:
        if self._live is not None:
            self._live.stop()
        self._reset()
