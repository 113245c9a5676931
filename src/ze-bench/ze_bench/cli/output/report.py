"""Terminal summary of a finished batch."""

from pathlib import Path

import typer

from ze_bench.batch.domain.analytics import BatchAnalytics
from ze_bench.batch.domain.summary import BatchSummary
from ze_bench.run.domain.run import RunRecord, RunStatus

# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_WHITE = "\033[97m"

# Labels longer than this are truncated in the run table.
_MAX_LABEL_LEN = 56


def _score_color(weighted: float) -> str:
    if weighted >= 7.0:
        return _GREEN
    if weighted >= 4.0:
        return _YELLOW
    return _RED


def _status_color(status: RunStatus) -> str:
    match status:
        case RunStatus.COMPLETED:
            return _GREEN
        case RunStatus.FAILED:
            return _RED
        case _:
            return _YELLOW


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _truncate(name: str, max_len: int = _MAX_LABEL_LEN) -> str:
    if len(name) <= max_len:
        return name
    return name[: max_len - 1] + "…"


def format_elapsed(elapsed_ms: int) -> str:
    """Format milliseconds as '1m 23.4s' or '5.2s'."""
    elapsed_seconds = elapsed_ms / 1000
    minutes, seconds = divmod(elapsed_seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{elapsed_seconds:.1f}s"


def _run_detail(run: RunRecord) -> str:
    if run.failure is not None:
        return f"{run.failure.stage}: {run.failure.reason}"
    if run.degraded_stages:
        return "degraded: " + ", ".join(d.stage for d in run.degraded_stages)
    return ""


def _format_avg(avg: float | None) -> str:
    if avg is None:
        return f"{_DIM}--{_RESET}/10"
    return f"{_score_color(weighted=avg)}{avg:.2f}{_RESET}/10"


def _print_analytics(analytics: BatchAnalytics) -> None:
    if analytics.failure_breakdown:
        reasons = ", ".join(
            f"{entry.stage}: {entry.count}" for entry in analytics.failure_breakdown
        )
        typer.echo(f"  {_BOLD}Failure reasons{_RESET} {_RED}{reasons}{_RESET}")

    if analytics.scenario_breakdown:
        typer.echo("")
        typer.echo(f"  {_BOLD}Scenario breakdown{_RESET}")
        for entry in analytics.scenario_breakdown:
            typer.echo(
                f"    {_CYAN}{entry.suite}{_RESET}/{entry.scenario}:"
                f" {_format_avg(avg=entry.avg_weighted_score)}"
                f" {_DIM}({entry.success_rate:.0%} success,"
                f" {entry.runs} runs){_RESET}"
            )

    if analytics.agent_performance:
        typer.echo("")
        typer.echo(f"  {_BOLD}Agent performance{_RESET}")
        for rank, entry in enumerate(analytics.agent_performance, start=1):
            typer.echo(
                f"    #{rank} {_CYAN}{entry.label}{_RESET}:"
                f" {_format_avg(avg=entry.avg_weighted_score)}"
                f" {_DIM}({entry.successful_runs}/{entry.runs} runs){_RESET}"
            )


def print_summary(summary: BatchSummary, json_path: Path, jsonl_path: Path) -> None:
    """Print a colorized batch summary: metadata, run rows, averages, breakdowns."""
    batch = summary.batch
    stats = batch.stats

    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  ze-bench  ·  Batch Complete{_RESET}")
    _rule(color=_CYAN)
    typer.echo("")

    meta_rows: list[tuple[str, str]] = [
        ("Batch ID", batch.batch_id),
        ("Suites", ", ".join(summary.selection.suites)),
        ("Agents", ", ".join(a.value for a in summary.selection.agents)),
        (
            "Concurrency",
            str(summary.concurrency) if summary.concurrency else "sequential",
        ),
        ("Total runs", str(stats.total_runs if stats else len(summary.runs))),
        ("Elapsed", format_elapsed(elapsed_ms=stats.duration_ms if stats else 0)),
        ("Batch JSON", str(json_path)),
        ("Runs JSONL", str(jsonl_path)),
    ]
    label_w = max(len(label) for label, _ in meta_rows)
    for label, value in meta_rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")

    if summary.runs:
        typer.echo("")
        width = min(
            max(len(run.combination.label) for run in summary.runs), _MAX_LABEL_LEN
        )
        typer.echo(
            f"  {_DIM}{'Run':<{width}}  {'Status':<10}  {'Score':>6}  Detail{_RESET}"
        )
        typer.echo(f"  {'─' * width}  {'─' * 10}  {'─' * 6}  {'─' * 10}")
        for run in sorted(summary.runs, key=lambda r: r.combination.label):
            color = _status_color(status=run.status)
            if run.weighted_total is not None:
                weighted = run.weighted_total.weighted
                score = f"{_score_color(weighted=weighted)}{weighted:>6.2f}{_RESET}"
            else:
                score = f"{_DIM}{'--':>6}{_RESET}"
            typer.echo(
                f"  {_WHITE}{_truncate(run.combination.label):<{width}}{_RESET}"
                f"  {color}{run.status.value:<10}{_RESET}"
                f"  {score}"
                f"  {_DIM}{_run_detail(run=run)}{_RESET}"
            )

    if stats is not None:
        typer.echo("")
        avg = (
            f"{stats.avg_weighted_score:.2f}/10"
            if stats.avg_weighted_score is not None
            else "--"
        )
        typer.echo(
            f"  {_BOLD}Successful{_RESET} {stats.successful_runs}/{stats.total_runs}"
            f"   {_BOLD}Avg weighted{_RESET} {avg}"
        )

    _print_analytics(analytics=summary.analytics)

    typer.echo("")
    _rule(color=_CYAN)
    typer.echo("")
