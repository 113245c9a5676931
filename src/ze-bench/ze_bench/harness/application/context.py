"""HarnessContext — per-process owner of shared collaborators and active runs."""

import asyncio
import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ze_bench.core.errors import ZeBenchError
from ze_bench.harness.domain.observer import HarnessObserver
from ze_bench.run.domain.recorder import RunRecorder

_HANDLED_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


class HarnessContext:
    """Explicit lifecycle for what would otherwise be process-wide state.

    start() prepares the workspaces root; stop() uninstalls signal handlers
    and marks any run still active as incomplete. On SIGINT/SIGTERM every
    active run is marked incomplete and the task that installed the handlers
    is cancelled. Spawned subprocesses are not terminated.
    """

    def __init__(
        self,
        recorder: RunRecorder,
        workspaces_root: Path,
        observer: HarnessObserver,
    ) -> None:
        self.recorder = recorder
        self.workspaces_root = workspaces_root
        self._observer = observer
        self._lock = threading.Lock()
        self._active: set[str] = set()
        self._started = False
        self._interrupted = False
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def started(self) -> bool:
        return self._started

    @property
    def interrupted(self) -> bool:
        return self._interrupted

    def active_runs(self) -> list[str]:
        with self._lock:
            return sorted(self._active)

    def start(self) -> None:
        self.workspaces_root.mkdir(parents=True, exist_ok=True)
        self._started = True
        self._observer.harness_started(workspaces_root=str(self.workspaces_root))

    def stop(self) -> None:
        self._remove_signal_handlers()
        abandoned = self._mark_active_incomplete(reason="harness stopped")
        self._started = False
        self._observer.harness_stopped(abandoned_runs=abandoned)

    @contextmanager
    def track(self, run_id: str) -> Iterator[None]:
        """Register run_id as active for the duration of the block."""
        with self._lock:
            self._active.add(run_id)
        try:
            yield
        finally:
            with self._lock:
                self._active.discard(run_id)

    def install_signal_handlers(self) -> None:
        """Route SIGINT/SIGTERM through interrupt(); call from inside the event loop."""
        loop = asyncio.get_running_loop()
        main_task = asyncio.current_task()
        for sig in _HANDLED_SIGNALS:
            loop.add_signal_handler(sig, self.interrupt, sig, main_task)
        self._loop = loop

    def interrupt(
        self, sig: signal.Signals, task: asyncio.Task[object] | None = None
    ) -> None:
        self._interrupted = True
        self._observer.harness_interrupted(
            signal_name=sig.name, active_runs=len(self.active_runs())
        )
        self._mark_active_incomplete(reason=f"interrupted by {sig.name}")
        if task is not None:
            task.cancel()

    def _mark_active_incomplete(self, reason: str) -> int:
        with self._lock:
            active = sorted(self._active)
            self._active.clear()
        marked = 0
        for run_id in active:
            try:
                self.recorder.mark_run_incomplete(run_id=run_id, reason=reason)
            except ZeBenchError:
                # Already terminal or unknown; nothing left to record.
                continue
            marked += 1
        return marked

    def _remove_signal_handlers(self) -> None:
        if self._loop is None or self._loop.is_closed():
            self._loop = None
            return
        for sig in _HANDLED_SIGNALS:
            self._loop.remove_signal_handler(sig)
        self._loop = None
