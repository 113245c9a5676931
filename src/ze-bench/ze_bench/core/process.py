"""Shell subprocess helpers shared by validation commands and the runCommand tool.

Each command runs as the leader of its own process group, so a timeout kills
the shell together with everything it started (``a; b``, ``a && b``, pipelines)
and the output pipes close without waiting for stray children.
"""

import asyncio
import os
import signal
from contextlib import suppress
from pathlib import Path


async def spawn_shell(
    command: str, cwd: Path, env: dict[str, str] | None = None
) -> asyncio.subprocess.Process:
    """Start ``command`` under the system shell in a new session.

    Raises:
        OSError: if the shell cannot be started (e.g. ``cwd`` is missing).
    """
    return await asyncio.create_subprocess_shell(
        command,
        cwd=cwd,
        env=env,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        start_new_session=True,
    )


async def communicate_within(
    proc: asyncio.subprocess.Process, timeout_seconds: float
) -> tuple[bytes, bytes, bool]:
    """Collect stdout and stderr, killing the process group at the deadline.

    Returns ``(stdout, stderr, timed_out)``; on timeout the output is whatever
    was written before the kill.
    """
    try:
        raw_out, raw_err = await asyncio.wait_for(
            proc.communicate(), timeout=timeout_seconds
        )
    except TimeoutError:
        kill_process_group(proc=proc)
        raw_out, raw_err = await proc.communicate()
        return raw_out, raw_err, True
    return raw_out, raw_err, False


def kill_process_group(proc: asyncio.subprocess.Process) -> None:
    # The group is gone once every member has exited.
    with suppress(ProcessLookupError):
        os.killpg(proc.pid, signal.SIGKILL)
