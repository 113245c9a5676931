"""Structlog implementation of the DiffObserver port."""

import structlog


class StructlogDiffObserver:
    """Delegates diff domain events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def diff_file_unreadable(self, path: str, reason: str) -> None:
        self._log.warning("diff.file_unreadable", path=path, reason=reason)

    def diff_collected(
        self, workspace_dir: str, files_changed: int, deps_changed: int
    ) -> None:
        self._log.info(
            "diff.collected",
            workspace_dir=workspace_dir,
            files_changed=files_changed,
            deps_changed=deps_changed,
        )
