"""DiffObserver port — domain events emitted while diffing a workspace."""

from typing import Protocol


class DiffObserver(Protocol):
    def diff_file_unreadable(self, path: str, reason: str) -> None: ...

    def diff_collected(
        self, workspace_dir: str, files_changed: int, deps_changed: int
    ) -> None: ...
