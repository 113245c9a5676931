"""FakeDiffCollector — returns canned diff artifacts or raises."""

from pathlib import Path

from ze_bench.diff.domain.diff import DiffArtifacts


class FakeDiffCollector:
    def __init__(
        self,
        artifacts: DiffArtifacts | None = None,
        error: Exception | None = None,
    ) -> None:
        self._artifacts = artifacts or DiffArtifacts()
        self._error = error
        self.calls: list[tuple[Path, Path]] = []

    def build(self, fixture_dir: Path, workspace_dir: Path) -> DiffArtifacts:
        self.calls.append((fixture_dir, workspace_dir))
        if self._error is not None:
            raise self._error
        return self._artifacts
