"""DiffCollector Protocol — compares a fixture tree against a workspace."""

from pathlib import Path
from typing import Protocol

from ze_bench.diff.domain.diff import DiffArtifacts


class DiffCollector(Protocol):
    def build(self, fixture_dir: Path, workspace_dir: Path) -> DiffArtifacts: ...
