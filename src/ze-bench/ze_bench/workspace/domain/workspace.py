"""PreparedWorkspace value object — an isolated copy of a scenario fixture."""

from pathlib import Path

from pydantic import BaseModel


class PreparedWorkspace(BaseModel, frozen=True):
    """Owned by exactly one run; never shared or reused."""

    workspace_dir: Path
    fixture_dir: Path
