"""Diff value objects — what changed between a fixture and its workspace."""

from typing import Literal

from pydantic import BaseModel, Field

DEPENDENCY_SECTIONS: tuple[str, ...] = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


class FileDiff(BaseModel, frozen=True):
    file: str
    change_type: Literal["added", "modified", "deleted"]
    text_patch: str | None = None


class DepChange(BaseModel, frozen=True):
    """One dependency entry whose version specifier differs.

    ``from_version`` is None for additions, ``to_version`` None for removals.
    """

    package_path: str
    section: str
    name: str
    from_version: str | None = None
    to_version: str | None = None


class DiffArtifacts(BaseModel, frozen=True):
    diff_summary: list[FileDiff] = Field(default_factory=list)
    deps_delta: list[DepChange] = Field(default_factory=list)
