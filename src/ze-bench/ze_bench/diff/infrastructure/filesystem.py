"""FilesystemDiffCollector — file-level diff plus package.json dependency delta."""

import json
from pathlib import Path
from typing import Any

from ze_bench.diff.domain.diff import (
    DEPENDENCY_SECTIONS,
    DepChange,
    DiffArtifacts,
    FileDiff,
)
from ze_bench.diff.domain.observer import DiffObserver

IGNORED_DIRS: frozenset[str] = frozenset(
    {"node_modules", ".git", ".turbo", "dist", ".nx", ".pnpm-store"}
)
# Never copied into workspaces, so absent there without being deleted.
_FIXTURE_ONLY_NAMES: frozenset[str] = frozenset({"README.md"})


class FilesystemDiffCollector:
    """Satisfies the DiffCollector protocol by walking both trees.

    Patches are whole-file pseudo patches (every old line removed, every new
    line added), which is enough for evaluators that grep for changes.
    """

    def __init__(self, observer: DiffObserver) -> None:
        self._observer = observer

    def build(self, fixture_dir: Path, workspace_dir: Path) -> DiffArtifacts:
        diff_summary = self._file_diffs(
            fixture_dir=fixture_dir, workspace_dir=workspace_dir
        )
        deps_delta = self._dependency_delta(
            fixture_dir=fixture_dir,
            workspace_dir=workspace_dir,
            diff_summary=diff_summary,
        )
        self._observer.diff_collected(
            workspace_dir=str(workspace_dir),
            files_changed=len(diff_summary),
            deps_changed=len(deps_delta),
        )
        return DiffArtifacts(diff_summary=diff_summary, deps_delta=deps_delta)

    def _file_diffs(self, fixture_dir: Path, workspace_dir: Path) -> list[FileDiff]:
        baseline = {
            rel
            for rel in _list_files(fixture_dir)
            if Path(rel).name not in _FIXTURE_ONLY_NAMES
        }
        current = _list_files(workspace_dir)
        diffs: list[FileDiff] = []

        for rel in sorted(baseline | current):
            if rel in baseline and rel not in current:
                diffs.append(FileDiff(file=rel, change_type="deleted"))
            elif rel not in baseline:
                after = self._read(workspace_dir / rel)
                diffs.append(
                    FileDiff(
                        file=rel,
                        change_type="added",
                        text_patch=(
                            _pseudo_patch(rel=rel, before="", after=after)
                            if after is not None
                            else None
                        ),
                    )
                )
            else:
                before = self._read(fixture_dir / rel)
                after = self._read(workspace_dir / rel)
                if before is None or after is None or before == after:
                    continue
                diffs.append(
                    FileDiff(
                        file=rel,
                        change_type="modified",
                        text_patch=_pseudo_patch(rel=rel, before=before, after=after),
                    )
                )
        return diffs

    def _dependency_delta(
        self, fixture_dir: Path, workspace_dir: Path, diff_summary: list[FileDiff]
    ) -> list[DepChange]:
        changes: list[DepChange] = []
        for entry in diff_summary:
            if not entry.file.endswith("package.json"):
                continue
            before = self._read_json(fixture_dir / entry.file)
            after = self._read_json(workspace_dir / entry.file)
            if before is None and after is None:
                continue
            for section in DEPENDENCY_SECTIONS:
                old = _section(manifest=before, section=section)
                new = _section(manifest=after, section=section)
                for name in sorted(old.keys() | new.keys()):
                    if old.get(name) == new.get(name):
                        continue
                    changes.append(
                        DepChange(
                            package_path=entry.file,
                            section=section,
                            name=name,
                            from_version=old.get(name),
                            to_version=new.get(name),
                        )
                    )
        return changes

    def _read(self, path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self._observer.diff_file_unreadable(path=str(path), reason=str(exc))
            return None

    def _read_json(self, path: Path) -> dict[str, Any] | None:
        if not path.is_file():
            return None
        text = self._read(path)
        if text is None:
            return None
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            self._observer.diff_file_unreadable(path=str(path), reason=str(exc))
            return None
        return parsed if isinstance(parsed, dict) else None


def _list_files(root: Path) -> set[str]:
    """Relative POSIX paths of every regular file under root, ignored dirs pruned."""
    files: set[str] = set()
    for dirpath, dirnames, filenames in root.walk(follow_symlinks=False):
        dirnames[:] = [d for d in dirnames if d not in IGNORED_DIRS]
        for filename in filenames:
            path = dirpath / filename
            if path.is_file() and not path.is_symlink():
                files.add(path.relative_to(root).as_posix())
    return files


def _section(manifest: dict[str, Any] | None, section: str) -> dict[str, str]:
    if manifest is None:
        return {}
    raw = manifest.get(section) or {}
    if not isinstance(raw, dict):
        return {}
    return {str(name): str(version) for name, version in raw.items()}


def _pseudo_patch(rel: str, before: str, after: str) -> str:
    lines = [f"--- a/{rel}", f"+++ b/{rel}", "@@"]
    if before:
        lines.extend(f"-{line}" for line in before.splitlines())
    if after:
        lines.extend(f"+{line}" for line in after.splitlines())
    return "\n".join(lines)
