"""Tests for FilesystemDiffCollector."""

import json
from pathlib import Path

from ze_bench.diff.domain.diff import DepChange, DiffArtifacts
from ze_bench.diff.infrastructure.filesystem import FilesystemDiffCollector
from tests.diff.fake_observer import FakeDiffObserver


def _write(root: Path, files: dict[str, str]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def _manifest(**sections: dict[str, str]) -> str:
    return json.dumps({"name": "app", **sections}, indent=2) + "\n"


def _build(
    tmp_path: Path, before: dict[str, str], after: dict[str, str]
) -> tuple[DiffArtifacts, FakeDiffObserver]:
    fixture = _write(tmp_path / "fixture", before)
    workspace = _write(tmp_path / "workspace", after)
    observer = FakeDiffObserver()
    artifacts = FilesystemDiffCollector(observer=observer).build(
        fixture_dir=fixture, workspace_dir=workspace
    )
    return artifacts, observer


class TestFileDiffs:
    """Files are classified as added, modified or deleted, sorted by path."""

    def test_identical_trees_have_no_diff(self, tmp_path: Path) -> None:
        files = {"a.txt": "x\n", "src/b.ts": "y\n"}
        artifacts, _ = _build(tmp_path, files, files)

        assert artifacts == DiffArtifacts()

    def test_classifies_changes(self, tmp_path: Path) -> None:
        artifacts, _ = _build(
            tmp_path,
            {"keep.txt": "same\n", "edit.txt": "old\n", "gone.txt": "bye\n"},
            {"keep.txt": "same\n", "edit.txt": "new\n", "new.txt": "hi\n"},
        )

        assert [(d.file, d.change_type) for d in artifacts.diff_summary] == [
            ("edit.txt", "modified"),
            ("gone.txt", "deleted"),
            ("new.txt", "added"),
        ]

    def test_modified_patch_shows_both_sides(self, tmp_path: Path) -> None:
        artifacts, _ = _build(tmp_path, {"f.txt": "old\n"}, {"f.txt": "new\n"})

        patch = artifacts.diff_summary[0].text_patch
        assert patch == "--- a/f.txt\n+++ b/f.txt\n@@\n-old\n+new"

    def test_deleted_file_has_no_patch(self, tmp_path: Path) -> None:
        artifacts, _ = _build(tmp_path, {"f.txt": "old\n"}, {})

        assert artifacts.diff_summary[0].text_patch is None

    def test_ignored_directories_are_skipped(self, tmp_path: Path) -> None:
        artifacts, _ = _build(
            tmp_path,
            {"a.txt": "x\n"},
            {
                "a.txt": "x\n",
                "node_modules/react/index.js": "module\n",
                ".git/HEAD": "ref\n",
                "dist/out.js": "built\n",
            },
        )

        assert artifacts.diff_summary == []

    def test_fixture_readme_is_not_a_deletion(self, tmp_path: Path) -> None:
        artifacts, _ = _build(
            tmp_path, {"README.md": "# fixture\n", "a.txt": "x\n"}, {"a.txt": "x\n"}
        )

        assert artifacts.diff_summary == []

    def test_undecodable_file_is_reported(self, tmp_path: Path) -> None:
        fixture = _write(tmp_path / "fixture", {"bin.dat": "ok"})
        workspace = _write(tmp_path / "workspace", {})
        (workspace / "bin.dat").write_bytes(b"\xff\xfe\xfa")
        observer = FakeDiffObserver()

        artifacts = FilesystemDiffCollector(observer=observer).build(
            fixture_dir=fixture, workspace_dir=workspace
        )

        assert artifacts.diff_summary == []
        assert len(observer.unreadable) == 1

    def test_emits_collected_event(self, tmp_path: Path) -> None:
        _, observer = _build(tmp_path, {"a.txt": "x\n"}, {"a.txt": "y\n"})

        assert observer.collected[0].files_changed == 1
        assert observer.collected[0].deps_changed == 0


class TestDependencyDelta:
    """Changed package.json files contribute one DepChange per differing entry."""

    def test_version_bump_addition_and_removal(self, tmp_path: Path) -> None:
        before = _manifest(
            dependencies={"react": "^18.2.0", "lodash": "^4.17.0"},
            devDependencies={"vitest": "^1.0.0"},
        )
        after = _manifest(
            dependencies={"react": "^19.0.0", "zod": "^3.23.0"},
            devDependencies={"vitest": "^1.0.0"},
        )

        artifacts, _ = _build(
            tmp_path, {"package.json": before}, {"package.json": after}
        )

        assert artifacts.deps_delta == [
            DepChange(
                package_path="package.json",
                section="dependencies",
                name="lodash",
                from_version="^4.17.0",
            ),
            DepChange(
                package_path="package.json",
                section="dependencies",
                name="react",
                from_version="^18.2.0",
                to_version="^19.0.0",
            ),
            DepChange(
                package_path="package.json",
                section="dependencies",
                name="zod",
                to_version="^3.23.0",
            ),
        ]

    def test_nested_workspace_manifest(self, tmp_path: Path) -> None:
        before = _manifest(dependencies={"react": "18.2.0"})
        after = _manifest(dependencies={"react": "19.0.0"})

        artifacts, _ = _build(
            tmp_path,
            {"packages/ui/package.json": before},
            {"packages/ui/package.json": after},
        )

        assert [c.package_path for c in artifacts.deps_delta] == [
            "packages/ui/package.json"
        ]

    def test_added_manifest_lists_every_dependency(self, tmp_path: Path) -> None:
        after = _manifest(dependencies={"react": "19.0.0"})

        artifacts, _ = _build(tmp_path, {}, {"apps/web/package.json": after})

        assert artifacts.deps_delta == [
            DepChange(
                package_path="apps/web/package.json",
                section="dependencies",
                name="react",
                to_version="19.0.0",
            )
        ]

    def test_invalid_json_is_reported_not_raised(self, tmp_path: Path) -> None:
        before = _manifest(dependencies={"react": "18.2.0"})

        artifacts, observer = _build(
            tmp_path, {"package.json": before}, {"package.json": "{broken"}
        )

        assert [d.change_type for d in artifacts.diff_summary] == ["modified"]
        assert observer.unreadable
        # The broken side reads as empty, so the old entry shows as removed.
        assert artifacts.deps_delta[0].to_version is None
