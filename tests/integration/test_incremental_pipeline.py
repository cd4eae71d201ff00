"""End-to-end integration tests — repeated task runs over a changing input tree.

These tests exercise input resolution, the snapshot store, the reconciler
and ChecksumTask together, the way a build would call them run after run.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from checksumforge.config import ChecksumSettings
from checksumforge.core.file_collection import resolve_inputs
from checksumforge.core.orchestrator import ChecksumTask
from checksumforge.core.snapshot import InputSnapshotStore
from checksumforge.models.algorithm import Algorithm
from checksumforge.models.config import ChecksumConfig

FOO_SHA256 = "2c26b46b68ffc68ff99b453c1d30413413422d706483bfa0f98a5e886266e7ae"


def _listing(directory: Path) -> list[str]:
    return sorted(p.name for p in directory.iterdir())


def _mtimes(directory: Path) -> dict[str, int]:
    return {p.name: p.stat().st_mtime_ns for p in directory.iterdir()}


class TestIncrementalPipeline:
    """A build script running the same task as its inputs evolve."""

    @pytest.fixture
    def run(self, tmp_dir: Path, input_dir: Path, output_dir: Path, recording_fs):
        db_path = tmp_dir / "state" / "state.db"
        store = InputSnapshotStore(db_path)
        settings = ChecksumSettings(state_path=db_path)

        def _run(algorithm: Algorithm = Algorithm.SHA256, append_name: bool = False):
            recording_fs.writes.clear()
            recording_fs.deletes.clear()
            config = ChecksumConfig(
                output_dir=output_dir,
                algorithm=algorithm,
                append_name=append_name,
                files=resolve_inputs([input_dir]),
            )
            return ChecksumTask(
                config, store=store, settings=settings, filesystem=recording_fs
            ).run()

        return _run

    def test_first_run_writes_every_input(self, run, output_dir: Path):
        report = run()
        assert report.incremental is False
        assert _listing(output_dir) == ["bar.txt.sha256", "foo.txt.sha256"]
        assert (output_dir / "foo.txt.sha256").read_text(encoding="utf-8") == FOO_SHA256

    def test_rerun_touches_nothing(self, run, recording_fs, output_dir: Path):
        run()
        before = _mtimes(output_dir)

        report = run()

        assert report.up_to_date is True
        assert recording_fs.writes == []
        assert recording_fs.deletes == []
        assert _mtimes(output_dir) == before

    def test_foreign_file_survives_every_mode(self, run, output_dir: Path):
        output_dir.mkdir(parents=True)
        foreign = output_dir / "notMyFile"
        foreign.write_text("not managed")

        run()
        run()
        run(algorithm=Algorithm.SHA384)

        assert foreign.read_text() == "not managed"

    def test_algorithm_switch_replaces_artifacts(self, run, output_dir: Path):
        run()
        report = run(algorithm=Algorithm.SHA384)

        assert report.incremental is False
        assert _listing(output_dir) == ["bar.txt.sha384", "foo.txt.sha384"]

    def test_append_name_switch_rewrites_content(self, run, output_dir: Path):
        run()
        run(append_name=True)
        content = (output_dir / "foo.txt.sha256").read_text(encoding="utf-8")
        assert content == f"{FOO_SHA256}  foo.txt"

    def test_removed_input_removes_only_its_artifact(
        self, run, recording_fs, input_dir: Path, output_dir: Path
    ):
        run()
        foo_before = (output_dir / "foo.txt.sha256").stat().st_mtime_ns
        (input_dir / "bar.txt").unlink()

        report = run()

        assert report.incremental is True
        assert _listing(output_dir) == ["foo.txt.sha256"]
        assert recording_fs.writes == []
        assert (output_dir / "foo.txt.sha256").stat().st_mtime_ns == foo_before

    def test_growing_tree_writes_only_new_inputs(
        self, run, recording_fs, input_dir: Path, output_dir: Path
    ):
        run()
        before = _mtimes(output_dir)
        (input_dir / "subdir").mkdir()
        (input_dir / "subdir" / "sub-foo.txt").write_bytes(b"sub-foo")
        (input_dir / "baz.txt").write_bytes(b"baz")

        report = run()

        assert report.incremental is True
        assert sorted(p.name for p in recording_fs.writes) == [
            "baz.txt.sha256",
            "sub-foo.txt.sha256",
        ]
        assert _listing(output_dir) == [
            "bar.txt.sha256",
            "baz.txt.sha256",
            "foo.txt.sha256",
            "sub-foo.txt.sha256",
        ]
        after = _mtimes(output_dir)
        assert after["foo.txt.sha256"] == before["foo.txt.sha256"]
        assert after["bar.txt.sha256"] == before["bar.txt.sha256"]

    def test_modified_input_rewrites_its_artifact(
        self, run, recording_fs, input_dir: Path, output_dir: Path
    ):
        run()
        foo = input_dir / "foo.txt"
        stat = foo.stat()
        foo.write_bytes(b"FOO")
        os.utime(foo, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

        run()

        assert [p.name for p in recording_fs.writes] == ["foo.txt.sha256"]
        assert (output_dir / "foo.txt.sha256").read_text(encoding="utf-8") != FOO_SHA256

    def test_deleted_artifact_forces_full_run(self, run, output_dir: Path):
        run()
        (output_dir / "bar.txt.sha256").unlink()

        report = run()

        assert report.incremental is False
        assert _listing(output_dir) == ["bar.txt.sha256", "foo.txt.sha256"]

    def test_moved_input_keeps_its_artifact(
        self, run, input_dir: Path, output_dir: Path
    ):
        run()
        (input_dir / "moved").mkdir()
        (input_dir / "foo.txt").rename(input_dir / "moved" / "foo.txt")

        report = run()

        assert report.incremental is True
        assert _listing(output_dir) == ["bar.txt.sha256", "foo.txt.sha256"]
        assert (output_dir / "foo.txt.sha256").read_text(encoding="utf-8") == FOO_SHA256

        # The next run starts from a consistent snapshot.
        assert run().up_to_date is True
