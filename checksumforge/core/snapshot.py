"""Input snapshots and change detection, backed by SQLite.

Plays the host build system's part: remembers what the last successful
run saw for an output directory and classifies the current inputs
against it. The reconciler never reads this store itself.

A run is FULL when:
- the output directory has never been recorded,
- any non-file input changed (algorithm, name-append mode, location),
- an artifact produced by the last run has disappeared from disk.

Otherwise it is INCREMENTAL and each input is ADDED, MODIFIED, REMOVED
or UNCHANGED. Size and mtime are compared first; content is re-hashed
only when they differ, so a touched-but-identical file stays UNCHANGED.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from checksumforge.core.hasher import digest_file, fingerprint
from checksumforge.core.naming import artifact_name
from checksumforge.errors import HashingError
from checksumforge.models.algorithm import Algorithm
from checksumforge.models.changes import ChangeDetection, ChangeKind, InputFileChange
from checksumforge.models.config import ChecksumConfig
from checksumforge.models.snapshot import InputRecord, TaskSnapshot

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

_CREATE_TASK_STATE = """
CREATE TABLE IF NOT EXISTS task_state (
    output_dir      TEXT PRIMARY KEY,
    config_hash     TEXT NOT NULL,
    algorithm       TEXT NOT NULL,
    append_name     INTEGER NOT NULL DEFAULT 0,
    artifacts_json  TEXT NOT NULL DEFAULT '[]',
    recorded_at     TEXT NOT NULL
);
"""

_CREATE_INPUT_SNAPSHOT = """
CREATE TABLE IF NOT EXISTS input_snapshot (
    output_dir      TEXT NOT NULL,
    path            TEXT NOT NULL,
    size            INTEGER NOT NULL,
    mtime_ns        INTEGER NOT NULL,
    content_hash    TEXT NOT NULL,
    PRIMARY KEY (output_dir, path)
);
"""


def _task_key(output_dir: Path) -> str:
    return str(Path(output_dir).resolve())


def _content_hash(path: Path) -> str:
    return digest_file(path, Algorithm.SHA256)


class InputSnapshotStore:
    """Persistent record of the inputs of the last successful run.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file. Created if it does not exist.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(_CREATE_TASK_STATE)
            conn.execute(_CREATE_INPUT_SNAPSHOT)
            conn.commit()

    # ------------------------------------------------------------------
    # Change detection
    # ------------------------------------------------------------------

    def detect_changes(self, config: ChecksumConfig) -> ChangeDetection:
        """Decide FULL vs INCREMENTAL and classify every input."""
        snapshot = self.load(config.output_dir)
        if snapshot is None:
            return ChangeDetection(is_incremental=False, reason="no previous run recorded")

        if snapshot.config_hash != fingerprint(config.fingerprint_payload()):
            return ChangeDetection(is_incremental=False, reason="task configuration changed")

        missing = [
            name for name in snapshot.artifacts
            if not (config.output_dir / name).is_file()
        ]
        if missing:
            logger.info(
                "%d checksum file(s) missing from %s, regenerating all",
                len(missing), config.output_dir,
            )
            return ChangeDetection(
                is_incremental=False, reason=f"output file {missing[0]} has been removed"
            )

        previous = {record.path: record for record in snapshot.inputs}
        current = [f for f in config.files if not f.is_dir()]
        changes: list[InputFileChange] = []

        for path in current:
            record = previous.pop(str(path), None)
            if record is None:
                changes.append(InputFileChange.added(path))
            elif self._is_modified(path, record):
                changes.append(InputFileChange.modified(path))
            else:
                changes.append(InputFileChange.unchanged(path))

        for stale in sorted(previous):
            changes.append(InputFileChange.removed(stale))

        return ChangeDetection(is_incremental=True, changes=changes)

    @staticmethod
    def _is_modified(path: Path, record: InputRecord) -> bool:
        try:
            stat = path.stat()
        except OSError:
            # Vanished between resolution and detection; let hashing report it.
            return True
        if stat.st_size == record.size and stat.st_mtime_ns == record.mtime_ns:
            return False
        if stat.st_size != record.size:
            return True
        return _content_hash(path) != record.content_hash

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record(self, config: ChecksumConfig) -> TaskSnapshot:
        """Replace the snapshot for ``config.output_dir`` after a successful run."""
        key = _task_key(config.output_dir)
        existing = self.load(config.output_dir)
        previous = {r.path: r for r in existing.inputs} if existing else {}

        inputs: list[InputRecord] = []
        for path in config.files:
            if path.is_dir():
                continue
            try:
                stat = path.stat()
            except OSError as exc:
                raise HashingError(path, exc.strerror or str(exc)) from exc
            old = previous.get(str(path))
            if old and old.size == stat.st_size and old.mtime_ns == stat.st_mtime_ns:
                content_hash = old.content_hash
            else:
                content_hash = _content_hash(path)
            inputs.append(
                InputRecord(
                    path=str(path),
                    size=stat.st_size,
                    mtime_ns=stat.st_mtime_ns,
                    content_hash=content_hash,
                )
            )

        snapshot = TaskSnapshot(
            output_dir=key,
            config_hash=fingerprint(config.fingerprint_payload()),
            algorithm=config.algorithm.value,
            append_name=config.append_name,
            artifacts=sorted({artifact_name(Path(r.path), config.algorithm) for r in inputs}),
            inputs=inputs,
        )
        self._write(snapshot)
        logger.debug("Recorded %d input(s) for %s", len(inputs), key)
        return snapshot

    def _write(self, snapshot: TaskSnapshot) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM input_snapshot WHERE output_dir = ?", (snapshot.output_dir,))
            conn.execute(
                """
                INSERT OR REPLACE INTO task_state
                    (output_dir, config_hash, algorithm, append_name, artifacts_json, recorded_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    snapshot.output_dir,
                    snapshot.config_hash,
                    snapshot.algorithm,
                    int(snapshot.append_name),
                    json.dumps(snapshot.artifacts),
                    snapshot.recorded_at.isoformat(),
                ),
            )
            conn.executemany(
                """
                INSERT INTO input_snapshot (output_dir, path, size, mtime_ns, content_hash)
                VALUES (?, ?, ?, ?, ?)
                """,
                [
                    (snapshot.output_dir, r.path, r.size, r.mtime_ns, r.content_hash)
                    for r in snapshot.inputs
                ],
            )
            conn.commit()

    # ------------------------------------------------------------------
    # Query / maintenance
    # ------------------------------------------------------------------

    def load(self, output_dir: Path) -> TaskSnapshot | None:
        """Return the recorded snapshot for ``output_dir``, or None."""
        key = _task_key(output_dir)
        with self._connect() as conn:
            row = conn.execute(
                "SELECT config_hash, algorithm, append_name, artifacts_json, recorded_at "
                "FROM task_state WHERE output_dir = ?",
                (key,),
            ).fetchone()
            if row is None:
                return None
            rows = conn.execute(
                "SELECT path, size, mtime_ns, content_hash FROM input_snapshot "
                "WHERE output_dir = ? ORDER BY path",
                (key,),
            ).fetchall()
        return TaskSnapshot(
            output_dir=key,
            config_hash=row[0],
            algorithm=row[1],
            append_name=bool(row[2]),
            artifacts=json.loads(row[3]),
            recorded_at=datetime.fromisoformat(row[4]),
            inputs=[
                InputRecord(path=r[0], size=r[1], mtime_ns=r[2], content_hash=r[3])
                for r in rows
            ],
        )

    def forget(self, output_dir: Path) -> bool:
        """Drop the record for ``output_dir`` so the next run is FULL."""
        key = _task_key(output_dir)
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM task_state WHERE output_dir = ?", (key,))
            conn.execute("DELETE FROM input_snapshot WHERE output_dir = ?", (key,))
            conn.commit()
        return cur.rowcount > 0

    def list_output_dirs(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT output_dir FROM task_state ORDER BY output_dir").fetchall()
        return [r[0] for r in rows]
