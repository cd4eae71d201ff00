"""Incremental reconciliation of checksum artifacts.

Keeps an output directory consistent with a set of input files:

- FULL run: purge every managed-extension file (all algorithms), then
  write an artifact for every current input.
- INCREMENTAL run: act only on the supplied change set. ADDED/MODIFIED
  inputs are (re)hashed, REMOVED inputs lose their artifact, UNCHANGED
  inputs are left alone. Removals are applied before any write, so the
  outcome does not depend on the order of the change set.

Each per-file step returns a ``FileOutcome``. The driving loop stops at
the first failed outcome and raises ``ChecksumGenerationError``; artifacts
written before that point stay on disk. The reconciler holds no state
between runs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path

from checksumforge.core.filesystem import ArtifactFileSystem, LocalFileSystem
from checksumforge.core.hasher import DEFAULT_CHUNK_SIZE, digest_stream
from checksumforge.core.naming import artifact_content, artifact_path, is_managed_artifact
from checksumforge.errors import ChecksumGenerationError, OutputDirectoryError
from checksumforge.models.changes import ChangeKind, InputFileChange
from checksumforge.models.config import ChecksumConfig
from checksumforge.models.results import FileAction, FileOutcome, ReconcileReport

logger = logging.getLogger(__name__)


class Reconciler:
    """Applies a change classification to a checksum output directory.

    Parameters
    ----------
    filesystem:
        Backend for all reads, writes and deletes. Defaults to
        ``LocalFileSystem``.
    max_workers:
        Number of threads used to hash added/modified inputs. ``1`` keeps
        the run fully sequential.
    chunk_size:
        Read size used when streaming input files through the digest.
    """

    def __init__(
        self,
        filesystem: ArtifactFileSystem | None = None,
        *,
        max_workers: int = 1,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._fs = filesystem or LocalFileSystem()
        self._max_workers = max_workers
        self._chunk_size = chunk_size

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def reconcile(
        self,
        config: ChecksumConfig,
        *,
        is_incremental: bool,
        changes: Iterable[InputFileChange] = (),
    ) -> ReconcileReport:
        """Bring ``config.output_dir`` in line with the inputs.

        When ``is_incremental`` is False, ``changes`` is ignored and every
        file in ``config.files`` is treated as added.

        Raises
        ------
        OutputDirectoryError
            If the output directory cannot be created.
        ChecksumGenerationError
            On the first input that cannot be hashed or written.
        """
        self.prepare_output_dir(config.output_dir)

        purged: list[Path] = []
        if is_incremental:
            work = list(changes)
        else:
            purged = self.purge(config.output_dir)
            work = [InputFileChange.added(f) for f in config.files]

        logger.info(
            "Reconciling %d input(s) into %s (%s, %s)",
            len(work),
            config.output_dir,
            config.algorithm.name,
            "incremental" if is_incremental else "full",
        )

        outcomes = self._run(config, work)

        return ReconcileReport(
            output_dir=config.output_dir,
            algorithm=config.algorithm,
            incremental=is_incremental,
            purged=purged,
            outcomes=outcomes,
        )

    def prepare_output_dir(self, output_dir: Path) -> None:
        """Create the output directory or fail the run."""
        try:
            self._fs.ensure_directory(output_dir)
        except OSError as exc:
            raise OutputDirectoryError(output_dir, exc.strerror or str(exc)) from exc

    def purge(self, output_dir: Path) -> list[Path]:
        """Delete every managed-extension file directly inside ``output_dir``.

        Covers all four algorithms, not only the current one. Files with any
        other name are never touched.
        """
        if not self._fs.is_dir(output_dir):
            return []
        removed: list[Path] = []
        for candidate in self._fs.list_files(output_dir):
            if is_managed_artifact(candidate) and self._fs.delete(candidate):
                removed.append(candidate)
        if removed:
            logger.info("Purged %d stale checksum file(s) from %s", len(removed), output_dir)
        return removed

    # ------------------------------------------------------------------
    # Per-file pass
    # ------------------------------------------------------------------

    def _run(self, config: ChecksumConfig, work: list[InputFileChange]) -> list[FileOutcome]:
        # Removals run before any write: a REMOVED input may share its
        # artifact name with an ADDED one (a file moved between directories).
        results: dict[int, FileOutcome] = {}
        hashing: list[tuple[int, InputFileChange]] = []
        for index, change in enumerate(work):
            if change.kind.needs_checksum:
                hashing.append((index, change))
            else:
                outcome = self._process(config, change)
                _raise_if_failed(outcome)
                results[index] = outcome

        if self._max_workers == 1:
            for index, change in hashing:
                outcome = self._process(config, change)
                _raise_if_failed(outcome)
                results[index] = outcome
        else:
            self._hash_parallel(config, hashing, results)

        return [results[i] for i in sorted(results)]

    def _hash_parallel(
        self,
        config: ChecksumConfig,
        hashing: list[tuple[int, InputFileChange]],
        results: dict[int, FileOutcome],
    ) -> None:
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures: dict[Future[FileOutcome], int] = {
                pool.submit(self._process, config, change): index
                for index, change in hashing
            }
            pending = set(futures)
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    outcome = future.result()
                    if not outcome.ok:
                        for other in pending:
                            other.cancel()
                        _raise_if_failed(outcome)
                    results[futures[future]] = outcome

    def _process(self, config: ChecksumConfig, change: InputFileChange) -> FileOutcome:
        path = change.path
        if self._fs.is_dir(path):
            return FileOutcome(input_path=path, action=FileAction.SKIPPED)
        if change.kind.needs_checksum:
            return self._write_checksum(config, path)
        if change.kind == ChangeKind.REMOVED:
            return self._remove_checksum(config, path)
        return FileOutcome(
            input_path=path,
            action=FileAction.UNCHANGED,
            artifact_path=artifact_path(config.output_dir, path, config.algorithm),
        )

    def _write_checksum(self, config: ChecksumConfig, path: Path) -> FileOutcome:
        target = artifact_path(config.output_dir, path, config.algorithm)
        try:
            with self._fs.open_binary(path) as stream:
                digest = digest_stream(stream, config.algorithm, chunk_size=self._chunk_size)
            self._fs.write_bytes(target, artifact_content(digest, path, config.append_name))
        except OSError as exc:
            return FileOutcome(
                input_path=path,
                action=FileAction.FAILED,
                artifact_path=target,
                error=exc.strerror or str(exc),
            )
        logger.debug("Wrote %s", target)
        return FileOutcome(
            input_path=path, action=FileAction.WRITTEN, artifact_path=target, digest=digest
        )

    def _remove_checksum(self, config: ChecksumConfig, path: Path) -> FileOutcome:
        target = artifact_path(config.output_dir, path, config.algorithm)
        try:
            existed = self._fs.delete(target)
        except OSError as exc:
            return FileOutcome(
                input_path=path,
                action=FileAction.FAILED,
                artifact_path=target,
                error=exc.strerror or str(exc),
            )
        if existed:
            logger.debug("Deleted %s", target)
        return FileOutcome(
            input_path=path,
            action=FileAction.DELETED if existed else FileAction.ABSENT,
            artifact_path=target,
        )


def _raise_if_failed(outcome: FileOutcome) -> None:
    if not outcome.ok:
        logger.debug("Stopping at failed input %s: %s", outcome.input_path, outcome.error)
        raise ChecksumGenerationError(outcome.input_path, outcome.error)
