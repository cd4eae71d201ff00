"""Task orchestrator — wires change detection to the reconciler.

A ``ChecksumTask`` is what a build script calls: it asks the snapshot
store what changed, hands that verdict to the ``Reconciler``, and records
the new snapshot only when the run succeeds. A failed run leaves the old
snapshot in place, so the next run sees the same changes again.
"""

from __future__ import annotations

import logging
from pathlib import Path

from checksumforge.config import ChecksumSettings
from checksumforge.core.filesystem import ArtifactFileSystem
from checksumforge.core.reconciler import Reconciler
from checksumforge.core.snapshot import InputSnapshotStore
from checksumforge.models.config import ChecksumConfig
from checksumforge.models.results import ReconcileReport

logger = logging.getLogger(__name__)


class ChecksumTask:
    """One checksum task bound to an output directory.

    Parameters
    ----------
    config:
        The immutable task configuration for this run.
    store:
        Snapshot store used for change detection. Defaults to one at
        ``settings.state_path``.
    settings:
        Process-wide defaults. Uses a fresh ``ChecksumSettings`` if omitted.
    filesystem:
        Optional file system backend for the reconciler.
    """

    def __init__(
        self,
        config: ChecksumConfig,
        *,
        store: InputSnapshotStore | None = None,
        settings: ChecksumSettings | None = None,
        filesystem: ArtifactFileSystem | None = None,
    ) -> None:
        self.config = config
        self._settings = settings or ChecksumSettings()
        self.store = store or InputSnapshotStore(self._settings.state_path)
        self.reconciler = Reconciler(
            filesystem,
            max_workers=self._settings.max_workers,
            chunk_size=self._settings.chunk_size,
        )

    def run(self) -> ReconcileReport:
        """Detect changes, reconcile, and record the new snapshot.

        Raises any ``ChecksumError`` from the reconciler unchanged.
        """
        detection = self.store.detect_changes(self.config)
        if detection.is_incremental and not detection.pending:
            logger.info("%s is up to date", self.config.output_dir)
            # Still make sure the directory exists; nothing else to do.
            self.reconciler.prepare_output_dir(self.config.output_dir)
            report = ReconcileReport(
                output_dir=self.config.output_dir,
                algorithm=self.config.algorithm,
                incremental=True,
                up_to_date=True,
            )
        else:
            if not detection.is_incremental:
                logger.info("Full rebuild of %s: %s", self.config.output_dir, detection.reason)
            report = self.reconciler.reconcile(
                self.config,
                is_incremental=detection.is_incremental,
                changes=detection.changes,
            )

        self.store.record(self.config)
        return report

    def clean(self) -> list[Path]:
        """Remove every managed checksum file and forget the snapshot."""
        purged = self.reconciler.purge(self.config.output_dir)
        self.store.forget(self.config.output_dir)
        return purged
