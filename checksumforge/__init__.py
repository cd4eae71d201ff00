"""Checksumforge: incremental checksum files for build pipelines.

Produces one ``<name>.<algorithm>`` file per input, recomputes only what
changed since the last run, and garbage-collects stale checksum files
without touching anything else in the output directory.
"""

__version__ = "1.2.0"
__description__ = "Incremental per-file checksum artifacts for build pipelines"

from checksumforge.core.orchestrator import ChecksumTask
from checksumforge.core.reconciler import Reconciler
from checksumforge.errors import ChecksumError
from checksumforge.models.algorithm import Algorithm
from checksumforge.models.config import ChecksumConfig

__all__ = [
    "Algorithm",
    "ChecksumConfig",
    "ChecksumError",
    "ChecksumTask",
    "Reconciler",
    "__version__",
]
