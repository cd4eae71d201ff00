"""Environment-driven defaults for checksum tasks.

Centralized settings using pydantic-settings. Reads from a ``.env`` file
and ``CHECKSUMFORGE_*`` environment variables. Explicit CLI options and
``ChecksumConfig`` fields always win over these defaults.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from checksumforge.models.algorithm import DEFAULT_ALGORITHM, Algorithm


class ChecksumSettings(BaseSettings):
    """Process-wide defaults with environment variable overrides.

    Examples
    --------
    Override via environment::

        export CHECKSUMFORGE_DEFAULT_ALGORITHM=sha512
        export CHECKSUMFORGE_LOG_LEVEL=DEBUG
        export CHECKSUMFORGE_STATE_PATH=/var/cache/checksums/state.db
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CHECKSUMFORGE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Task defaults
    default_algorithm: Algorithm = DEFAULT_ALGORITHM
    output_dir: Path = Path("build/checksums")
    append_name: bool = False

    # Change detection state
    state_path: Path = Path(".checksumforge/state.db")

    # Hashing
    max_workers: int = 1
    chunk_size: int = 64 * 1024


# Module-level singleton: import as `from checksumforge.config import settings`
settings = ChecksumSettings()
