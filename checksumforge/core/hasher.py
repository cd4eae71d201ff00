"""Streaming file digests and canonical hashing helpers.

File content is always hashed in fixed-size chunks so inputs of any size
can be processed without loading them into memory.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, BinaryIO

from checksumforge.errors import HashingError
from checksumforge.models.algorithm import Algorithm

DEFAULT_CHUNK_SIZE = 64 * 1024


def digest_stream(
    stream: BinaryIO,
    algorithm: Algorithm,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Consume ``stream`` to EOF and return its lowercase hex digest.

    Read errors propagate as ``OSError``; callers that know the file name
    wrap them (see ``digest_file``).
    """
    h = algorithm.new_hash()
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        h.update(chunk)
    return h.hexdigest()


def digest_file(
    path: Path | str,
    algorithm: Algorithm,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Return the lowercase hex digest of the file at ``path``.

    Raises
    ------
    HashingError
        If the file cannot be opened or read to the end.
    """
    path = Path(path)
    try:
        with path.open("rb") as fh:
            return digest_stream(fh, algorithm, chunk_size=chunk_size)
    except OSError as exc:
        raise HashingError(path, exc.strerror or str(exc)) from exc


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes — deterministic, sorted, compact."""
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def fingerprint(obj: Any) -> str:
    """SHA-256 of the canonical JSON form of ``obj``.

    Used to detect changes in non-file task inputs between runs.
    """
    return sha256_hex(canonical_json_bytes(obj))
