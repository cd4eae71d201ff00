"""Supported checksum algorithms and their artifact extensions."""

from __future__ import annotations

import hashlib
from enum import Enum
from typing import Any


class Algorithm(str, Enum):
    """Closed set of digest algorithms an artifact can be produced with.

    The enum value doubles as the ``hashlib`` constructor name and as the
    artifact file extension (without the leading dot).
    """

    MD5 = "md5"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"

    @property
    def extension(self) -> str:
        """Lowercase artifact extension, e.g. ``sha256``."""
        return self.value

    @property
    def suffix(self) -> str:
        """Extension with the leading dot, e.g. ``.sha256``."""
        return f".{self.value}"

    def new_hash(self) -> Any:
        """Return a fresh hash object for this algorithm."""
        return hashlib.new(self.value)

    @classmethod
    def parse(cls, name: str) -> Algorithm:
        """Look up an algorithm by name, case-insensitively (``SHA-256`` ok)."""
        key = name.strip().lower().replace("-", "")
        try:
            return cls(key)
        except ValueError:
            allowed = ", ".join(a.name for a in cls)
            raise ValueError(f"Unknown algorithm {name!r}. Allowed: {allowed}") from None


DEFAULT_ALGORITHM = Algorithm.SHA256

# Every suffix the reconciler is allowed to create or delete.
MANAGED_SUFFIXES: frozenset[str] = frozenset(a.suffix for a in Algorithm)
