"""Resolution of task sources into a flat, sorted list of input files.

Sources may be individual files or directory roots. Roots are walked
recursively and filtered with glob patterns evaluated against the path
relative to the root, e.g. ``include=["**/*.txt"]``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from fnmatch import fnmatchcase
from pathlib import Path

logger = logging.getLogger(__name__)


def matches(relative: str, pattern: str) -> bool:
    """Glob match where a leading ``**/`` also matches zero directories."""
    if fnmatchcase(relative, pattern):
        return True
    while pattern.startswith("**/"):
        pattern = pattern[3:]
        if fnmatchcase(relative, pattern):
            return True
    return False


def _accepted(relative: str, include: Sequence[str], exclude: Sequence[str]) -> bool:
    if include and not any(matches(relative, p) for p in include):
        return False
    return not any(matches(relative, p) for p in exclude)


def walk_tree(
    root: Path,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> list[Path]:
    """Every regular file under ``root`` that passes the filters."""
    found = []
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        if _accepted(path.relative_to(root).as_posix(), include, exclude):
            found.append(path)
    return found


def resolve_inputs(
    sources: Iterable[Path | str],
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> list[Path]:
    """Flatten ``sources`` into a sorted, de-duplicated list of files.

    Sources that do not exist are skipped with a warning. If they were
    inputs of the previous run the change detector reports them as removed.
    Filters apply to directory roots only.
    """
    include = list(include or ())
    exclude = list(exclude or ())
    resolved: set[Path] = set()

    for source in sources:
        path = Path(source)
        if path.is_dir():
            tree = walk_tree(path, include, exclude)
            logger.debug("Resolved %d file(s) under %s", len(tree), path)
            resolved.update(p.absolute() for p in tree)
        elif path.exists():
            resolved.add(path.absolute())
        else:
            logger.warning("Input %s does not exist, skipping", path)

    return sorted(resolved)
