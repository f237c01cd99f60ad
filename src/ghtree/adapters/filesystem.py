from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from ..core import Writer
from ..defaults import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)


def _walk(directory: Path, rel: str, depth: int, max_depth: int) -> Iterator[str]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", directory, e)
        return
    for e in entries:
        child = e.name if rel == "." else f"{rel}/{e.name}"
        yield child
        if depth + 1 < max_depth and e.is_dir(follow_symlinks=False):
            yield from _walk(Path(e.path), child, depth + 1, max_depth)


def iter_local_paths(root: Path, max_depth: int = DEFAULT_MAX_DEPTH) -> Iterator[str]:
    """
    Yield `root` itself as "." and every path up to `max_depth` levels below it.

    Paths are relative to `root`, depth-first, siblings in name order. Hidden entries
    are included; symlinked directories are listed but not followed.
    """
    yield "."
    if max_depth <= 0:
        return
    yield from _walk(Path(root), ".", 0, max_depth)


def print_local_listing(root: Path, writer: Writer, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
    writer.write("Local repository (relative listing):\n")
    for rel in iter_local_paths(root, max_depth=max_depth):
        if rel:
            writer.write(rel + "\n")
    writer.write("\n")
