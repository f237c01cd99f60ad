from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Iterable

from .core import Renderer, TreeEntry

logger = logging.getLogger(__name__)

GUTTER = "  "


def _rows(entries: Iterable[TreeEntry]) -> list[tuple[str, str, str]]:
    return [e.row() for e in entries]


def _tsv(rows: list[tuple[str, str, str]]) -> str:
    return "".join("\t".join(r) + "\n" for r in rows)


class TsvRenderer:
    def render(self, entries: Iterable[TreeEntry]) -> str:
        return _tsv(_rows(entries))


class TableRenderer:
    def render(self, entries: Iterable[TreeEntry]) -> str:
        rows = _rows(entries)
        if not rows:
            return ""
        widths = [max(len(r[i]) for r in rows) for i in range(2)]
        lines = [
            GUTTER.join((typ.ljust(widths[0]), path.ljust(widths[1]), size))
            for typ, path, size in rows
        ]
        return "\n".join(lines) + "\n"


class ColumnCommandRenderer:
    """
    Aligns rows with the external `column` tool.

    Alignment is best effort: when the tool fails the tab-separated rows are
    returned unaligned.
    """

    def __init__(self, executable: str = "column") -> None:
        self.executable = executable

    def render(self, entries: Iterable[TreeEntry]) -> str:
        text = _tsv(_rows(entries))
        if not text:
            return ""
        try:
            proc = subprocess.run(
                [self.executable, "-t", "-s", "\t"],
                input=text,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.debug("%s unavailable, leaving rows unaligned: %s", self.executable, e)
            return text
        if proc.returncode != 0 or not proc.stdout:
            logger.debug("%s exited with %s, leaving rows unaligned", self.executable, proc.returncode)
            return text
        return proc.stdout


def select_renderer(name: str = "auto") -> Renderer:
    if name == "table":
        return TableRenderer()
    if name == "tsv":
        return TsvRenderer()
    if name == "column":
        return ColumnCommandRenderer()
    if name == "auto":
        executable = shutil.which("column")
        if executable:
            logger.debug("Aligning with %s", executable)
            return ColumnCommandRenderer(executable)
        return TableRenderer()
    msg = f"Unknown format: {name}"
    raise ValueError(msg)
