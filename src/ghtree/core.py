from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from .types import TOwner, TRepo


class TargetResolutionError(ValueError):
    """Owner could not be taken from the arguments nor inferred from the git remote."""


class GitHubApiError(RuntimeError):
    """The trees endpoint answered with an error payload after the branch fallback."""

    def __init__(self, body: str) -> None:
        super().__init__("GitHub API returned an error")
        self.body = body


@dataclass(frozen=True)
class RepoRef:
    owner: TOwner
    repo: TRepo

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class TreeEntry:
    type: str
    path: str
    size: int | None = None

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> TreeEntry:
        return cls(
            type=str(item.get("type") or ""),
            path=str(item.get("path") or ""),
            size=item.get("size"),
        )

    def row(self) -> tuple[str, str, str]:
        size = "-" if self.size is None else str(self.size)
        return self.type, self.path, size


def parse_tree(payload: dict[str, Any]) -> list[TreeEntry]:
    """
    Return the entries of a recursive trees response, in the order GitHub sent them.

    Non-object items are skipped. A payload without a `tree` array has no entries.
    """
    items = payload.get("tree")
    if not isinstance(items, list):
        return []
    return [TreeEntry.from_api(it) for it in items if isinstance(it, dict)]


class Writer(Protocol):
    def write(self, text: str) -> None: ...


class Renderer(Protocol):
    def render(self, entries: Iterable[TreeEntry]) -> str: ...


class StdoutWriter(Writer):
    def write(self, text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()


class StringWriter(Writer):
    """
    Collects written text into an internal buffer for tests and callers.

    Provides a lightweight Writer implementation that accumulates text and
    exposes it via the `text()` accessor.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, text: str) -> None:  # Writer protocol
        self._parts.append(text)

    def text(self) -> str:
        return "".join(self._parts)
