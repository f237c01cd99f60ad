from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Iterator

import pytest
import requests


@pytest.fixture(autouse=True)
def _no_ambient_token(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's GHTOKEN out of tests; tests that need one pass it explicitly."""
    monkeypatch.delenv("GHTOKEN", raising=False)


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code


class FakeSession:
    """
    Stands in for requests.Session.

    Answers are keyed by branch name (the last path segment of the trees URL). A value
    that is an exception instance is raised instead of returned. Every call is recorded.
    """

    def __init__(self, answers: dict[str, object]) -> None:
        self.answers = answers
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, dict | None]] = []
        self.closed = False

    def get(self, url: str, params: dict | None = None, **kwargs) -> FakeResponse:
        self.calls.append((url, params))
        branch = url.rsplit("/", 1)[-1]
        answer = self.answers.get(branch, "")
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, (dict, list)):
            answer = json.dumps(answer, indent=2)
        return FakeResponse(str(answer))

    def close(self) -> None:
        self.closed = True

    @property
    def branches(self) -> list[str]:
        return [url.rsplit("/", 1)[-1] for url, _ in self.calls]


@pytest.fixture
def fake_session() -> Callable[..., FakeSession]:
    def _make(**answers: object) -> FakeSession:
        return FakeSession(answers)

    return _make


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("network unreachable")


@pytest.fixture
def git_repo(tmp_path_factory: pytest.TempPathFactory) -> Iterator[Callable[[str | None], Path]]:
    """Create throwaway git working trees, optionally with an 'origin' remote."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    def _make(origin_url: str | None = None) -> Path:
        base = tmp_path_factory.mktemp("work_tree")
        subprocess.run(["git", "init", "-q", str(base)], check=True)
        if origin_url:
            subprocess.run(
                ["git", "-C", str(base), "remote", "add", "origin", origin_url], check=True
            )
        return base

    yield _make


@pytest.fixture
def plain_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A directory that git will not treat as part of any enclosing working tree."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    return tmp_path
