from __future__ import annotations

import pytest

from ghtree.core import RepoRef, TargetResolutionError
from ghtree.util import is_inside_work_tree, parse_remote_url, read_origin_url, resolve_target


@pytest.mark.parametrize(
    "url",
    [
        "git@github.com:octo/widgets.git",
        "https://github.com/octo/widgets.git",
        "https://github.com/octo/widgets",
        "ssh://git@github.com/octo/widgets.git",
        "https://github.com/octo/widgets/",
    ],
)
def test_parse_remote_url_supported_forms(url):
    assert parse_remote_url(url) == ("octo", "widgets")


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://github.com/octo/octo.github.io.git", ("octo", "octo.github.io")),
        ("git@github.com:octo/socket.io", ("octo", "socket.io")),
        ("git@github.com:octo/socket.io.git", ("octo", "socket.io")),
    ],
)
def test_parse_remote_url_keeps_dots_in_repo_name(url, expected):
    assert parse_remote_url(url) == expected


def test_parse_remote_url_not_github():
    assert parse_remote_url("https://gitlab.com/octo/widgets.git") is None


def test_explicit_owner_ignores_remote():
    ref = resolve_target("alice", None, remote_url="git@github.com:octo/widgets.git")
    assert ref == RepoRef(owner="alice", repo="Pilot-test")


def test_explicit_owner_and_repo_are_verbatim():
    ref = resolve_target("alice", "thing", remote_url="https://github.com/octo/widgets")
    assert ref == RepoRef(owner="alice", repo="thing")


def test_owner_and_repo_inferred_from_remote():
    ref = resolve_target(None, None, remote_url="git@github.com:octo/widgets.git")
    assert ref == RepoRef(owner="octo", repo="widgets")


def test_explicit_repo_survives_inference():
    ref = resolve_target(None, "mine", remote_url="https://github.com/octo/widgets.git")
    assert ref == RepoRef(owner="octo", repo="mine")


@pytest.mark.parametrize("remote_url", [None, "", "https://example.com/octo/widgets.git"])
def test_unresolvable_owner_raises(remote_url):
    with pytest.raises(TargetResolutionError):
        resolve_target(None, None, remote_url=remote_url)


def test_repo_ref_str():
    assert str(RepoRef("octo", "widgets")) == "octo/widgets"


def test_read_origin_url_from_real_repo(git_repo):
    work = git_repo("git@github.com:octo/widgets.git")
    assert is_inside_work_tree(work)
    assert read_origin_url(work) == "git@github.com:octo/widgets.git"


def test_read_origin_url_without_origin(git_repo):
    work = git_repo(None)
    assert is_inside_work_tree(work)
    assert read_origin_url(work) is None


def test_read_origin_url_outside_work_tree(plain_dir):
    assert not is_inside_work_tree(plain_dir)
    assert read_origin_url(plain_dir) is None
