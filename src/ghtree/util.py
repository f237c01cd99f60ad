from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from typeguard import typechecked

from .core import RepoRef, TargetResolutionError
from .defaults import DEFAULT_REMOTE_NAME, DEFAULT_REPO_NAME
from .types import TOwner, TRepo

logger = logging.getLogger(__name__)

# Matches both git@github.com:owner/repo.git and https://github.com/owner/repo(.git).
# The repo group keeps dots (octo.github.io); only a trailing .git and slash are dropped.
GITHUB_REMOTE_RE = re.compile(r"github\.com[:/]+([^/]+)/([^/]+?)(?:\.git)?/?$")


@typechecked
def parse_remote_url(url: str) -> tuple[str, str] | None:
    m = GITHUB_REMOTE_RE.search(url.strip())
    if not m:
        return None
    return m.group(1), m.group(2)


def _git(cwd: Path, *args: str) -> str | None:
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.debug("git %s failed: %s", " ".join(args), e)
        return None
    if proc.returncode != 0:
        return None
    return proc.stdout.strip()


def is_inside_work_tree(cwd: Path) -> bool:
    return _git(cwd, "rev-parse", "--is-inside-work-tree") == "true"


def read_origin_url(cwd: Path, remote: str = DEFAULT_REMOTE_NAME) -> str | None:
    """Return the URL of `remote` if `cwd` is inside a git working tree that has one."""
    if not is_inside_work_tree(cwd):
        return None
    return _git(cwd, "remote", "get-url", remote) or None


@typechecked
def resolve_target(
    owner: TOwner | None,
    repo: TRepo | None,
    *,
    remote_url: str | None,
) -> RepoRef:
    """
    Decide which repository to inspect.

    An explicit owner always wins. Otherwise the owner comes from the remote URL,
    and so does the repo name unless the caller gave one. The repo falls back to
    DEFAULT_REPO_NAME.
    """
    if not owner and remote_url:
        parsed = parse_remote_url(remote_url)
        if parsed is not None:
            owner = parsed[0]
            if not repo:
                repo = parsed[1]
            logger.debug("Inferred %s/%s from remote %s", owner, repo, remote_url)
        else:
            logger.debug("Remote %s is not a GitHub URL", remote_url)

    if not owner:
        msg = "GitHub username not provided and could not be inferred from git remote."
        raise TargetResolutionError(msg)
    return RepoRef(owner=owner, repo=repo or DEFAULT_REPO_NAME)
