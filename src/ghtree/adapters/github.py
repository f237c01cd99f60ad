from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Optional

import requests

from ..core import GitHubApiError, RepoRef
from ..defaults import API_BASE, BRANCH_MISSING_MESSAGES, DEFAULT_BRANCH, DEFAULT_FALLBACK_BRANCH

logger = logging.getLogger(__name__)


def _auth_headers(token: Optional[str]) -> Dict[str, str]:
    headers = {"Accept": "application/vnd.github.v3+json"}
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


def tree_url(ref: RepoRef, branch: str) -> str:
    return f"{API_BASE}/repos/{ref.owner}/{ref.repo}/git/trees/{branch}"


def load_payload(body: str) -> Optional[Dict[str, Any]]:
    """Return the body as a JSON object, or None if it is empty or not an object."""
    if not body.strip():
        return None
    try:
        data = json.loads(body)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def needs_fallback(body: str) -> bool:
    """True if the first branch came back empty or as a missing-ref error."""
    if not body.strip():
        return True
    payload = load_payload(body)
    if payload is None:
        return False
    return payload.get("message") in BRANCH_MISSING_MESSAGES


class GitHubTreeSource:
    def __init__(
        self,
        ref: RepoRef,
        *,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        branch: str = DEFAULT_BRANCH,
        fallback_branch: str = DEFAULT_FALLBACK_BRANCH,
    ) -> None:
        self.ref = ref
        self.branch = branch
        self.fallback_branch = fallback_branch
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._session.headers.update(_auth_headers(token))

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> GitHubTreeSource:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch(self, branch: str) -> str:
        """GET the recursive tree of `branch` and return the raw body; a transport failure reads as empty."""
        url = tree_url(self.ref, branch)
        logger.debug("GET %s", url)
        try:
            resp = self._session.get(url, params={"recursive": "1"})
        except requests.RequestException as e:
            logger.warning("Request for %s failed: %s", url, e)
            return ""
        logger.debug("%s -> HTTP %s", url, resp.status_code)
        return resp.text

    def fetch_tree(self, on_fallback: Optional[Callable[[str, str], None]] = None) -> Dict[str, Any]:
        """
        Fetch the tree on the primary branch, or on the fallback branch if the primary is missing.

        `on_fallback(branch, fallback_branch)` is called right before the second request.
        Raises GitHubApiError with the raw body when the final answer is not a tree.
        """
        body = self.fetch(self.branch)
        if needs_fallback(body):
            if on_fallback is not None:
                on_fallback(self.branch, self.fallback_branch)
            body = self.fetch(self.fallback_branch)

        payload = load_payload(body)
        if payload is None or "message" in payload or not isinstance(payload.get("tree"), list):
            raise GitHubApiError(body)
        if payload.get("truncated"):
            logger.warning("GitHub truncated the tree listing for %s", self.ref)
        return payload
