from __future__ import annotations

import argparse
import textwrap
from dataclasses import dataclass
from typing import Literal

from ghtree.defaults import (
    DEFAULT_BRANCH,
    DEFAULT_FALLBACK_BRANCH,
    DEFAULT_FORMAT,
    DEFAULT_FORMAT_CHOICES,
    DEFAULT_MAX_DEPTH,
    DEFAULT_NO_LOCAL,
    DEFAULT_REPO_NAME,
    DEFAULT_VERBOSE,
    TOKEN_ENV_VAR,
)
from ghtree.types import TBranch, is_ref_name

PROG = "ghtree"
USAGE = f"{PROG} [github_username] [repo_name]"


@dataclass(slots=True)
class Context:
    owner: str | None = None
    repo: str | None = None
    branch: TBranch = DEFAULT_BRANCH
    fallback_branch: TBranch = DEFAULT_FALLBACK_BRANCH
    max_depth: int = DEFAULT_MAX_DEPTH
    no_local: bool = DEFAULT_NO_LOCAL
    format: Literal["auto", "table", "column", "tsv"] = DEFAULT_FORMAT
    verbose: bool = DEFAULT_VERBOSE


def _branch(value: str) -> str:
    if not is_ref_name(value):
        msg = f"invalid branch name: {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return value


def _depth(value: str) -> int:
    depth = int(value)
    if depth < 0:
        msg = f"depth must be >= 0, got {depth}"
        raise argparse.ArgumentTypeError(msg)
    return depth


def parse_common_args(argv: list[str] | None = None) -> Context:
    epilog = textwrap.dedent(
        f"""
        EXAMPLES
          {PROG} myuser Pilot-test
          {PROG}                     # infer owner (and repo) from the 'origin' remote; repo defaults to {DEFAULT_REPO_NAME}

        AUTHENTICATION
        Set {TOKEN_ENV_VAR} to send a token with the API request, e.g. for private repositories:
          export {TOKEN_ENV_VAR}="your_token"
        """
    )

    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=f"{USAGE} [options]",
        description="Lists a GitHub repository's tree, locally and via the GitHub API",
        add_help=True,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )

    parser.add_argument(
        "owner",
        type=str,
        nargs="?",
        default=None,
        help="GitHub user or organisation. Inferred from the git remote if omitted.",
    )
    parser.add_argument(
        "repo",
        type=str,
        nargs="?",
        default=None,
        help=f"Repository name. Inferred from the git remote or defaults to {DEFAULT_REPO_NAME}.",
    )
    parser.add_argument(
        "-b",
        "--branch",
        type=_branch,
        default=DEFAULT_BRANCH,
        help=f"Branch to list first (default: {DEFAULT_BRANCH}).",
    )
    parser.add_argument(
        "--fallback-branch",
        type=_branch,
        default=DEFAULT_FALLBACK_BRANCH,
        help=f"Branch tried once if the first one is missing (default: {DEFAULT_FALLBACK_BRANCH}).",
    )
    parser.add_argument(
        "-d",
        "--depth",
        type=_depth,
        dest="max_depth",
        default=DEFAULT_MAX_DEPTH,
        help=f"How many levels of the local working tree to list (default: {DEFAULT_MAX_DEPTH}).",
    )
    parser.add_argument(
        "-L",
        "--no-local",
        action="store_true",
        default=DEFAULT_NO_LOCAL,
        help="Skip the local working tree listing.",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=DEFAULT_FORMAT_CHOICES,
        default=DEFAULT_FORMAT,
        help="Remote tree layout. 'auto' uses the `column` tool when installed.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=DEFAULT_VERBOSE,
        help="Log requests and decisions to stderr.",
    )

    args = parser.parse_args(argv)
    return Context(
        owner=args.owner or None,
        repo=args.repo or None,
        branch=args.branch,
        fallback_branch=args.fallback_branch,
        max_depth=args.max_depth,
        no_local=bool(args.no_local),
        format=args.format,
        verbose=bool(args.verbose),
    )
