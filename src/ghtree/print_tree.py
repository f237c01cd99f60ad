from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

import requests

from .adapters.filesystem import print_local_listing
from .adapters.github import GitHubTreeSource
from .cli_common import USAGE, Context, parse_common_args
from .core import GitHubApiError, StdoutWriter, TargetResolutionError, Writer, parse_tree
from .defaults import MAX_ERROR_LINES, TOKEN_ENV_VAR
from .formatters import select_renderer
from .util import is_inside_work_tree, read_origin_url, resolve_target

logger = logging.getLogger(__name__)

CREDENTIALS_HINT = (
    "If this shows 'Bad credentials' or 'Not Found' check that:\n"
    " - Repo name & owner are correct\n"
    f' - If private, you have set {TOKEN_ENV_VAR} with repo scope: export {TOKEN_ENV_VAR}="YOUR_TOKEN"\n'
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _write_api_error(body: str, writer: Writer) -> None:
    writer.write("GitHub API response:\n")
    lines = body.splitlines()[:MAX_ERROR_LINES]
    writer.write("".join(line + "\n" for line in lines))
    writer.write("\n")
    writer.write(CREDENTIALS_HINT)


def main(
    *,
    argv: list[str] | None = None,
    writer: Writer | None = None,
    env: Optional[Mapping[str, str]] = None,
    cwd: Path | None = None,
    session: Optional[requests.Session] = None,
) -> int:
    if argv is None:
        argv = sys.argv[1:]
    ctx: Context = parse_common_args(argv)
    _configure_logging(ctx.verbose)

    env = os.environ if env is None else env
    cwd = Path.cwd() if cwd is None else Path(cwd)
    token = env.get(TOKEN_ENV_VAR) or None
    out_writer = writer or StdoutWriter()

    in_work_tree = is_inside_work_tree(cwd)
    remote_url = read_origin_url(cwd) if ctx.owner is None and in_work_tree else None
    try:
        ref = resolve_target(ctx.owner, ctx.repo, remote_url=remote_url)
    except TargetResolutionError as e:
        out_writer.write(f"Error: {e}\n")
        out_writer.write(f"Usage: {USAGE}\n")
        return 1

    renderer = select_renderer(ctx.format)

    out_writer.write(f"Checking repository: {ref}\n\n")

    if in_work_tree and not ctx.no_local:
        print_local_listing(cwd, out_writer, max_depth=ctx.max_depth)

    out_writer.write("Remote repository content (GitHub API):\n")

    def _announce_fallback(branch: str, fallback_branch: str) -> None:
        out_writer.write(
            f" - Branch '{branch}' not found or API returned error. Trying branch '{fallback_branch}'...\n"
        )

    with GitHubTreeSource(
        ref,
        token=token,
        session=session,
        branch=ctx.branch,
        fallback_branch=ctx.fallback_branch,
    ) as source:
        try:
            payload = source.fetch_tree(on_fallback=_announce_fallback)
        except GitHubApiError as e:
            _write_api_error(e.body, out_writer)
            return 1

    out_writer.write(renderer.render(parse_tree(payload)))
    out_writer.write("\nDone.\n")
    return 0


def run() -> None:
    try:
        code = main()
    except BrokenPipeError:
        # The reader went away (e.g. `ghtree | head`). Point stdout at devnull so the
        # interpreter's final flush does not raise again.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    run()
