"""
Defaults for the CLI and the GitHub tree lookup.
"""

# region ---[ Target Resolution ]---

DEFAULT_REPO_NAME = "Pilot-test"
DEFAULT_REMOTE_NAME = "origin"
TOKEN_ENV_VAR = "GHTOKEN"

# endregion ---[ Target Resolution ]---
# region ---[ GitHub API ]---

API_BASE = "https://api.github.com"
DEFAULT_BRANCH = "main"
DEFAULT_FALLBACK_BRANCH = "master"

# Messages that mean "this ref does not exist here", as opposed to a credentials or quota problem.
BRANCH_MISSING_MESSAGES: tuple[str, ...] = ("Not Found", "Invalid request")

# The raw error payload is echoed up to this many lines.
MAX_ERROR_LINES = 200

# endregion ---[ GitHub API ]---
# region ---[ Default CLI Options ]---

DEFAULT_MAX_DEPTH = 3
DEFAULT_NO_LOCAL = False
DEFAULT_FORMAT = "auto"
DEFAULT_FORMAT_CHOICES = ["auto", "table", "column", "tsv"]
DEFAULT_VERBOSE = False

# endregion ---[ Default CLI Options ]---
