import re
from typing import Annotated, NewType

from annotated_types import Predicate
from typeguard import typechecked

_NAME_RE = re.compile(r"^[^/\s]+$")


def _is_name(value) -> bool:
    if not isinstance(value, str):
        return False
    return bool(_NAME_RE.match(value))


def _is_ref_name(value) -> bool:
    if not isinstance(value, str) or not value:
        return False
    return not (value.startswith("/") or value.endswith("/") or ".." in value or " " in value)


TOwner = Annotated[NewType("TOwner", str), Predicate(_is_name)]
TRepo = Annotated[NewType("TRepo", str), Predicate(_is_name)]
TBranch = Annotated[NewType("TBranch", str), Predicate(_is_ref_name)]
"""
TOwner and TRepo are single GitHub path segments (no slashes, no whitespace).
TBranch is a git ref name as it appears in the trees endpoint, e.g. 'main' or 'release/1.x'.
"""


@typechecked
def is_ref_name(value: str) -> bool:
    return _is_ref_name(value)
