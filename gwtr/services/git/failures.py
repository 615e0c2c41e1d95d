"""Classification of git's human-readable failure text.

git reports failures as free text, so retry and skip decisions depend on
matching that text. All matching lives here; the rules in
gwtr.constants are the only thing that changes when git rewords a message.
"""

import re
from typing import Iterable, Pattern, Tuple

from gwtr.constants import (
    BRANCH_EXISTS_PATTERNS,
    REMOTE_MISSING_PATTERNS,
    UNCOMMITTED_CHANGES_PATTERNS,
    UP_TO_DATE_PATTERNS,
)
from gwtr.models.worktree import FailureKind


def _compile(patterns: Iterable[str]) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)


_RULES = (
    (FailureKind.BRANCH_EXISTS, _compile(BRANCH_EXISTS_PATTERNS)),
    (FailureKind.HAS_UNCOMMITTED_CHANGES, _compile(UNCOMMITTED_CHANGES_PATTERNS)),
    (FailureKind.REMOTE_MISSING, _compile(REMOTE_MISSING_PATTERNS)),
)

_UP_TO_DATE = _compile(UP_TO_DATE_PATTERNS)


def classify_failure(text: str) -> FailureKind:
    """Map git's error text to the failure kind that selects the next step."""
    for kind, patterns in _RULES:
        if any(pattern.search(text) for pattern in patterns):
            return kind
    return FailureKind.OTHER


def is_up_to_date(text: str) -> bool:
    """True when `git pull` output says nothing was fetched or merged."""
    return any(pattern.search(text) for pattern in _UP_TO_DATE)
