"""Composer lockfile consistency check."""

from __future__ import annotations

from collections.abc import Sequence

from stagegate.checks.types import CheckResult
from stagegate.errors import LockfileMissingError

COMPOSER_JSON = "composer.json"
COMPOSER_LOCK = "composer.lock"


def check_composer_lock(staged: Sequence[str]) -> CheckResult:
    """Require composer.lock alongside a staged composer.json.

    Raises:
        LockfileMissingError: composer.json is staged without composer.lock
    """
    if COMPOSER_JSON not in staged:
        return CheckResult.skip(f"{COMPOSER_JSON} not staged")
    if COMPOSER_LOCK not in staged:
        raise LockfileMissingError(f"{COMPOSER_LOCK} must be commited if {COMPOSER_JSON} is modified!")
    return CheckResult.ok(f"{COMPOSER_JSON} and {COMPOSER_LOCK} staged together")
