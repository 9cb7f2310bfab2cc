"""Tests for the composer lockfile check."""

from __future__ import annotations

import pytest

from stagegate.checks.composer import check_composer_lock
from stagegate.errors import LockfileMissingError


@pytest.mark.parametrize(
    "staged",
    [
        [],
        ["composer.lock"],
        ["src/Foo.php", "composer.lock"],
        ["vendor/pkg/composer.json"],
    ],
)
def test_passes_without_composer_json(staged: list[str]) -> None:
    assert check_composer_lock(staged).passed


def test_passes_when_both_files_staged() -> None:
    result = check_composer_lock(["composer.lock", "composer.json"])
    assert result.passed
    assert not result.skipped


def test_composer_json_alone_is_fatal() -> None:
    with pytest.raises(LockfileMissingError, match="composer.lock must be commited"):
        check_composer_lock(["composer.json"])


def test_composer_json_with_other_files_is_fatal() -> None:
    with pytest.raises(LockfileMissingError):
        check_composer_lock(["src/Foo.php", "composer.json", "app/composer.lock"])
