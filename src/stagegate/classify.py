"""Staged file classification by path pattern."""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FilePatternRule:
    """Named path category backed by a regular expression."""

    name: str
    pattern: str
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.pattern))

    def matches(self, path: str) -> bool:
        return self._compiled.search(path) is not None


PHP_FILE = FilePatternRule(name="php", pattern=r"^.*\.php$")
SOURCE_PHP_FILE = FilePatternRule(name="source-php", pattern=r"^src/.*\.php$")
SYNTAX_FILE = FilePatternRule(name="php-syntax", pattern=r"^.*\.(php|inc)$")


def matches(path: str, category: FilePatternRule) -> bool:
    """Return True when ``path`` belongs to ``category``."""
    return category.matches(path)


def source_php_rule(source_dir: str) -> FilePatternRule:
    """Build the "PHP under the source directory" rule for a custom root."""
    prefix = source_dir.strip("/")
    if prefix == "src":
        return SOURCE_PHP_FILE
    return FilePatternRule(name="source-php", pattern=rf"^{re.escape(prefix)}/.*\.php$")


def select(paths: list[str], category: FilePatternRule) -> list[str]:
    """Filter ``paths`` down to those in ``category``, preserving order."""
    return [p for p in paths if category.matches(p)]
