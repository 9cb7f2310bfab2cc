"""Forbidden debug-code scanner over staged file content."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import Path

from stagegate.checks.types import CheckResult, DebugMatch
from stagegate.config import DebugCodeGroup
from stagegate.git.staging import read_staged_lines, staged_diff_matching

logger = logging.getLogger(__name__)

_ESCAPED_TOKEN = re.compile(r"\\([^A-Za-z0-9])")


def snippet_pattern(snippet: str) -> re.Pattern[str]:
    """Compile a snippet as fixed text.

    A backslash before a non-alphanumeric character (``exit\\;``) is an escaped
    literal, so the backslash itself is not part of the search text.
    """
    literal = _ESCAPED_TOKEN.sub(r"\1", snippet)
    return re.compile(re.escape(literal))


def scan_group(
    name: str,
    group: DebugCodeGroup,
    repo_root: Path,
    *,
    collect_all: bool = True,
    cache: dict[str, list[str]] | None = None,
) -> list[DebugMatch]:
    """Return forbidden snippet hits for one language group.

    With ``collect_all`` unset the scan stops at the first snippet that hits.
    """
    files = list(staged_diff_matching(group.file_pattern, repo_root))
    if not files:
        return []

    contents = cache if cache is not None else {}
    found: list[DebugMatch] = []
    for snippet in group.forbidden:
        pattern = snippet_pattern(snippet)
        hits: list[DebugMatch] = []
        for path in files:
            if path not in contents:
                contents[path] = read_staged_lines(path, repo_root)
            for number, line in enumerate(contents[path], start=1):
                m = pattern.search(line)
                if m:
                    hits.append(
                        DebugMatch(
                            group=name,
                            snippet=snippet,
                            path=path,
                            line_number=number,
                            line=line,
                            span=m.span(),
                        )
                    )
        if hits:
            logger.debug("debug-code group %s: %d hit(s) for %r", name, len(hits), snippet)
            found.extend(hits)
            if not collect_all:
                break
    return found


def scan_debug_code(
    rules: Sequence[tuple[str, DebugCodeGroup]],
    repo_root: Path,
    *,
    collect_all: bool = True,
) -> CheckResult:
    """Scan every configured group in order; any hit fails the check."""
    cache: dict[str, list[str]] = {}
    matches: list[DebugMatch] = []
    failed_groups: list[str] = []
    for name, group in rules:
        hits = scan_group(name, group, repo_root, collect_all=collect_all, cache=cache)
        if hits:
            failed_groups.append(name)
            matches.extend(hits)

    if not matches:
        return CheckResult.ok(f"{len(rules)} group(s) clean")

    diagnostics = [f"[{m.group}] {m.render()}" for m in matches]
    diagnostics.append(f"forbidden debug code found in group(s): {', '.join(failed_groups)}")
    return CheckResult(passed=False, diagnostics=tuple(diagnostics), matches=tuple(matches))
