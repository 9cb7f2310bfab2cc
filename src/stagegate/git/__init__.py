"""Git staging access for stagegate."""

from stagegate.git.staging import (
    EMPTY_TREE_SHA,
    has_head,
    list_staged_files,
    read_staged_lines,
    staged_diff_matching,
)

__all__ = [
    "EMPTY_TREE_SHA",
    "has_head",
    "list_staged_files",
    "read_staged_lines",
    "staged_diff_matching",
]
