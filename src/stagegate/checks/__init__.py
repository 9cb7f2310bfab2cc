"""Check modules run by the gate pipeline."""

from stagegate.checks.composer import check_composer_lock
from stagegate.checks.debug_code import scan_debug_code
from stagegate.checks.style import check_style_fixer, check_style_standard
from stagegate.checks.syntax import check_syntax
from stagegate.checks.types import CheckResult, DebugMatch
from stagegate.checks.unit_tests import check_unit_tests

__all__ = [
    "CheckResult",
    "DebugMatch",
    "check_composer_lock",
    "check_style_fixer",
    "check_style_standard",
    "check_syntax",
    "check_unit_tests",
    "scan_debug_code",
]
