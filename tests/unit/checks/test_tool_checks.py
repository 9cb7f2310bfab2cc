"""Tests for syntax, style and unit-test checks with stubbed tools."""

from __future__ import annotations

from pathlib import Path

import pytest

from stagegate.checks.style import check_style_fixer, check_style_standard
from stagegate.checks.syntax import check_syntax
from stagegate.checks.unit_tests import check_unit_tests
from stagegate.classify import source_php_rule
from stagegate.errors import ToolLaunchError
from stagegate.exec import ExecResult


def _result(stdout: str = "", stderr: str = "", code: int = 0) -> ExecResult:
    return ExecResult(argv=("tool",), cwd=Path("/repo"), returncode=code, stdout=stdout, stderr=stderr)


class _ToolStub:
    def __init__(self, outputs: dict[str, ExecResult] | None = None):
        self.outputs = outputs or {}
        self.checked: list[str] = []

    def check(self, path: str) -> ExecResult:
        self.checked.append(path)
        return self.outputs.get(path, _result(stdout=f"No syntax errors detected in {path}\n"))


class _SuiteStub:
    def __init__(self, result: ExecResult):
        self.result = result
        self.runs = 0

    def run(self) -> ExecResult:
        self.runs += 1
        return self.result


def test_syntax_checks_php_and_inc_files_only() -> None:
    tool = _ToolStub()
    result = check_syntax(["a.php", "b.inc", "c.js", "d.twig"], tool)

    assert result.passed
    assert tool.checked == ["a.php", "b.inc"]


def test_syntax_reports_every_failing_file() -> None:
    tool = _ToolStub(
        {
            "a.php": _result(stdout="PHP Parse error: unexpected '}' in a.php on line 3\n", code=255),
            "c.php": _result(stderr="PHP Parse error: unexpected end of file in c.php\n", code=255),
        }
    )
    result = check_syntax(["a.php", "b.php", "c.php"], tool)

    assert not result.passed
    assert tool.checked == ["a.php", "b.php", "c.php"]
    assert "a.php:" in result.diagnostics
    assert "c.php:" in result.diagnostics
    assert "b.php:" not in result.diagnostics
    assert any("unexpected '}'" in line for line in result.diagnostics)


def test_syntax_skips_without_matching_files() -> None:
    tool = _ToolStub()
    result = check_syntax(["README.md"], tool)
    assert result.passed and result.skipped
    assert tool.checked == []


def test_failing_check_without_output_still_explains() -> None:
    tool = _ToolStub({"a.php": _result(code=1)})
    result = check_syntax(["a.php"], tool)
    assert not result.passed
    assert result.diagnostics == ("a.php:", "  exit 1")


def test_style_fixer_surfaces_diff_output() -> None:
    diff = "   1) src/Foo.php\n      ---------- begin diff ----------\n-  $a=1;\n+  $a = 1;\n"
    tool = _ToolStub({"src/Foo.php": _result(stdout=diff, code=8)})
    result = check_style_fixer(["src/Foo.php", "tests/FooTest.php", "app.js"], tool)

    assert not result.passed
    assert tool.checked == ["src/Foo.php", "tests/FooTest.php"]
    assert "  +  $a = 1;" in result.diagnostics


def test_style_standard_only_checks_source_directory() -> None:
    tool = _ToolStub()
    result = check_style_standard(["src/Foo.php", "tests/FooTest.php", "lib/Bar.php"], tool)

    assert result.passed
    assert tool.checked == ["src/Foo.php"]


def test_style_standard_with_custom_source_dir() -> None:
    tool = _ToolStub({"lib/Bar.php": _result(stdout="FOUND 1 ERROR AFFECTING 1 LINE\n", code=2)})
    result = check_style_standard(["src/Foo.php", "lib/Bar.php"], tool, source_php_rule("lib"))

    assert not result.passed
    assert tool.checked == ["lib/Bar.php"]
    assert "  FOUND 1 ERROR AFFECTING 1 LINE" in result.diagnostics


def test_launch_failure_propagates() -> None:
    class _Missing:
        def check(self, path: str) -> ExecResult:
            raise ToolLaunchError(["php", "-l", path], "No such file or directory")

    with pytest.raises(ToolLaunchError, match="unable to launch php"):
        check_syntax(["a.php"], _Missing())


def test_unit_tests_pass_on_clean_output() -> None:
    suite = _SuiteStub(_result(stdout="OK (12 tests, 30 assertions)\n"))
    result = check_unit_tests(suite)
    assert result.passed
    assert suite.runs == 1


@pytest.mark.parametrize(
    "output",
    [
        "FAILURES!\nTests: 3, Assertions: 4, Failures: 1.\n",
        "PHP Fatal error:  Uncaught Error: Class 'Foo' not found\n",
    ],
)
def test_unit_tests_fail_on_failure_tokens(output: str) -> None:
    result = check_unit_tests(_SuiteStub(_result(stdout=output, code=1)))
    assert not result.passed
    assert list(result.diagnostics) == output.splitlines()


def test_unit_tests_token_in_stderr_counts() -> None:
    result = check_unit_tests(_SuiteStub(_result(stdout="....\n", stderr="Fatal: out of memory\n")))
    assert not result.passed
    assert result.diagnostics == ("....", "Fatal: out of memory")
