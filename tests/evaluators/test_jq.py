"""Tests for JqEvaluator.

Most tests stand in for jq with the running Python interpreter: ``args`` is
placed before the expression, so ``python -c SCRIPT EXPRESSION`` receives the
expression as ``sys.argv[1]`` and the document on stdin.
"""

from __future__ import annotations

import shutil
import sys

import pytest

from json_tree_nav.evaluators import JqEvaluator
from json_tree_nav.evaluators.jq import ERROR_MARKER
from json_tree_nav.exceptions import EvaluationError
from json_tree_nav.protocols import Evaluator

requires_jq = pytest.mark.skipif(shutil.which("jq") is None, reason="jq is not installed")


def _python_evaluator(script: str, timeout: float | None = 10.0) -> JqEvaluator:
    return JqEvaluator(sys.executable, ("-c", script), timeout=timeout)


class TestProtocol:
    def test_satisfies_evaluator_protocol(self) -> None:
        assert isinstance(JqEvaluator(), Evaluator)

    def test_repr(self) -> None:
        assert repr(JqEvaluator(timeout=2.0)) == "JqEvaluator(executable='jq', timeout=2.0)"

    def test_is_available(self) -> None:
        assert _python_evaluator("pass").is_available()
        assert not JqEvaluator("definitely-not-a-real-jq-binary").is_available()


class TestSubprocessContract:
    def test_document_on_stdin_expression_as_last_argument(self) -> None:
        echo = _python_evaluator(
            "import sys; sys.stdout.write(sys.argv[1] + '|' + sys.stdin.read() + '\\n\\n')"
        )
        assert echo.evaluate(".abi", '{"abi": 1}') == '.abi|{"abi": 1}'

    def test_non_zero_exit_raises_with_diagnostic(self) -> None:
        failing = _python_evaluator("import sys; sys.stderr.write('bad filter\\n'); sys.exit(3)")
        with pytest.raises(EvaluationError) as exc_info:
            failing.evaluate(".x", "{}")
        assert exc_info.value.diagnostic == "bad filter"

    def test_silent_failure_reports_exit_status(self) -> None:
        failing = _python_evaluator("import sys; sys.exit(2)")
        with pytest.raises(EvaluationError, match="exit status 2"):
            failing.evaluate(".x", "{}")

    def test_error_marker_on_success_still_raises(self) -> None:
        marked = _python_evaluator(f"print({ERROR_MARKER!r} + ' (at <stdin>:0): boom')")
        with pytest.raises(EvaluationError, match="boom"):
            marked.evaluate(".x", "{}")

    def test_timeout(self) -> None:
        slow = _python_evaluator("import time; time.sleep(5)", timeout=0.2)
        with pytest.raises(EvaluationError) as exc_info:
            slow.evaluate(".x", "{}")
        assert exc_info.value.diagnostic == "timeout"

    def test_missing_executable(self) -> None:
        with pytest.raises(EvaluationError, match="definitely-not-a-real-jq-binary"):
            JqEvaluator("definitely-not-a-real-jq-binary").evaluate(".", "{}")


@requires_jq
class TestRealJq:
    def test_simple_path(self) -> None:
        assert JqEvaluator().evaluate(".abi[0].name", '{"abi": [{"name": "f"}]}') == '"f"'

    def test_absent_key_is_null(self) -> None:
        assert JqEvaluator().evaluate(".missing", '{"abi": []}') == "null"

    def test_extra_args(self) -> None:
        compact = JqEvaluator(args=("-c",))
        assert compact.evaluate(".", '{ "a" : [1, 2] }') == '{"a":[1,2]}'

    def test_type_error(self) -> None:
        with pytest.raises(EvaluationError, match="jq: error"):
            JqEvaluator().evaluate(".abi | ascii_downcase", '{"abi": []}')
