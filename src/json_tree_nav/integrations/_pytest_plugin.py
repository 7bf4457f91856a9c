"""pytest plugin for json-tree-nav.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

import json
from typing import Any

import pytest
import yaml

from json_tree_nav import DocumentKind, NavigatorConfig, resolve
from json_tree_nav.protocols import Evaluator


@pytest.fixture(scope="session")
def assert_json_path() -> Any:
    """Fixture that returns a callable path asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to resolve() which creates a fresh HybridResolver per call).

    Usage in tests::

        def test_name(assert_json_path):
            assert_json_path('{"abi": [{"name": "f"}]}', ".abi[0].name", "f")

        def test_missing(assert_json_path):
            with pytest.raises(AssertionError, match=r"no value at"):
                assert_json_path('{"abi": []}', ".name", "f")

    Returns:
        A callable ``_assert(document, path, expected=..., kind=JSON, config=None, evaluator=None)``.
        Without ``expected`` it only asserts that something is at ``path``.
        ``expected`` may be a Python value (compared after decoding the
        resolved JSON or YAML). Text that does not decode is compared as-is.
    """
    missing = object()

    def _assert(
        document: str,
        path: str,
        expected: Any = missing,
        kind: DocumentKind = DocumentKind.JSON,
        config: NavigatorConfig | None = None,
        evaluator: Evaluator | None = None,
    ) -> None:
        """Assert that ``path`` resolves in ``document`` (to ``expected``).

        Raises:
            AssertionError: When nothing is at ``path`` or the value differs,
                with the path, the resolver's message and both values.
        """
        resolution = resolve(path, document, kind=kind, config=config, evaluator=evaluator)
        if not resolution.found:
            raise AssertionError(f"path {path} not found: {resolution.message}")
        if expected is missing:
            return

        actual: Any = resolution.text
        try:
            if kind is DocumentKind.JSON:
                actual = json.loads(resolution.text)
            else:
                actual = yaml.safe_load(resolution.text)
        except (ValueError, yaml.YAMLError):
            actual = resolution.text
        if actual != expected:
            raise AssertionError(
                f"value at {path} differs\n"
                f"  actual:   {resolution.text}\n"
                f"  expected: {expected!r}"
            )

    return _assert
