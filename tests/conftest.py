"""Shared fixtures: sample documents and a recording evaluator double."""

from __future__ import annotations

from collections.abc import Callable

import pytest

ABI_DOC = '{"abi":[{"name":"f","type":"function"}]}'

NESTED_DOC = """{
  "name": "token",
  "abi": [
    {"name": "transfer", "type": "function", "inputs": [{"name": "to"}]},
    {"name": "Transfer", "type": "event"}
  ],
  "meta": {"version": 2, "draft": false, "notes": null}
}"""

YAML_DOC = """name: token
abi:
  - name: transfer
    type: function
  - name: Transfer
    type: event
meta:
  version: 2
  draft: false
"""

ALIAS_DOC = """base: &b x
items:
  - name: *b
    type: t
"""


class RecordingEvaluator:
    """Evaluator double that returns a canned answer and records its calls."""

    def __init__(self, output: str = "null", error: Exception | None = None) -> None:
        self.output = output
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def evaluate(self, expression: str, document: str) -> str:
        self.calls.append((expression, document))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def abi_doc() -> str:
    return ABI_DOC


@pytest.fixture
def nested_doc() -> str:
    return NESTED_DOC


@pytest.fixture
def yaml_doc() -> str:
    return YAML_DOC


@pytest.fixture
def alias_doc() -> str:
    return ALIAS_DOC


@pytest.fixture
def evaluator() -> RecordingEvaluator:
    return RecordingEvaluator()


@pytest.fixture
def make_evaluator() -> Callable[..., RecordingEvaluator]:
    return RecordingEvaluator
