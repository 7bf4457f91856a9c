"""Evaluator Protocol for the external filter-evaluator extension point.

Defines the structural interface every evaluator must satisfy.  Users can
plug in their own evaluator (a different jq build, gojq, a test double)
without inheriting from any base class: any class with a conformant
``evaluate`` method passes ``isinstance`` checks.

Example::

    from json_tree_nav.protocols import Evaluator

    class EchoEvaluator:
        def evaluate(self, expression: str, document: str) -> str:
            return document

    assert isinstance(EchoEvaluator(), Evaluator)  # True, structural conformance
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Evaluator(Protocol):
    """Structural protocol for external filter evaluators.

    The ``evaluate`` method must:
    - Accept the unmodified filter expression and the full JSON document text.
    - Return the evaluator's standard output with trailing newlines removed.
    - Raise ``EvaluationError`` when the evaluator fails, times out, or
      reports an error, carrying the raw diagnostic text.
    """

    def evaluate(self, expression: str, document: str) -> str: ...
