"""HybridResolver: structural resolution first, external evaluator second.

This is the orchestration layer between the parse tree and ``jq``.

Architecture:
- ``resolve()`` re-parses the document (a malformed document is a
  ``ParseError`` before anything else happens), classifies the expression,
  and runs an explicit two-stage pipeline:

  1. ``_match_structurally`` returns a ``StructuralMatch`` or None.  It never
     raises for a miss; out-of-range indexes and absent keys are just None.
  2. ``_delegate`` runs only when stage 1 returned None.  The document is
     serialised (YAML is converted to JSON first) and handed to the
     evaluator with the unmodified expression.

- A structural hit is final: the evaluator is never consulted afterwards,
  so it can never override one.
- For SIMPLE_PATH and PROJECTION expressions an evaluator answer of ``null``
  (or nothing at all) is reported as not found, because jq answers ``null``
  for absent keys instead of failing.  For COMPLEX expressions ``null`` is
  a legitimate value and is returned as-is.
- Results are document-formatted text either way, one entry per value;
  callers cannot tell which stage produced them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from json_tree_nav.cache import QueryCache
from json_tree_nav.config import DocumentKind, NavigatorConfig
from json_tree_nav.convert import render_value, split_json_values, yaml_to_json
from json_tree_nav.enumerator import enumerate_children, node_at_path
from json_tree_nav.evaluators import JqEvaluator
from json_tree_nav.path import Key, Path
from json_tree_nav.query.translator import ExpressionClass, StructuralMatch, classify
from json_tree_nav.result import Resolution
from json_tree_nav.tree.adapter import TreeAdapter
from json_tree_nav.tree.keys import suggest_keys

if TYPE_CHECKING:
    from json_tree_nav.protocols import Evaluator
    from json_tree_nav.tree.nodes import Node

__all__ = ["HybridResolver"]

logger = structlog.get_logger(__name__)

_EMPTY_ANSWERS = frozenset({"", "null"})


class HybridResolver:
    """Resolve paths and restricted filters, delegating the rest to ``jq``.

    Example::

        from json_tree_nav.resolver import HybridResolver

        resolver = HybridResolver()
        doc = '{"abi": [{"name": "f", "type": "function"}]}'
        resolver.resolve(".abi[0].name", doc).text            # '"f"'
        resolver.resolve(".abi[] | {name,type}", doc).values  # one record per element
        resolver.resolve(".missing", doc).found               # False
    """

    def __init__(
        self,
        config: NavigatorConfig | None = None,
        evaluator: Evaluator | None = None,
        max_cache_size: int = 128,
    ) -> None:
        """Initialise the resolver.

        Args:
            config: Resolution parameters.  Defaults to ``NavigatorConfig()``.
            evaluator: An Evaluator-conformant object.  Defaults to a
                ``JqEvaluator`` built from the config.
            max_cache_size: Maximum number of translated expressions kept in
                the per-instance LRU cache.  An infrastructure parameter, not
                part of ``NavigatorConfig``.
        """
        self._config: NavigatorConfig = config if config is not None else NavigatorConfig()
        self._evaluator: Any = (
            evaluator
            if evaluator is not None
            else JqEvaluator(
                self._config.evaluator,
                self._config.evaluator_args,
                self._config.timeout,
            )
        )
        self._adapter = TreeAdapter(self._config.kind)
        self._queries = QueryCache(max_size=max_cache_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> NavigatorConfig:
        return self._config

    @property
    def kind(self) -> DocumentKind:
        return self._config.kind

    @property
    def adapter(self) -> TreeAdapter:
        return self._adapter

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, expression: str, document_text: str) -> Resolution:
        """Resolve ``expression`` against ``document_text``.

        Raises:
            ParseError: If the document is malformed.
            EvaluationError: If delegation was needed and the evaluator failed
                or timed out.
        """
        root = self._adapter.parse(document_text)
        expression_class = classify(expression)

        match = self._match_structurally(expression, root)
        if match is not None:
            logger.debug(
                "structural_hit",
                expression=expression,
                expression_class=str(expression_class),
                results=len(match.values),
            )
            return Resolution(expression, match.values)

        logger.debug(
            "delegating_to_evaluator",
            expression=expression,
            expression_class=str(expression_class),
        )
        output = self._delegate(expression, document_text)

        if expression_class is not ExpressionClass.COMPLEX and output.strip() in _EMPTY_ANSWERS:
            return Resolution(expression, (), self._not_found_message(expression, root))
        if not output.strip():
            return Resolution(expression, (), f"{expression} produced no output")
        return Resolution(expression, self._from_evaluator_output(output))

    def resolve_path(self, path: Path, document_text: str) -> Resolution:
        """Resolve a Path by its textual form."""
        return self.resolve(path.render(), document_text)

    # ------------------------------------------------------------------
    # Stage 1: structural
    # ------------------------------------------------------------------

    def _match_structurally(self, expression: str, root: Node) -> StructuralMatch | None:
        if not self._config.structural_first:
            return None
        compiled = self._queries.get(expression)
        if compiled is None:
            return None
        logger.debug(
            "structural_query",
            expression=expression,
            query=compiled.pattern.to_query_source(self.kind),
        )
        return compiled.execute(root, self.kind)

    # ------------------------------------------------------------------
    # Stage 2: delegation
    # ------------------------------------------------------------------

    def _delegate(self, expression: str, document_text: str) -> str:
        payload = document_text
        if self.kind is DocumentKind.YAML:
            payload = yaml_to_json(document_text)
        return str(self._evaluator.evaluate(expression, payload))

    def _from_evaluator_output(self, output: str) -> tuple[str, ...]:
        """One document-formatted value per result the evaluator printed."""
        values = split_json_values(output)
        if values is None:
            # Raw (-r) output is not JSON; hand it back untouched.
            return (output,)
        rendered: list[str] = []
        for value, text in values:
            # JSON scalars keep the evaluator's own literal, as structural
            # hits keep the source literal.
            if self.kind is DocumentKind.JSON and not isinstance(value, (dict, list)):
                rendered.append(text)
            else:
                rendered.append(render_value(value, self.kind))
        return tuple(rendered)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _not_found_message(self, expression: str, root: Node) -> str:
        compiled = self._queries.get(expression)
        message = f"no value at {expression}"
        if compiled is None or not compiled.path.segments or not compiled.path.is_concrete:
            return message

        last = compiled.path.segments[-1]
        parent_path = compiled.path.parent()
        if not isinstance(last, Key) or parent_path is None:
            return message
        parent = node_at_path(root, parent_path)
        if parent is None:
            return message

        siblings = [e.segment.name for e in enumerate_children(parent) if isinstance(e.segment, Key)]
        hints = suggest_keys(last.name, siblings, self._config.suggestion_threshold)
        if hints:
            alternatives = ", ".join(str(parent_path.extend(Key(h))) for h in hints[:3])
            message += f"; did you mean {alternatives}?"
        return message

