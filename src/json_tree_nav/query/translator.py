"""Query translator: restricted filter expressions -> structural QueryPatterns.

The structural grammar is deliberately small::

    expression := path [ "|" "{" field ("," field)* "}" ]

``classify`` sorts an arbitrary expression into one of three classes, which
decides how the resolver treats it:

- SIMPLE_PATH: bare dotted keys and indexes only, e.g. ``.abi[0].name``
- PROJECTION:  a path (``[]`` allowed) piped into one flat projection,
               e.g. ``.abi[] | {name,type}``
- COMPLEX:     everything else (functions, several pipes, quoted keys, ...)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from json_tree_nav.config import DocumentKind
from json_tree_nav.convert import load_value, render_value
from json_tree_nav.exceptions import PathSyntaxError
from json_tree_nav.path import Each, Index, Key, Path, parse_path
from json_tree_nav.query.pattern import (
    Capture,
    EachStep,
    FieldStep,
    IndexStep,
    QueryPattern,
    Step,
)
from json_tree_nav.tree.nodes import Node, NodeKind

__all__ = [
    "CompiledQuery",
    "ExpressionClass",
    "StructuralMatch",
    "classify",
    "compile_path",
    "translate",
]

_PROJECTION = re.compile(r"^(?P<path>[^|{}]+?)\s*\|\s*\{(?P<fields>[^{}|]*)\}\s*$")
_FIELD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class ExpressionClass(StrEnum):
    SIMPLE_PATH = auto()
    PROJECTION = auto()
    COMPLEX = auto()


@dataclass(frozen=True, slots=True)
class StructuralMatch:
    """Captured values of a structural hit, as document-formatted text."""

    values: tuple[str, ...]
    nodes: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    """A translated expression: the pattern plus any requested projection."""

    expression: str
    path: Path
    pattern: QueryPattern
    fields: tuple[str, ...] | None = None

    def execute(self, root: Node, kind: DocumentKind) -> StructuralMatch | None:
        """Run the pattern against ``root``; None when nothing is captured.

        With a projection, every capture must be an OBJECT; any other
        capture makes the whole attempt a miss so the caller can defer to
        the external evaluator, which reports the type error itself.
        """
        captures = self.pattern.captures(root)
        if not captures:
            return None

        values: list[str] = []
        for node in captures:
            if self.fields is not None and node.kind is not NodeKind.OBJECT:
                return None
            # Aliases and other YAML nodes that do not decode on their own
            # are left to the evaluator, which sees the resolved document.
            try:
                if self.fields is not None:
                    values.append(_project(node, self.fields, kind))
                elif node.kind.is_scalar and kind is DocumentKind.YAML:
                    values.append(render_value(load_value(node.text, kind), kind))
                else:
                    values.append(node.text)
            except ValueError:
                return None
        return StructuralMatch(tuple(values), tuple(captures))


def _project(node: Node, fields: tuple[str, ...], kind: DocumentKind) -> str:
    """Render the requested members of ``node`` in request order.

    A missing field is omitted rather than treated as an error.  The record
    is rendered the way evaluator answers are, so both stages agree.

    Raises:
        ValueError: If a member does not decode on its own (YAML aliases).
    """
    record: dict[str, Any] = {}
    for name in fields:
        hits = list(FieldStep(name, Capture()).match(node))
        if hits:
            record[name] = load_value(hits[-1].text, kind)
    return render_value(record, kind)


def _split(expression: str) -> tuple[str, tuple[str, ...] | None] | None:
    """Split into (path text, projection fields); None outside the grammar."""
    text = expression.strip()
    if "|" not in text:
        return text, None
    m = _PROJECTION.match(text)
    if m is None:
        return None
    fields = tuple(f.strip() for f in m.group("fields").split(","))
    if not fields or not all(_FIELD.fullmatch(f) for f in fields):
        return None
    return m.group("path").strip(), fields


def classify(expression: str) -> ExpressionClass:
    """Decide how far structural resolution can take ``expression``."""
    parts = _split(expression)
    if parts is None:
        return ExpressionClass.COMPLEX
    path_text, fields = parts
    # jq paths always start with a dot; a bare word is a function call.
    if not path_text.startswith("."):
        return ExpressionClass.COMPLEX
    try:
        path = parse_path(path_text)
    except PathSyntaxError:
        return ExpressionClass.COMPLEX
    if any(isinstance(s, Key) and not s.is_bare for s in path):
        return ExpressionClass.COMPLEX
    if fields is None:
        return ExpressionClass.SIMPLE_PATH if path.is_concrete else ExpressionClass.COMPLEX
    return ExpressionClass.PROJECTION


def compile_path(path: Path) -> QueryPattern:
    """Compile ``path`` into a pattern whose innermost step is the capture."""
    step: Step = Capture()
    # Wrap from the last segment outwards so the first segment ends up as the
    # outermost step and the capture binds the target value.
    for segment in reversed(path.segments):
        if isinstance(segment, Key):
            step = FieldStep(segment.name, step)
        elif isinstance(segment, Index):
            step = IndexStep(segment.index, step)
        elif isinstance(segment, Each):
            step = EachStep(step)
    return QueryPattern(step)


def translate(expression: str) -> CompiledQuery | None:
    """Translate a SIMPLE_PATH or PROJECTION expression.

    Returns None for COMPLEX expressions, which only the external evaluator
    can answer.
    """
    parts = _split(expression)
    if parts is None or classify(expression) is ExpressionClass.COMPLEX:
        return None
    path_text, fields = parts
    path = parse_path(path_text)
    return CompiledQuery(expression, path, compile_path(path), fields)
