"""Conversions between node source text, Python values and evaluator output.

Both resolution stages render values through this module, so a scalar found
in the parse tree and the same scalar answered by ``jq`` come out as the same
text.  YAML crosses the evaluator boundary as JSON: ``yaml_to_json`` on the
way in, ``render_value`` on the way back.
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from json_tree_nav.config import DocumentKind
from json_tree_nav.exceptions import ParseError

__all__ = [
    "dump_yaml",
    "load_value",
    "render_value",
    "split_json_values",
    "yaml_to_json",
]


def yaml_to_json(text: str) -> str:
    """Serialise the first YAML document of ``text`` as JSON."""
    try:
        data = next(iter(yaml.safe_load_all(text)), None)
    except yaml.YAMLError as exc:
        raise ParseError(f"YAML document cannot be converted to JSON: {exc}") from exc
    return json.dumps(data, default=str)


def load_value(text: str, kind: DocumentKind) -> Any:
    """Decode the source text of a single node.

    YAML values are passed through the same JSON round trip the evaluator's
    input takes, so dates and other YAML-only types end up as strings.

    Raises:
        ValueError: When the text does not stand on its own, e.g. a YAML
            alias whose anchor lies outside the node.
    """
    if kind is DocumentKind.YAML:
        try:
            value = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML node cannot be decoded on its own: {exc}") from exc
        return json.loads(json.dumps(value, default=str))
    return json.loads(text)


def split_json_values(output: str) -> list[tuple[Any, str]] | None:
    """Split evaluator output into ``(value, source text)`` pairs.

    ``jq`` prints one JSON text per result.  Returns None when the output is
    not a sequence of JSON texts (raw ``-r`` output).
    """
    decoder = json.JSONDecoder()
    text = output.strip()
    values: list[tuple[Any, str]] = []
    pos = 0
    try:
        while pos < len(text):
            value, end = decoder.raw_decode(text, pos)
            values.append((value, text[pos:end]))
            pos = end
            while pos < len(text) and text[pos].isspace():
                pos += 1
    except ValueError:
        return None
    return values


def dump_yaml(value: Any) -> str:
    text = yaml.safe_dump(value, sort_keys=False, default_flow_style=False, allow_unicode=True)
    return text.removesuffix("\n...\n").rstrip("\n")


def render_value(value: Any, kind: DocumentKind) -> str:
    """Document-formatted text for a decoded value.

    JSON containers are written on one line with ``json.dumps`` spacing, the
    same form projected records take.
    """
    if kind is DocumentKind.YAML:
        return dump_yaml(value)
    return json.dumps(value, ensure_ascii=False)
