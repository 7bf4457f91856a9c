"""Path model: canonical document locations and their dotted/bracketed text form.

A ``Path`` is an immutable sequence of segments from the root to a target:

- ``Key("abi")``  renders as ``.abi``
- ``Index(0)``    renders as ``[0]`` and attaches without a dot (``.abi[0]``)
- ``Each()``      renders as ``[]``; it selects every element and is only
                  meaningful inside queries, never in a navigation path

The root renders as ``.``.  Keys that are not made of ``[A-Za-z0-9_]`` render
in ``jq``'s quoted form (``."content type"``) so that every path round-trips:
``Path.parse(p.render()) == p``.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterator
from dataclasses import dataclass

from json_tree_nav.exceptions import PathSyntaxError

__all__ = ["Each", "Index", "Key", "Path", "PathSegment", "parse_path", "render_path"]

_BARE_KEY = re.compile(r"[A-Za-z0-9_]+")
_DIGITS = re.compile(r"[0-9]+")
_decoder = json.JSONDecoder()


@dataclass(frozen=True, slots=True)
class Key:
    """Select the member ``name`` of an object."""

    name: str

    @property
    def is_bare(self) -> bool:
        """True when the key can be written as a plain dotted segment."""
        return _BARE_KEY.fullmatch(self.name) is not None

    def render(self) -> str:
        if self.is_bare:
            return f".{self.name}"
        return "." + json.dumps(self.name, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class Index:
    """Select the zero-based ``index``-th element of an array."""

    index: int

    def __post_init__(self) -> None:
        if self.index < 0:
            msg = f"index must be >= 0, got {self.index}"
            raise ValueError(msg)

    def render(self) -> str:
        return f"[{self.index}]"


@dataclass(frozen=True, slots=True)
class Each:
    """Select every element of an array (query-only)."""

    def render(self) -> str:
        return "[]"


PathSegment = Key | Index | Each


@dataclass(frozen=True, slots=True)
class Path:
    """An ordered, immutable sequence of segments; ``Path()`` is the root."""

    segments: tuple[PathSegment, ...] = ()

    @classmethod
    def parse(cls, text: str) -> Path:
        return parse_path(text)

    def render(self) -> str:
        return render_path(self)

    def __str__(self) -> str:
        return self.render()

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def is_concrete(self) -> bool:
        """True when the path names exactly one location (no ``[]``)."""
        return not any(isinstance(s, Each) for s in self.segments)

    def extend(self, segment: PathSegment) -> Path:
        return Path((*self.segments, segment))

    def parent(self) -> Path | None:
        if not self.segments:
            return None
        return Path(self.segments[:-1])


def render_path(path: Path) -> str:
    """Render ``path`` in dotted/bracketed notation."""
    if not path.segments:
        return "."
    out = "".join(segment.render() for segment in path.segments)
    return out if out.startswith(".") else "." + out


def parse_path(text: str) -> Path:
    """Parse dotted/bracketed notation into a Path.

    A leading ``.`` is optional.  Brackets hold a non-negative decimal index,
    a quoted key, or nothing (``[]``).

    Raises:
        PathSyntaxError: On consecutive or trailing dots, unclosed or invalid
            brackets, or characters that cannot start a segment.
    """
    s = text.strip()
    n = len(s)
    pos = 0
    segments: list[PathSegment] = []
    # A key may follow the start of the text or a dot; nothing else.
    key_allowed = True

    if s.startswith("."):
        pos = 1

    while pos < n:
        ch = s[pos]

        if ch == ".":
            if key_allowed:
                raise PathSyntaxError("consecutive dots", text, pos)
            pos += 1
            if pos == n:
                raise PathSyntaxError("trailing dot", text, pos - 1)
            key_allowed = True
            continue

        if ch == "[":
            segment, pos = _parse_bracket(s, pos, text)
            segments.append(segment)
            key_allowed = False
            continue

        if not key_allowed:
            raise PathSyntaxError("expected '.' or '['", text, pos)

        if ch == '"':
            name, pos = _parse_quoted(s, pos, text)
            segments.append(Key(name))
        else:
            m = _BARE_KEY.match(s, pos)
            if m is None:
                raise PathSyntaxError(f"unexpected character {ch!r}", text, pos)
            segments.append(Key(m.group()))
            pos = m.end()
        key_allowed = False

    return Path(tuple(segments))


def _parse_bracket(s: str, pos: int, text: str) -> tuple[PathSegment, int]:
    """Parse ``[...]`` starting at ``s[pos] == '['``; return (segment, next pos)."""
    start = pos + 1
    if start < len(s) and s[start] == '"':
        name, end = _parse_quoted(s, start, text)
        if end >= len(s) or s[end] != "]":
            raise PathSyntaxError("unclosed bracket", text, pos)
        return Key(name), end + 1

    close = s.find("]", start)
    if close == -1:
        raise PathSyntaxError("unclosed bracket", text, pos)
    inner = s[start:close]
    if inner == "":
        return Each(), close + 1
    if _DIGITS.fullmatch(inner) is None:
        raise PathSyntaxError("bracket must hold a non-negative integer", text, start)
    return Index(int(inner)), close + 1


def _parse_quoted(s: str, pos: int, text: str) -> tuple[str, int]:
    try:
        value, end = _decoder.raw_decode(s, pos)
    except ValueError:
        raise PathSyntaxError("unterminated quoted key", text, pos) from None
    if not isinstance(value, str):
        raise PathSyntaxError("quoted key must be a string", text, pos)
    return value, end
