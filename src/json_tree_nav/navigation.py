"""NavigationSession: a reversible drill-down/back exploration of one document.

States::

    IDLE --open--> VIEWING --drill_down/go_back/reset--> VIEWING --close--> CLOSED

While VIEWING there is always exactly one current ``NavigationFrame`` (path
plus the content displayed for it) outside the history stack.  A drill-down
pushes the current frame before moving; ``go_back`` pops and restores the
stored frame verbatim, so going back never re-resolves anything and is exact
even if the document changed in the meantime.

Paths are always absolute: every drill-down resolves the extended path
against the root document the session was opened with, never against the
sub-document currently displayed.  A failed transition leaves the session
untouched (nothing is pushed, nothing is replaced).

All state lives on the session object; independent sessions never share it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum, auto

import structlog

from json_tree_nav.enumerator import ChildEntry, enumerate_children
from json_tree_nav.exceptions import NavigationError, ParseError, PathSyntaxError
from json_tree_nav.path import Index, Key, Path, parse_path
from json_tree_nav.resolver import HybridResolver

__all__ = ["NavigationFrame", "NavigationSession", "SessionState"]

logger = structlog.get_logger(__name__)

Listener = Callable[[str, str], None]


class SessionState(StrEnum):
    IDLE = auto()
    VIEWING = auto()
    CLOSED = auto()


@dataclass(frozen=True, slots=True)
class NavigationFrame:
    """A path and the content that was displayed for it."""

    path: Path
    content: str


class NavigationSession:
    """Explicit navigation state for one exploration of one root document.

    Args:
        resolver: Resolver used for every drill-down.  Defaults to a
            ``HybridResolver`` with the default config.
        listener: Optional callable notified with ``(content, path_text)``
            after every transition; this is how a presentation layer learns
            what to display.

    Example::

        session = NavigationSession()
        session.open('{"abi": [{"name": "f"}]}')
        session.drill_down(Key("abi"))
        session.drill_down(Index(0))
        session.copy_path()   # ".abi[0]"
        session.go_back()
        session.copy_path()   # ".abi"
    """

    def __init__(
        self,
        resolver: HybridResolver | None = None,
        listener: Listener | None = None,
    ) -> None:
        self._resolver = resolver if resolver is not None else HybridResolver()
        self._listener = listener
        self._state = SessionState.IDLE
        self._root_text: str | None = None
        self._current: NavigationFrame | None = None
        self._history: list[NavigationFrame] = []

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current(self) -> NavigationFrame:
        return self._require_viewing()

    @property
    def path(self) -> Path:
        return self._require_viewing().path

    @property
    def content(self) -> str:
        return self._require_viewing().content

    @property
    def history(self) -> tuple[NavigationFrame, ...]:
        """The back-stack, oldest frame first."""
        return tuple(self._history)

    @property
    def depth(self) -> int:
        return len(self._history)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def open(self, root_text: str) -> None:
        """Start exploring ``root_text`` at the root, discarding any history.

        Raises:
            ParseError: If the document is malformed; the session is unchanged.
            NavigationError: If the session was closed.
        """
        if self._state is SessionState.CLOSED:
            raise NavigationError("session closed")
        self._resolver.adapter.parse(root_text)
        self._root_text = root_text
        self._history.clear()
        self._state = SessionState.VIEWING
        logger.debug("navigation_open", kind=str(self._resolver.kind), size=len(root_text))
        self._transition(NavigationFrame(Path(), root_text))

    def reset(self, new_root_text: str) -> None:
        """Restart at the root of a changed document; history is cleared."""
        self.open(new_root_text)

    def drill_down(self, segment: Key | Index | int | str) -> NavigationFrame:
        """Move to a direct child of the current node.

        ``segment`` may be a ``Key``/``Index``, an ``int`` (index) or one
        segment in path notation (``"abi"``, ``".abi"``, ``"[0]"``).

        Raises:
            NavigationError: If the current node is not a container, the
                segment names none of its children, or nothing resolves there.
            EvaluationError: If the evaluator was needed and failed.
        """
        current = self._require_viewing()
        root_text = self._root_text
        if root_text is None:
            raise NavigationError("no document open")
        child = _coerce_segment(segment)

        try:
            children = self.children()
        except ParseError as exc:
            raise NavigationError(f"invalid target: current content is not navigable ({exc})") from exc
        if not any(entry.segment == child for entry in children):
            raise NavigationError(
                f"invalid target: {Path((child,))} is not a child of {current.path}"
            )

        new_path = current.path.extend(child)
        resolution = self._resolver.resolve_path(new_path, root_text)
        if not resolution.found:
            raise NavigationError(f"invalid target: {resolution.message}")

        self._history.append(current)
        logger.info("navigation_drill_down", path=str(new_path), depth=len(self._history))
        return self._transition(NavigationFrame(new_path, resolution.text))

    def go_back(self) -> NavigationFrame:
        """Restore the frame that was current before the last drill-down.

        Raises:
            NavigationError: If there is no history.
        """
        self._require_viewing()
        if not self._history:
            raise NavigationError("no history")
        frame = self._history.pop()
        logger.info("navigation_back", path=str(frame.path), depth=len(self._history))
        return self._transition(frame)

    def close(self) -> None:
        """End the session; history and displayed content are released."""
        self._history.clear()
        self._current = None
        self._root_text = None
        self._state = SessionState.CLOSED
        logger.debug("navigation_closed")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def copy_path(self) -> str:
        """Textual form of the current path (``.`` at the root)."""
        return self.path.render()

    def children(self) -> list[ChildEntry]:
        """Navigable children of the content currently displayed."""
        frame = self._require_viewing()
        return enumerate_children(self._resolver.adapter.parse(frame.content))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_viewing(self) -> NavigationFrame:
        if self._state is SessionState.CLOSED:
            raise NavigationError("session closed")
        if self._current is None:
            raise NavigationError("no document open")
        return self._current

    def _transition(self, frame: NavigationFrame) -> NavigationFrame:
        self._current = frame
        if self._listener is not None:
            self._listener(frame.content, frame.path.render())
        return frame


def _coerce_segment(segment: Key | Index | int | str) -> Key | Index:
    if isinstance(segment, Key | Index):
        return segment
    if isinstance(segment, int):
        if segment < 0:
            raise NavigationError(f"invalid target: negative index {segment}")
        return Index(segment)
    try:
        path = parse_path(segment)
    except PathSyntaxError as exc:
        raise NavigationError(f"invalid target: {exc}") from exc
    if len(path) != 1 or not isinstance(path.segments[0], Key | Index):
        raise NavigationError(f"invalid target: {segment!r} is not a single segment")
    return path.segments[0]
