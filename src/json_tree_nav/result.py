"""Resolution dataclass for resolver output.

This module provides the result type returned by ``resolve()`` calls.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Resolution"]


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result of resolving one expression against one document.

    A miss is not an exception: ``found`` is False and ``message`` says what
    was looked for.  Whether the values came from the parse tree or from the
    external evaluator is deliberately not recorded.

    Attributes:
        expression: The expression as requested.
        values: Document-formatted text of each result, in output order.
        message: Human-readable explanation when nothing was found.
    """

    expression: str
    values: tuple[str, ...] = ()
    message: str = ""

    @property
    def found(self) -> bool:
        return bool(self.values)

    @property
    def text(self) -> str:
        """All values joined by newlines; empty when nothing was found."""
        return "\n".join(self.values)
