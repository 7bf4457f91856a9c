"""NavigatorConfig and DocumentKind for resolver and session configuration.

NavigatorConfig is a frozen (immutable) dataclass holding the resolver
parameters.  DocumentKind selects the grammar used to parse a document and
the serialization used when delegating to the external evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from pathlib import PurePath

_SUFFIXES: dict[str, str] = {
    ".json": "json",
    ".jsonc": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


class DocumentKind(StrEnum):
    """The declared kind of a document.

    - JSON: parsed with the tree-sitter JSON grammar, passed to ``jq`` as-is.
    - YAML: parsed with the tree-sitter YAML grammar, converted to JSON
      before delegation and converted back afterwards.
    """

    JSON = auto()
    YAML = auto()

    @classmethod
    def from_path(cls, path: str | PurePath) -> DocumentKind:
        """Infer the kind from a file suffix (``.json``, ``.yaml``, ``.yml``).

        Raises:
            ValueError: If the suffix is not recognised.
        """
        suffix = PurePath(path).suffix.lower()
        try:
            return cls(_SUFFIXES[suffix])
        except KeyError:
            msg = f"cannot infer document kind from suffix {suffix!r}"
            raise ValueError(msg) from None


@dataclass(frozen=True, slots=True)
class NavigatorConfig:
    """Immutable configuration for resolution and navigation.

    Attributes:
        kind: Grammar of the documents handled.  Default JSON.
        evaluator: Executable invoked for delegated expressions.  Default "jq".
        evaluator_args: Extra arguments placed before the expression.
        timeout: Seconds to wait for the evaluator (None waits forever).
        structural_first: When False every expression is delegated.
        suggestion_threshold: Minimum key similarity in [0, 1] for a sibling
            key to be offered as a "did you mean" hint on a miss.
    """

    kind: DocumentKind = DocumentKind.JSON
    evaluator: str = "jq"
    evaluator_args: tuple[str, ...] = ()
    timeout: float | None = 10.0
    structural_first: bool = True
    suggestion_threshold: float = 0.6

    def __post_init__(self) -> None:
        if not self.evaluator:
            msg = "evaluator must be a non-empty executable name"
            raise ValueError(msg)
        if self.timeout is not None and self.timeout <= 0.0:
            msg = f"timeout must be > 0 or None, got {self.timeout}"
            raise ValueError(msg)
        if not 0.0 <= self.suggestion_threshold <= 1.0:
            msg = f"suggestion_threshold must be in [0, 1], got {self.suggestion_threshold}"
            raise ValueError(msg)
