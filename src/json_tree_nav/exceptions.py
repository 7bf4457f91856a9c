"""
json-tree-nav exceptions

All module-specific exceptions inherit from JsonTreeNavError.
"""

from __future__ import annotations


class JsonTreeNavError(Exception):
    """Base exception for all json-tree-nav errors."""

    pass


class ParseError(JsonTreeNavError):
    """Raised when the document text is not well-formed JSON or YAML."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)
        self.line = line
        self.column = column


class PathSyntaxError(JsonTreeNavError):
    """Raised when path text cannot be parsed."""

    def __init__(self, message: str, text: str, offset: int):
        super().__init__(f"{message} at offset {offset} in {text!r}")
        self.text = text
        self.offset = offset


class NotFoundError(JsonTreeNavError):
    """Raised when a well-formed path or position matches nothing."""

    pass


class EvaluationError(JsonTreeNavError):
    """Raised when the external evaluator fails or times out."""

    def __init__(self, diagnostic: str):
        super().__init__(f"evaluator failed: {diagnostic}")
        self.diagnostic = diagnostic


class NavigationError(JsonTreeNavError):
    """Raised for an invalid drill-down target or empty back-history."""

    pass
