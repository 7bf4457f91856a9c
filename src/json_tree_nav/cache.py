"""QueryCache: LRU cache of translated expressions.

Translation is a pure function of the expression text, so a compiled query
can be reused across documents.  COMPLEX expressions are cached too (as a
"not translatable" marker) so repeated delegation skips classification.

Each ``QueryCache`` instance maintains its own ``LRUCache``: there is no
class-level shared state, so two resolvers never interfere with each other.

Example::

    from json_tree_nav.cache import QueryCache

    cache = QueryCache(max_size=64)
    cache.get(".abi[0].name")   # translated on first use
    cache.get(".abi[0].name")   # served from memory
"""

from __future__ import annotations

from typing import Final

from cachetools import LRUCache

from json_tree_nav.query.translator import CompiledQuery, translate

_UNTRANSLATABLE: Final = object()


class QueryCache:
    """LRU-backed memo of ``translate``.

    Args:
        max_size: Maximum number of expressions held.  When exceeded, the
            least-recently-used entry is silently evicted.
    """

    def __init__(self, max_size: int = 128) -> None:
        self._cache: LRUCache[str, object] = LRUCache(maxsize=max_size)

    @property
    def max_size(self) -> int:
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        return int(self._cache.currsize)

    def __contains__(self, expression: object) -> bool:
        return expression in self._cache

    def get(self, expression: str) -> CompiledQuery | None:
        """The compiled query for ``expression``; None when it is COMPLEX."""
        try:
            cached = self._cache[expression]
        except KeyError:
            compiled = translate(expression)
            self._cache[expression] = compiled if compiled is not None else _UNTRANSLATABLE
            return compiled
        return cached if isinstance(cached, CompiledQuery) else None

    def clear(self) -> None:
        self._cache.clear()
