"""
Typing surface for query builders carrying the full-text search methods.

SQLAlchemy's own stubs don't know about methods added by ``install``, so code
that wants type checking can ``cast`` a builder to ``WebSearchQuery``.
"""

from typing import Optional, Protocol, runtime_checkable

from pgsearch.operators import ColumnRef


@runtime_checkable
class WebSearchQuery(Protocol):
    """A Select or Query after ``pgsearch.install`` has run."""

    def where_web_search(
        self,
        tsvector_column: ColumnRef,
        query: Optional[str] = ...,
        *,
        config: str = ...,
    ) -> "WebSearchQuery": ...

    def select_web_search_rank(
        self,
        tsvector_column: ColumnRef,
        query: Optional[str] = ...,
        alias: str = ...,
        *,
        config: str = ...,
    ) -> "WebSearchQuery": ...
