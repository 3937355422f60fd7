"""
Full-text search plugin for SQLAlchemy query builders.

Adds ``where_web_search`` to ``Select``, ``Update``, ``Delete`` and the ORM
``Query``, and ``select_web_search_rank`` to ``Select`` and ``Query``.

Usage:

    from sqlalchemy import create_engine, desc, select
    import pgsearch

    engine = pgsearch.install(create_engine(url))

    stmt = (
        select(products.c.id, products.c.name)
        .select_web_search_rank("description", "Shoes")
        .where_web_search("description", "Shoes")
        .order_by(desc("rank"))
    )
"""

import logging
from typing import Any, Optional, TypeVar

from pgsearch.exceptions import ExtensionError, ExtensionUnsupportedError, OperationExistsError
from pgsearch.operators import (
    DEFAULT_CONFIG,
    DEFAULT_RANK_ALIAS,
    UNSET,
    ColumnRef,
    is_unset,
    web_search_match,
    web_search_rank,
)
from pgsearch.registry import OperationRegistry, default_registry

logger = logging.getLogger(__name__)

T = TypeVar("T")


def where_web_search(
    self,
    tsvector_column: ColumnRef,
    query: Optional[str] = UNSET,
    *,
    config: str = DEFAULT_CONFIG,
):
    """
    Query a tsvector column using postgres function ``websearch_to_tsquery``.

    Used together with ``select_web_search_rank`` to order results by score.
    Leaving out ``query`` (or passing ``UNSET``) returns the builder unmodified.
    ``None`` is searched for like any other value.

    Args:
        tsvector_column: The tsvector column to query.
        query: The search text.
        config: Text search configuration, ``'simple'`` by default.

    Returns:
        The builder with the match predicate added.
    """
    if is_unset(query):
        return self
    return self.where(web_search_match(tsvector_column, query, config))


def select_web_search_rank(
    self,
    tsvector_column: ColumnRef,
    query: Optional[str] = UNSET,
    alias: str = DEFAULT_RANK_ALIAS,
    *,
    config: str = DEFAULT_CONFIG,
):
    """
    Add a column with a rank/score for the given query.

    The score is computed by postgres function ``ts_rank``. Leaving out
    ``query`` returns the builder unmodified, so the alias column is absent.

    Args:
        tsvector_column: The tsvector column to rank.
        query: The search text.
        alias: Name of the score column, ``rank`` by default.
        config: Text search configuration, ``'simple'`` by default.

    Returns:
        The builder with the score column added.
    """
    if is_unset(query):
        return self
    return self.add_columns(web_search_rank(tsvector_column, query, alias, config))


# name -> (operation, builder methods it calls)
OPERATIONS = {
    "where_web_search": (where_web_search, ("where",)),
    "select_web_search_rank": (select_web_search_rank, ("add_columns",)),
}


def _check_dialect(db: Any) -> None:
    dialect = getattr(db, "dialect", None)
    name = getattr(dialect, "name", None)
    if name and name != "postgresql":
        logger.warning(
            "Full-text search methods need PostgreSQL, %s dialect will fail at execution",
            name,
        )


def _rollback(registry: OperationRegistry, names: list[str]) -> None:
    for name in reversed(names):
        try:
            registry.unregister(name)
        except Exception:
            logger.error("Error removing %s from query builders", name, exc_info=True)


def install(db: T, registry: Optional[OperationRegistry] = None) -> T:
    """
    Register the full-text search methods on the query builders.

    Safe to call more than once. Never raises: if the builders can't be
    extended, calling the methods later fails with AttributeError instead.

    Args:
        db: Engine or connection the application queries through.
        registry: Where to register the methods. Defaults to SQLAlchemy's
            ``Select``, ``Update``, ``Delete`` and ``Query``.

    Returns:
        ``db``, unchanged.
    """
    installed = []
    try:
        if registry is None:
            registry = default_registry()

        if not registry.supports_extension():
            logger.debug("Query builders do not support extend, skipping full-text search methods")
            return db

        _check_dialect(db)

        for name, (operation, requires) in OPERATIONS.items():
            if registry.has(name, requires):
                continue
            try:
                registry.register(name, operation, requires)
            except OperationExistsError:
                continue
            installed.append(name)
    except Exception as e:
        _rollback(registry, installed)
        # Show error if it's not the expected one
        if isinstance(e, ExtensionError) and e.code == ExtensionUnsupportedError.code:
            logger.debug("Query builders do not support extend: %s", e)
        else:
            logger.error("Error extending query builders", exc_info=True)

    return db
