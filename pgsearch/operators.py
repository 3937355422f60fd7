"""
SQL expressions for PostgreSQL web-style full-text search.

These build the fragments used by the query builder operations:

    <column> @@ websearch_to_tsquery('simple', <query>)
    ts_rank(<column>, websearch_to_tsquery('simple', <query>)) AS <alias>

The column is rendered through SQLAlchemy's identifier quoting and the query
text is always a bound parameter.
"""

from typing import Any, Union

from sqlalchemy import Float, String, func, literal, literal_column
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.elements import ColumnClause, ColumnElement, Label

DEFAULT_CONFIG = "simple"
DEFAULT_RANK_ALIAS = "rank"

ColumnRef = Union[str, ColumnElement[Any]]


class _Unset:
    """Marker for a search query that was not supplied at all."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Unset, ())


# Only UNSET skips the search; None is a real value bound as NULL.
UNSET: Any = _Unset()


def is_unset(value: object) -> bool:
    """
    Check if a search query was left out.

    Args:
        value: The query argument as received by an operation.

    Returns:
        True only for the UNSET sentinel, False for None and empty strings.
    """
    return value is UNSET


class IdentifierColumn(ColumnClause):
    """
    A column given by a possibly dotted name, such as ``products.description``.

    Each part is quoted on its own by the dialect. Unlike a table-bound column
    it adds nothing to the FROM list.
    """

    inherit_cache = True

    @property
    def parts(self) -> list[str]:
        return self.name.split(".")


@compiles(IdentifierColumn)
def _compile_identifier_column(element, compiler, **kw):
    return ".".join(compiler.preparer.quote(part) for part in element.parts)


def _identifier(ref: ColumnRef) -> ColumnElement[Any]:
    """Turn a column reference into a quotable column construct."""
    if not isinstance(ref, str):
        return ref
    return IdentifierColumn(ref)


def _config_literal(config: str) -> ColumnElement[Any]:
    escaped = config.replace("'", "''")
    return literal_column(f"'{escaped}'")


def websearch_to_tsquery(query: Any, config: str = DEFAULT_CONFIG) -> ColumnElement[Any]:
    """
    Parse web-style search text into a tsquery.

    Args:
        query: Search text, bound as a parameter. None binds NULL.
        config: Text search configuration name, rendered inline.

    Returns:
        A ``websearch_to_tsquery(<config>, <query>)`` function expression.
    """
    return func.websearch_to_tsquery(_config_literal(config), literal(query, type_=String))


def web_search_match(
    tsvector_column: ColumnRef,
    query: Any,
    config: str = DEFAULT_CONFIG,
) -> ColumnElement[bool]:
    """
    Build the ``@@`` predicate matching a tsvector column against a query.

    Args:
        tsvector_column: Name of the tsvector column, or a column expression.
        query: Search text in web search syntax (quoted phrases, -exclusion, or).
        config: Text search configuration name.

    Returns:
        A boolean expression usable in ``where()`` or ``filter()``.
    """
    return _identifier(tsvector_column).bool_op("@@")(websearch_to_tsquery(query, config))


def web_search_rank(
    tsvector_column: ColumnRef,
    query: Any,
    alias: str = DEFAULT_RANK_ALIAS,
    config: str = DEFAULT_CONFIG,
) -> Label[Any]:
    """
    Build a labelled ``ts_rank`` relevance score for a query.

    Args:
        tsvector_column: Name of the tsvector column, or a column expression.
        query: Search text in web search syntax.
        alias: Name of the score column in the result.
        config: Text search configuration name.

    Returns:
        ``ts_rank(<column>, websearch_to_tsquery(...)) AS <alias>``.
    """
    score = func.ts_rank(
        _identifier(tsvector_column),
        websearch_to_tsquery(query, config),
        type_=Float,
    )
    return score.label(alias)
