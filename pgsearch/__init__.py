"""
pgsearch - PostgreSQL web-style full-text search for SQLAlchemy query builders.

pgsearch adds ``where_web_search`` and ``select_web_search_rank`` to
``Select`` and ``Query``, built on ``websearch_to_tsquery`` and ``ts_rank``.
"""

from pgsearch.__version__ import __version__
from pgsearch.exceptions import ExtensionError, ExtensionUnsupportedError, OperationExistsError
from pgsearch.operators import UNSET, web_search_match, web_search_rank, websearch_to_tsquery
from pgsearch.plugin import install, select_web_search_rank, where_web_search
from pgsearch.protocols import WebSearchQuery
from pgsearch.registry import ClassRegistry, OperationRegistry, default_registry

__all__ = [
    "ClassRegistry",
    "ExtensionError",
    "ExtensionUnsupportedError",
    "OperationExistsError",
    "OperationRegistry",
    "UNSET",
    "WebSearchQuery",
    "default_registry",
    "install",
    "select_web_search_rank",
    "web_search_match",
    "web_search_rank",
    "websearch_to_tsquery",
    "where_web_search",
    "__version__",
]
