"""
Operation registries - where chainable query builder operations get attached.

SQLAlchemy has no plugin hook for adding methods to ``Select`` or ``Query``,
so the registry sets them as attributes on the builder classes. Every builder
instance created afterwards in the process exposes them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from sqlalchemy import Delete, Select, Update
from sqlalchemy.orm import Query

from pgsearch.exceptions import ExtensionUnsupportedError, OperationExistsError

logger = logging.getLogger(__name__)


class OperationRegistry(ABC):
    """
    Capability object for adding named operations to query builders.

    Operations name the builder methods they delegate to in ``requires``;
    only builders providing all of them receive the operation.
    """

    @abstractmethod
    def supports_extension(self) -> bool:
        """Check if operations can be added at all."""

    @abstractmethod
    def has(self, name: str, requires: Sequence[str] = ()) -> bool:
        """Check if ``name`` is present on every builder able to carry it."""

    @abstractmethod
    def register(self, name: str, operation: Callable, requires: Sequence[str] = ()) -> None:
        """Add ``operation`` as ``name`` to the builders providing ``requires``."""

    @abstractmethod
    def unregister(self, name: str) -> None:
        """Remove ``name`` from the builders this registry added it to."""


class ClassRegistry(OperationRegistry):
    """
    Registry attaching operations as methods of query builder classes.

    Example:
        >>> from sqlalchemy import Select, Update
        >>> from pgsearch.plugin import where_web_search
        >>> registry = ClassRegistry([Select, Update])
        >>> registry.register("where_web_search", where_web_search, requires=("where",))
        >>> registry.has("where_web_search", requires=("where",))
        True
    """

    def __init__(self, targets: Sequence[type]):
        """
        Initialize the registry.

        Args:
            targets: Builder classes that may receive operations.
        """
        self.targets = list(targets)
        self._registered: dict[str, list[type]] = {}

    def supports_extension(self) -> bool:
        return bool(self.targets) and all(isinstance(target, type) for target in self.targets)

    def _targets_for(self, requires: Sequence[str]) -> list[type]:
        return [
            target
            for target in self.targets
            if all(callable(getattr(target, method, None)) for method in requires)
        ]

    def has(self, name: str, requires: Sequence[str] = ()) -> bool:
        targets = self._targets_for(requires)
        return bool(targets) and all(hasattr(target, name) for target in targets)

    def register(self, name: str, operation: Callable, requires: Sequence[str] = ()) -> None:
        """
        Attach ``operation`` as method ``name`` on every suitable target lacking it.

        Either all those targets get the method or none do.

        Args:
            name: Method name.
            operation: Function taking the builder as first argument.
            requires: Builder methods the operation calls.

        Raises:
            ExtensionUnsupportedError: If no target can carry the operation.
            OperationExistsError: If all suitable targets already have ``name``.
        """
        if not self.supports_extension():
            raise ExtensionUnsupportedError(
                f"Query builders {self.targets!r} do not support extend"
            )
        targets = self._targets_for(requires)
        if not targets:
            raise ExtensionUnsupportedError(
                f"No query builder provides {', '.join(requires)} to extend with {name}"
            )
        if all(hasattr(target, name) for target in targets):
            raise OperationExistsError(name)

        extended = []
        try:
            for target in targets:
                if hasattr(target, name):
                    continue
                setattr(target, name, operation)
                extended.append(target)
        except Exception:
            for target in extended:
                delattr(target, name)
            raise

        self._registered.setdefault(name, []).extend(extended)
        logger.debug("Registered %s on %s", name, [t.__name__ for t in extended])

    def unregister(self, name: str) -> None:
        for target in self._registered.pop(name, []):
            if name in vars(target):
                delattr(target, name)


_default_registry: Optional[ClassRegistry] = None


def default_registry() -> ClassRegistry:
    """
    Get the process-wide registry over SQLAlchemy's query builders.

    Returns:
        A ClassRegistry targeting ``Select``, ``Update``, ``Delete`` and the
        ORM ``Query``.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = ClassRegistry([Select, Update, Delete, Query])
    return _default_registry
