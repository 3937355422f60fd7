"""
Errors raised by operation registries while installing pgsearch.

Each error kind carries a stable ``code`` so callers can tell expected
conditions apart without matching on message text.
"""


class ExtensionError(Exception):
    """Base class for failures while extending a query builder."""

    code = "extension_error"


class ExtensionUnsupportedError(ExtensionError):
    """The registry cannot add operations to its query builders."""

    code = "unsupported"


class OperationExistsError(ExtensionError):
    """An operation with the same name is already registered."""

    code = "exists"

    def __init__(self, name: str):
        super().__init__(f"Can't extend query builder with existing method ('{name}')")
        self.name = name
