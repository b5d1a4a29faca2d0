"""
Exceptions raised while loading ghacheck inputs.

Only the two load paths can fail: the rule catalog and the workflow file.
Rule evaluation itself never raises.
"""


class GhacheckError(Exception):
    """Base class for all ghacheck errors."""


class CatalogError(GhacheckError):
    """Raised when the rule catalog cannot be found, read or parsed."""


class WorkflowError(GhacheckError):
    """Raised when the workflow file cannot be found, read or parsed."""
