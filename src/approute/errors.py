"""Typed errors raised by approute.

"No route found" is an empty result, never an exception. Everything here
means the query or the catalog itself was unusable.
"""


class ApprouteError(Exception):
    """Base class for all approute errors."""


class InvalidQueryError(ApprouteError):
    """Query has no start, no goal and no route tag to bound the search."""

    def __init__(self, detail: str = "route tag is required when neither start nor goal is given"):
        self.detail = detail
        super().__init__(detail)


class UnknownNodeError(ApprouteError):
    """A start or goal identity does not exist in the graph."""

    def __init__(self, identity: str | int, role: str = "node"):
        self.identity = identity
        self.role = role
        super().__init__(f"Unknown {role} application: {identity!r}")


class SearchBudgetExceededError(ApprouteError):
    """Traversal exceeded its expansion, depth or time budget."""

    def __init__(self, expansions: int, reason: str):
        self.expansions = expansions
        self.reason = reason
        super().__init__(f"Search budget exceeded after {expansions} expansions: {reason}")


class CatalogError(ApprouteError):
    """Catalog file is unreadable or inconsistent."""
