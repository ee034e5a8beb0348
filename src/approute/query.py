"""Route queries: validation and dispatch to the route finder."""

import logging
from dataclasses import dataclass

from approute.config import SearchConfig
from approute.errors import InvalidQueryError, UnknownNodeError
from approute.graph.finder import SearchBudget, find_routes, find_routes_from_anywhere
from approute.graph.models import AppGraph, Route

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteQuery:
    """Start, goal and route tag of one route query.

    ``start`` and ``goal`` accept an application index, catalog app id or
    application name. Empty strings count as absent.
    """
    start: str | int | None = None
    goal: str | int | None = None
    route_tag: str | None = None

    @property
    def is_bounded(self) -> bool:
        return _present(self.start) or _present(self.goal) or bool(self.route_tag)


def _present(identity: str | int | None) -> bool:
    return identity is not None and identity != ""


def budget_from_config(search: SearchConfig) -> SearchBudget:
    """Fresh search budget from the search configuration section."""
    return SearchBudget(
        max_expansions=search.max_expansions,
        timeout_seconds=search.timeout_seconds,
        max_depth=search.max_depth,
    )


def resolve_endpoint(graph: AppGraph, identity: str | int | None, role: str) -> int | None:
    """Resolve a start or goal identity, raising for unknown applications."""
    if not _present(identity):
        return None
    index = graph.resolve(identity)
    if index is None:
        raise UnknownNodeError(identity, role)
    return index


def discover_routes(graph: AppGraph, query: RouteQuery, budget: SearchBudget | None = None) -> list[Route]:
    """Answer a route query.

    Raises:
        InvalidQueryError: If the query has no start, goal or route tag
        UnknownNodeError: If start or goal is not in the graph
        SearchBudgetExceededError: If the search runs past its budget
    """
    if not query.is_bounded:
        raise InvalidQueryError()

    start = resolve_endpoint(graph, query.start, "start")
    goal = resolve_endpoint(graph, query.goal, "goal")
    route_tag = query.route_tag or None

    if start is not None:
        results: list[Route] = []
        find_routes(graph, start, goal, route_tag, [], results, set(), budget)
    elif route_tag is None:
        # Goal only and no tag: nothing can be followed
        results = []
    else:
        results = find_routes_from_anywhere(graph, route_tag, goal=goal, budget=budget)
        if goal is not None:
            results = [route for route in results if route]

    logger.info(
        f"Route query start={query.start!r} goal={query.goal!r} route={route_tag!r} "
        f"returned {len(results)} routes"
    )
    return results
