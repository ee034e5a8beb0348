"""Route discovery over the application graph.

Depth-first enumeration of simple paths whose every edge carries the
requested route tag. Search state (path buffer, visited set) is owned by
the caller of each search and is never shared between searches.
"""

import logging
import time
from dataclasses import dataclass, field

from ..errors import SearchBudgetExceededError
from .models import AppGraph, Hop, Route

logger = logging.getLogger(__name__)


@dataclass
class SearchBudget:
    """Expansion, depth and wall-clock limits for one search.

    A budget is stateful: create one per query.
    """
    max_expansions: int | None = None
    timeout_seconds: float | None = None
    max_depth: int | None = None
    expansions: int = 0
    _deadline: float | None = field(default=None, repr=False)

    def __post_init__(self):
        if self.timeout_seconds is not None:
            self._deadline = time.monotonic() + self.timeout_seconds

    def charge(self, depth: int) -> None:
        """Account for following one edge to a route of ``depth`` hops."""
        self.expansions += 1

        if self.max_expansions is not None and self.expansions > self.max_expansions:
            raise SearchBudgetExceededError(
                self.expansions, f"more than {self.max_expansions} edge expansions"
            )
        if self.max_depth is not None and depth > self.max_depth:
            raise SearchBudgetExceededError(
                self.expansions, f"route longer than {self.max_depth} hops"
            )
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SearchBudgetExceededError(
                self.expansions, f"deadline of {self.timeout_seconds}s reached"
            )


def find_routes(
    graph: AppGraph,
    current: int,
    goal: int | None,
    route_tag: str | None,
    path: list[Hop],
    results: list[Route],
    visited: set[int],
    budget: SearchBudget | None = None,
) -> None:
    """Collect every simple route from ``current`` that follows ``route_tag``.

    With a goal, only routes that reach it are recorded and the goal is
    never expanded further. Without a goal, a non-empty route is recorded
    when it reaches a dead end, i.e. a node with no unvisited outgoing edge
    carrying the tag.

    No edge is followed unless ``route_tag`` is given.
    """
    logger.debug(f"Visiting node: {graph[current].name}")

    if goal is not None and current == goal:
        results.append(tuple(path))
        logger.debug(f"Found route to {graph[goal].name} with {len(path)} hops")
        return

    visited.add(current)
    followed = 0

    for hop in graph.outgoing(current):
        target = hop.target

        if target in visited:
            logger.debug(f"Node {graph[target].name} already visited, skipping")
            continue

        if not route_tag or route_tag not in hop.link.route_tags:
            continue

        logger.debug(
            f"Following {graph[current].name} -> {graph[target].name} via {hop.link.kind.display_name}"
        )
        followed += 1
        path.append(hop)
        try:
            if budget is not None:
                budget.charge(len(path))
            find_routes(graph, target, goal, route_tag, path, results, visited, budget)
        finally:
            path.pop()

    if goal is None and followed == 0 and path:
        results.append(tuple(path))
        logger.debug(f"Dead end at {graph[current].name}, recorded route with {len(path)} hops")

    visited.discard(current)


def find_routes_from_anywhere(
    graph: AppGraph,
    route_tag: str,
    goal: int | None = None,
    budget: SearchBudget | None = None,
) -> list[Route]:
    """Run the route search rooted at every application and aggregate.

    Each root gets a fresh visited set and path buffer. Results keep root
    order, then depth-first discovery order within a root.
    """
    results: list[Route] = []

    for root in graph.node_indices():
        find_routes(graph, root, goal, route_tag, [], results, set(), budget)

    logger.debug(f"Collected {len(results)} routes for '{route_tag}' from {len(graph)} roots")
    return results
