"""JSON renderer for discovered routes."""

from typing import Sequence

from .framework import GraphRenderer
from .models import AppGraph, Route


class JsonRenderer(GraphRenderer):
    """Renders routes as a JSON ``RouteSet`` document."""

    @property
    def format_name(self) -> str:
        return "json"

    def get_file_extension(self) -> str:
        return ".json"

    def render(
        self,
        graph: AppGraph,
        routes: Sequence[Route],
        *,
        route_tag: str | None = None,
        start: int | None = None,
        goal: int | None = None,
    ) -> str:
        from approute.models.routes import RouteSet

        route_set = RouteSet.from_routes(graph, routes, route_tag=route_tag, start=start, goal=goal)
        return route_set.model_dump_json(by_alias=True, indent=2)
