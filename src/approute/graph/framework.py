"""Renderer framework for discovered routes."""

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from ..config import ApprouteConfig
from .models import AppGraph, Route

logger = logging.getLogger(__name__)


class GraphRenderer(ABC):
    """Abstract base class for route renderers."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def render(
        self,
        graph: AppGraph,
        routes: Sequence[Route],
        *,
        route_tag: str | None = None,
        start: int | None = None,
        goal: int | None = None,
    ) -> str:
        """Render routes to string format.

        The keyword arguments describe the query that produced the routes.
        Renderers that carry no query metadata ignore them.
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass


class RouteDiagramGenerator:
    """Holds the available renderers and dispatches to them by format name."""

    def __init__(self, config: ApprouteConfig):
        self.config = config
        self.renderers: dict[str, GraphRenderer] = {}

    def add_renderer(self, renderer: GraphRenderer) -> None:
        """Add a route renderer."""
        self.renderers[renderer.format_name] = renderer

    def render(
        self,
        graph: AppGraph,
        routes: Sequence[Route],
        format_name: str | None = None,
        *,
        route_tag: str | None = None,
        start: int | None = None,
        goal: int | None = None,
    ) -> str:
        """Render routes with the named renderer.

        Args:
            graph: Graph the routes were discovered in
            routes: Routes to render
            format_name: Output format, defaults to ``config.output.format``
            route_tag: Route tag the query followed
            start: Index of the start application, if bounded
            goal: Index of the goal application, if bounded

        Returns:
            Rendered routes as string
        """
        format_name = format_name or self.config.output.format
        if format_name not in self.renderers:
            available = list(self.renderers.keys())
            raise ValueError(f"Unknown format '{format_name}'. Available: {available}")

        renderer = self.renderers[format_name]
        logger.info(f"Rendering {len(routes)} routes with {renderer.format_name} renderer")
        return renderer.render(graph, routes, route_tag=route_tag, start=start, goal=goal)

    def file_extension(self, format_name: str) -> str:
        return self.renderers[format_name].get_file_extension()


def create_default_generator(config: ApprouteConfig) -> RouteDiagramGenerator:
    """Generator with the Mermaid and JSON renderers registered."""
    from .json_renderer import JsonRenderer
    from .mermaid import MermaidRenderer

    generator = RouteDiagramGenerator(config)
    generator.add_renderer(MermaidRenderer())
    generator.add_renderer(JsonRenderer())
    return generator
