"""Mermaid renderer for discovered routes."""

import logging
from typing import Sequence, assert_never

from .framework import GraphRenderer
from .models import (
    AppGraph,
    CommunicationLink,
    FileTransferLink,
    GrpcLink,
    KafkaLink,
    MessageQueueLink,
    RestApiLink,
    Route,
    SoapLink,
)

logger = logging.getLogger(__name__)

MERMAID_HEADER = "```mermaid\ngraph TD\n"
MERMAID_FOOTER = "```"


def link_details(link: CommunicationLink) -> str:
    """Edge label for a link: display kind followed by kind-specific fields."""
    kind = link.kind.display_name

    if isinstance(link, RestApiLink):
        return f"{kind} - Method: {link.method} - Endpoint: {link.endpoint}"
    elif isinstance(link, KafkaLink):
        return f"{kind} - Topic: {link.topic}"
    elif isinstance(link, MessageQueueLink):
        return f"{kind} - Queue: {link.queue_name}"
    elif isinstance(link, GrpcLink):
        return f"{kind} - Service: {link.service_name}"
    elif isinstance(link, FileTransferLink):
        return f"{kind} - File: {link.file_path}"
    elif isinstance(link, SoapLink):
        return f"{kind} - WSDL: {link.wsdl_url}"
    else:
        assert_never(link)


def render_mermaid(graph: AppGraph, routes: Sequence[Route]) -> str:
    """Render routes as a fenced Mermaid ``graph TD`` block.

    One line per hop, routes in order and hops in order within a route.
    Hops shared by several routes are repeated, nothing is escaped.
    """
    lines = [MERMAID_HEADER]

    for route in routes:
        for source, target, link in route:
            lines.append(f"    {graph[source].name} -->|{link_details(link)}| {graph[target].name}\n")

    lines.append(MERMAID_FOOTER)
    return "".join(lines)


class MermaidRenderer(GraphRenderer):
    """Mermaid diagram renderer for routes."""

    @property
    def format_name(self) -> str:
        return "mermaid"

    def get_file_extension(self) -> str:
        return ".md"

    def render(
        self,
        graph: AppGraph,
        routes: Sequence[Route],
        *,
        route_tag: str | None = None,
        start: int | None = None,
        goal: int | None = None,
    ) -> str:
        hop_count = sum(len(route) for route in routes)
        logger.debug(f"Rendering {hop_count} hops from {len(routes)} routes as Mermaid")
        return render_mermaid(graph, routes)
