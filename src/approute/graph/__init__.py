"""Route graph module for approute.

Graph model, route discovery and renderers for discovered routes, with
Mermaid as the primary output format.
"""

from .finder import SearchBudget, find_routes, find_routes_from_anywhere
from .framework import GraphRenderer, RouteDiagramGenerator, create_default_generator
from .json_renderer import JsonRenderer
from .mermaid import MermaidRenderer, link_details, render_mermaid
from .models import (
    AppGraph,
    Application,
    CommunicationLink,
    FileTransferLink,
    GrpcLink,
    Hop,
    KafkaLink,
    LinkKind,
    MessageQueueLink,
    RestApiLink,
    Route,
    SoapLink,
)

__all__ = [
    "AppGraph",
    "Application",
    "CommunicationLink",
    "RestApiLink",
    "MessageQueueLink",
    "KafkaLink",
    "GrpcLink",
    "FileTransferLink",
    "SoapLink",
    "LinkKind",
    "Hop",
    "Route",
    "SearchBudget",
    "find_routes",
    "find_routes_from_anywhere",
    "GraphRenderer",
    "RouteDiagramGenerator",
    "create_default_generator",
    "MermaidRenderer",
    "JsonRenderer",
    "link_details",
    "render_mermaid",
]
