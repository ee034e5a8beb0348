"""Read-only HTTP API exposing route queries."""

import json
import logging
import socket
import threading
import uuid
from datetime import UTC, datetime
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import parse_qs, urlparse

from approute import __version__
from approute.config import ApprouteConfig
from approute.errors import InvalidQueryError, SearchBudgetExceededError, UnknownNodeError
from approute.graph.mermaid import render_mermaid
from approute.graph.models import AppGraph
from approute.models.routes import ApplicationSummary, RouteSet
from approute.query import RouteQuery, budget_from_config, discover_routes, resolve_endpoint

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """API error with HTTP status code."""

    def __init__(self, status_code: int, error_type: str, detail: str):
        self.status_code = status_code
        self.error_type = error_type
        self.detail = detail
        super().__init__(f"{error_type}: {detail}")


class RouteApiHandler(BaseHTTPRequestHandler):
    """HTTP request handler for approute endpoints."""

    def __init__(self, request, client_address, server, api_server):
        self.api_server = api_server
        super().__init__(request, client_address, server)

    def log_message(self, format, *args):
        """Route access logs through the approute logger instead of stderr."""
        logger.info(f"{self.address_string()} - {format % args}")

    def do_GET(self):
        """Handle GET requests."""
        try:
            parsed_url = urlparse(self.path)
            path = parsed_url.path
            params = parse_qs(parsed_url.query)

            if path == "/health":
                self._handle_health()
            elif path == "/applications":
                self._handle_applications()
            elif path == "/routes":
                self._handle_routes(params)
            else:
                raise ApiError(404, "not_found", f"Unknown endpoint: {path}")

        except ApiError as e:
            self._send_error_response(e)
        except (ConnectionAbortedError, BrokenPipeError):
            # Client went away
            pass
        except Exception:
            logger.exception(f"Unexpected error handling {self.path}")
            self._send_error_response(ApiError(500, "internal", "Internal server error"))

    def do_POST(self):
        """Handle POST requests - not allowed in read-only API."""
        self._send_method_not_allowed()

    def do_PUT(self):
        """Handle PUT requests - not allowed in read-only API."""
        self._send_method_not_allowed()

    def do_DELETE(self):
        """Handle DELETE requests - not allowed in read-only API."""
        self._send_method_not_allowed()

    def do_PATCH(self):
        """Handle PATCH requests - not allowed in read-only API."""
        self._send_method_not_allowed()

    def _send_method_not_allowed(self):
        error = ApiError(405, "method_not_allowed", "Method not allowed - read-only API")
        self._send_error_response(error)

    def _handle_health(self):
        """Handle /health endpoint."""
        response = {
            "status": "ok",
            "version": __version__,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        self._send_json_response(200, response)

    def _handle_applications(self):
        """Handle /applications endpoint."""
        graph = self.api_server.graph
        response = {
            "applications": [
                ApplicationSummary.from_application(app).model_dump(by_alias=True)
                for app in graph.applications
            ],
            "routeTags": sorted(graph.route_tags()),
        }
        self._send_json_response(200, response)

    def _handle_routes(self, params: dict[str, list[str]]):
        """Handle /routes endpoint."""
        query = RouteQuery(
            start=_single(params, "start"),
            goal=_single(params, "goal"),
            route_tag=_single(params, "route"),
        )
        output_format = _single(params, "format") or self.api_server.config.output.format
        if output_format not in ("json", "mermaid"):
            raise ApiError(400, "invalid_format", f"Unknown format '{output_format}'. Available: ['json', 'mermaid']")

        graph = self.api_server.graph
        try:
            routes = discover_routes(graph, query, budget_from_config(self.api_server.config.search))
            start = resolve_endpoint(graph, query.start, "start")
            goal = resolve_endpoint(graph, query.goal, "goal")
        except InvalidQueryError as e:
            raise ApiError(400, "invalid_query", str(e))
        except UnknownNodeError as e:
            raise ApiError(404, "unknown_node", str(e))
        except SearchBudgetExceededError as e:
            raise ApiError(422, "search_budget_exceeded", str(e))

        if output_format == "mermaid":
            self._send_text_response(200, render_mermaid(graph, routes), "text/markdown")
        else:
            route_set = RouteSet.from_routes(graph, routes, route_tag=query.route_tag or None, start=start, goal=goal)
            self._send_json_response(200, route_set.model_dump(by_alias=True))

    def _send_text_response(self, status_code: int, text: str, content_type: str):
        response_bytes = text.encode("utf-8")
        try:
            self.send_response(status_code)
            self.send_header("Content-Type", f"{content_type}; charset=utf-8")
            self.send_header("Content-Length", str(len(response_bytes)))
            self.end_headers()
            self.wfile.write(response_bytes)
        except (ConnectionAbortedError, BrokenPipeError):
            # Client closed connection before response was sent
            pass

    def _send_json_response(self, status_code: int, data: Any):
        """Send JSON response."""
        response_json = json.dumps(data, indent=2, ensure_ascii=False)
        self._send_text_response(status_code, response_json, "application/json")

    def _send_error_response(self, error: ApiError):
        """Send standardized error response."""
        response = {
            "error": error.error_type,
            "detail": error.detail,
            "traceId": str(uuid.uuid4()),
            "timestamp": datetime.now(UTC).isoformat(),
            "requestPath": self.path,
        }
        self._send_json_response(error.status_code, response)


def _single(params: dict[str, list[str]], name: str) -> str | None:
    values = params.get(name)
    return values[0] if values else None


class RouteApiServer:
    """Read-only route query server over one loaded graph."""

    def __init__(self, config: ApprouteConfig, graph: AppGraph):
        self.config = config
        self.graph = graph
        self.server = None
        self.server_thread = None
        self.actual_port = None

    def _find_available_port(self, start_port: int) -> int:
        """Find available port starting from start_port."""
        max_attempts = 100
        for port in range(start_port, start_port + max_attempts):
            try:
                with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                    s.bind((self.config.api.bind, port))
                    return port
            except OSError:
                continue

        raise ApiError(503, "service_unavailable", f"No available ports found starting from {start_port}")

    def start(self) -> str:
        """Start the API server in a background thread and return its URL."""
        if not self.config.api.enabled:
            raise ApiError(503, "service_unavailable", "API is disabled in configuration")

        self.actual_port = self._find_available_port(self.config.api.port)

        def handler_factory(request, client_address, server):
            return RouteApiHandler(request, client_address, server, self)

        self.server = ThreadingHTTPServer((self.config.api.bind, self.actual_port), handler_factory)
        self.server_thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.server_thread.start()

        url = f"http://{self.config.api.bind}:{self.actual_port}"
        logger.info(f"approute API started at {url} ({len(self.graph)} applications)")
        return url

    def stop(self):
        """Stop the API server."""
        if self.server:
            logger.info("Shutting down API server...")
            self.server.shutdown()
            self.server.server_close()

            if self.server_thread:
                self.server_thread.join(timeout=5.0)
            logger.info("API server stopped")


def start_api_server(config: ApprouteConfig, graph: AppGraph) -> RouteApiServer:
    """Start the route API server with the given configuration and graph."""
    server = RouteApiServer(config, graph)
    server.start()
    return server
