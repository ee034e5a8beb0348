"""Build the application graph from a JSON catalog file."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from approute.errors import CatalogError
from approute.graph.models import (
    AppGraph,
    CommunicationLink,
    FileTransferLink,
    GrpcLink,
    KafkaLink,
    LinkKind,
    MessageQueueLink,
    RestApiLink,
    SoapLink,
)
from approute.models.catalog import AppConnectInfo, AppInfo, Catalog

logger = logging.getLogger(__name__)

# Normalized method type name (lower case, no spaces, dashes or underscores) to kind
KIND_ALIASES: Dict[str, LinkKind] = {
    "restapi": LinkKind.REST_API,
    "rest": LinkKind.REST_API,
    "mq": LinkKind.MQ,
    "messagequeue": LinkKind.MQ,
    "kafka": LinkKind.KAFKA,
    "grpc": LinkKind.GRPC,
    "filetransfer": LinkKind.FILE_TRANSFER,
    "soap": LinkKind.SOAP,
}


def resolve_kind(method_type_name: str) -> LinkKind | None:
    """Map a catalog method type name to a link kind."""
    key = "".join(ch for ch in method_type_name.lower() if ch not in " -_")
    return KIND_ALIASES.get(key)


def load_catalog(catalog_path: str | Path) -> AppGraph:
    """Load a catalog file and build the route graph.

    Args:
        catalog_path: Path to the catalog JSON file

    Returns:
        AppGraph: Graph with one node per application and one edge per connection

    Raises:
        CatalogError: If the file is missing, not valid JSON or inconsistent
    """
    catalog_path = Path(catalog_path)
    if not catalog_path.exists():
        raise CatalogError(f"Catalog file not found: {catalog_path}")

    try:
        with open(catalog_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in catalog file {catalog_path}: {e}") from e

    graph = build_graph(data)
    logger.info(
        f"Loaded catalog {catalog_path}: {len(graph)} applications, "
        f"{len(graph.edges)} connections, {len(graph.route_tags())} route tags"
    )
    return graph


def build_graph(data: Dict[str, Any] | Catalog) -> AppGraph:
    """Build the route graph from catalog data."""
    if isinstance(data, Catalog):
        catalog = data
    else:
        try:
            catalog = Catalog.model_validate(data)
        except ValidationError as e:
            raise CatalogError(f"Invalid catalog: {e}") from e

    graph = AppGraph()
    by_app_id: Dict[str, int] = {}

    def register(app: AppInfo) -> int:
        if app.app_id in by_app_id:
            return by_app_id[app.app_id]
        index = graph.add_application(
            name=app.app_name,
            app_id=app.app_id,
            category=app.app_category.category_name if app.app_category else None,
            level=app.app_level,
        )
        by_app_id[app.app_id] = index
        return index

    for app in catalog.applications:
        if app.app_id in by_app_id:
            logger.warning(f"Duplicate application id '{app.app_id}' in catalog, keeping the first entry")
            continue
        register(app)

    for position, connection in enumerate(catalog.connections):
        source = _endpoint(connection.app_start, by_app_id, register, position)
        target = _endpoint(connection.app_end, by_app_id, register, position)
        graph.add_link(source, target, _link_from_connection(connection, position))

    return graph


def _endpoint(reference: str | AppInfo, by_app_id: Dict[str, int], register, position: int) -> int:
    if isinstance(reference, AppInfo):
        return register(reference)
    if reference not in by_app_id:
        raise CatalogError(f"Connection {position} references unknown application '{reference}'")
    return by_app_id[reference]


def _link_from_connection(connection: AppConnectInfo, position: int) -> CommunicationLink:
    """Turn a catalog connection into the matching link variant."""
    type_name = connection.communication_method_type.com_method_type_name
    kind = resolve_kind(type_name)
    if kind is None:
        raise CatalogError(f"Connection {position} has unknown communication method type '{type_name}'")

    info = connection.communication_method_info
    tags = frozenset(connection.route_names)

    def required(value: str | None, field_name: str) -> str:
        if not value:
            raise CatalogError(f"Connection {position} ({kind.display_name}) is missing '{field_name}'")
        return value

    if kind is LinkKind.REST_API:
        return RestApiLink(
            method=required(info.rest_api_method, "rest_api_http_method"),
            endpoint=required(info.rest_api_endpoint, "rest_api_http_uri"),
            route_tags=tags,
        )
    elif kind is LinkKind.MQ:
        return MessageQueueLink(queue_name=required(info.mq_queue_name, "mq_queue_name"), route_tags=tags)
    elif kind is LinkKind.KAFKA:
        return KafkaLink(topic=required(info.kafka_topic, "kafka_topic"), route_tags=tags)
    elif kind is LinkKind.GRPC:
        return GrpcLink(service_name=required(info.grpc_service_name, "grpc_service_name"), route_tags=tags)
    elif kind is LinkKind.FILE_TRANSFER:
        return FileTransferLink(file_path=required(info.file_path, "file_path"), route_tags=tags)
    else:
        return SoapLink(wsdl_url=required(info.wsdl_url, "wsdl_url"), route_tags=tags)
