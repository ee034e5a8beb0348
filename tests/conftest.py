"""Shared fixtures for approute tests."""

import json

import pytest

from approute.graph.models import AppGraph, KafkaLink, RestApiLink

PAYMENT_ROUTE = "payment_route"


@pytest.fixture
def payment_graph():
    """Linear chain AppA -> AppB -> AppC -> AppD, all on payment_route."""
    graph = AppGraph()
    app_a = graph.add_application("AppA", app_id="a")
    app_b = graph.add_application("AppB", app_id="b")
    app_c = graph.add_application("AppC", app_id="c")
    app_d = graph.add_application("AppD", app_id="d")

    tags = frozenset({PAYMENT_ROUTE})
    graph.add_link(app_a, app_b, RestApiLink(method="GET", endpoint="/api/data", route_tags=tags))
    graph.add_link(app_b, app_c, KafkaLink(topic="topic1", route_tags=tags))
    graph.add_link(app_c, app_d, KafkaLink(topic="topic2", route_tags=tags))
    return graph


@pytest.fixture
def catalog_data():
    """Catalog document describing the payment chain."""
    return {
        "applications": [
            {"app_id": "a", "app_name": "AppA",
             "app_category": {"category_id": 1, "category_name": "frontend"}, "app_level": 1},
            {"app_id": "b", "app_name": "AppB"},
            {"app_id": "c", "app_name": "AppC"},
        ],
        "connections": [
            {
                "app_start": "a",
                "app_end": "b",
                "communication_method_type": {"com_method_type_id": 1, "com_method_name": "REST API"},
                "communication_method_info": {
                    "com_method_id": 10,
                    "rest_api_http_method": "GET",
                    "rest_api_http_uri": "/api/data",
                },
                "route_names": [PAYMENT_ROUTE],
            },
            {
                "app_start": "b",
                "app_end": "c",
                "communication_method_type": {"com_method_type_id": 2, "com_method_name": "Kafka"},
                "communication_method_info": {"com_method_id": 11, "kafka_topic": "topic1"},
                "route_names": [PAYMENT_ROUTE],
            },
            {
                "app_start": "c",
                "app_end": {"app_id": "d", "app_name": "AppD", "app_level": 3},
                "communication_method_type": {"com_method_type_id": 2, "com_method_name": "Kafka"},
                "communication_method_info": {"com_method_id": 12, "kafka_topic": "topic2"},
                "route_names": [PAYMENT_ROUTE, "audit_route"],
            },
        ],
    }


@pytest.fixture
def catalog_file(tmp_path, catalog_data):
    """Catalog document written to a temporary file."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_data), encoding="utf-8")
    return path
