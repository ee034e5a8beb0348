"""Tests for route query validation and dispatch."""

import pytest

from approute.config import SearchConfig
from approute.errors import InvalidQueryError, SearchBudgetExceededError, UnknownNodeError
from approute.graph.models import AppGraph, KafkaLink
from approute.query import RouteQuery, budget_from_config, discover_routes


class TestRouteQuery:
    """Tests for query bounds."""

    def test_unbounded_query(self):
        assert not RouteQuery().is_bounded
        assert not RouteQuery(start="", goal="", route_tag="").is_bounded

    def test_bounded_queries(self):
        assert RouteQuery(route_tag="payment_route").is_bounded
        assert RouteQuery(start="AppA").is_bounded
        assert RouteQuery(goal=0).is_bounded


class TestDiscoverRoutes:
    """Tests for discover_routes."""

    def test_no_bound_is_invalid(self, payment_graph):
        """Empty tag without start or goal fails before any traversal."""
        with pytest.raises(InvalidQueryError):
            discover_routes(payment_graph, RouteQuery(route_tag=""))

    def test_start_and_goal(self, payment_graph):
        routes = discover_routes(payment_graph, RouteQuery(start="AppA", goal="AppD", route_tag="payment_route"))

        assert len(routes) == 1
        assert routes[0][0].source == payment_graph.find_by_name("AppA")
        assert routes[0][-1].target == payment_graph.find_by_name("AppD")

    def test_identities_by_app_id_and_index(self, payment_graph):
        by_id = discover_routes(payment_graph, RouteQuery(start="a", goal="d", route_tag="payment_route"))
        by_index = discover_routes(payment_graph, RouteQuery(start=0, goal="3", route_tag="payment_route"))

        assert by_id == by_index
        assert len(by_id) == 1

    def test_tag_only(self, payment_graph):
        assert len(discover_routes(payment_graph, RouteQuery(route_tag="payment_route"))) == 3

    def test_start_only(self, payment_graph):
        routes = discover_routes(payment_graph, RouteQuery(start="AppB", route_tag="payment_route"))

        assert len(routes) == 1
        assert len(routes[0]) == 2

    def test_goal_only(self, payment_graph):
        """Goal without start searches from every root and drops the empty route."""
        routes = discover_routes(payment_graph, RouteQuery(goal="AppC", route_tag="payment_route"))

        assert [len(route) for route in routes] == [2, 1]
        assert all(route[-1].target == 2 for route in routes)

    def test_start_without_tag_follows_nothing(self, payment_graph):
        assert discover_routes(payment_graph, RouteQuery(start="AppA", goal="AppD")) == []
        assert discover_routes(payment_graph, RouteQuery(start="AppA", goal="AppA")) == [()]

    def test_goal_without_tag(self, payment_graph):
        assert discover_routes(payment_graph, RouteQuery(goal="AppD")) == []

    def test_unknown_tag_is_empty_success(self, payment_graph):
        assert discover_routes(payment_graph, RouteQuery(route_tag="refund_route")) == []

    def test_unknown_start(self, payment_graph):
        with pytest.raises(UnknownNodeError) as exc_info:
            discover_routes(payment_graph, RouteQuery(start="AppZ", route_tag="payment_route"))

        assert exc_info.value.identity == "AppZ"
        assert exc_info.value.role == "start"

    def test_unknown_goal_index(self, payment_graph):
        with pytest.raises(UnknownNodeError, match="goal"):
            discover_routes(payment_graph, RouteQuery(start=0, goal=42, route_tag="payment_route"))

    def test_budget_from_config(self):
        graph = AppGraph()
        nodes = [graph.add_application(f"N{i}") for i in range(6)]
        for source in nodes:
            for target in nodes:
                if source != target:
                    graph.add_link(source, target, KafkaLink(topic="t", route_tags=frozenset({"r"})))

        budget = budget_from_config(SearchConfig(max_expansions=20))

        with pytest.raises(SearchBudgetExceededError):
            discover_routes(graph, RouteQuery(route_tag="r"), budget)
