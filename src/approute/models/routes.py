"""Serializable route results for programmatic consumers."""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from approute.graph.mermaid import link_details
from approute.graph.models import AppGraph, Application, CommunicationLink, Route


class ApplicationSummary(BaseModel):
    """An application as exposed to API and JSON consumers."""

    index: int = Field(description="Index of the application in the graph")
    name: str = Field(description="Application name")
    app_id: Optional[str] = Field(default=None, description="Catalog identity")
    category: Optional[str] = Field(default=None, description="Catalog category name")
    level: Optional[int] = Field(default=None, description="Catalog application level")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_application(cls, app: Application) -> "ApplicationSummary":
        return cls(
            index=app.index,
            name=app.name,
            app_id=app.app_id,
            category=app.category,
            level=app.level,
        )


class HopResult(BaseModel):
    """One hop of a discovered route."""

    source: str = Field(description="Source application name")
    target: str = Field(description="Target application name")
    kind: str = Field(description="Raw communication kind label")
    detail: str = Field(description="Diagram label for the hop")
    link_fields: Dict[str, Any] = Field(default_factory=dict, description="Kind-specific link fields")
    route_tags: List[str] = Field(default_factory=list, description="Route tags on the link, sorted")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RouteResult(BaseModel):
    """A discovered route."""

    hops: List[HopResult] = Field(default_factory=list)


class RouteSet(BaseModel):
    """All routes answering one query."""

    route_tag: Optional[str] = Field(default=None, description="Route tag the query followed")
    start: Optional[str] = Field(default=None, description="Start application, if bounded")
    goal: Optional[str] = Field(default=None, description="Goal application, if bounded")
    count: int = Field(default=0, description="Number of routes")
    routes: List[RouteResult] = Field(default_factory=list)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_routes(
        cls,
        graph: AppGraph,
        routes: Sequence[Route],
        route_tag: str | None = None,
        start: int | None = None,
        goal: int | None = None,
    ) -> "RouteSet":
        results = [
            RouteResult(hops=[_hop_result(graph, source, target, link) for source, target, link in route])
            for route in routes
        ]
        return cls(
            route_tag=route_tag,
            start=graph[start].name if start is not None else None,
            goal=graph[goal].name if goal is not None else None,
            count=len(results),
            routes=results,
        )


def _hop_result(graph: AppGraph, source: int, target: int, link: CommunicationLink) -> HopResult:
    fields = {
        name: value
        for name, value in vars(link).items()
        if name != "route_tags"
    }
    return HopResult(
        source=graph[source].name,
        target=graph[target].name,
        kind=link.kind.value,
        detail=link_details(link),
        link_fields=fields,
        route_tags=sorted(link.route_tags),
    )
