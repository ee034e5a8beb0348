"""Pydantic data models for the catalog and for route results."""

from approute.models.catalog import (
    AppCategory,
    AppConnectInfo,
    AppInfo,
    Catalog,
    CommunicationMethodInfo,
    CommunicationMethodType,
)
from approute.models.routes import ApplicationSummary, HopResult, RouteResult, RouteSet

__all__ = [
    "AppCategory",
    "AppInfo",
    "AppConnectInfo",
    "Catalog",
    "CommunicationMethodInfo",
    "CommunicationMethodType",
    "ApplicationSummary",
    "HopResult",
    "RouteResult",
    "RouteSet",
]
