"""Catalog file models: applications and the connections between them."""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AppCategory(BaseModel):
    """Application category."""

    category_id: int = Field(description="Category identifier")
    category_name: str = Field(description="Category display name")


class AppInfo(BaseModel):
    """An application entry in the catalog."""

    app_id: str = Field(description="Unique application identifier")
    app_name: str = Field(description="Application name used in diagrams")
    app_category: Optional[AppCategory] = Field(default=None, description="Category the application belongs to")
    app_level: Optional[int] = Field(default=None, description="Architecture level of the application")


class CommunicationMethodType(BaseModel):
    """Communication method type, e.g. ``REST API`` or ``Kafka``."""

    com_method_type_id: Optional[int] = Field(default=None, description="Method type identifier")
    com_method_type_name: str = Field(alias="com_method_name", description="Method type name")

    model_config = ConfigDict(populate_by_name=True)


class CommunicationMethodInfo(BaseModel):
    """Kind-specific communication details; only the fields of the kind are set."""

    com_method_id: Optional[int] = Field(default=None, description="Method identifier")
    kafka_topic: Optional[str] = None
    rest_api_method: Optional[str] = Field(default=None, alias="rest_api_http_method")
    rest_api_endpoint: Optional[str] = Field(default=None, alias="rest_api_http_uri")
    mq_queue_name: Optional[str] = None
    grpc_service_name: Optional[str] = None
    file_path: Optional[str] = None
    wsdl_url: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class AppConnectInfo(BaseModel):
    """A directed connection from one application to another."""

    app_start: Union[str, AppInfo] = Field(description="Source app id or embedded application")
    app_end: Union[str, AppInfo] = Field(description="Target app id or embedded application")
    communication_method_type: CommunicationMethodType
    communication_method_info: CommunicationMethodInfo = Field(default_factory=CommunicationMethodInfo)
    route_names: List[str] = Field(default_factory=list, description="Business routes the connection takes part in")


class Catalog(BaseModel):
    """Complete application catalog."""

    applications: List[AppInfo] = Field(default_factory=list)
    connections: List[AppConnectInfo] = Field(default_factory=list)
