"""Graph data model: applications, communication links and the route graph."""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, NamedTuple, Union


class LinkKind(str, Enum):
    """Raw communication kind labels."""
    REST_API = "RESTAPI"
    MQ = "MQ"
    KAFKA = "Kafka"
    GRPC = "gRPC"
    FILE_TRANSFER = "File Transfer"
    SOAP = "SOAP"

    @property
    def display_name(self) -> str:
        """Human label used in diagrams."""
        if self is LinkKind.REST_API:
            return "REST API"
        return self.value


@dataclass(frozen=True)
class Application:
    """An application node, addressed by its index in the graph arena."""
    index: int
    name: str
    app_id: str | None = None  # Catalog identity
    category: str | None = None
    level: int | None = None


@dataclass(frozen=True)
class RestApiLink:
    method: str
    endpoint: str
    route_tags: frozenset[str] = frozenset()
    kind: ClassVar[LinkKind] = LinkKind.REST_API


@dataclass(frozen=True)
class MessageQueueLink:
    queue_name: str
    route_tags: frozenset[str] = frozenset()
    kind: ClassVar[LinkKind] = LinkKind.MQ


@dataclass(frozen=True)
class KafkaLink:
    topic: str
    route_tags: frozenset[str] = frozenset()
    kind: ClassVar[LinkKind] = LinkKind.KAFKA


@dataclass(frozen=True)
class GrpcLink:
    service_name: str
    route_tags: frozenset[str] = frozenset()
    kind: ClassVar[LinkKind] = LinkKind.GRPC


@dataclass(frozen=True)
class FileTransferLink:
    file_path: str
    route_tags: frozenset[str] = frozenset()
    kind: ClassVar[LinkKind] = LinkKind.FILE_TRANSFER


@dataclass(frozen=True)
class SoapLink:
    wsdl_url: str
    route_tags: frozenset[str] = frozenset()
    kind: ClassVar[LinkKind] = LinkKind.SOAP


CommunicationLink = Union[
    RestApiLink,
    MessageQueueLink,
    KafkaLink,
    GrpcLink,
    FileTransferLink,
    SoapLink,
]


class Hop(NamedTuple):
    """One traversed edge of a route."""
    source: int
    target: int
    link: CommunicationLink


Route = tuple[Hop, ...]


@dataclass
class AppGraph:
    """Directed multigraph of applications and communication links.

    Applications live in an arena and are addressed by index. Each node keeps
    its outgoing edges in insertion order. The graph is built once and treated
    as read-only while routes are searched.
    """
    applications: list[Application] = field(default_factory=list)
    edges: list[Hop] = field(default_factory=list)
    _outgoing: list[list[Hop]] = field(default_factory=list, repr=False)

    def add_application(
        self,
        name: str,
        app_id: str | None = None,
        category: str | None = None,
        level: int | None = None,
    ) -> int:
        """Add an application and return its index."""
        index = len(self.applications)
        self.applications.append(
            Application(index=index, name=name, app_id=app_id, category=category, level=level)
        )
        self._outgoing.append([])
        return index

    def add_link(self, source: int, target: int, link: CommunicationLink) -> Hop:
        """Add a communication link between two existing applications."""
        for endpoint in (source, target):
            if not self.contains(endpoint):
                raise ValueError(f"Edge endpoint {endpoint} is not in the graph")

        hop = Hop(source, target, link)
        self.edges.append(hop)
        self._outgoing[source].append(hop)
        return hop

    def contains(self, index: int) -> bool:
        return isinstance(index, int) and 0 <= index < len(self.applications)

    def node(self, index: int) -> Application:
        return self.applications[index]

    def __getitem__(self, index: int) -> Application:
        return self.applications[index]

    def __len__(self) -> int:
        return len(self.applications)

    def node_indices(self) -> Iterator[int]:
        return iter(range(len(self.applications)))

    def outgoing(self, index: int) -> list[Hop]:
        """Outgoing edges of a node, in insertion order."""
        return self._outgoing[index]

    def find_by_name(self, name: str) -> int | None:
        for app in self.applications:
            if app.name == name:
                return app.index
        return None

    def find_by_app_id(self, app_id: str) -> int | None:
        for app in self.applications:
            if app.app_id is not None and app.app_id == app_id:
                return app.index
        return None

    def resolve(self, identity: str | int) -> int | None:
        """Resolve an index, catalog app id or application name to an index.

        Catalog ids win over names so that an id that happens to look like
        another application's name still points at its own node.
        """
        if isinstance(identity, int):
            return identity if self.contains(identity) else None

        index = self.find_by_app_id(identity)
        if index is None:
            index = self.find_by_name(identity)
        if index is None and identity.isdigit():
            candidate = int(identity)
            if self.contains(candidate):
                index = candidate
        return index

    def route_tags(self) -> set[str]:
        """All route tags present on any edge."""
        tags = set()
        for hop in self.edges:
            tags.update(hop.link.route_tags)
        return tags
