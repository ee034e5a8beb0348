"""approute - discover and diagram business routes between applications.

approute loads a catalog of applications and their communication links
(REST, Kafka, MQ, gRPC, file transfer, SOAP), finds the chains of links
tagged with a route name, and renders them as Mermaid diagrams.
"""

__version__ = "0.1.0"
__description__ = "Discover and diagram business routes between applications"

from approute.config import ApprouteConfig

__all__ = [
    "__version__",
    "__description__",
    "ApprouteConfig",
]
