"""Core interfaces, models and errors for the gateway."""

from infino_gateway.core.errors import (
    ErrorKind,
    GatewayError,
    InvalidRequestPathError,
    MissingIndexError,
    UnsupportedIndexTypeError,
    InvalidMethodError,
    UpstreamUnavailableError,
    GatewayInternalError,
)
from infino_gateway.core.interfaces import IMetadataStore, ITransport
from infino_gateway.core.models import (
    RestMethod,
    IndexType,
    MirrorOutcome,
    ParsedRequest,
    TimeWindow,
    OutboundCommand,
    BackendResponse,
    GatewayResponse,
)

__all__ = [
    "ErrorKind",
    "GatewayError",
    "InvalidRequestPathError",
    "MissingIndexError",
    "UnsupportedIndexTypeError",
    "InvalidMethodError",
    "UpstreamUnavailableError",
    "GatewayInternalError",
    "IMetadataStore",
    "ITransport",
    "RestMethod",
    "IndexType",
    "MirrorOutcome",
    "ParsedRequest",
    "TimeWindow",
    "OutboundCommand",
    "BackendResponse",
    "GatewayResponse",
]
