"""
Shared data models for the Infino gateway.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from infino_gateway.core.errors import ErrorKind


class RestMethod(str, Enum):
    """REST methods the gateway routes."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class IndexType(str, Enum):
    """
    Telemetry class of an Infino collection.

    Infino keeps a separate index per telemetry type. UNDEFINED covers
    requests that do not name a class in their path.
    """

    UNDEFINED = "undefined"
    LOGS = "logs"
    METRICS = "metrics"


class MirrorOutcome(str, Enum):
    """Terminal states of a metadata mirror sync."""

    SKIPPED = "skipped"  # index already present
    CREATED = "created"
    FAILED = "failed"


class ParsedRequest(BaseModel):
    """Normalized descriptor of one inbound call."""

    model_config = ConfigDict(frozen=True)

    method: Optional[RestMethod] = None
    raw_path: Optional[str] = None
    path_prefix: Optional[str] = None  # E.g. /infino/logs/
    path_suffix: Optional[str] = None  # E.g. _search
    index_name: str
    index_type: IndexType = IndexType.UNDEFINED
    params: Dict[str, str] = Field(default_factory=dict)


class TimeWindow(BaseModel):
    """Search time boundaries, always populated after resolution."""

    model_config = ConfigDict(frozen=True)

    start_time: str
    end_time: str


class OutboundCommand(BaseModel):
    """Fully resolved (method, URL) pair sent to the Infino server."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: RestMethod


class BackendResponse(BaseModel):
    """Raw response received from the Infino server."""

    status_code: int
    body: str = ""


class GatewayResponse(BaseModel):
    """Caller-visible result of a forwarded command."""

    status_code: int = 200
    body: str = ""
    success: bool = True
    error: Optional[ErrorKind] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
