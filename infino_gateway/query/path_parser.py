"""
Inbound request parsing.

REST paths normally take one of these forms:

    /infino/logs/<index-name>/_action?parameters
    /infino/<index-name>/logs/_action?parameters
    /infino/<index-name>/_action?parameters

The path value handed to the parser is either such a full path or the
part of it that follows the index segment (e.g. ``logs/_search``).
"""

import logging
from typing import Mapping, NamedTuple, Optional

from infino_gateway.core.errors import (
    InvalidMethodError,
    InvalidRequestPathError,
    MissingIndexError,
)
from infino_gateway.core.models import IndexType, ParsedRequest, RestMethod

logger = logging.getLogger(__name__)

_INDEX_TYPES = {
    "logs": IndexType.LOGS,
    "metrics": IndexType.METRICS,
}

# Methods that cannot be translated without an action in the path
_PATH_REQUIRED = {RestMethod.GET, RestMethod.POST}


class PathParts(NamedTuple):
    prefix: Optional[str]
    suffix: str
    index_type: IndexType


def parse_path(path: Optional[str], index_name: Optional[str] = None) -> PathParts:
    """
    Split a path value into prefix, action suffix and telemetry class.

    The suffix is everything after the last ``/``. The class segment is the
    last segment before it, skipping the index name when the path spells
    the index out (``/infino/logs/my-index/_search``). Class matching is
    case-sensitive.

    Args:
        path: Path value of the inbound call
        index_name: Name of the addressed index

    Returns:
        PathParts for the path

    Raises:
        InvalidRequestPathError: If the path is missing
    """
    if path is None:
        raise InvalidRequestPathError("Request path must be specified")

    split_at = path.rfind("/")
    suffix = path[split_at + 1:]
    if split_at == -1:
        return PathParts(None, suffix, IndexType.UNDEFINED)

    head = path[:split_at]
    segments = [segment for segment in head.split("/") if segment]
    prefix = head

    # A lone segment is the class itself, even when the index shares its name
    if index_name and len(segments) > 1 and segments[-1] == index_name:
        prefix = head[: head.rfind(index_name)]
        segments = segments[:-1]

    class_segment = segments[-1] if segments else ""
    return PathParts(prefix, suffix, _INDEX_TYPES.get(class_segment, IndexType.UNDEFINED))


def parse_method(method: Optional[str]) -> RestMethod:
    """Normalize a method name, raising InvalidMethodError if unsupported."""
    if not method:
        raise InvalidMethodError("Request method must be specified")
    try:
        return RestMethod(method.upper())
    except ValueError:
        raise InvalidMethodError(f"Unsupported request method: {method}") from None


def parse_request(
    method: Optional[str],
    index_name: Optional[str],
    path: Optional[str] = None,
    params: Optional[Mapping[str, str]] = None,
) -> ParsedRequest:
    """
    Build the immutable descriptor of an inbound call.

    Args:
        method: REST method name
        index_name: Name of the Infino index
        path: Path value; optional for PUT, DELETE and HEAD on a bare index
        params: Query parameters of the call

    Returns:
        ParsedRequest for the call

    Raises:
        InvalidMethodError: If the method is missing or unsupported
        MissingIndexError: If the index name is missing
        InvalidRequestPathError: If GET or POST carries no path
    """
    rest_method = parse_method(method)

    if not index_name:
        raise MissingIndexError("Index name must be specified")

    request_params = dict(params or {})
    for key, value in request_params.items():
        logger.debug("Query parameters from caller to Infino: %s is %s", key, value)

    if path is None and rest_method not in _PATH_REQUIRED:
        return ParsedRequest(
            method=rest_method,
            index_name=index_name,
            params=request_params,
        )

    parts = parse_path(path, index_name)
    return ParsedRequest(
        method=rest_method,
        raw_path=path,
        path_prefix=parts.prefix,
        path_suffix=parts.suffix,
        index_name=index_name,
        index_type=parts.index_type,
        params=request_params,
    )
