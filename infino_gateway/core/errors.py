"""
Error taxonomy for the gateway.

Translation errors are raised before any network call is made. Dispatch
errors are caught at the async boundary and converted into a response.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure surfaced to the caller."""

    INVALID_REQUEST_PATH = "InvalidRequestPath"
    MISSING_INDEX = "MissingIndex"
    UNSUPPORTED_INDEX_TYPE = "UnsupportedIndexType"
    INVALID_METHOD = "InvalidMethod"
    UPSTREAM_UNAVAILABLE = "UpstreamUnavailable"
    INTERNAL_ERROR = "InternalError"


class GatewayError(Exception):
    """Base class for every error the gateway reports to a caller."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestPathError(GatewayError):
    kind = ErrorKind.INVALID_REQUEST_PATH
    status_code = 400


class MissingIndexError(GatewayError):
    kind = ErrorKind.MISSING_INDEX
    status_code = 400


class UnsupportedIndexTypeError(GatewayError):
    kind = ErrorKind.UNSUPPORTED_INDEX_TYPE
    status_code = 400


class InvalidMethodError(GatewayError):
    kind = ErrorKind.INVALID_METHOD
    status_code = 400


class UpstreamUnavailableError(GatewayError):
    kind = ErrorKind.UPSTREAM_UNAVAILABLE
    status_code = 503


class GatewayInternalError(GatewayError):
    kind = ErrorKind.INTERNAL_ERROR
    status_code = 500
