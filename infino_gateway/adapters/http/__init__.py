"""HTTP transport adapter."""

from infino_gateway.adapters.http.transport import HttpxTransport

__all__ = ["HttpxTransport"]
