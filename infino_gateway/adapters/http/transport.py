"""
HTTP transport towards the Infino server.
"""

from typing import Optional

import httpx

from infino_gateway.core.errors import UpstreamUnavailableError
from infino_gateway.core.models import BackendResponse, OutboundCommand


class HttpxTransport:
    """
    Sends outbound commands with a pooled httpx client.

    Implements the ITransport interface. No retries and no timeout beyond
    the client's own defaults.
    """

    def __init__(self, client: Optional[httpx.Client] = None):
        """
        Initialize transport.

        Args:
            client: Preconfigured httpx client; a default one is created
                    when omitted
        """
        self.client = client or httpx.Client()

    def send(self, command: OutboundCommand, body: Optional[bytes] = None) -> BackendResponse:
        try:
            response = self.client.request(
                command.method.value,
                command.url,
                content=body or None,
            )
        except httpx.TransportError as e:
            raise UpstreamUnavailableError(
                f"Infino server unavailable at {command.url}: {e}"
            ) from e

        return BackendResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self.client.close()
