"""
Abstract interfaces for external collaborators.

These protocols define the contract the gateway expects from the host
platform's index metadata store and from the HTTP transport used to reach
the Infino server.
"""

from typing import Optional, Protocol

from infino_gateway.core.models import BackendResponse, OutboundCommand


class IMetadataStore(Protocol):
    """
    Index metadata store of the host search platform.

    Used only to keep a placeholder index per Infino collection so that
    cluster-level bookkeeping matches the backend.
    """

    def exists(self, index_name: str) -> bool:
        """
        Check whether an index exists.

        Args:
            index_name: Name of the index

        Returns:
            True if the index exists
        """
        ...

    def create(self, index_name: str, shards: int, replicas: int) -> bool:
        """
        Create an index with the given settings.

        Args:
            index_name: Name of the index
            shards: Number of primary shards
            replicas: Number of replicas

        Returns:
            True if the platform acknowledged the creation
        """
        ...


class ITransport(Protocol):
    """
    HTTP transport towards the Infino server.

    Implementations block until the response arrives; the dispatcher is
    responsible for running them off the caller's thread.
    """

    def send(self, command: OutboundCommand, body: Optional[bytes] = None) -> BackendResponse:
        """
        Send one outbound command.

        Args:
            command: Resolved method and URL
            body: Request body, forwarded verbatim

        Returns:
            The backend response

        Raises:
            UpstreamUnavailableError: If the backend cannot be reached
        """
        ...

    def close(self) -> None:
        """Release pooled connections."""
        ...
