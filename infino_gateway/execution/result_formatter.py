"""
Result formatting utilities.

Maps backend responses and gateway errors to the caller-visible response.
"""

from infino_gateway.core.errors import GatewayError
from infino_gateway.core.models import BackendResponse, GatewayResponse


class ResultFormatter:
    """
    Formats dispatch outcomes into GatewayResponse objects.

    A response from the backend is relayed as OK with the backend body;
    the backend's own status is kept in metadata only.
    """

    @staticmethod
    def format_backend_response(response: BackendResponse) -> GatewayResponse:
        """
        Format a response received from the Infino server.

        Args:
            response: Raw backend response

        Returns:
            Successful GatewayResponse carrying the backend body
        """
        return GatewayResponse(
            status_code=200,
            body=response.body,
            success=True,
            metadata={"backend_status": response.status_code},
        )

    @staticmethod
    def format_error(error: GatewayError) -> GatewayResponse:
        """
        Format a gateway error.

        Args:
            error: Error raised while dispatching

        Returns:
            Failed GatewayResponse with the error message as body
        """
        return GatewayResponse(
            status_code=error.status_code,
            body=error.message,
            success=False,
            error=error.kind,
        )
