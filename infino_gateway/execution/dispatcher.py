"""
Forwarding of outbound commands.

Commands run on a worker pool owned by the gateway and kept apart from
the web server's own request handling, so a slow Infino server cannot
starve unrelated requests.
"""

import logging
from concurrent.futures import Executor, Future
from typing import Optional

from infino_gateway.core.errors import GatewayError, GatewayInternalError
from infino_gateway.core.interfaces import ITransport
from infino_gateway.core.models import GatewayResponse, OutboundCommand
from infino_gateway.execution.inflight import InFlightSet
from infino_gateway.execution.result_formatter import ResultFormatter

logger = logging.getLogger(__name__)


class ForwardingDispatcher:
    """
    Executes outbound commands asynchronously.

    The returned future always resolves to a GatewayResponse; transport
    and formatting failures are converted, never raised. At most one
    attempt is made per command.
    """

    def __init__(self, transport: ITransport, executor: Executor, in_flight: InFlightSet):
        """
        Initialize dispatcher.

        Args:
            transport: HTTP transport towards the Infino server
            executor: Isolated worker pool
            in_flight: Registry of pending operations
        """
        self.transport = transport
        self.executor = executor
        self.in_flight = in_flight

    def dispatch(self, command: OutboundCommand, body: Optional[bytes] = None) -> Future:
        """
        Submit a command to the worker pool.

        Args:
            command: Outbound command to execute
            body: Request body forwarded verbatim

        Returns:
            Future resolving to a GatewayResponse
        """
        try:
            future = self.executor.submit(self._forward, command, body)
        except RuntimeError as e:
            logger.error("Cannot dispatch %s %s: %s", command.method.value, command.url, e)
            future = Future()
            future.set_result(
                ResultFormatter.format_error(GatewayInternalError("Gateway is shutting down"))
            )
            return future
        return self.in_flight.add(future)

    def _forward(self, command: OutboundCommand, body: Optional[bytes]) -> GatewayResponse:
        try:
            response = self.transport.send(command, body)
        except GatewayError as e:
            logger.error("Error in async HTTP call to %s", command.url, exc_info=True)
            return ResultFormatter.format_error(e)
        except Exception as e:
            logger.error("Unexpected error calling %s", command.url, exc_info=True)
            return ResultFormatter.format_error(GatewayInternalError(str(e)))

        try:
            return ResultFormatter.format_backend_response(response)
        except Exception as e:
            logger.error("Error sending response", exc_info=True)
            return ResultFormatter.format_error(GatewayInternalError(str(e)))
