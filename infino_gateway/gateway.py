"""
Gateway context - main entry point.

Coordinates request parsing, command translation, metadata mirroring and
forwarding. One instance is built at process start and shared by every
call path.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Mapping, Optional, Tuple

from infino_gateway.config import GatewaySettings
from infino_gateway.core.interfaces import IMetadataStore, ITransport
from infino_gateway.core.models import OutboundCommand, ParsedRequest, RestMethod
from infino_gateway.execution.dispatcher import ForwardingDispatcher
from infino_gateway.execution.inflight import InFlightSet
from infino_gateway.execution.mirror import MetadataMirrorSynchronizer
from infino_gateway.query.path_parser import parse_request
from infino_gateway.query.translator import CommandTranslator

logger = logging.getLogger(__name__)


class InfinoGateway:
    """
    Process-wide gateway context.

    Owns the settings, the worker pools and the in-flight set.
    Translation runs on the caller's thread. Forwarding runs on the
    isolated forward pool and mirroring on its own smaller pool, so a
    stalled metadata store never holds up forwards.
    """

    def __init__(
        self,
        settings: GatewaySettings,
        transport: ITransport,
        metadata_store: IMetadataStore,
        executor: Optional[ThreadPoolExecutor] = None,
        mirror_executor: Optional[ThreadPoolExecutor] = None,
    ):
        """
        Initialize gateway.

        Args:
            settings: Resolved gateway settings
            transport: HTTP transport towards the Infino server
            metadata_store: Host platform index metadata store
            executor: Worker pool; one sized from settings is created
                      when omitted
            mirror_executor: Pool for mirror syncs; one sized from
                             settings is created when omitted
        """
        self.settings = settings
        self.transport = transport
        self.metadata_store = metadata_store
        self.executor = executor or ThreadPoolExecutor(
            max_workers=settings.worker_threads,
            thread_name_prefix="infino-forward",
        )
        self.mirror_executor = mirror_executor or ThreadPoolExecutor(
            max_workers=settings.mirror_threads,
            thread_name_prefix="infino-mirror",
        )
        self.in_flight = InFlightSet()

        self.translator = CommandTranslator(
            endpoint=settings.infino_endpoint,
            default_window_days=settings.default_window_days,
        )
        self.mirror = MetadataMirrorSynchronizer(
            metadata_store, self.mirror_executor, self.in_flight
        )
        self.dispatcher = ForwardingDispatcher(transport, self.executor, self.in_flight)

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "InfinoGateway":
        """
        Create a gateway wired to the real Infino server and search platform.

        Args:
            environ: Environment mapping; defaults to os.environ

        Returns:
            Configured InfinoGateway
        """
        from infino_gateway.adapters.elasticsearch import ESMetadataStore
        from infino_gateway.adapters.http import HttpxTransport

        settings = GatewaySettings.from_env(environ)
        logger.info("Forwarding Infino requests to %s", settings.infino_endpoint)

        return cls(
            settings=settings,
            transport=HttpxTransport(),
            metadata_store=ESMetadataStore(es_host=settings.opensearch_host),
        )

    def prepare(
        self,
        method: Optional[str],
        index_name: Optional[str],
        path: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> Tuple[ParsedRequest, OutboundCommand]:
        """
        Parse and translate an inbound call without sending anything.

        Raises:
            GatewayError: If the call cannot be translated
        """
        request = parse_request(method, index_name, path, params)
        command = self.translator.translate(request)
        return request, command

    def handle(
        self,
        method: Optional[str],
        index_name: Optional[str],
        path: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
    ) -> Future:
        """
        Translate an inbound call and forward it to the Infino server.

        Translation errors are raised here, before any network call.
        Index creation also starts a mirror sync that is not awaited.

        Args:
            method: REST method name
            index_name: Name of the Infino index
            path: Path value of the call
            params: Query parameters
            body: Request body

        Returns:
            Future resolving to a GatewayResponse
        """
        request, command = self.prepare(method, index_name, path, params)

        if request.method is RestMethod.PUT:
            self.mirror.submit(request.index_name)

        return self.dispatcher.dispatch(command, body)

    def in_flight_count(self) -> int:
        return len(self.in_flight)

    def shutdown(self, timeout: Optional[float] = None) -> bool:
        """
        Drain pending work, then stop both worker pools.

        Args:
            timeout: Seconds to wait for the drain; defaults to the
                     configured shutdown timeout

        Returns:
            True if every pending operation finished before the timeout
        """
        if timeout is None:
            timeout = self.settings.shutdown_timeout

        drained = self.in_flight.drain(timeout)
        if not drained:
            logger.warning(
                "Stopping worker pool with %d operations still in flight", len(self.in_flight)
            )

        self.executor.shutdown(wait=False, cancel_futures=True)
        self.mirror_executor.shutdown(wait=False, cancel_futures=True)
        self.transport.close()
        close_store = getattr(self.metadata_store, "close", None)
        if close_store is not None:
            close_store()
        return drained
