"""
Metadata mirror synchronization.

Keeps an empty placeholder index on the host platform for every Infino
collection so the platform's index bookkeeping matches the backend.
Mirroring is best effort: failures are logged and never reach the caller.
"""

import logging
from concurrent.futures import Executor, Future

from infino_gateway.core.interfaces import IMetadataStore
from infino_gateway.core.models import MirrorOutcome
from infino_gateway.execution.inflight import InFlightSet

logger = logging.getLogger(__name__)

MIRROR_SHARDS = 1
MIRROR_REPLICAS = 1


class MetadataMirrorSynchronizer:
    """
    Creates mirror indexes on the host platform when missing.

    The check-then-create sequence is not atomic. Concurrent requests for
    the same new index may all attempt the create; the losers fail and
    are logged.
    """

    def __init__(self, store: IMetadataStore, executor: Executor, in_flight: InFlightSet):
        """
        Initialize mirror synchronizer.

        Args:
            store: Host platform metadata store
            executor: Worker pool the sync runs on
            in_flight: Registry of pending operations
        """
        self.store = store
        self.executor = executor
        self.in_flight = in_flight

    def sync(self, index_name: str) -> MirrorOutcome:
        """Run check-then-create for one index. Never raises."""
        try:
            exists = self.store.exists(index_name)
        except Exception:
            logger.error("Error checking existence of '%s' index", index_name, exc_info=True)
            return MirrorOutcome.FAILED

        if exists:
            return MirrorOutcome.SKIPPED

        try:
            acknowledged = self.store.create(
                index_name, shards=MIRROR_SHARDS, replicas=MIRROR_REPLICAS
            )
        except Exception:
            logger.error("Failed to create '%s' mirror index", index_name, exc_info=True)
            return MirrorOutcome.FAILED

        if not acknowledged:
            logger.error("Creation of '%s' mirror index was not acknowledged", index_name)
            return MirrorOutcome.FAILED

        logger.info("Successfully created '%s' mirror index", index_name)
        return MirrorOutcome.CREATED

    def submit(self, index_name: str) -> Future:
        """
        Schedule a sync on the worker pool without waiting for it.

        Returns:
            Future resolving to a MirrorOutcome
        """
        try:
            future = self.executor.submit(self.sync, index_name)
        except RuntimeError:
            logger.error("Worker pool is shut down; skipping mirror of '%s'", index_name)
            future = Future()
            future.set_result(MirrorOutcome.FAILED)
            return future
        return self.in_flight.add(future)
