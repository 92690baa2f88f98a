"""Shared fakes for gateway tests."""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import pytest

from infino_gateway.config import GatewaySettings
from infino_gateway.core.errors import UpstreamUnavailableError
from infino_gateway.core.models import BackendResponse, OutboundCommand
from infino_gateway.execution.inflight import InFlightSet
from infino_gateway.gateway import InfinoGateway


class FakeTransport:
    """Records commands and answers with a canned response."""

    def __init__(self, body: str = "ok", status_code: int = 200, error: Optional[Exception] = None):
        self.body = body
        self.status_code = status_code
        self.error = error
        self.sent: List[Tuple[OutboundCommand, Optional[bytes]]] = []
        self.closed = False
        self._lock = threading.Lock()

    def send(self, command: OutboundCommand, body: Optional[bytes] = None) -> BackendResponse:
        with self._lock:
            self.sent.append((command, body))
        if self.error is not None:
            raise self.error
        return BackendResponse(status_code=self.status_code, body=self.body)

    def close(self) -> None:
        self.closed = True


class FakeMetadataStore:
    """In-memory index registry; can be told to fail."""

    def __init__(self, existing=(), fail_exists: bool = False, fail_create: bool = False):
        self.indexes = set(existing)
        self.fail_exists = fail_exists
        self.fail_create = fail_create
        self.create_calls: List[Tuple[str, int, int]] = []
        self._lock = threading.Lock()

    def exists(self, index_name: str) -> bool:
        if self.fail_exists:
            raise ConnectionError("metadata store unreachable")
        with self._lock:
            return index_name in self.indexes

    def create(self, index_name: str, shards: int, replicas: int) -> bool:
        with self._lock:
            self.create_calls.append((index_name, shards, replicas))
            if self.fail_create:
                raise RuntimeError("create rejected")
            if index_name in self.indexes:
                raise RuntimeError(f"index [{index_name}] already exists")
            self.indexes.add(index_name)
            return True


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="test-forward")
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def in_flight():
    return InFlightSet()


@pytest.fixture
def transport():
    return FakeTransport(body='{"hits": []}')


@pytest.fixture
def metadata_store():
    return FakeMetadataStore()


@pytest.fixture
def settings():
    return GatewaySettings(infino_endpoint="http://infino:3000", shutdown_timeout=2.0)


@pytest.fixture
def gateway(settings, transport, metadata_store):
    gw = InfinoGateway(settings=settings, transport=transport, metadata_store=metadata_store)
    yield gw
    gw.executor.shutdown(wait=True)
    gw.mirror_executor.shutdown(wait=True)


@pytest.fixture
def unavailable_transport():
    return FakeTransport(error=UpstreamUnavailableError("Connection refused"))
