"""
Gateway Integration Tests
=========================

End-to-end flow through the gateway context with injected fakes.
"""

import threading

import pytest

from infino_gateway.core.errors import (
    InvalidMethodError,
    UnsupportedIndexTypeError,
)
from infino_gateway.core.models import MirrorOutcome, RestMethod
from infino_gateway.gateway import InfinoGateway

from conftest import FakeMetadataStore, FakeTransport


class TestInfinoGateway:

    def test_search_is_forwarded(self, gateway, transport):
        result = gateway.handle("GET", "my-index", "logs/_search", {"text": "error"}).result(timeout=5)

        assert result.success
        assert result.body == '{"hits": []}'
        command, _ = transport.sent[0]
        assert command.url.startswith("http://infino:3000/my-index/search_logs?text=error&start_time=")
        assert command.method is RestMethod.GET

    def test_body_forwarded_verbatim(self, gateway, transport):
        body = b'[{"date": 1, "message": "hi"}]'
        gateway.handle("POST", "my-index", "logs/_doc", body=body).result(timeout=5)

        command, sent_body = transport.sent[0]
        assert command.url == "http://infino:3000/my-index/append_log"
        assert sent_body == body

    def test_translation_errors_fail_before_network(self, gateway, transport, metadata_store):
        with pytest.raises(UnsupportedIndexTypeError):
            gateway.handle("GET", "my-index", "_search")
        with pytest.raises(InvalidMethodError):
            gateway.handle(None, "my-index", "_ping")

        assert transport.sent == []
        assert metadata_store.create_calls == []

    def test_put_mirrors_index(self, gateway, transport, metadata_store):
        result = gateway.handle("PUT", "my-index").result(timeout=5)
        assert gateway.in_flight.drain(timeout=5)

        assert result.success
        assert transport.sent[0][0].url == "http://infino:3000/:my-index"
        assert metadata_store.create_calls == [("my-index", 1, 1)]

    def test_delete_does_not_mirror(self, gateway, metadata_store):
        gateway.handle("DELETE", "my-index").result(timeout=5)
        assert gateway.in_flight.drain(timeout=5)
        assert metadata_store.create_calls == []

    def test_mirror_failure_does_not_affect_forward(self, settings, transport):
        store = FakeMetadataStore(fail_create=True)
        gw = InfinoGateway(settings=settings, transport=transport, metadata_store=store)
        try:
            result = gw.handle("PUT", "my-index").result(timeout=5)
            assert result.success
        finally:
            gw.shutdown()

    def test_forward_does_not_wait_for_mirror(self, settings, transport):
        release = threading.Event()

        class SlowStore(FakeMetadataStore):
            def exists(self, index_name):
                release.wait(timeout=5)
                return False

        gw = InfinoGateway(settings=settings, transport=transport, metadata_store=SlowStore())
        try:
            result = gw.handle("PUT", "my-index").result(timeout=5)
            assert result.success
            assert gw.in_flight_count() >= 1
            release.set()
            assert gw.in_flight.drain(timeout=5)
        finally:
            release.set()
            gw.shutdown()

    def test_stalled_metadata_store_does_not_delay_forwards(self, settings, transport):
        release = threading.Event()

        class StalledStore(FakeMetadataStore):
            def exists(self, index_name):
                release.wait(timeout=10)
                return True

        gw = InfinoGateway(settings=settings, transport=transport, metadata_store=StalledStore())
        try:
            puts = [gw.handle("PUT", f"index-{i}") for i in range(settings.worker_threads + 2)]
            result = gw.handle("GET", "my-index", "_ping").result(timeout=2)

            assert result.success
            assert all(f.result(timeout=2).success for f in puts)
        finally:
            release.set()
            gw.shutdown()

    def test_concurrent_puts_for_new_index(self, settings):
        transport = FakeTransport()
        store = FakeMetadataStore()
        gw = InfinoGateway(settings=settings, transport=transport, metadata_store=store)
        try:
            futures = [gw.handle("PUT", "new-index") for _ in range(8)]
            results = [f.result(timeout=5) for f in futures]
            assert gw.in_flight.drain(timeout=5)

            assert all(r.success for r in results)
            assert len(transport.sent) == 8
            assert "new-index" in store.indexes
            assert 1 <= len(store.create_calls) <= 8
        finally:
            gw.shutdown()

    def test_shutdown_drains_and_closes(self, settings):
        transport = FakeTransport()
        gw = InfinoGateway(settings=settings, transport=transport, metadata_store=FakeMetadataStore())
        future = gw.handle("GET", "my-index", "_ping")

        assert gw.shutdown() is True
        assert future.done()
        assert transport.closed

    def test_mirror_outcome_is_observable(self, gateway):
        future = gateway.mirror.submit("other-index")
        assert future.result(timeout=5) is MirrorOutcome.CREATED

    def test_from_environment_uses_default_endpoint(self, monkeypatch):
        monkeypatch.delenv("INFINO_SERVER_URL", raising=False)
        gw = InfinoGateway.from_environment({})
        try:
            assert gw.settings.infino_endpoint == "http://localhost:3000"
            assert gw.translator.endpoint == "http://localhost:3000"
        finally:
            gw.shutdown(timeout=0)
