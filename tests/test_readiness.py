"""Tests for the SDK readiness gate."""

import logging

import pytest
from split_openfeature import readiness
from split_openfeature.readiness import SdkReadinessGate

from conftest import FakeSplitClient, FakeSplitFactory


@pytest.fixture
def patch_factory(monkeypatch):
    """Replace splitio.get_factory with one returning the given double."""

    def _patch(factory):
        calls = []

        def fake_get_factory(sdk_key, config=None):
            calls.append((sdk_key, config))
            return factory

        monkeypatch.setattr(readiness, "get_factory", fake_get_factory)
        return calls

    return _patch


class TestAdoptedClient:
    """Tests for gates wrapping a pre-built client."""

    def test_ready_client(self):
        """A client reporting ready makes the gate ready."""
        gate = SdkReadinessGate(FakeSplitClient(ready=True))
        assert gate.is_ready() is True

    def test_not_ready_client(self, caplog):
        """A client not yet ready is reported and logged."""
        gate = SdkReadinessGate(FakeSplitClient(ready=False))

        with caplog.at_level(logging.ERROR):
            assert gate.is_ready() is False

        assert "Split client is not ready" in caplog.text

    def test_becomes_ready_later(self):
        """The gate re-probes until the client is ready."""
        client = FakeSplitClient(ready=False)
        gate = SdkReadinessGate(client)
        assert gate.is_ready() is False

        client.ready = True
        assert gate.is_ready() is True

    def test_readiness_is_monotonic(self):
        """Once ready, the gate stays ready even if the client flips back."""
        client = FakeSplitClient(ready=True)
        gate = SdkReadinessGate(client)
        assert gate.is_ready() is True

        client.ready = False
        assert gate.is_ready() is True
        assert gate.is_ready() is True

    def test_factory_probe_uses_short_timeout(self):
        """With a factory, each probe waits about a millisecond."""
        client = FakeSplitClient()
        factory = FakeSplitFactory(client, ready_after=1)
        gate = SdkReadinessGate(client, factory=factory)

        assert gate.is_ready() is False
        assert gate.is_ready() is True
        assert factory.block_calls == [0.001, 0.001]

        # No further probes once ready
        gate.is_ready()
        assert len(factory.block_calls) == 2

    def test_probe_errors_are_swallowed(self):
        """A probe raising an unexpected error reports not ready."""

        class BrokenClient(FakeSplitClient):
            @property
            def ready(self):
                raise RuntimeError("boom")

            @ready.setter
            def ready(self, value):
                pass

        gate = SdkReadinessGate(BrokenClient())
        assert gate.is_ready() is False

    def test_probe_error_is_logged(self, caplog):
        """The error behind a failed probe is included in the log."""
        client = FakeSplitClient()
        factory = FakeSplitFactory(client, ready_after=None)
        gate = SdkReadinessGate(client, factory=factory)

        with caplog.at_level(logging.ERROR):
            assert gate.is_ready() is False

        assert "Split client is not ready: Waited 0.001 seconds" in caplog.text

    def test_destroy_destroys_client(self):
        """An adopted client is destroyed directly."""
        client = FakeSplitClient()
        gate = SdkReadinessGate(client, factory=FakeSplitFactory(client))
        gate.destroy()
        assert client.destroyed is True


class TestFromSdkKey:
    """Tests for gates building their own factory."""

    def test_blocks_until_ready(self, patch_factory):
        """The factory is built from the key and awaited."""
        client = FakeSplitClient()
        factory = FakeSplitFactory(client)
        calls = patch_factory(factory)

        gate = SdkReadinessGate.from_sdk_key("localhost", {"splitFile": "split.yaml"}, 5000)

        assert calls == [("localhost", {"splitFile": "split.yaml"})]
        assert factory.block_calls == [5.0]
        assert gate.client is client
        assert gate.factory is factory
        assert gate.is_ready() is True

    def test_default_block_time(self, patch_factory):
        """The default wait is ten seconds."""
        factory = FakeSplitFactory(FakeSplitClient())
        patch_factory(factory)

        SdkReadinessGate.from_sdk_key("sdk-key")

        assert factory.block_calls == [10.0]

    def test_timeout_is_logged_not_raised(self, patch_factory, caplog):
        """A ready timeout leaves the gate not ready."""
        factory = FakeSplitFactory(FakeSplitClient(), ready_after=None)
        patch_factory(factory)

        with caplog.at_level(logging.ERROR):
            gate = SdkReadinessGate.from_sdk_key("sdk-key", ready_block_time_ms=10)

        assert "Split SDK not ready within 10 ms" in caplog.text
        assert gate.is_ready() is False

    def test_destroy_destroys_owned_factory(self, patch_factory):
        """An owned factory is destroyed on shutdown."""
        factory = FakeSplitFactory(FakeSplitClient())
        patch_factory(factory)

        gate = SdkReadinessGate.from_sdk_key("sdk-key")
        gate.destroy()

        assert factory.destroyed is True

    def test_injected_logger(self, patch_factory):
        """Readiness problems go to the injected logger."""
        records = []

        class ListHandler(logging.Handler):
            def emit(self, record):
                records.append(record.getMessage())

        log = logging.getLogger("test.readiness.injected")
        log.addHandler(ListHandler())
        log.propagate = False

        patch_factory(FakeSplitFactory(FakeSplitClient(), ready_after=None))
        SdkReadinessGate.from_sdk_key("sdk-key", ready_block_time_ms=10, log=log)

        assert any("not ready within 10 ms" in r for r in records)
