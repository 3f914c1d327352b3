"""
Readiness gate around the Split SDK.

The Split SDK synchronizes flag definitions in the background. Until that
first sync completes every evaluation would come back as "control", so the
provider checks the gate first and reports PROVIDER_NOT_READY instead.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from splitio import get_factory

logger = logging.getLogger("split_openfeature.readiness")

PROBE_TIMEOUT_MS = 1


@dataclass
class ProbeResult:
    """Outcome of a single readiness probe."""

    ready: bool
    error: Optional[Exception] = None


class SdkReadinessGate:
    """
    Tracks whether the Split SDK finished its initial synchronization.

    The ready flag starts False and is set to True at most once; nothing
    resets it.
    """

    def __init__(
        self,
        client: Any,
        factory: Optional[Any] = None,
        log: Optional[logging.Logger] = None,
    ):
        """
        Adopt an existing Split client without blocking.

        Args:
            client: Split client used for evaluations and tracking
            factory: Factory that produced the client, if known
            log: Logger to report readiness problems to
        """
        self._client = client
        self._factory = factory
        self._ready = False
        self._owns_factory = False
        self._log = log or logger

    @classmethod
    def from_sdk_key(
        cls,
        sdk_key: str,
        config: Optional[Dict[str, Any]] = None,
        ready_block_time_ms: int = 10000,
        log: Optional[logging.Logger] = None,
    ) -> "SdkReadinessGate":
        """
        Build a Split factory and wait for it to become ready.

        A timeout leaves the gate not ready; it is logged, not raised.

        Args:
            sdk_key: Split SDK key, or "localhost"
            config: Options passed to splitio.get_factory()
            ready_block_time_ms: Maximum time to wait for the first sync

        Returns:
            A gate owning the new factory
        """
        factory = get_factory(sdk_key, config=config or {})
        gate = cls(factory.client(), factory=factory, log=log)
        gate._owns_factory = True

        result = gate._probe(ready_block_time_ms)
        if result.ready:
            gate._ready = True
        else:
            gate._log.error(f"Split SDK not ready within {ready_block_time_ms} ms: {result.error}")
        return gate

    @property
    def client(self) -> Any:
        return self._client

    @property
    def factory(self) -> Optional[Any]:
        return self._factory

    def is_ready(self) -> bool:
        """
        Check whether the SDK is ready, probing it once if not yet known.

        Returns:
            True once the SDK has completed its initial sync
        """
        if self._ready:
            return True

        result = self._probe(PROBE_TIMEOUT_MS)
        if result.ready:
            self._ready = True
        else:
            if result.error is not None:
                self._log.error(f"Split client is not ready: {result.error}")
            else:
                self._log.error("Split client is not ready")
        return self._ready

    def _probe(self, timeout_ms: int) -> ProbeResult:
        """Wait up to timeout_ms for the SDK; never raises."""
        try:
            if self._factory is not None:
                self._factory.block_until_ready(timeout_ms / 1000)
                return ProbeResult(ready=True)
            if self._client.ready:
                return ProbeResult(ready=True)
            return ProbeResult(ready=False)
        except Exception as e:
            return ProbeResult(ready=False, error=e)

    def destroy(self) -> None:
        """Destroy the Split SDK behind this gate."""
        if self._owns_factory:
            self._factory.destroy()
        else:
            self._client.destroy()
