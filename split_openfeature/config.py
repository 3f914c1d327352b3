"""Configuration for the Split OpenFeature provider."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from split_openfeature.errors import ArgumentError

SPLIT_CLIENT_KEY = "SplitClient"
SPLIT_FACTORY_KEY = "SplitFactory"
SDK_KEY = "SdkKey"
LEGACY_SDK_KEY = "ApiKey"
CONFIG_OPTIONS_KEY = "ConfigOptions"
READY_BLOCK_TIME_KEY = "ReadyBlockTime"

DEFAULT_READY_BLOCK_TIME_MS = 10000


@dataclass
class ProviderConfig:
    """Configuration for SplitProvider."""

    split_client: Optional[Any] = None
    """Pre-built Split client. Takes precedence over sdk_key."""

    split_factory: Optional[Any] = None
    """Factory the client came from, used for readiness probes when given."""

    sdk_key: Optional[str] = None
    """Split SDK key, or "localhost" for localhost mode."""

    config_options: Dict[str, Any] = field(default_factory=dict)
    """Options passed unchanged to splitio.get_factory()."""

    ready_block_time_ms: int = DEFAULT_READY_BLOCK_TIME_MS
    """How long construction waits for the SDK to sync (default: 10s)."""

    def has_client(self) -> bool:
        return self.split_client is not None or self.split_factory is not None

    def validate(self) -> None:
        """
        Check that a Split client can be obtained from this configuration.

        Raises:
            ArgumentError: If neither a client nor an SDK key is set, or the
                ready block time is invalid
        """
        if not self.has_client() and not self.sdk_key:
            raise ArgumentError()
        if not self.has_client() and not isinstance(self.sdk_key, str):
            raise ArgumentError(f"{SDK_KEY} must be a string")
        if (
            isinstance(self.ready_block_time_ms, bool)
            or not isinstance(self.ready_block_time_ms, int)
            or self.ready_block_time_ms < 0
        ):
            raise ArgumentError(
                f"{READY_BLOCK_TIME_KEY} must be a non-negative integer, "
                f"got {self.ready_block_time_ms!r}"
            )

    @classmethod
    def from_initial_context(cls, initial_context: Optional[Mapping[str, Any]]) -> "ProviderConfig":
        """
        Build a configuration from an initial-context mapping.

        Recognised keys are SplitClient, SplitFactory, SdkKey (or the older
        ApiKey), ConfigOptions and ReadyBlockTime.

        Args:
            initial_context: Mapping of provider settings

        Returns:
            A validated ProviderConfig

        Raises:
            ArgumentError: If the mapping is missing or incomplete
        """
        if initial_context is None:
            raise ArgumentError()

        sdk_key = initial_context.get(SDK_KEY, initial_context.get(LEGACY_SDK_KEY))
        config_options = initial_context.get(CONFIG_OPTIONS_KEY) or {}

        config = cls(
            split_client=initial_context.get(SPLIT_CLIENT_KEY),
            split_factory=initial_context.get(SPLIT_FACTORY_KEY),
            sdk_key=sdk_key,
            config_options=dict(config_options),
            ready_block_time_ms=initial_context.get(
                READY_BLOCK_TIME_KEY, DEFAULT_READY_BLOCK_TIME_MS
            ),
        )
        config.validate()
        return config
