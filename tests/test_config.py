"""Tests for provider configuration."""

import pytest
from split_openfeature.config import DEFAULT_READY_BLOCK_TIME_MS, ProviderConfig
from split_openfeature.errors import ArgumentError, ErrorCategory

from conftest import FakeSplitClient


class TestProviderConfig:
    """Tests for ProviderConfig.from_initial_context."""

    def test_none_is_rejected(self):
        with pytest.raises(ArgumentError, match="Missing SplitClient instance or SDK key"):
            ProviderConfig.from_initial_context(None)

    def test_missing_client_and_key(self):
        with pytest.raises(ArgumentError):
            ProviderConfig.from_initial_context({"something": "sdk"})

    def test_client(self):
        client = FakeSplitClient()
        config = ProviderConfig.from_initial_context({"SplitClient": client})
        assert config.split_client is client
        assert config.has_client() is True

    def test_sdk_key(self):
        config = ProviderConfig.from_initial_context(
            {"SdkKey": "localhost", "ConfigOptions": {"splitFile": "split.yaml"}, "ReadyBlockTime": 500}
        )
        assert config.sdk_key == "localhost"
        assert config.config_options == {"splitFile": "split.yaml"}
        assert config.ready_block_time_ms == 500
        assert config.has_client() is False

    def test_legacy_api_key(self):
        config = ProviderConfig.from_initial_context({"ApiKey": "sdk-key"})
        assert config.sdk_key == "sdk-key"
        assert config.ready_block_time_ms == DEFAULT_READY_BLOCK_TIME_MS
        assert config.config_options == {}

    @pytest.mark.parametrize("block_time", [-1, "100", 1.5, True])
    def test_invalid_ready_block_time(self, block_time):
        with pytest.raises(ArgumentError, match="ReadyBlockTime"):
            ProviderConfig.from_initial_context({"SdkKey": "sdk-key", "ReadyBlockTime": block_time})

    def test_non_string_sdk_key(self):
        with pytest.raises(ArgumentError, match="SdkKey must be a string"):
            ProviderConfig.from_initial_context({"SdkKey": 42})

    def test_argument_error_is_value_error(self):
        """ArgumentError is a configuration error and a ValueError."""
        error = ArgumentError()
        assert isinstance(error, ValueError)
        assert error.category == ErrorCategory.CONFIGURATION
        assert "ArgumentError" in repr(error)
