"""
Split OpenFeature provider - evaluate Split feature flags through OpenFeature.

Usage:
    from openfeature import api
    from split_openfeature import SplitProvider

    api.set_provider(SplitProvider({"SdkKey": "your-sdk-key"}))
    client = api.get_client()
"""

from split_openfeature.provider import SplitProvider, PROVIDER_NAME
from split_openfeature.config import ProviderConfig, DEFAULT_READY_BLOCK_TIME_MS
from split_openfeature.errors import ArgumentError, ErrorCategory, SplitProviderError
from split_openfeature.readiness import SdkReadinessGate, ProbeResult
from split_openfeature.context import to_attribute_map, targeting_key, traffic_type
from split_openfeature.evaluate import (
    Treatment,
    CoercionResult,
    TreatmentResolver,
    coerce_boolean,
    coerce_string,
    coerce_integer,
    coerce_float,
    coerce_object,
)
from split_openfeature.events import TrackingForwarder
from split_openfeature.reasons import CONTROL

__version__ = "1.0.0"
__all__ = [
    # Provider
    "SplitProvider",
    "PROVIDER_NAME",
    # Config
    "ProviderConfig",
    "DEFAULT_READY_BLOCK_TIME_MS",
    # Errors
    "SplitProviderError",
    "ArgumentError",
    "ErrorCategory",
    # Readiness
    "SdkReadinessGate",
    "ProbeResult",
    # Context
    "to_attribute_map",
    "targeting_key",
    "traffic_type",
    # Evaluation
    "Treatment",
    "CoercionResult",
    "TreatmentResolver",
    "coerce_boolean",
    "coerce_string",
    "coerce_integer",
    "coerce_float",
    "coerce_object",
    "CONTROL",
    # Tracking
    "TrackingForwarder",
]
