"""
OpenFeature provider backed by the Split SDK.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from openfeature.evaluation_context import EvaluationContext
from openfeature.flag_evaluation import FlagResolutionDetails, FlagType
from openfeature.provider import AbstractProvider, Metadata

from split_openfeature.config import ProviderConfig
from split_openfeature.events import TrackingForwarder
from split_openfeature.evaluate import TreatmentResolver
from split_openfeature.readiness import SdkReadinessGate

logger = logging.getLogger("split_openfeature")

PROVIDER_NAME = "Split Client"


class SplitProvider(AbstractProvider):
    """
    Split feature flag provider for OpenFeature.

    Example:
        ```python
        from openfeature import api
        from openfeature.evaluation_context import EvaluationContext

        provider = SplitProvider({"SdkKey": "your-sdk-key"})
        api.set_provider(provider)

        client = api.get_client()
        enabled = client.get_boolean_value(
            "my-feature", False, EvaluationContext(targeting_key="user-1")
        )
        ```
    """

    def __init__(
        self,
        initial_context: Optional[Mapping[str, Any]] = None,
        *,
        config: Optional[ProviderConfig] = None,
        log: Optional[logging.Logger] = None,
    ):
        """
        Create the provider from an initial context or a ProviderConfig.

        Args:
            initial_context: Mapping with SplitClient, or SdkKey plus
                optional ConfigOptions and ReadyBlockTime
            config: Parsed configuration, used instead of initial_context
            log: Logger for provider diagnostics

        Raises:
            ArgumentError: If neither a Split client nor an SDK key is given
        """
        super().__init__()
        if config is None:
            config = ProviderConfig.from_initial_context(initial_context)
        else:
            config.validate()

        self._config = config
        self._log = log or logger
        self._metadata = Metadata(name=PROVIDER_NAME)

        if config.has_client():
            client = config.split_client
            if client is None:
                client = config.split_factory.client()
            self._gate = SdkReadinessGate(client, factory=config.split_factory, log=self._log)
        else:
            self._gate = SdkReadinessGate.from_sdk_key(
                config.sdk_key,
                config.config_options,
                config.ready_block_time_ms,
                log=self._log,
            )

        self._resolver = TreatmentResolver(self._gate, log=self._log)
        self._tracker = TrackingForwarder(self._gate.client, log=self._log)

    def get_metadata(self) -> Metadata:
        return self._metadata

    @property
    def split_client(self) -> Any:
        """The Split client evaluations are delegated to."""
        return self._gate.client

    def is_ready(self) -> bool:
        return self._gate.is_ready()

    def resolve_boolean_details(
        self,
        flag_key: str,
        default_value: bool,
        evaluation_context: Optional[EvaluationContext] = None,
    ) -> FlagResolutionDetails[bool]:
        return self._resolver.evaluate(
            FlagType.BOOLEAN, flag_key, default_value, evaluation_context
        )

    def resolve_string_details(
        self,
        flag_key: str,
        default_value: str,
        evaluation_context: Optional[EvaluationContext] = None,
    ) -> FlagResolutionDetails[str]:
        return self._resolver.evaluate(
            FlagType.STRING, flag_key, default_value, evaluation_context
        )

    def resolve_integer_details(
        self,
        flag_key: str,
        default_value: int,
        evaluation_context: Optional[EvaluationContext] = None,
    ) -> FlagResolutionDetails[int]:
        return self._resolver.evaluate(
            FlagType.INTEGER, flag_key, default_value, evaluation_context
        )

    def resolve_float_details(
        self,
        flag_key: str,
        default_value: float,
        evaluation_context: Optional[EvaluationContext] = None,
    ) -> FlagResolutionDetails[float]:
        return self._resolver.evaluate(
            FlagType.FLOAT, flag_key, default_value, evaluation_context
        )

    def resolve_object_details(
        self,
        flag_key: str,
        default_value: Union[Dict[str, Any], List[Any]],
        evaluation_context: Optional[EvaluationContext] = None,
    ) -> FlagResolutionDetails[Union[Dict[str, Any], List[Any]]]:
        """Resolve a flag's JSON config; the treatment becomes the variant."""
        return self._resolver.evaluate(
            FlagType.OBJECT, flag_key, default_value, evaluation_context
        )

    def track(
        self,
        tracking_event_name: str,
        evaluation_context: Optional[EvaluationContext] = None,
        tracking_event_details: Optional[Any] = None,
    ) -> None:
        """
        Forward a tracking event to Split.

        The context must carry a targeting key and a "trafficType"
        attribute, otherwise the event is dropped.
        """
        self._tracker.track(tracking_event_name, evaluation_context, tracking_event_details)

    def shutdown(self) -> None:
        """Destroy the Split client."""
        self._log.info("Shutting down Split provider")
        self._gate.destroy()
