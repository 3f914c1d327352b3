"""
Forwarding of OpenFeature tracking events to Split.
"""

import logging
from typing import Any, Dict, Optional

from openfeature.evaluation_context import EvaluationContext

from split_openfeature.context import targeting_key, traffic_type

logger = logging.getLogger("split_openfeature.events")


class TrackingForwarder:
    """
    Validates tracking calls and hands them to Split's track().

    Invalid calls are logged and dropped; nothing is sent to Split.
    """

    def __init__(self, client: Any, log: Optional[logging.Logger] = None):
        self._client = client
        self._log = log or logger

    def track(
        self,
        event_name: str,
        context: Optional[EvaluationContext] = None,
        details: Optional[Any] = None,
    ) -> None:
        """
        Send a custom event to Split.

        Args:
            event_name: Split event type
            context: Context carrying the targeting key and "trafficType"
            details: TrackingEventDetails with an optional value and attributes
        """
        if context is None:
            self._log.error("Split provider: evaluation context is required to track events")
            return

        if not event_name:
            self._log.error("Split provider: event name is required to track events")
            return

        key = targeting_key(context, self._log)
        if key is None:
            return

        tt = traffic_type(context, self._log)
        if tt is None:
            return

        value = 0.0
        properties: Dict[str, Any] = {}
        if details is not None:
            if details.value is not None:
                value = float(details.value)
            properties = dict(details.attributes or {})

        accepted = self._client.track(key, tt, event_name, value, properties)
        if accepted is False:
            self._log.warning(f"Split rejected event '{event_name}' for traffic type '{tt}'")
