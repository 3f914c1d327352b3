"""
Translation of OpenFeature evaluation contexts into Split inputs.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from openfeature.evaluation_context import EvaluationContext

logger = logging.getLogger("split_openfeature")

TARGETING_KEY = "targetingKey"
TRAFFIC_TYPE = "trafficType"


def to_attribute_map(context: Optional[EvaluationContext]) -> Dict[str, Any]:
    """
    Flatten an evaluation context into the attribute dict Split expects.

    Args:
        context: OpenFeature evaluation context, may be None

    Returns:
        A new dict of attribute name to plain value
    """
    if context is None:
        return {}
    return {name: _to_primitive(value) for name, value in context.attributes.items()}


def _to_primitive(value: Any) -> Any:
    # Split compares datetime attributes as epoch milliseconds
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() * 1000)
    if isinstance(value, dict):
        return {k: _to_primitive(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(v) for v in value]
    return value


def targeting_key(
    context: Optional[EvaluationContext], log: Optional[logging.Logger] = None
) -> Optional[str]:
    """
    Get the key identifying the evaluation subject.

    The context's targeting_key wins; a "targetingKey" attribute is used
    when it is unset.

    Returns:
        The key, or None if the context has no non-empty key
    """
    key = None
    if context is not None:
        key = context.targeting_key or context.attributes.get(TARGETING_KEY)
    if key is None or str(key) == "":
        (log or logger).error("Split provider: targeting key missing")
        return None
    return str(key)


def traffic_type(
    context: Optional[EvaluationContext], log: Optional[logging.Logger] = None
) -> Optional[str]:
    """
    Get the Split traffic type used when tracking events.

    Returns:
        The traffic type, or None if the context has no non-empty value
    """
    value = None
    if context is not None:
        value = context.attributes.get(TRAFFIC_TYPE)
    if value is None or str(value) == "":
        (log or logger).error("Split provider: traffic type missing")
        return None
    return str(value)
