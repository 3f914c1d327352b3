"""
Treatment resolution.

Asks Split for a treatment and coerces it into the type OpenFeature
requested. Each FlagType has its own coercer; the object type is the one
case where the treatment's JSON config, not its name, becomes the value.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from openfeature.evaluation_context import EvaluationContext
from openfeature.exception import ErrorCode
from openfeature.flag_evaluation import FlagResolutionDetails, FlagType

from split_openfeature.context import targeting_key, to_attribute_map
from split_openfeature.readiness import SdkReadinessGate
from split_openfeature.reasons import (
    CONTROL,
    error_resolution,
    flag_not_found,
    parse_error,
    provider_not_ready,
    target_match_resolution,
    targeting_key_missing,
)

logger = logging.getLogger("split_openfeature")

T = TypeVar("T")

_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")

_BOOLEAN_TREATMENTS = {
    "true": True,
    "on": True,
    "false": False,
    "off": False,
}


@dataclass
class Treatment:
    """A treatment as returned by Split for one key and flag."""

    name: str
    config: Optional[str] = None


@dataclass
class CoercionResult(Generic[T]):
    """Result of coercing a treatment into a typed value."""

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None


def coerce_boolean(treatment: Treatment) -> CoercionResult[bool]:
    value = _BOOLEAN_TREATMENTS.get(treatment.name.lower())
    if value is None:
        return CoercionResult(False, error=f"{treatment.name!r} is not a boolean")
    return CoercionResult(True, value)


def coerce_string(treatment: Treatment) -> CoercionResult[str]:
    return CoercionResult(True, treatment.name)


def coerce_integer(treatment: Treatment) -> CoercionResult[int]:
    text = treatment.name.strip()
    if not _INTEGER_PATTERN.match(text):
        return CoercionResult(False, error=f"{treatment.name!r} is not an integer")
    return CoercionResult(True, int(text, 10))


def coerce_float(treatment: Treatment) -> CoercionResult[float]:
    # float() also accepts "1_000" and non-ASCII digits
    if "_" in treatment.name or not treatment.name.isascii():
        return CoercionResult(False, error=f"{treatment.name!r} is not a number")
    try:
        return CoercionResult(True, float(treatment.name))
    except ValueError:
        return CoercionResult(False, error=f"{treatment.name!r} is not a number")


def coerce_object(treatment: Treatment) -> CoercionResult[Dict[str, str]]:
    """
    Parse the treatment config as a flat JSON object of strings.

    Numbers and booleans are kept as their JSON text; nested objects, arrays
    and nulls are rejected.
    """
    if treatment.config is None:
        return CoercionResult(
            False, error=f"treatment {treatment.name!r} has no config"
        )

    try:
        parsed = json.loads(treatment.config)
    except (TypeError, ValueError) as e:
        return CoercionResult(
            False,
            error=f"config {treatment.config!r} of treatment {treatment.name!r} is not JSON: {e}",
        )

    if not isinstance(parsed, dict):
        return CoercionResult(
            False,
            error=f"config {treatment.config!r} of treatment {treatment.name!r} is not a JSON object",
        )

    result: Dict[str, str] = {}
    for key, value in parsed.items():
        if isinstance(value, str):
            result[key] = value
        elif isinstance(value, (bool, int, float)):
            result[key] = json.dumps(value)
        else:
            return CoercionResult(
                False,
                error=f"config {treatment.config!r} of treatment {treatment.name!r} "
                f"has a non-scalar value for {key!r}",
            )
    return CoercionResult(True, result)


COERCERS: Dict[FlagType, Callable[[Treatment], CoercionResult[Any]]] = {
    FlagType.BOOLEAN: coerce_boolean,
    FlagType.STRING: coerce_string,
    FlagType.INTEGER: coerce_integer,
    FlagType.FLOAT: coerce_float,
    FlagType.OBJECT: coerce_object,
}


class TreatmentResolver:
    """
    Resolves OpenFeature flag requests against a Split client.

    Resolution order:
    1. SDK not ready -> PROVIDER_NOT_READY
    2. No targeting key -> TARGETING_KEY_MISSING
    3. Treatment is "control" -> FLAG_NOT_FOUND
    4. Treatment cannot be coerced -> PARSE_ERROR
    5. Otherwise TARGETING_MATCH with the coerced value
    """

    def __init__(self, gate: SdkReadinessGate, log: Optional[logging.Logger] = None):
        self._gate = gate
        self._log = log or logger

    def evaluate(
        self,
        flag_type: FlagType,
        flag_key: str,
        default_value: T,
        context: Optional[EvaluationContext] = None,
    ) -> FlagResolutionDetails[T]:
        """
        Resolve one flag for the given context.

        Never raises; every failure is reported through the returned details.

        Args:
            flag_type: Type OpenFeature asked for
            flag_key: Split feature flag name
            default_value: Value returned on any error
            context: Evaluation context carrying the targeting key

        Returns:
            Resolution details for OpenFeature
        """
        if not self._gate.is_ready():
            self._log.error(f"Cannot evaluate '{flag_key}': Split SDK is not ready")
            return provider_not_ready(default_value)

        key = targeting_key(context, self._log)
        if key is None:
            return targeting_key_missing(default_value)

        try:
            treatment = self._get_treatment(key, flag_key, context)
        except Exception as e:
            self._log.error(f"Error evaluating '{flag_key}': {e}")
            # A failed rule evaluation is the same outcome as a control treatment
            return error_resolution(default_value, ErrorCode.FLAG_NOT_FOUND, str(e))

        if treatment.name == CONTROL:
            self._log.error(f"Flag '{flag_key}' returned the control treatment")
            return flag_not_found(default_value, flag_key)

        result = COERCERS[flag_type](treatment)
        if not result.success:
            self._log.error(f"Cannot resolve '{flag_key}' as {flag_type.name.lower()}: {result.error}")
            return parse_error(default_value, result.error)

        return target_match_resolution(result.value, treatment.name, treatment.config)

    def _get_treatment(
        self, key: str, flag_key: str, context: Optional[EvaluationContext]
    ) -> Treatment:
        name, config = self._gate.client.get_treatment_with_config(
            key, flag_key, to_attribute_map(context)
        )
        return Treatment(name=name, config=config)
