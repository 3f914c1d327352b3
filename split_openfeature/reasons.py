"""
Resolution envelopes returned to OpenFeature.

Every evaluation ends in one of these helpers, so the pairing of reason and
error code stays consistent: TARGETING_MATCH never carries an error code and
ERROR always does.
"""

from typing import Optional, TypeVar

from openfeature.exception import ErrorCode
from openfeature.flag_evaluation import FlagResolutionDetails, Reason

T = TypeVar("T")

CONTROL = "control"


def target_match_resolution(
    value: T, treatment: str, config: Optional[str] = None
) -> FlagResolutionDetails[T]:
    """Create a resolution for a successfully coerced treatment."""
    metadata = {"config": config} if config is not None else {}
    return FlagResolutionDetails(
        value=value,
        variant=treatment,
        reason=Reason.TARGETING_MATCH,
        flag_metadata=metadata,
    )


def error_resolution(
    default_value: T, error_code: ErrorCode, message: Optional[str] = None
) -> FlagResolutionDetails[T]:
    """Create a resolution that falls back to the caller's default."""
    return FlagResolutionDetails(
        value=default_value,
        variant=CONTROL,
        reason=Reason.ERROR,
        error_code=error_code,
        error_message=message,
    )


def provider_not_ready(default_value: T) -> FlagResolutionDetails[T]:
    return error_resolution(
        default_value, ErrorCode.PROVIDER_NOT_READY, "Split SDK is not ready"
    )


def targeting_key_missing(default_value: T) -> FlagResolutionDetails[T]:
    return error_resolution(
        default_value, ErrorCode.TARGETING_KEY_MISSING, "Targeting key is missing"
    )


def flag_not_found(default_value: T, flag_key: str) -> FlagResolutionDetails[T]:
    return error_resolution(
        default_value, ErrorCode.FLAG_NOT_FOUND, f"Flag '{flag_key}' not found"
    )


def parse_error(default_value: T, message: str) -> FlagResolutionDetails[T]:
    return error_resolution(default_value, ErrorCode.PARSE_ERROR, message)
