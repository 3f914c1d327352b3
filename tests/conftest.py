"""Shared fixtures and Split SDK doubles."""

from typing import Any, Dict, List, Optional, Tuple

import pytest
from openfeature.evaluation_context import EvaluationContext


class TimeoutException(Exception):
    """Stands in for splitio.exceptions.TimeoutException."""


class FakeSplitClient:
    """Split client double returning treatments from a dict."""

    def __init__(
        self,
        treatments: Optional[Dict[str, Tuple[str, Optional[str]]]] = None,
        ready: bool = True,
    ):
        self.treatments = treatments or {}
        self.ready = ready
        self.destroyed = False
        self.treatment_calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.track_calls: List[Tuple[Any, ...]] = []
        self.track_result = True

    def get_treatment_with_config(self, key, feature_flag_name, attributes=None):
        self.treatment_calls.append((key, feature_flag_name, attributes))
        return self.treatments.get(feature_flag_name, ("control", None))

    def track(self, key, traffic_type, event_type, value=None, properties=None):
        self.track_calls.append((key, traffic_type, event_type, value, properties))
        return self.track_result

    def destroy(self):
        self.destroyed = True


class FakeSplitFactory:
    """Split factory double; becomes ready after ready_after block calls."""

    def __init__(self, client: FakeSplitClient, ready_after: Optional[int] = 0):
        self._client = client
        self.ready_after = ready_after
        self.block_calls: List[float] = []
        self.destroyed = False

    def client(self) -> FakeSplitClient:
        return self._client

    def block_until_ready(self, timeout=None):
        self.block_calls.append(timeout)
        if self.ready_after is None or len(self.block_calls) <= self.ready_after:
            raise TimeoutException("Waited %s seconds, and SDK was not ready" % timeout)

    def destroy(self, destroyed_event=None):
        self.destroyed = True


TREATMENTS = {
    "my_feature": ("on", '{"desc": "this applies only to ON treatment"}'),
    "some_other_feature": ("off", '{"key": "value"}'),
    "int_feature": ("32", '{"key": "value"}'),
    "float_feature": ("2.5", None),
    "obj_feature": ("on", '{"key": "value"}'),
    "bad_json_feature": ("on", "{not json"),
    "list_config_feature": ("on", '["a", "b"]'),
    "no_config_feature": ("32", None),
}


@pytest.fixture
def split_client():
    """Create a ready Split client double."""
    return FakeSplitClient(dict(TREATMENTS))


@pytest.fixture
def context():
    """Create an evaluation context with a targeting key."""
    return EvaluationContext(targeting_key="key")


@pytest.fixture
def track_context():
    """Create a context usable for tracking."""
    return EvaluationContext(targeting_key="key", attributes={"trafficType": "user"})
