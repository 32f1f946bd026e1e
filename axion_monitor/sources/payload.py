"""Translate raw JSON payloads from sensor gateways into RawSamples.

Expected raw format (the shape the dashboard frontend already uses):
{
    "timestamp": 1760870400000,            # epoch ms, or an ISO-8601 string
    "accelerometer1": {"x": 0.4, "y": -1.1, "z": 9.7},
    "accelerometer2": {"x": 0.2, "y": 0.3, "z": 10.1}
}

The input dict is never mutated.  Anything that cannot be turned into a
RawSample raises ValueError.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import ValidationError

from axion_monitor.domain.sample import RawSample, Vector3
from axion_monitor.foundation.clock import from_epoch_ms, utc_now

_SENSOR_KEYS = ("accelerometer1", "accelerometer2")


def parse_raw_sample(raw: dict[str, Any]) -> RawSample:
    """Build a validated RawSample from a gateway payload.

    Raises:
        ValueError: If a sensor block is missing or malformed.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"sample payload must be an object, got {type(raw).__name__}")

    vectors: list[Vector3] = []
    for key in _SENSOR_KEYS:
        block = raw.get(key)
        if not isinstance(block, dict):
            raise ValueError(f"sample payload missing '{key}'")
        try:
            vectors.append(Vector3.model_validate(block))
        except ValidationError as exc:
            raise ValueError(f"sample payload has malformed '{key}': {exc}") from exc

    return RawSample(
        sensor1=vectors[0],
        sensor2=vectors[1],
        timestamp=_parse_timestamp(raw.get("timestamp")),
    )


def _parse_timestamp(value: Any) -> datetime:
    if value is None:
        return utc_now()
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValueError("sample timestamp must be epoch milliseconds or ISO-8601")
    if isinstance(value, (int, float)):
        try:
            return from_epoch_ms(value)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"sample timestamp out of range: {value!r}") from exc
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError(f"sample timestamp is not ISO-8601: {value!r}") from exc
    raise ValueError("sample timestamp must be epoch milliseconds or ISO-8601")
