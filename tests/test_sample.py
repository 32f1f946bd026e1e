"""Tests for the RawSample / Vector3 input models and payload parsing."""

import math
from datetime import datetime, timezone

import pytest

from axion_monitor.domain.sample import RawSample, Vector3
from axion_monitor.sources.payload import parse_raw_sample


def _sample(peak1: float = 1.0, peak2: float = 1.0, **overrides) -> RawSample:
    """Return a RawSample whose sensor vectors point along z with the given norms."""
    base = {
        "sensor1": Vector3(x=0.0, y=0.0, z=peak1),
        "sensor2": Vector3(x=0.0, y=0.0, z=peak2),
        "timestamp": datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
    }
    base.update(overrides)
    return RawSample(**base)


def _payload(**overrides) -> dict:
    """Return a valid gateway payload, with optional overrides."""
    base = {
        "timestamp": 1767268800000,
        "accelerometer1": {"x": 0.4, "y": -1.1, "z": 9.7},
        "accelerometer2": {"x": 0.2, "y": 0.3, "z": 10.1},
    }
    base.update(overrides)
    return base


class TestVector3:
    def test_magnitude_is_euclidean_norm(self) -> None:
        v = Vector3(x=3.0, y=4.0, z=12.0)
        assert v.magnitude() == pytest.approx(13.0, abs=1e-9)

    @pytest.mark.parametrize("x,y,z", [(0.0, 0.0, 0.0), (1.5, 2.25, 9.8), (10.0, 20.0, 30.0)])
    def test_magnitude_matches_formula(self, x: float, y: float, z: float) -> None:
        assert Vector3(x=x, y=y, z=z).magnitude() == pytest.approx(
            math.sqrt(x * x + y * y + z * z), abs=1e-9
        )

    def test_non_finite_components_are_accepted_but_flagged(self) -> None:
        v = Vector3(x=float("nan"), y=0.0, z=1.0)
        assert v.is_finite is False

    def test_vector_is_immutable(self) -> None:
        v = Vector3(x=1.0, y=2.0, z=3.0)
        with pytest.raises(Exception):
            v.x = 5.0


class TestRawSample:
    def test_naive_timestamp_gets_utc(self) -> None:
        sample = _sample(timestamp=datetime(2026, 1, 1, 12, 0, 0))
        assert sample.timestamp.tzinfo is not None

    def test_timestamp_ms(self) -> None:
        assert _sample().timestamp_ms == 1767268800000

    def test_default_timestamp_is_now(self) -> None:
        sample = RawSample(sensor1=Vector3(x=0, y=0, z=1), sensor2=Vector3(x=0, y=0, z=1))
        assert sample.timestamp.tzinfo is not None

    def test_sample_is_immutable(self) -> None:
        sample = _sample()
        with pytest.raises(Exception):
            sample.sensor1 = Vector3(x=0, y=0, z=0)


class TestParseRawSample:
    def test_valid_payload_parses(self) -> None:
        sample = parse_raw_sample(_payload())
        assert sample.sensor1.z == 9.7
        assert sample.sensor2.x == 0.2
        assert sample.timestamp_ms == 1767268800000

    def test_iso_timestamp_parses(self) -> None:
        sample = parse_raw_sample(_payload(timestamp="2026-01-01T12:00:00Z"))
        assert sample.timestamp == datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def test_missing_timestamp_defaults_to_now(self) -> None:
        raw = _payload()
        del raw["timestamp"]
        assert parse_raw_sample(raw).timestamp.tzinfo is not None

    def test_missing_sensor_rejected(self) -> None:
        raw = _payload()
        del raw["accelerometer2"]
        with pytest.raises(ValueError, match="accelerometer2"):
            parse_raw_sample(raw)

    def test_malformed_sensor_rejected(self) -> None:
        with pytest.raises(ValueError, match="accelerometer1"):
            parse_raw_sample(_payload(accelerometer1={"x": "fast", "y": 0, "z": 1}))

    def test_bad_timestamp_rejected(self) -> None:
        with pytest.raises(ValueError):
            parse_raw_sample(_payload(timestamp="yesterday"))

    @pytest.mark.parametrize("timestamp", [1e300, float("inf"), float("-inf"), float("nan")])
    def test_unrepresentable_epoch_rejected(self, timestamp: float) -> None:
        with pytest.raises(ValueError, match="timestamp"):
            parse_raw_sample(_payload(timestamp=timestamp))

    def test_non_object_rejected(self) -> None:
        with pytest.raises(ValueError):
            parse_raw_sample([1, 2, 3])  # type: ignore[arg-type]

    def test_payload_not_mutated(self) -> None:
        raw = _payload()
        snapshot = {k: (dict(v) if isinstance(v, dict) else v) for k, v in raw.items()}
        parse_raw_sample(raw)
        assert raw == snapshot
