"""Tests for the bounded HistoryBuffer."""

import threading

import pytest

from axion_monitor.core.classifier import ImpactClassifier
from axion_monitor.domain.errors import InvalidConfiguration
from axion_monitor.domain.record import ClassifiedRecord
from axion_monitor.store.history import HistoryBuffer

from tests.test_sample import _sample

_classifier = ImpactClassifier()


def _record(peak: float = 1.0) -> ClassifiedRecord:
    return _classifier.classify(_sample(peak1=peak))


def _records(n: int) -> list[ClassifiedRecord]:
    # Distinct peaks make records distinguishable by value
    return [_record(peak=float(i)) for i in range(n)]


class TestHistoryBuffer:
    def test_default_capacity(self) -> None:
        assert HistoryBuffer().capacity == 1000

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_non_positive_capacity_rejected(self, capacity: int) -> None:
        with pytest.raises(InvalidConfiguration):
            HistoryBuffer(capacity)

    def test_append_preserves_insertion_order(self) -> None:
        buf = HistoryBuffer(capacity=10)
        records = _records(4)
        for r in records:
            buf.append(r)
        assert list(buf.snapshot()) == records

    def test_overflow_keeps_last_c_in_order(self) -> None:
        buf = HistoryBuffer(capacity=5)
        records = _records(12)
        for r in records:
            buf.append(r)
        assert len(buf) == 5
        assert list(buf.snapshot()) == records[-5:]

    def test_length_never_exceeds_capacity(self) -> None:
        buf = HistoryBuffer(capacity=3)
        for i, r in enumerate(_records(10), start=1):
            buf.append(r)
            assert len(buf) == min(i, 3)

    def test_snapshot_is_independent_copy(self) -> None:
        buf = HistoryBuffer(capacity=3)
        first = _records(3)
        for r in first:
            buf.append(r)
        snap = buf.snapshot()
        buf.append(_record(99.0))
        assert list(snap) == first
        assert isinstance(snap, tuple)

    def test_latest(self) -> None:
        buf = HistoryBuffer(capacity=10)
        records = _records(6)
        for r in records:
            buf.append(r)
        assert list(buf.latest(2)) == records[-2:]
        assert list(buf.latest(50)) == records
        assert buf.latest(0) == ()

    def test_clear_is_idempotent(self) -> None:
        buf = HistoryBuffer(capacity=3)
        for r in _records(3):
            buf.append(r)
        buf.clear()
        assert buf.snapshot() == ()
        buf.clear()
        assert buf.snapshot() == ()
        assert len(buf) == 0

    def test_concurrent_readers_see_consistent_snapshots(self) -> None:
        buf = HistoryBuffer(capacity=50)
        records = _records(500)
        errors: list[BaseException] = []

        def read() -> None:
            try:
                for _ in range(200):
                    snap = buf.snapshot()
                    assert len(snap) <= 50
                    peaks = [r.peak_magnitude for r in snap]
                    assert peaks == sorted(peaks)
            except BaseException as exc:  # pragma: no cover - surfaced below
                errors.append(exc)

        readers = [threading.Thread(target=read) for _ in range(4)]
        for t in readers:
            t.start()
        for r in records:
            buf.append(r)
        for t in readers:
            t.join()
        assert errors == []
