"""Tests for the RiskAggregator."""

import pytest

from axion_monitor.core.classifier import ImpactClassifier
from axion_monitor.core.risk import RiskAggregator
from axion_monitor.domain.enums import RiskLevel, Severity
from axion_monitor.domain.errors import InvalidConfiguration
from axion_monitor.domain.record import ClassifiedRecord

from tests.test_sample import _sample

_classifier = ImpactClassifier()

LOW, MODERATE, HIGH, CRITICAL = 5.0, 20.0, 40.0, 60.0


def _history(*peaks: float) -> list[ClassifiedRecord]:
    return [_classifier.classify(_sample(peak1=p)) for p in peaks]


@pytest.fixture
def aggregator() -> RiskAggregator:
    return RiskAggregator()


class TestRiskLevels:
    def test_empty_history_is_low(self, aggregator: RiskAggregator) -> None:
        verdict = aggregator.assess([])
        assert verdict.level is RiskLevel.LOW
        assert verdict.advisory == "No significant impacts detected"
        assert verdict.peak_magnitude == 0.0
        assert verdict.record_count == 0

    def test_all_low_is_low(self, aggregator: RiskAggregator) -> None:
        assert aggregator.assess(_history(LOW, LOW, LOW)).level is RiskLevel.LOW

    def test_moderate_samples_alone_stay_low(self, aggregator: RiskAggregator) -> None:
        assert aggregator.assess(_history(MODERATE, MODERATE)).level is RiskLevel.LOW

    def test_single_critical_dominates(self, aggregator: RiskAggregator) -> None:
        verdict = aggregator.assess(_history(LOW, HIGH, HIGH, HIGH, HIGH, CRITICAL, LOW))
        assert verdict.level is RiskLevel.CRITICAL
        assert verdict.advisory == "Immediate medical attention required"

    def test_two_high_is_moderate(self, aggregator: RiskAggregator) -> None:
        verdict = aggregator.assess(_history(HIGH, LOW, HIGH))
        assert verdict.level is RiskLevel.MODERATE
        assert verdict.advisory == "Monitor for symptoms"

    def test_one_high_is_moderate(self, aggregator: RiskAggregator) -> None:
        assert aggregator.assess(_history(HIGH)).level is RiskLevel.MODERATE

    def test_three_high_is_high(self, aggregator: RiskAggregator) -> None:
        verdict = aggregator.assess(_history(HIGH, HIGH, MODERATE, HIGH))
        assert verdict.level is RiskLevel.HIGH
        assert verdict.advisory == "Multiple high impacts detected"

    def test_custom_high_count_threshold(self) -> None:
        aggregator = RiskAggregator(high_count_threshold=2)
        assert aggregator.assess(_history(HIGH, HIGH)).level is RiskLevel.HIGH

    def test_invalid_high_count_threshold(self) -> None:
        with pytest.raises(InvalidConfiguration):
            RiskAggregator(high_count_threshold=0)


class TestVerdictDetails:
    def test_peak_magnitude(self, aggregator: RiskAggregator) -> None:
        history = _history(LOW, 42.5, MODERATE)
        assert aggregator.assess(history).peak_magnitude == pytest.approx(42.5)

    def test_peak_uses_either_sensor(self, aggregator: RiskAggregator) -> None:
        history = [_classifier.classify(_sample(peak1=3.0, peak2=17.0))]
        assert aggregator.assess(history).peak_magnitude == pytest.approx(17.0)

    def test_counts(self, aggregator: RiskAggregator) -> None:
        verdict = aggregator.assess(_history(LOW, LOW, MODERATE, HIGH, CRITICAL))
        assert verdict.severity_counts == {
            Severity.LOW: 2,
            Severity.MODERATE: 1,
            Severity.HIGH: 1,
            Severity.CRITICAL: 1,
        }
        assert verdict.high_impact_count == 2
        assert verdict.record_count == 5

    def test_recommendations_follow_level(self, aggregator: RiskAggregator) -> None:
        critical = aggregator.assess(_history(CRITICAL))
        assert "Remove player from field immediately" in critical.recommendations
        low = aggregator.assess(_history(LOW))
        assert len(low.recommendations) == 1

    def test_assess_is_deterministic(self, aggregator: RiskAggregator) -> None:
        history = _history(LOW, HIGH, HIGH)
        assert aggregator.assess(history) == aggregator.assess(history)

    def test_verdict_is_immutable(self, aggregator: RiskAggregator) -> None:
        verdict = aggregator.assess(_history(LOW))
        with pytest.raises(Exception):
            verdict.level = RiskLevel.CRITICAL


class TestHighImpactTimeline:
    def test_only_high_impacts_oldest_first(self) -> None:
        events = RiskAggregator.high_impact_timeline(_history(LOW, HIGH, MODERATE, CRITICAL))
        assert [e.severity for e in events] == [Severity.HIGH, Severity.CRITICAL]
        assert events[1].magnitude == pytest.approx(CRITICAL)

    def test_limit_keeps_most_recent(self) -> None:
        peaks = [31.0 + i for i in range(15)]
        events = RiskAggregator.high_impact_timeline(_history(*peaks), limit=10)
        assert len(events) == 10
        assert [e.magnitude for e in events] == pytest.approx(peaks[-10:])

    def test_non_positive_limit(self) -> None:
        assert RiskAggregator.high_impact_timeline(_history(HIGH), limit=0) == []
