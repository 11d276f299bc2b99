"""Tests for frankenai.core.evidence."""

from __future__ import annotations

import pytest

from frankenai.core.evidence import EvidenceCollector


class TestEvidenceCollector:
    """Tests for EvidenceCollector."""

    def test_empty_collector_has_zero_confidence(self) -> None:
        """Test that no steps means no confidence."""
        collector = EvidenceCollector()
        assert collector.confidence == 0.0
        assert collector.evidence == []

    def test_steps_fold_in_order(self) -> None:
        """Test that a scale step only affects the steps before it."""
        collector = EvidenceCollector()
        collector.add(0.8, "manifest")
        collector.scale(0.5, "penalty")
        collector.add(0.1, "extra")

        assert collector.confidence == pytest.approx(0.5)
        assert collector.evidence == ["manifest", "penalty", "extra"]

    def test_confidence_is_clamped_once_at_the_end(self) -> None:
        """Test that the raw score may exceed 1 but confidence does not."""
        collector = EvidenceCollector()
        collector.add(0.9, "a")
        collector.add(0.9, "b")
        collector.scale(0.5, "c")

        assert collector.raw_score == pytest.approx(0.9)
        assert collector.confidence == pytest.approx(0.9)

        collector.add(0.9, "d")
        assert collector.confidence == 1.0

    def test_add_if_skips_falsy_conditions(self) -> None:
        """Test that add_if only records truthy conditions."""
        collector = EvidenceCollector()
        assert collector.add_if([], 0.5, "empty list") is False
        assert collector.add_if(["x"], 0.2, "non-empty list") is True

        assert collector.evidence == ["non-empty list"]

    def test_result_uses_strict_threshold_by_default(self) -> None:
        """Test that confidence equal to the threshold is not detected."""
        collector = EvidenceCollector()
        collector.add(0.3, "weak")

        assert collector.result(0.3).detected is False
        assert collector.result(0.3, inclusive=True).detected is True

    def test_result_keeps_excludes_only_when_detected(self) -> None:
        """Test that an undetected result never carries excludes."""
        collector = EvidenceCollector()
        collector.add(0.2, "weak")

        assert collector.result(0.5, excludes=["react"]).excludes is None
        assert collector.result(0.1, excludes=["react"]).excludes == ["react"]

    def test_result_never_detects_at_zero_confidence(self) -> None:
        """Test that a zero threshold still needs some evidence."""
        result = EvidenceCollector().result(0.0, inclusive=True)
        assert result.detected is False

    def test_result_copies_metadata(self) -> None:
        """Test that metadata is passed through."""
        collector = EvidenceCollector()
        collector.add(0.9, "strong")
        metadata = {"files": 3}

        result = collector.result(0.3, metadata=metadata)

        assert result.metadata == {"files": 3}
        assert result.metadata is not metadata
