"""Tests for ScoreNormalizer, RiskClassifier and the emotional-state rule."""
import pytest

from chatinsight.shared.models import EmotionalState, RiskLevel
from chatinsight.services.insight_service.config import ScoringConfig
from chatinsight.services.insight_service.scoring import (
    RiskClassifier,
    ScoreNormalizer,
    emotional_state_for,
)


@pytest.fixture
def normalizer():
    return ScoreNormalizer()


@pytest.fixture
def risk_classifier():
    return RiskClassifier()


class TestPercentageMapping:
    """Raw valence to percentage, no category effects."""

    def test_zero_maps_to_midpoint(self, normalizer):
        assert normalizer.normalize(0.0, {}) == 50

    def test_range_endpoints(self, normalizer):
        assert normalizer.normalize(-5.0, {}) == 0
        assert normalizer.normalize(5.0, {}) == 100

    def test_out_of_range_is_clamped(self, normalizer):
        assert normalizer.normalize(-40.0, {}) == 0
        assert normalizer.normalize(40.0, {}) == 100

    def test_intermediate_value(self, normalizer):
        assert normalizer.normalize(-2.5, {}) == 25
        assert normalizer.normalize(3.0, {}) == 80


class TestCategoryAdjustments:
    """Penalties and bonus applied in fixed order."""

    def test_depression_penalty_per_match(self, normalizer):
        assert normalizer.normalize(0.0, {"depression": ["sad", "hopeless"]}) == 40

    def test_anxiety_penalty(self, normalizer):
        assert normalizer.normalize(0.0, {"anxiety": ["panic"]}) == 47

    def test_stress_penalty(self, normalizer):
        assert normalizer.normalize(0.0, {"stress": ["pressure"]}) == 48

    def test_penalties_stack(self, normalizer):
        matches = {"depression": ["sad"], "anxiety": ["panic"], "stress": ["pressure"]}
        assert normalizer.normalize(0.0, matches) == 40

    def test_positive_bonus(self, normalizer):
        assert normalizer.normalize(4.0, {"positive": ["happy", "grateful"]}) == 96

    def test_positive_bonus_capped(self, normalizer):
        assert normalizer.normalize(5.0, {"positive": ["happy"]}) == 100

    def test_penalties_never_go_below_zero(self, normalizer):
        matches = {"depression": ["sad", "hopeless", "worthless", "lonely"]}
        assert normalizer.normalize(-5.0, matches) == 0


class TestEscalationCap:
    """Crisis, self-harm and the concerning-phrase override."""

    def test_crisis_caps_score(self, normalizer):
        assert normalizer.normalize(4.0, {"crisis": ["urgent"]}) == 20

    def test_self_harm_caps_score(self, normalizer):
        assert normalizer.normalize(5.0, {"self_harm": ["suicide"]}) == 20

    def test_cap_keeps_lower_scores(self, normalizer):
        assert normalizer.normalize(-5.0, {"crisis": ["urgent"]}) == 0

    def test_override_forces_minimum_valence(self, normalizer):
        assert normalizer.normalize(5.0, {}, concerning_override=True) == 0

    def test_override_not_masked_by_positive_words(self, normalizer):
        positives = {"positive": ["happy", "grateful", "thankful", "excited",
                                  "hopeful", "relaxed", "calm", "proud"]}
        score = normalizer.normalize(5.0, positives, concerning_override=True)
        assert score <= 20

    @pytest.mark.parametrize("raw", [-100.0, -5.0, -1.0, 0.0, 1.0, 5.0, 100.0])
    def test_always_within_bounds(self, normalizer, raw):
        matches = {"positive": ["happy"] * 50, "depression": ["sad"] * 3}
        assert 0 <= normalizer.normalize(raw, matches) <= 100

    def test_custom_magnitudes(self):
        normalizer = ScoreNormalizer(ScoringConfig(depression_penalty=10, escalation_score_cap=10))
        assert normalizer.normalize(0.0, {"depression": ["sad"]}) == 40
        assert normalizer.normalize(0.0, {"crisis": ["urgent"]}) == 10


class TestRiskClassifier:
    """Decision table: category rules, corrections, override."""

    def test_no_matches_is_low(self, risk_classifier):
        assert risk_classifier.classify({}, 50) == RiskLevel.LOW

    def test_crisis_is_high(self, risk_classifier):
        assert risk_classifier.classify({"crisis": ["emergency"]}, 20) == RiskLevel.HIGH

    def test_self_harm_is_high(self, risk_classifier):
        assert risk_classifier.classify({"self_harm": ["suicidal"]}, 20) == RiskLevel.HIGH

    def test_high_not_deescalated_by_score(self, risk_classifier):
        assert risk_classifier.classify({"crisis": ["urgent"]}, 100) == RiskLevel.HIGH

    def test_depression_is_medium(self, risk_classifier):
        assert risk_classifier.classify({"depression": ["sad"]}, 40) == RiskLevel.MEDIUM

    def test_anxiety_is_medium(self, risk_classifier):
        assert risk_classifier.classify({"anxiety": ["panic"]}, 47) == RiskLevel.MEDIUM

    def test_medium_deescalated_above_threshold(self, risk_classifier):
        assert risk_classifier.classify({"anxiety": ["panic"]}, 61) == RiskLevel.LOW

    def test_medium_kept_at_threshold(self, risk_classifier):
        assert risk_classifier.classify({"anxiety": ["panic"]}, 60) == RiskLevel.MEDIUM

    def test_low_escalated_below_threshold(self, risk_classifier):
        assert risk_classifier.classify({}, 19) == RiskLevel.MEDIUM

    def test_low_kept_at_threshold(self, risk_classifier):
        assert risk_classifier.classify({}, 20) == RiskLevel.LOW

    def test_stress_and_positive_alone_are_low(self, risk_classifier):
        assert risk_classifier.classify({"stress": ["pressure"]}, 48) == RiskLevel.LOW
        assert risk_classifier.classify({"positive": ["happy"]}, 90) == RiskLevel.LOW

    def test_override_always_high(self, risk_classifier):
        assert risk_classifier.classify({}, 100, concerning_override=True) == RiskLevel.HIGH

    def test_custom_thresholds(self):
        classifier = RiskClassifier(ScoringConfig(deescalate_above=80))
        assert classifier.classify({"anxiety": ["panic"]}, 70) == RiskLevel.MEDIUM

    def test_apply_corrections_leaves_high_alone(self, risk_classifier):
        assert risk_classifier.apply_corrections(RiskLevel.HIGH, 100) == RiskLevel.HIGH
        assert risk_classifier.apply_corrections(RiskLevel.HIGH, 0) == RiskLevel.HIGH


class TestEmotionalState:
    """Symmetric cutoffs around the midpoint."""

    @pytest.mark.parametrize("score,expected", [
        (0, EmotionalState.NEGATIVE),
        (34, EmotionalState.NEGATIVE),
        (35, EmotionalState.NEUTRAL),
        (50, EmotionalState.NEUTRAL),
        (65, EmotionalState.NEUTRAL),
        (66, EmotionalState.POSITIVE),
        (100, EmotionalState.POSITIVE),
    ])
    def test_cutoffs(self, score, expected):
        assert emotional_state_for(score) == expected


class TestScoringConfig:
    """Tests for scale conversion and validation."""

    def test_to_raw(self):
        config = ScoringConfig()
        assert config.to_raw(0) == -5.0
        assert config.to_raw(50) == 0.0
        assert config.to_raw(100) == 5.0
        assert config.to_raw(35) == -1.5

    def test_report_respects_mode(self):
        assert ScoringConfig().report(80) == 80
        assert ScoringConfig(percentage_mode=False).report(80) == 3.0

    def test_invalid_raw_range(self):
        with pytest.raises(ValueError):
            ScoringConfig(raw_min=5.0, raw_max=-5.0)

    def test_invalid_emotional_cutoffs(self):
        with pytest.raises(ValueError):
            ScoringConfig(negative_below=70, positive_above=30)

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            ScoringConfig(alert_below=150)
