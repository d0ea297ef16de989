"""Tests for domain value objects.

Value objects are immutable (frozen) dataclasses that represent
engine inputs and outputs.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from attention_triage.domain.enums import Attention, Indicator, Reference
from attention_triage.domain.value_objects import (
    ADDITIONAL_SCALE_SCL90,
    EvaluationResult,
    FactorSet,
    IndicatorScore,
    RuleFired,
    SubjectAttributes,
    SymptomFactor,
)

pytestmark = pytest.mark.unit


class TestIndicatorScore:
    """Tests for IndicatorScore value object."""

    def test_defaults_to_zero(self) -> None:
        """Magnitudes default to zero."""
        score = IndicatorScore(Indicator.STRESS)
        assert score.positive_score == 0.0
        assert score.negative_score == 0.0

    def test_net_values(self) -> None:
        """net_positive and net_negative are mirror images."""
        score = IndicatorScore(Indicator.DEPRESSION, positive_score=1.0, negative_score=0.25)
        assert score.net_positive == pytest.approx(0.75)
        assert score.net_negative == pytest.approx(-0.75)

    def test_negative_positive_score_raises(self) -> None:
        """Magnitudes must be non-negative."""
        with pytest.raises(ValueError, match="positive_score must be >= 0"):
            IndicatorScore(Indicator.ANXIETY, positive_score=-0.1)

    def test_negative_negative_score_raises(self) -> None:
        """Magnitudes must be non-negative."""
        with pytest.raises(ValueError, match="negative_score must be >= 0"):
            IndicatorScore(Indicator.ANXIETY, negative_score=-1.0)

    def test_immutability(self) -> None:
        """IndicatorScore should be immutable."""
        score = IndicatorScore(Indicator.PSYCHOSIS, positive_score=0.5)
        with pytest.raises(FrozenInstanceError):
            score.positive_score = 0.9  # type: ignore[misc]


class TestSubjectAttributes:
    """Tests for SubjectAttributes value object."""

    def test_defaults_to_non_strict(self) -> None:
        """Strict mode is off by default."""
        assert SubjectAttributes(age=12).strict is False

    def test_negative_age_raises(self) -> None:
        """Age must be non-negative."""
        with pytest.raises(ValueError, match="age must be >= 0"):
            SubjectAttributes(age=-1)


class TestSymptomFactor:
    """Tests for SymptomFactor value object."""

    def test_marked_obsession_or_interpersonal(self) -> None:
        """Either factor above 3 counts as marked."""
        assert SymptomFactor(total=100, obsession=3.1).has_marked_obsession_or_interpersonal
        assert SymptomFactor(total=100, interpersonal=3.5).has_marked_obsession_or_interpersonal
        assert not SymptomFactor(
            total=100, obsession=3.0, interpersonal=3.0
        ).has_marked_obsession_or_interpersonal

    def test_from_symptoms_weights_by_item_count(self) -> None:
        """Total is the item-count weighted sum of factor means."""
        symptoms = {
            "somatization": 1.0,
            "obsession": 2.0,
            "interpersonal": 1.0,
            "depression": 2.0,
            "anxiety": 1.0,
            "hostile": 1.0,
            "horror": 1.0,
            "paranoid": 1.0,
            "psychosis": 1.0,
            "sleepDiet": 1.0,
        }
        factor = SymptomFactor.from_symptoms(symptoms)
        # 90 items at 1.0 plus the extra point on obsession (10) and depression (13)
        assert factor.total == 113
        assert factor.obsession == 2.0
        assert factor.depression == 2.0

    def test_from_symptoms_ignores_name_case(self) -> None:
        """Factor names match regardless of case."""
        factor = SymptomFactor.from_symptoms({"Depression": 3.0, "SLEEPDIET": 1.0})
        assert factor.total == 46
        assert factor.depression == 3.0

    def test_from_symptoms_truncates_total(self) -> None:
        """The weighted total is truncated, not rounded."""
        factor = SymptomFactor.from_symptoms({"depression": 1.99})
        assert factor.total == 25

    def test_from_symptoms_missing_factors_count_as_zero(self) -> None:
        """Absent factors contribute nothing."""
        factor = SymptomFactor.from_symptoms({})
        assert factor.total == 0
        assert factor.anxiety == 0.0

    def test_factor_set_wraps_symptom_factor(self) -> None:
        """FactorSet exposes the symptom factor."""
        factor = SymptomFactor(total=170)
        assert FactorSet(symptom_factor=factor).symptom_factor is factor


class TestRuleFired:
    """Tests for RuleFired trace records."""

    def test_describe_with_delta(self) -> None:
        """Deltas are rendered with an explicit sign."""
        record = RuleFired(phase="indicator", rule="depression>=1.2", delta=3, score=3)
        assert record.describe() == "[indicator] depression>=1.2 +3 -> 3"

    def test_describe_negative_delta(self) -> None:
        """Negative deltas keep their sign."""
        record = RuleFired(phase="age", rule="35<=age<=50&score>=5", delta=-2, score=4)
        assert record.describe() == "[age] 35<=age<=50&score>=5 -2 -> 4"

    def test_describe_assignment(self) -> None:
        """Assignments have no delta."""
        record = RuleFired(phase="indicator", rule="unknown", delta=None, score=4)
        assert record.describe() == "[indicator] unknown -> 4"


class TestEvaluationResult:
    """Tests for EvaluationResult value object."""

    def test_needs_additional_scale(self) -> None:
        """needs_additional_scale follows the scale name."""
        with_scale = EvaluationResult(
            Attention.FOCUSED_ATTENTION, Reference.NORMAL, ADDITIONAL_SCALE_SCL90
        )
        without_scale = EvaluationResult(Attention.NO_ATTENTION, Reference.NORMAL)
        assert with_scale.needs_additional_scale
        assert not without_scale.needs_additional_scale

    def test_equality(self) -> None:
        """Equal fields mean equal results."""
        first = EvaluationResult(Attention.GENERAL_ATTENTION, Reference.NORMAL, score=3)
        second = EvaluationResult(Attention.GENERAL_ATTENTION, Reference.NORMAL, score=3)
        assert first == second
