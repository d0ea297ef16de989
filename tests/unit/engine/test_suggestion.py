"""Tests for the suggestion evaluator."""

from __future__ import annotations

import pytest

from attention_triage.domain.enums import Attention, Reference, Suggestion
from attention_triage.engine.suggestion import evaluate_suggestion

pytestmark = pytest.mark.unit


class TestEvaluateSuggestion:
    """Tests for the attention-to-suggestion mapping."""

    @pytest.mark.parametrize("reference", list(Reference))
    @pytest.mark.parametrize("hesitating", [True, False])
    def test_fixed_tiers(self, reference: Reference, hesitating: bool) -> None:
        """No, Focused and Special attention ignore reference and hesitation."""
        assert (
            evaluate_suggestion(Attention.NO_ATTENTION, reference, hesitating)
            is Suggestion.NO_INTERVENTION
        )
        assert (
            evaluate_suggestion(Attention.FOCUSED_ATTENTION, reference, hesitating)
            is Suggestion.PSYCHOLOGICAL_COUNSELING
        )
        assert (
            evaluate_suggestion(Attention.SPECIAL_ATTENTION, reference, hesitating)
            is Suggestion.PSYCHIATRY_DEPARTMENT
        )

    def test_general_normal_confident(self) -> None:
        """General attention alone needs no intervention."""
        assert (
            evaluate_suggestion(Attention.GENERAL_ATTENTION, Reference.NORMAL)
            is Suggestion.NO_INTERVENTION
        )

    def test_general_hesitating(self) -> None:
        """A hesitating report gets the chatting service."""
        assert (
            evaluate_suggestion(Attention.GENERAL_ATTENTION, Reference.NORMAL, hesitating=True)
            is Suggestion.CHATTING_SERVICE
        )

    def test_general_abnormal(self) -> None:
        """An abnormal reference gets the chatting service."""
        assert (
            evaluate_suggestion(Attention.GENERAL_ATTENTION, Reference.ABNORMAL)
            is Suggestion.CHATTING_SERVICE
        )
