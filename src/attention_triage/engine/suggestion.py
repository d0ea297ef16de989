"""Suggestion evaluator: maps an attention tier to an intervention."""

from __future__ import annotations

from attention_triage.domain.enums import Attention, Reference, Suggestion


def evaluate_suggestion(
    attention: Attention,
    reference: Reference,
    hesitating: bool = False,
) -> Suggestion:
    """Recommend an intervention for an attention tier.

    General attention only warrants the chatting service when the report is
    hesitating or the reference is abnormal; every other tier maps to a
    fixed suggestion.

    Args:
        attention: Tier produced by the attention evaluator.
        reference: Reference produced by the attention evaluator.
        hesitating: Whether the upstream report had too little material to be confident.

    Returns:
        The recommended intervention.
    """
    if attention is Attention.SPECIAL_ATTENTION:
        return Suggestion.PSYCHIATRY_DEPARTMENT
    if attention is Attention.FOCUSED_ATTENTION:
        return Suggestion.PSYCHOLOGICAL_COUNSELING
    if attention is Attention.GENERAL_ATTENTION and (hesitating or reference.is_abnormal):
        return Suggestion.CHATTING_SERVICE
    return Suggestion.NO_INTERVENTION
