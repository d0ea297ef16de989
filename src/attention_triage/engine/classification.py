"""Tier classification and reference-driven adjustment.

Maps the corrected score to an attention tier, escalates the reference to
ABNORMAL for scores of 5 or more, decides whether the SCL-90 follow-up
questionnaire is needed, and finally adjusts the tier for abnormal references
by age group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from attention_triage.domain.enums import Attention, Reference
from attention_triage.domain.value_objects import ADDITIONAL_SCALE_SCL90, EvaluationResult

if TYPE_CHECKING:
    from attention_triage.engine.state import EvaluationContext, ScoreState

PHASE_CLASSIFY = "classification"
PHASE_REFERENCE = "reference"

CHILD_MAX_AGE = 11
ADULT_MIN_AGE = 20
MINOR_FACTOR_TOTAL_THRESHOLD = 180
ADULT_FACTOR_TOTAL_THRESHOLD = 160


def classify_score(
    state: ScoreState, reference: Reference
) -> tuple[Attention, Reference, ScoreState]:
    """Map a corrected score to a tier, escalating the reference if needed.

    Args:
        state: Corrected score state.
        reference: Input reference.

    Returns:
        Tuple of (attention, fixed reference, state with classification notes).
    """
    score = state.score
    if score <= 0:
        return Attention.NO_ATTENTION, reference, state

    if score >= 5:
        state = state.note(PHASE_CLASSIFY, "score>=5:special&abnormal")
        return Attention.SPECIAL_ATTENTION, Reference.ABNORMAL, state

    if score >= 4:
        return Attention.FOCUSED_ATTENTION, reference, state

    if score == 1 and reference is Reference.NORMAL:
        state = state.note(PHASE_CLASSIFY, "score==1&normal:no_attention")
        return Attention.NO_ATTENTION, reference, state

    return Attention.GENERAL_ATTENTION, reference, state


def additional_scale_for(score: int, reference: Reference) -> str:
    """Return the follow-up questionnaire name, or "" when none is needed."""
    if score >= 4 or reference.is_abnormal:
        return ADDITIONAL_SCALE_SCL90
    return ""


def adjust_for_reference(
    attention: Attention,
    state: ScoreState,
    context: EvaluationContext,
) -> tuple[Attention, ScoreState]:
    """Adjust the tier of an ABNORMAL-reference subject by age group.

    Callers only invoke this when the fixed reference is ABNORMAL.

    Args:
        attention: Tier produced by classification.
        state: Corrected score state (provides score and rollback state).
        context: Fixed evaluation inputs.

    Returns:
        Tuple of (adjusted attention, state with adjustment notes).
    """
    subject_age = context.attributes.age

    if subject_age <= CHILD_MAX_AGE:
        if attention is Attention.SPECIAL_ATTENTION:
            state = state.note(PHASE_REFERENCE, "age<=11:special->focused")
            return Attention.FOCUSED_ATTENTION, state
        if attention is Attention.FOCUSED_ATTENTION:
            state = state.note(PHASE_REFERENCE, "age<=11:focused->general")
            return Attention.GENERAL_ATTENTION, state
        return attention, state

    if attention is Attention.NO_ATTENTION and state.score > 0:
        state = state.note(PHASE_REFERENCE, "abnormal&score>0:no->general")
        attention = Attention.GENERAL_ATTENTION

    if attention is not Attention.GENERAL_ATTENTION or state.rollback:
        return attention, state

    factor = context.symptom_factor
    if factor is None:
        return attention, state

    if subject_age < ADULT_MIN_AGE:
        if factor.total > MINOR_FACTOR_TOTAL_THRESHOLD:
            state = state.note(PHASE_REFERENCE, "age<20&total>180:general->focused")
            return Attention.FOCUSED_ATTENTION, state
    elif factor.total > ADULT_FACTOR_TOTAL_THRESHOLD and state.score > 3:
        state = state.note(PHASE_REFERENCE, "age>=20&total>160&score>3:general->focused")
        return Attention.FOCUSED_ATTENTION, state

    return attention, state


def classify(state: ScoreState, context: EvaluationContext) -> EvaluationResult:
    """Produce the evaluation result from a corrected state.

    Args:
        state: State after all correction steps.
        context: Fixed evaluation inputs.

    Returns:
        The evaluation result, carrying the full rule trace.
    """
    attention, reference, state = classify_score(state, context.reference)
    additional_scale = additional_scale_for(state.score, reference)

    if reference.is_abnormal:
        attention, state = adjust_for_reference(attention, state, context)

    return EvaluationResult(
        attention=attention,
        reference=reference,
        additional_scale=additional_scale,
        score=state.score,
        trace=state.trace,
    )
