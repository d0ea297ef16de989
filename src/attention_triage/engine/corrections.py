"""Ordered correction steps applied after indicator accumulation.

Each step is a pure `(ScoreState, EvaluationContext) -> ScoreState` transform.
`CORRECTION_STEPS` fixes their order:

1. cross_indicator: first matching depression combination bonus
2. no_depression_no_anxiety: penalty when neither signal is present
3. unknown_clamp: keep an UNKNOWN-forced raw score of 4 from inflating
4. strict_optimism: strict-mode optimism offset
5. projection: snapshot the score and derive the rollback state
6. factor_total / factor_obsession_interpersonal / factor_combined: FactorSet corrections
7. age_band: age-band correction
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TypeAlias

from attention_triage.engine.state import EvaluationContext, ScoreState

StepFunc: TypeAlias = Callable[[ScoreState, EvaluationContext], ScoreState]

CLAMPED_RAW_SCORE = 4

FACTOR_TOTAL_THRESHOLD = 160


@dataclass(frozen=True, slots=True)
class CorrectionStep:
    """A named correction step."""

    name: str
    apply: StepFunc

    def __call__(self, state: ScoreState, context: EvaluationContext) -> ScoreState:
        return self.apply(state, context)


def cross_indicator(state: ScoreState, context: EvaluationContext) -> ScoreState:
    """Add 1 for the first matching depression combination."""
    flags = state.flags
    if not flags.depression:
        return state
    if flags.sense_of_security:
        return state.adjust(1, "cross", "depression&sense_of_security")
    if flags.stress:
        return state.adjust(1, "cross", "depression&stress")
    if flags.anxiety:
        return state.adjust(1, "cross", "depression&anxiety")
    return state


def no_depression_no_anxiety(state: ScoreState, context: EvaluationContext) -> ScoreState:
    """Subtract 1 when neither depression nor anxiety was flagged."""
    if not state.flags.depression and not state.flags.anxiety:
        return state.adjust(-1, "cross", "!depression&!anxiety")
    return state


def unknown_clamp(state: ScoreState, context: EvaluationContext) -> ScoreState:
    """Clamp back to 4 when the raw score was 4 and corrections raised it."""
    if state.score > state.raw_score and state.raw_score == CLAMPED_RAW_SCORE:
        return state.assign(CLAMPED_RAW_SCORE, "cross", "clamp_raw_score_4")
    return state


def strict_optimism(state: ScoreState, context: EvaluationContext) -> ScoreState:
    """In strict mode, optimism offsets a depression delta of at least 0.4."""
    if context.attributes.strict and state.flags.optimism and state.depression_score >= 0.4:
        return state.adjust(-1, "strict", "strict&optimism&depression>=0.4")
    return state


def projection(state: ScoreState, context: EvaluationContext) -> ScoreState:
    """Snapshot the projection score and derive the rollback state."""
    rollback = state.depression_score < 1.0 and state.flags.optimism
    return replace(state, projection_score=state.score, rollback=rollback)


def factor_total(state: ScoreState, context: EvaluationContext) -> ScoreState:
    """Add 1 when the symptom inventory total exceeds 160."""
    factor = context.symptom_factor
    if factor is not None and factor.total > FACTOR_TOTAL_THRESHOLD:
        return state.adjust(1, "factor_set", "total>160")
    return state


def factor_obsession_interpersonal(state: ScoreState, context: EvaluationContext) -> ScoreState:
    """Add 1 for a marked obsession factor, else for a marked interpersonal one."""
    factor = context.symptom_factor
    if factor is None:
        return state
    if factor.obsession > 3:
        return state.adjust(1, "factor_set", "obsession>3")
    if factor.interpersonal > 3:
        return state.adjust(1, "factor_set", "interpersonal>3")
    return state


def factor_combined(state: ScoreState, context: EvaluationContext) -> ScoreState:
    """Add 1 for a co-elevated factor combination (first match only)."""
    factor = context.symptom_factor
    if factor is None:
        return state
    if factor.depression > 2 and factor.anxiety > 2:
        return state.adjust(1, "factor_set", "depression>2&anxiety>2")
    if factor.obsession > 2 and factor.interpersonal > 2 and factor.anxiety > 2:
        return state.adjust(1, "factor_set", "obsession>2&interpersonal>2&anxiety>2")
    return state


def age_band(state: ScoreState, context: EvaluationContext) -> ScoreState:
    """Apply the age-band correction.

    Bands are mutually exclusive. Ages 17 through 20 have no band.
    """
    subject_age = context.attributes.age

    if subject_age <= 16:
        if not state.rollback:
            return state
        state = state.assign(state.projection_score, "age", "age<=16&rollback:reset")
        state = state.adjust(-2, "age", "age<=16&rollback")
        factor = context.symptom_factor
        if factor is not None:
            if factor.total > FACTOR_TOTAL_THRESHOLD:
                state = state.adjust(-1, "age", "age<=16&rollback&total>160")
            if factor.has_marked_obsession_or_interpersonal:
                state = state.adjust(-1, "age", "age<=16&rollback&(obsession|interpersonal)>3")
        return state

    if 20 < subject_age < 35:
        if state.score >= 5:
            return state.adjust(-1, "age", "20<age<35&score>=5")
        return state

    if 35 <= subject_age <= 50:
        if state.score >= 5:
            return state.adjust(-2, "age", "35<=age<=50&score>=5")
        return state

    if subject_age > 50:
        if state.score >= 5:
            return state.assign(3, "age", "age>50&score>=5")
        if state.score >= 4:
            return state.assign(2, "age", "age>50&score>=4")

    return state


CORRECTION_STEPS: tuple[CorrectionStep, ...] = (
    CorrectionStep("cross_indicator", cross_indicator),
    CorrectionStep("no_depression_no_anxiety", no_depression_no_anxiety),
    CorrectionStep("unknown_clamp", unknown_clamp),
    CorrectionStep("strict_optimism", strict_optimism),
    CorrectionStep("projection", projection),
    CorrectionStep("factor_total", factor_total),
    CorrectionStep("factor_obsession_interpersonal", factor_obsession_interpersonal),
    CorrectionStep("factor_combined", factor_combined),
    CorrectionStep("age_band", age_band),
)


def apply_corrections(
    state: ScoreState,
    context: EvaluationContext,
    steps: tuple[CorrectionStep, ...] = CORRECTION_STEPS,
) -> ScoreState:
    """Apply correction steps in order.

    Args:
        state: State produced by indicator accumulation.
        context: Fixed evaluation inputs.
        steps: Steps to apply; defaults to the canonical sequence.

    Returns:
        The corrected state.
    """
    for step in steps:
        state = step(state, context)
    return state
