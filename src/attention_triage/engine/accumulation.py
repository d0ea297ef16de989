"""Per-indicator accumulation (first attention phase).

Every supplied score is visited in order; there is no early exit. Each
indicator contributes through its own rule, and UNKNOWN forces the score to 4
without stopping the loop, so later indicators can still add to it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING, TypeAlias

from attention_triage.domain.enums import Indicator
from attention_triage.engine.state import IndicatorFlags, ScoreState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from attention_triage.domain.value_objects import IndicatorScore

PHASE = "indicator"

UNKNOWN_FORCED_SCORE = 4


def _psychosis(state: ScoreState, score: IndicatorScore) -> ScoreState:
    positive = score.positive_score
    if positive > 0.9:
        return state.adjust(4, PHASE, "psychosis>0.9")
    if positive > 0.6:
        return state.adjust(3, PHASE, "psychosis>0.6")
    if positive > 0.3:
        return state.adjust(2, PHASE, "psychosis>0.3")
    return state


def _social_adaptability(state: ScoreState, score: IndicatorScore) -> ScoreState:
    delta = score.net_negative
    if delta > 0.9:
        return state.adjust(2, PHASE, "social_adaptability>0.9")
    if delta >= 0.5:
        return state.adjust(1, PHASE, "social_adaptability>=0.5")
    return state


def _depression(state: ScoreState, score: IndicatorScore) -> ScoreState:
    delta = score.net_positive
    state = replace(state, depression_score=delta)
    flagged = replace(state, flags=replace(state.flags, depression=True))
    if delta >= 1.2:
        return flagged.adjust(3, PHASE, "depression>=1.2")
    if delta > 0.8:
        return flagged.adjust(2, PHASE, "depression>0.8")
    if delta > 0.4:
        return flagged.adjust(1, PHASE, "depression>0.4")
    if delta > 0:
        return flagged.note(PHASE, "depression>0")
    if delta < 0:
        return state.adjust(-1, PHASE, "depression<0")
    return state


def _sense_of_security(state: ScoreState, score: IndicatorScore) -> ScoreState:
    if score.net_negative > 0.7:
        state = replace(state, flags=replace(state.flags, sense_of_security=True))
        return state.adjust(1, PHASE, "sense_of_security>0.7")
    return state


def _stress(state: ScoreState, score: IndicatorScore) -> ScoreState:
    if score.net_positive > 0.5:
        state = replace(state, flags=replace(state.flags, stress=True))
        return state.note(PHASE, "stress>0.5")
    return state


def _anxiety(state: ScoreState, score: IndicatorScore) -> ScoreState:
    delta = score.net_positive
    flagged = replace(state, flags=replace(state.flags, anxiety=True))
    if delta > 1.5:
        return flagged.adjust(2, PHASE, "anxiety>1.5")
    if delta > 0.8:
        return flagged.adjust(1, PHASE, "anxiety>0.8")
    if delta > 0:
        return flagged.note(PHASE, "anxiety>0")
    if delta < 0:
        return state.adjust(-1, PHASE, "anxiety<0")
    return state


def _obsession(state: ScoreState, score: IndicatorScore) -> ScoreState:
    if score.net_positive > 0.8:
        state = replace(state, flags=replace(state.flags, obsession=True))
        return state.adjust(1, PHASE, "obsession>0.8")
    return state


def _optimism(state: ScoreState, score: IndicatorScore) -> ScoreState:
    delta = score.net_positive
    flagged = replace(state, flags=replace(state.flags, optimism=True))
    if delta > 1.0:
        return flagged.adjust(-1, PHASE, "optimism>1.0")
    if delta > 0.5:
        return flagged.note(PHASE, "optimism>0.5")
    return state


def _pessimism(state: ScoreState, score: IndicatorScore) -> ScoreState:
    if score.net_positive > 0.1:
        state = replace(state, flags=replace(state.flags, pessimism=True))
        return state.note(PHASE, "pessimism>0.1")
    return state


def _unknown(state: ScoreState, score: IndicatorScore) -> ScoreState:
    return state.assign(UNKNOWN_FORCED_SCORE, PHASE, "unknown")


IndicatorRule: TypeAlias = Callable[[ScoreState, "IndicatorScore"], ScoreState]

INDICATOR_RULES: dict[Indicator, IndicatorRule] = {
    Indicator.PSYCHOSIS: _psychosis,
    Indicator.SOCIAL_ADAPTABILITY: _social_adaptability,
    Indicator.DEPRESSION: _depression,
    Indicator.SENSE_OF_SECURITY: _sense_of_security,
    Indicator.STRESS: _stress,
    Indicator.ANXIETY: _anxiety,
    Indicator.OBSESSION: _obsession,
    Indicator.OPTIMISM: _optimism,
    Indicator.PESSIMISM: _pessimism,
    Indicator.UNKNOWN: _unknown,
}


def apply_indicator(state: ScoreState, score: IndicatorScore) -> ScoreState:
    """Apply the rule for a single indicator score.

    Indicators without a rule leave the state unchanged.

    Args:
        state: Accumulator state before this score.
        score: The indicator score to apply.

    Returns:
        Accumulator state after this score.
    """
    rule = INDICATOR_RULES.get(score.indicator)
    if rule is None:
        return state
    return rule(state, score)


def accumulate_indicators(scores: Iterable[IndicatorScore]) -> ScoreState:
    """Run the accumulation phase over all supplied scores.

    Args:
        scores: Indicator scores in any order; every entry is visited.

    Returns:
        State carrying the accumulated score, indicator flags, the depression
        delta and the `raw_score` snapshot.
    """
    state = ScoreState(flags=IndicatorFlags())
    for score in scores:
        state = apply_indicator(state, score)
    return replace(state, raw_score=state.score)
