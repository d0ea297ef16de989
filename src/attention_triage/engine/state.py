"""Evaluation state threaded through the attention phases.

`ScoreState` is immutable: every rule that changes the accumulator returns a
new state with the change appended to the trace, so each phase can be tested
in isolation and the full sequence can be audited afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from attention_triage.domain.value_objects import RuleFired

if TYPE_CHECKING:
    from attention_triage.domain.enums import Reference
    from attention_triage.domain.value_objects import (
        FactorSet,
        SubjectAttributes,
        SymptomFactor,
    )


@dataclass(frozen=True, slots=True)
class IndicatorFlags:
    """Indicators that crossed their signalling threshold."""

    depression: bool = False
    sense_of_security: bool = False
    stress: bool = False
    anxiety: bool = False
    obsession: bool = False
    optimism: bool = False
    pessimism: bool = False


@dataclass(frozen=True, slots=True)
class EvaluationContext:
    """Inputs that stay fixed for a whole evaluation."""

    attributes: SubjectAttributes
    reference: Reference
    factor_set: FactorSet | None = None

    @property
    def symptom_factor(self) -> SymptomFactor | None:
        """Symptom factor of the factor set, if one was supplied."""
        return self.factor_set.symptom_factor if self.factor_set is not None else None


@dataclass(frozen=True, slots=True)
class ScoreState:
    """Accumulator plus the bookkeeping later phases depend on."""

    score: int = 0
    """Current attention score."""

    flags: IndicatorFlags = IndicatorFlags()
    """Indicator signals raised during accumulation."""

    depression_score: float = 0.0
    """Depression positive-minus-negative delta (0 when not supplied)."""

    raw_score: int = 0
    """Score snapshot taken right after indicator accumulation."""

    projection_score: int = 0
    """Score snapshot taken before factor-set and age corrections."""

    rollback: bool = False
    """Optimism offsets a sub-1.0 depression signal; gates age rollback."""

    trace: tuple[RuleFired, ...] = ()
    """Rules fired so far, in order."""

    def adjust(self, delta: int, phase: str, rule: str) -> ScoreState:
        """Return a state with `delta` added to the score."""
        score = self.score + delta
        return replace(
            self,
            score=score,
            trace=(*self.trace, RuleFired(phase=phase, rule=rule, delta=delta, score=score)),
        )

    def assign(self, score: int, phase: str, rule: str) -> ScoreState:
        """Return a state with the score set to `score`."""
        return replace(
            self,
            score=score,
            trace=(*self.trace, RuleFired(phase=phase, rule=rule, delta=None, score=score)),
        )

    def note(self, phase: str, rule: str) -> ScoreState:
        """Return a state recording a rule that did not touch the score."""
        return replace(
            self,
            trace=(*self.trace, RuleFired(phase=phase, rule=rule, delta=0, score=self.score)),
        )
