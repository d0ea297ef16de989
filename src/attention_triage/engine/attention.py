"""Attention evaluator.

Runs the three stages of an evaluation in order:

1. Indicator accumulation (`accumulation`)
2. Correction steps (`corrections.CORRECTION_STEPS`)
3. Classification and reference adjustment (`classification`)

The evaluator is a pure function of its inputs. It never raises, keeps no
state between calls, and returns the fired rules as a trace on the result
instead of printing them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from attention_triage.domain.enums import Reference
from attention_triage.engine.accumulation import accumulate_indicators
from attention_triage.engine.classification import classify
from attention_triage.engine.corrections import CORRECTION_STEPS, apply_corrections
from attention_triage.engine.state import EvaluationContext
from attention_triage.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from attention_triage.domain.value_objects import (
        EvaluationResult,
        FactorSet,
        IndicatorScore,
        SubjectAttributes,
    )
    from attention_triage.engine.corrections import CorrectionStep

logger = get_logger(__name__)


class AttentionEvaluator:
    """Maps indicator scores and subject attributes to an attention tier."""

    def __init__(self, steps: tuple[CorrectionStep, ...] = CORRECTION_STEPS) -> None:
        """Initialize the evaluator.

        Args:
            steps: Correction steps to apply after accumulation, in order.
        """
        self._steps = steps

    @property
    def steps(self) -> tuple[CorrectionStep, ...]:
        """Correction steps applied by this evaluator."""
        return self._steps

    def evaluate(
        self,
        attributes: SubjectAttributes,
        scores: Iterable[IndicatorScore],
        factor_set: FactorSet | None = None,
        reference: Reference = Reference.NORMAL,
    ) -> EvaluationResult:
        """Evaluate the attention tier for one subject.

        Args:
            attributes: Subject age and strict-mode flag.
            scores: Indicator scores; order does not matter and every entry is visited.
            factor_set: Optional symptom-inventory aggregate.
            reference: Prior screening classification.

        Returns:
            Attention tier, possibly escalated reference, additional scale and trace.
        """
        context = EvaluationContext(
            attributes=attributes,
            reference=reference,
            factor_set=factor_set,
        )
        state = accumulate_indicators(scores)
        state = apply_corrections(state, context, self._steps)
        result = classify(state, context)

        logger.debug(
            "Attention evaluated",
            attention=result.attention.label,
            reference=result.reference.value,
            score=result.score,
            raw_score=state.raw_score,
            rollback=state.rollback,
            rules_fired=len(result.trace),
        )
        return result

    __call__ = evaluate


_DEFAULT_EVALUATOR = AttentionEvaluator()


def evaluate_attention(
    attributes: SubjectAttributes,
    scores: Iterable[IndicatorScore],
    factor_set: FactorSet | None = None,
    reference: Reference = Reference.NORMAL,
) -> EvaluationResult:
    """Evaluate the attention tier with the canonical correction steps.

    See `AttentionEvaluator.evaluate`.
    """
    return _DEFAULT_EVALUATOR.evaluate(attributes, scores, factor_set, reference)
