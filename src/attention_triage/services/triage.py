"""Triage service: attention evaluation followed by suggestion.

Wraps the two pure evaluators with the orchestration a report builder needs:
a privacy-safe case fingerprint bound to the logging context, optional
per-rule trace logging, the hesitating heuristic, and manual attention
overrides that recompute the suggestion.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from attention_triage.domain.enums import Reference
from attention_triage.engine.attention import AttentionEvaluator
from attention_triage.engine.suggestion import evaluate_suggestion
from attention_triage.infrastructure.hashing import stable_json_hash
from attention_triage.infrastructure.logging import bound_context, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from attention_triage.config import TriageSettings
    from attention_triage.domain.enums import Attention, Suggestion
    from attention_triage.domain.value_objects import (
        EvaluationResult,
        FactorSet,
        IndicatorScore,
        SubjectAttributes,
    )
    from attention_triage.services.payload import TriageCase

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TriageOutcome:
    """Attention result plus the derived suggestion."""

    result: EvaluationResult
    suggestion: Suggestion
    inputs_hash: str
    hesitating: bool = False
    overridden: bool = False

    @property
    def attention(self) -> Attention:
        """Final attention tier."""
        return self.result.attention

    @property
    def reference(self) -> Reference:
        """Final (possibly escalated) reference."""
        return self.result.reference

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Serialise to plain data for reporting layers.

        Args:
            include_trace: Include the fired-rule trace.

        Returns:
            JSON-serialisable dictionary.
        """
        data: dict[str, Any] = {
            "attention": self.result.attention.label,
            "attention_level": self.result.attention.level,
            "reference": self.result.reference.value,
            "additional_scale": self.result.additional_scale,
            "score": self.result.score,
            "suggestion": self.suggestion.label,
            "hesitating": self.hesitating,
            "overridden": self.overridden,
            "inputs_hash": self.inputs_hash,
        }
        if include_trace:
            data["trace"] = [rule.describe() for rule in self.result.trace]
        return data


def is_hesitating(num_representations: int, num_scores: int, settings: TriageSettings) -> bool:
    """Decide whether a report had too little material to be confident.

    Args:
        num_representations: Interpreted drawing/answer representations.
        num_scores: Evaluation scores produced upstream.
        settings: Triage settings holding both limits.

    Returns:
        True when either count is at or below its limit.
    """
    return (
        num_representations <= settings.hesitating_max_representations
        or num_scores <= settings.hesitating_max_scores
    )


def fingerprint_inputs(
    attributes: SubjectAttributes,
    scores: Iterable[IndicatorScore],
    factor_set: FactorSet | None,
    reference: Reference,
    hesitating: bool,
) -> str:
    """Return a short stable hash identifying one set of triage inputs."""
    factor = factor_set.symptom_factor if factor_set is not None else None
    payload = {
        "age": attributes.age,
        "strict": attributes.strict,
        "scores": [
            [score.indicator.value, score.positive_score, score.negative_score] for score in scores
        ],
        "factor": (
            None
            if factor is None
            else [
                factor.total,
                factor.obsession,
                factor.interpersonal,
                factor.depression,
                factor.anxiety,
            ]
        ),
        "reference": reference.value,
        "hesitating": hesitating,
    }
    return stable_json_hash(payload)


class TriageService:
    """Runs attention evaluation and suggestion for one subject at a time."""

    def __init__(
        self,
        settings: TriageSettings,
        evaluator: AttentionEvaluator | None = None,
    ) -> None:
        """Initialize triage service.

        Args:
            settings: Triage configuration.
            evaluator: Attention evaluator; defaults to the canonical rule set.
        """
        self._settings = settings
        self._evaluator = evaluator or AttentionEvaluator()

    def assess(
        self,
        attributes: SubjectAttributes,
        scores: Iterable[IndicatorScore],
        factor_set: FactorSet | None = None,
        reference: Reference = Reference.NORMAL,
        hesitating: bool = False,
    ) -> TriageOutcome:
        """Evaluate attention and derive the suggestion.

        Args:
            attributes: Subject age and strict-mode flag.
            scores: Indicator scores.
            factor_set: Optional symptom-inventory aggregate.
            reference: Prior screening classification.
            hesitating: Whether the upstream report is hesitating.

        Returns:
            The triage outcome.
        """
        scores = tuple(scores)
        inputs_hash = fingerprint_inputs(attributes, scores, factor_set, reference, hesitating)

        with bound_context(inputs_hash=inputs_hash):
            result = self._evaluator.evaluate(attributes, scores, factor_set, reference)
            suggestion = evaluate_suggestion(result.attention, result.reference, hesitating)

            if self._settings.log_trace:
                for rule in result.trace:
                    logger.debug("Rule fired", rule=rule.describe())

            if result.reference is not reference:
                logger.info("Reference escalated", reference=result.reference.value)

            logger.info(
                "Triage assessed",
                attention=result.attention.label,
                suggestion=suggestion.label,
                additional_scale=result.additional_scale or None,
                hesitating=hesitating,
            )

        return TriageOutcome(
            result=result,
            suggestion=suggestion,
            inputs_hash=inputs_hash,
            hesitating=hesitating,
        )

    def assess_case(self, case: TriageCase) -> TriageOutcome:
        """Assess an adapted case payload.

        Report counts, when present, decide the hesitating flag.
        """
        hesitating = case.hesitating
        if case.report is not None:
            hesitating = is_hesitating(
                case.report.representations,
                case.report.evaluation_scores,
                self._settings,
            )
        return self.assess(
            case.attributes,
            case.scores,
            factor_set=case.factor_set,
            reference=case.reference,
            hesitating=hesitating,
        )

    def overlay_attention(
        self,
        outcome: TriageOutcome,
        attention: Attention,
        hesitating: bool | None = None,
    ) -> TriageOutcome:
        """Override the attention tier and recompute the suggestion.

        Reference and additional scale are kept from the original outcome.

        Args:
            outcome: Outcome to override.
            attention: Tier chosen by the reviewer.
            hesitating: New hesitating flag; defaults to the outcome's.

        Returns:
            A new outcome marked as overridden.
        """
        hesitating = outcome.hesitating if hesitating is None else hesitating
        result = replace(outcome.result, attention=attention)
        suggestion = evaluate_suggestion(attention, result.reference, hesitating)

        with bound_context(inputs_hash=outcome.inputs_hash):
            logger.info(
                "Attention overridden",
                previous=outcome.attention.label,
                attention=attention.label,
                suggestion=suggestion.label,
            )

        return replace(
            outcome,
            result=result,
            suggestion=suggestion,
            hesitating=hesitating,
            overridden=True,
        )
