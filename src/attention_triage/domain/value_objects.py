"""Immutable value objects for the attention/triage engine.

Value objects are immutable (frozen) dataclasses that represent engine inputs
and outputs. They are equal if all their attributes are equal.

All value objects use:
- frozen=True: Makes instances immutable
- slots=True: Optimizes memory usage
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

    from attention_triage.domain.enums import Attention, Indicator, Reference

ADDITIONAL_SCALE_SCL90 = "SCL-90"
"""Follow-up questionnaire recommended for elevated or abnormal cases."""

SYMPTOM_ITEM_COUNTS: Final[dict[str, int]] = {
    "somatization": 12,
    "obsession": 10,
    "interpersonal": 9,
    "depression": 13,
    "anxiety": 10,
    "hostile": 6,
    "horror": 7,
    "paranoid": 6,
    "psychosis": 10,
    "sleepdiet": 7,
}
"""SCL-90 factors (lowercase names) and their item counts."""


@dataclass(frozen=True, slots=True)
class IndicatorScore:
    """Positive/negative magnitude pair for one indicator."""

    indicator: Indicator
    """The indicator being scored."""

    positive_score: float = 0.0
    """Magnitude of evidence for the indicator."""

    negative_score: float = 0.0
    """Magnitude of evidence against the indicator."""

    def __post_init__(self) -> None:
        """Validate magnitudes.

        Raises:
            ValueError: If either magnitude is negative.
        """
        if self.positive_score < 0:
            raise ValueError(f"positive_score must be >= 0, got {self.positive_score}")
        if self.negative_score < 0:
            raise ValueError(f"negative_score must be >= 0, got {self.negative_score}")

    @property
    def net_positive(self) -> float:
        """Positive minus negative magnitude."""
        return self.positive_score - self.negative_score

    @property
    def net_negative(self) -> float:
        """Negative minus positive magnitude."""
        return self.negative_score - self.positive_score


@dataclass(frozen=True, slots=True)
class SubjectAttributes:
    """Attributes of the assessed subject."""

    age: int
    """Age in whole years."""

    strict: bool = False
    """Strict mode lets optimism offset a mild depression signal."""

    def __post_init__(self) -> None:
        """Validate attributes.

        Raises:
            ValueError: If age is negative.
        """
        if self.age < 0:
            raise ValueError(f"age must be >= 0, got {self.age}")


@dataclass(frozen=True, slots=True)
class SymptomFactor:
    """Symptom-inventory aggregates used as a corrective signal.

    Factor values are mean item scores (1-5 scale); `total` is the weighted
    inventory total.
    """

    total: float
    obsession: float = 0.0
    interpersonal: float = 0.0
    depression: float = 0.0
    anxiety: float = 0.0

    @property
    def has_marked_obsession_or_interpersonal(self) -> bool:
        """Check for a marked (> 3) obsession or interpersonal factor."""
        return self.obsession > 3 or self.interpersonal > 3

    @classmethod
    def from_symptoms(cls, symptoms: Mapping[str, float]) -> SymptomFactor:
        """Build a symptom factor from the full list of SCL-90 factor means.

        The total is the item-count weighted sum of the factor means,
        truncated to an integer. Factor names match case-insensitively;
        factors absent from `symptoms` count as 0.

        Args:
            symptoms: Factor name to mean item score (e.g. {"depression": 2.4}).

        Returns:
            SymptomFactor with the weighted total and the four factors the
            engine reads.
        """
        means = {name.strip().lower(): value for name, value in symptoms.items()}
        total = int(
            sum(weight * means.get(name, 0.0) for name, weight in SYMPTOM_ITEM_COUNTS.items())
        )
        return cls(
            total=total,
            obsession=means.get("obsession", 0.0),
            interpersonal=means.get("interpersonal", 0.0),
            depression=means.get("depression", 0.0),
            anxiety=means.get("anxiety", 0.0),
        )


@dataclass(frozen=True, slots=True)
class FactorSet:
    """Secondary aggregate derived from a full symptom inventory."""

    symptom_factor: SymptomFactor


@dataclass(frozen=True, slots=True)
class RuleFired:
    """One entry of the evaluation trace.

    Records which rule fired and the accumulator value after it applied.
    """

    phase: str
    """Phase that evaluated the rule (e.g. "indicator", "age")."""

    rule: str
    """Short rule identifier (e.g. "depression>=1.2")."""

    delta: int | None
    """Score change, or None when the rule sets the score or only flags."""

    score: int
    """Accumulator value after the rule applied."""

    def describe(self) -> str:
        """Render the record as a single human-readable line."""
        if self.delta is None:
            return f"[{self.phase}] {self.rule} -> {self.score}"
        return f"[{self.phase}] {self.rule} {self.delta:+d} -> {self.score}"


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Outcome of the attention evaluator."""

    attention: Attention
    """Triage tier."""

    reference: Reference
    """Input reference, possibly escalated to ABNORMAL."""

    additional_scale: str = ""
    """Follow-up questionnaire name, or "" when none is needed."""

    score: int = 0
    """Final accumulator value the tier was derived from."""

    trace: tuple[RuleFired, ...] = ()
    """Ordered record of fired rules (diagnostic only)."""

    @property
    def needs_additional_scale(self) -> bool:
        """Check whether a follow-up questionnaire is recommended."""
        return bool(self.additional_scale)
