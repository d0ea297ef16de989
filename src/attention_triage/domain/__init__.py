"""Domain models for attention/triage scoring.

This module provides the core domain layer, containing pure Python objects
with no external dependencies.

Modules:
    enums: Domain enumerations (Indicator, Reference, Attention, Suggestion)
    value_objects: Immutable value types (IndicatorScore, FactorSet, EvaluationResult, etc.)
    exceptions: Domain-specific exceptions

Example:
    >>> from attention_triage.domain import Attention
    >>> Attention.FOCUSED_ATTENTION > Attention.GENERAL_ATTENTION
    True
"""

from attention_triage.domain.enums import Attention, Indicator, Reference, Suggestion
from attention_triage.domain.exceptions import DomainError, PayloadError, ValidationError
from attention_triage.domain.value_objects import (
    ADDITIONAL_SCALE_SCL90,
    EvaluationResult,
    FactorSet,
    IndicatorScore,
    RuleFired,
    SubjectAttributes,
    SymptomFactor,
)

__all__ = [
    "ADDITIONAL_SCALE_SCL90",
    "Attention",
    "DomainError",
    "EvaluationResult",
    "FactorSet",
    "Indicator",
    "IndicatorScore",
    "PayloadError",
    "Reference",
    "RuleFired",
    "SubjectAttributes",
    "Suggestion",
    "SymptomFactor",
    "ValidationError",
]
