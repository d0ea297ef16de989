"""Adapt external case payloads into engine inputs.

Upstream orchestrators hand over decoded JSON. The Pydantic models here check
its structure; the `parse_*` helpers then build the immutable domain values the
evaluators consume. Structural problems raise `PayloadError`. Indicator codes
and symptom names the engine does not know are skipped rather than rejected.

Example payload::

    {
        "attributes": {"age": 25, "strict": false},
        "scores": [{"indicator": "Depression", "positive": 1.3, "negative": 0.0}],
        "factor_set": {"symptoms": [{"name": "depression", "value": 2.4}]},
        "reference": "Normal",
        "hesitating": false
    }

Instead of `hesitating`, a case may carry
`"report": {"representations": 12, "evaluation_scores": 9}`; the service then
derives the flag from those counts.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from attention_triage.domain.enums import Indicator, Reference
from attention_triage.domain.exceptions import PayloadError
from attention_triage.domain.value_objects import (
    SYMPTOM_ITEM_COUNTS,
    FactorSet,
    IndicatorScore,
    SubjectAttributes,
    SymptomFactor,
)
from attention_triage.infrastructure.logging import get_logger

logger = get_logger(__name__)


class AttributesPayload(BaseModel):
    """Subject attributes."""

    model_config = ConfigDict(extra="ignore")

    age: int = Field(ge=0)
    strict: bool = False


class ScorePayload(BaseModel):
    """One indicator score; `indicator` is the upstream code."""

    model_config = ConfigDict(extra="ignore")

    indicator: str
    positive: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    negative: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)


class SymptomFactorPayload(BaseModel):
    """Pre-aggregated symptom factor."""

    model_config = ConfigDict(extra="ignore")

    total: float = Field(allow_inf_nan=False)
    obsession: float = Field(default=0.0, allow_inf_nan=False)
    interpersonal: float = Field(default=0.0, allow_inf_nan=False)
    depression: float = Field(default=0.0, allow_inf_nan=False)
    anxiety: float = Field(default=0.0, allow_inf_nan=False)


class SymptomValuePayload(BaseModel):
    """One named SCL-90 factor mean."""

    name: str
    value: float = Field(allow_inf_nan=False)


class FactorSetPayload(BaseModel):
    """Factor set: either a pre-aggregated summary or the full symptom list."""

    model_config = ConfigDict(extra="ignore")

    symptom_factor: SymptomFactorPayload | None = None
    symptoms: list[SymptomValuePayload] | None = None

    @model_validator(mode="after")
    def require_one_form(self) -> FactorSetPayload:
        """Require exactly one of `symptom_factor` or `symptoms`."""
        if (self.symptom_factor is None) == (self.symptoms is None):
            raise ValueError("provide exactly one of 'symptom_factor' or 'symptoms'")
        return self


class ReportPayload(BaseModel):
    """Material counts of the upstream report."""

    model_config = ConfigDict(extra="ignore")

    representations: int = Field(ge=0)
    evaluation_scores: int = Field(ge=0)


class CasePayload(BaseModel):
    """Complete triage case."""

    model_config = ConfigDict(extra="ignore")

    attributes: AttributesPayload
    scores: list[ScorePayload] = Field(default_factory=list)
    factor_set: FactorSetPayload | None = None
    reference: Reference = Reference.NORMAL
    hesitating: bool | None = None
    report: ReportPayload | None = None

    @field_validator("reference", mode="before")
    @classmethod
    def normalise_reference(cls, value: Any) -> Any:
        """Accept reference codes in any case."""
        if isinstance(value, str):
            return Reference.from_code(value)
        return value

    @model_validator(mode="after")
    def require_single_hesitating_source(self) -> CasePayload:
        """Reject a case that gives both `hesitating` and `report`."""
        if self.hesitating is not None and self.report is not None:
            raise ValueError("provide at most one of 'hesitating' or 'report'")
        return self


@dataclass(frozen=True, slots=True)
class ReportCounts:
    """How much material the upstream report interpreted."""

    representations: int
    evaluation_scores: int


@dataclass(frozen=True, slots=True)
class TriageCase:
    """Engine inputs for one subject, ready for `TriageService.assess`.

    When `report` is set, the service derives the hesitating flag from it
    and `hesitating` is ignored.
    """

    attributes: SubjectAttributes
    scores: tuple[IndicatorScore, ...]
    factor_set: FactorSet | None = None
    reference: Reference = Reference.NORMAL
    hesitating: bool = False
    report: ReportCounts | None = None


def _payload_error(exc: PydanticValidationError, prefix: str = "") -> PayloadError:
    first = exc.errors()[0]
    loc = "".join(f"[{part}]" if isinstance(part, int) else f".{part}" for part in first["loc"])
    path = f"{prefix}{loc}".lstrip(".") or "<root>"
    return PayloadError(path, first["msg"])


def _validate(model: type[BaseModel], data: Any, prefix: str = "") -> Any:
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise _payload_error(exc, prefix) from exc


def _to_scores(items: Iterable[ScorePayload]) -> tuple[IndicatorScore, ...]:
    scores: list[IndicatorScore] = []
    for item in items:
        indicator = Indicator.parse(item.indicator)
        if indicator is None:
            logger.debug("Skipping unrecognised indicator", indicator=item.indicator)
            continue
        scores.append(
            IndicatorScore(
                indicator=indicator,
                positive_score=item.positive,
                negative_score=item.negative,
            )
        )
    return tuple(scores)


def _to_factor_set(payload: FactorSetPayload | None) -> FactorSet | None:
    if payload is None:
        return None
    if payload.symptom_factor is not None:
        summary = payload.symptom_factor
        return FactorSet(
            symptom_factor=SymptomFactor(
                total=summary.total,
                obsession=summary.obsession,
                interpersonal=summary.interpersonal,
                depression=summary.depression,
                anxiety=summary.anxiety,
            )
        )
    symptoms: dict[str, float] = {}
    for item in payload.symptoms or ():
        name = item.name.strip().lower()
        if name not in SYMPTOM_ITEM_COUNTS:
            logger.debug("Skipping unrecognised symptom", symptom=item.name)
            continue
        symptoms[name] = item.value
    return FactorSet(symptom_factor=SymptomFactor.from_symptoms(symptoms))


def parse_indicator_scores(items: Iterable[Mapping[str, Any]]) -> tuple[IndicatorScore, ...]:
    """Adapt a list of score mappings, skipping unrecognised indicators.

    Args:
        items: Mappings with "indicator", "positive" and "negative" keys.

    Returns:
        Indicator scores in input order.

    Raises:
        PayloadError: If an entry is malformed.
    """
    validated = [
        _validate(ScorePayload, item, prefix=f"scores[{index}]")
        for index, item in enumerate(items)
    ]
    return _to_scores(validated)


def parse_factor_set(data: Mapping[str, Any] | None) -> FactorSet | None:
    """Adapt a factor-set mapping; None means no factor set.

    Raises:
        PayloadError: If the mapping is malformed.
    """
    if data is None:
        return None
    return _to_factor_set(_validate(FactorSetPayload, data, prefix="factor_set"))


def parse_case(data: Mapping[str, Any]) -> TriageCase:
    """Adapt a complete case payload.

    Args:
        data: Decoded case payload (see module docstring).

    Returns:
        The triage case.

    Raises:
        PayloadError: If the payload is malformed.
    """
    payload: CasePayload = _validate(CasePayload, data)
    report = None
    if payload.report is not None:
        report = ReportCounts(
            representations=payload.report.representations,
            evaluation_scores=payload.report.evaluation_scores,
        )
    return TriageCase(
        attributes=SubjectAttributes(
            age=payload.attributes.age,
            strict=payload.attributes.strict,
        ),
        scores=_to_scores(payload.scores),
        factor_set=_to_factor_set(payload.factor_set),
        reference=payload.reference,
        hesitating=bool(payload.hesitating),
        report=report,
    )
