"""Tests for case payload adaptation."""

from __future__ import annotations

import json
from typing import Any

import pytest

from attention_triage.config import LoggingSettings
from attention_triage.domain.enums import Indicator, Reference
from attention_triage.domain.exceptions import PayloadError
from attention_triage.domain.value_objects import IndicatorScore, SymptomFactor
from attention_triage.infrastructure.logging import setup_logging
from attention_triage.services.payload import (
    ReportCounts,
    parse_case,
    parse_factor_set,
    parse_indicator_scores,
)

pytestmark = pytest.mark.unit


class TestParseIndicatorScores:
    """Tests for score list adaptation."""

    def test_parses_in_order(self) -> None:
        """Entries become IndicatorScores in input order."""
        scores = parse_indicator_scores(
            [
                {"indicator": "Psychosis", "positive": 0.95},
                {"indicator": "socialadaptability", "positive": 0.1, "negative": 0.8},
            ]
        )
        assert scores == (
            IndicatorScore(Indicator.PSYCHOSIS, positive_score=0.95),
            IndicatorScore(Indicator.SOCIAL_ADAPTABILITY, positive_score=0.1, negative_score=0.8),
        )

    def test_skips_unrecognised_indicators(self) -> None:
        """Unknown codes are dropped, not mapped to UNKNOWN."""
        scores = parse_indicator_scores(
            [{"indicator": "Hostility", "positive": 2.0}, {"indicator": "Unknown"}]
        )
        assert scores == (IndicatorScore(Indicator.UNKNOWN),)

    def test_negative_magnitude_reports_path(self) -> None:
        """Negative magnitudes are rejected with the offending path."""
        with pytest.raises(PayloadError) as exc_info:
            parse_indicator_scores(
                [{"indicator": "Stress", "positive": 0.6}, {"indicator": "Anxiety", "positive": -1}]
            )
        assert exc_info.value.path == "scores[1].positive"

    def test_missing_indicator(self) -> None:
        """An entry without an indicator code is malformed."""
        with pytest.raises(PayloadError) as exc_info:
            parse_indicator_scores([{"positive": 0.6}])
        assert exc_info.value.path == "scores[0].indicator"

    def test_non_finite_magnitude(self) -> None:
        """NaN is not a valid magnitude."""
        with pytest.raises(PayloadError):
            parse_indicator_scores([{"indicator": "Stress", "positive": float("nan")}])


class TestParseFactorSet:
    """Tests for factor set adaptation."""

    def test_none_means_absent(self) -> None:
        """No mapping means no factor set."""
        assert parse_factor_set(None) is None

    def test_summary_form(self) -> None:
        """A pre-aggregated summary is used as given."""
        factor_set = parse_factor_set(
            {"symptom_factor": {"total": 175, "obsession": 3.2, "anxiety": 2.5}}
        )
        assert factor_set is not None
        assert factor_set.symptom_factor == SymptomFactor(total=175, obsession=3.2, anxiety=2.5)

    def test_symptom_list_form(self) -> None:
        """A symptom list is aggregated into a weighted total."""
        factor_set = parse_factor_set(
            {
                "symptoms": [
                    {"name": "depression", "value": 2.0},
                    {"name": "anxiety", "value": 3.0},
                    {"name": "hostile", "value": 1.0},
                ]
            }
        )
        assert factor_set is not None
        assert factor_set.symptom_factor.total == 62
        assert factor_set.symptom_factor.depression == 2.0
        assert factor_set.symptom_factor.anxiety == 3.0

    def test_symptom_names_ignore_case(self) -> None:
        """Capitalised names count like lowercase ones."""
        factor_set = parse_factor_set(
            {
                "symptoms": [
                    {"name": "Depression", "value": 3.0},
                    {"name": "sleepdiet", "value": 1.0},
                ]
            }
        )
        assert factor_set is not None
        assert factor_set.symptom_factor.total == 46
        assert factor_set.symptom_factor.depression == 3.0

    def test_unrecognised_symptom_is_skipped_and_logged(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Unknown names contribute nothing and leave a debug record."""
        setup_logging(LoggingSettings(level="DEBUG", format="json", include_caller=False))
        factor_set = parse_factor_set(
            {
                "symptoms": [
                    {"name": "depression", "value": 2.0},
                    {"name": "phobia", "value": 4.0},
                ]
            }
        )
        assert factor_set is not None
        assert factor_set.symptom_factor.total == 26

        logs = [json.loads(line) for line in capsys.readouterr().out.strip().splitlines()]
        skipped = [entry for entry in logs if entry["event"] == "Skipping unrecognised symptom"]
        assert [entry["symptom"] for entry in skipped] == ["phobia"]

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"symptom_factor": {"total": 100}, "symptoms": []},
        ],
    )
    def test_requires_exactly_one_form(self, data: dict[str, Any]) -> None:
        """Both or neither form is ambiguous."""
        with pytest.raises(PayloadError, match="exactly one"):
            parse_factor_set(data)

    def test_error_path_is_prefixed(self) -> None:
        """Nested errors carry the factor_set prefix."""
        with pytest.raises(PayloadError) as exc_info:
            parse_factor_set({"symptom_factor": {"obsession": 2.0}})
        assert exc_info.value.path == "factor_set.symptom_factor.total"


class TestParseCase:
    """Tests for whole-case adaptation."""

    def test_full_case(self, sample_case_payload: dict[str, object]) -> None:
        """A complete payload becomes a TriageCase."""
        case = parse_case(sample_case_payload)
        assert case.attributes.age == 30
        assert not case.attributes.strict
        assert [score.indicator for score in case.scores] == [
            Indicator.DEPRESSION,
            Indicator.ANXIETY,
        ]
        assert case.factor_set is None
        assert case.reference is Reference.NORMAL
        assert not case.hesitating

    def test_defaults(self) -> None:
        """Only attributes are required."""
        case = parse_case({"attributes": {"age": 12}})
        assert case.scores == ()
        assert case.reference is Reference.NORMAL

    def test_abnormal_reference_and_factor_set(self) -> None:
        """Reference and factor set are carried through."""
        case = parse_case(
            {
                "attributes": {"age": 16, "strict": True},
                "reference": "Abnormal",
                "factor_set": {"symptom_factor": {"total": 190}},
                "hesitating": True,
            }
        )
        assert case.attributes.strict
        assert case.reference is Reference.ABNORMAL
        assert case.factor_set is not None
        assert case.factor_set.symptom_factor.total == 190
        assert case.hesitating

    def test_missing_attributes(self) -> None:
        """Attributes are required."""
        with pytest.raises(PayloadError) as exc_info:
            parse_case({"scores": []})
        assert exc_info.value.path == "attributes"

    def test_negative_age(self) -> None:
        """Negative ages are rejected at the boundary."""
        with pytest.raises(PayloadError) as exc_info:
            parse_case({"attributes": {"age": -3}})
        assert exc_info.value.path == "attributes.age"

    def test_invalid_reference(self) -> None:
        """Only Normal and Abnormal are valid references."""
        with pytest.raises(PayloadError) as exc_info:
            parse_case({"attributes": {"age": 20}, "reference": "Borderline"})
        assert exc_info.value.path == "reference"

    @pytest.mark.parametrize("code", ["normal", "ABNORMAL", "Abnormal"])
    def test_reference_ignores_case(self, code: str) -> None:
        """Reference codes match regardless of case, like indicator codes."""
        case = parse_case({"attributes": {"age": 20}, "reference": code})
        assert case.reference is Reference.from_code(code)

    def test_report_counts(self) -> None:
        """Report counts are carried through for the service to judge."""
        case = parse_case(
            {
                "attributes": {"age": 20},
                "report": {"representations": 12, "evaluation_scores": 4},
            }
        )
        assert case.report == ReportCounts(representations=12, evaluation_scores=4)
        assert not case.hesitating

    def test_hesitating_and_report_are_exclusive(self) -> None:
        """A case gives the flag or the counts, not both."""
        with pytest.raises(PayloadError, match="at most one"):
            parse_case(
                {
                    "attributes": {"age": 20},
                    "hesitating": True,
                    "report": {"representations": 12, "evaluation_scores": 9},
                }
            )

    def test_negative_report_count(self) -> None:
        """Counts must be non-negative."""
        with pytest.raises(PayloadError) as exc_info:
            parse_case(
                {
                    "attributes": {"age": 20},
                    "report": {"representations": -1, "evaluation_scores": 9},
                }
            )
        assert exc_info.value.path == "report.representations"

    def test_non_mapping_payload(self) -> None:
        """A payload that is not an object reports the root."""
        with pytest.raises(PayloadError) as exc_info:
            parse_case([1, 2, 3])  # type: ignore[arg-type]
        assert exc_info.value.path == "<root>"
