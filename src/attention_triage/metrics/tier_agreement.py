"""Agreement between engine attention tiers and clinician-assigned tiers.

Used to audit a rule revision against a labelled review set. Metrics are
coverage-aware: a `None` prediction is an abstention and is excluded from
everything except `n_total` and `coverage`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from attention_triage.domain.enums import Attention

if TYPE_CHECKING:
    from collections.abc import Sequence

N_TIERS = len(Attention)


@dataclass(frozen=True, slots=True)
class TierAgreementMetrics:
    """Coverage-aware agreement metrics for attention tiers."""

    n_total: int
    n_predicted: int
    coverage: float

    exact_agreement: float | None
    within_one_agreement: float | None
    under_triage_rate: float | None
    over_triage_rate: float | None
    quadratic_weighted_kappa: float | None

    confusion_matrix: list[list[int]] | None
    """Rows are actual tiers, columns predicted tiers, both by level."""


def _quadratic_weighted_kappa(confusion: np.ndarray) -> float | None:
    n = float(confusion.sum())
    if n == 0:
        return None

    levels = np.arange(N_TIERS, dtype=float)
    weights = (levels[:, None] - levels[None, :]) ** 2 / float((N_TIERS - 1) ** 2)

    expected = np.outer(confusion.sum(axis=1), confusion.sum(axis=0)) / n
    denominator = float(np.sum(weights * expected))
    if denominator == 0.0:
        return None
    return 1.0 - float(np.sum(weights * confusion)) / denominator


def compute_tier_agreement(
    *,
    predicted: Sequence[Attention | None],
    actual: Sequence[Attention],
) -> TierAgreementMetrics:
    """Compare predicted attention tiers against reference tiers.

    Under-triage counts predictions below the reference tier; over-triage
    counts predictions above it.

    Raises:
        ValueError: If `predicted` and `actual` differ in length.
    """
    if len(predicted) != len(actual):
        raise ValueError("predicted and actual must have the same length")

    n_total = len(actual)
    pairs = [(p, a) for p, a in zip(predicted, actual, strict=True) if p is not None]
    n_predicted = len(pairs)
    coverage = (n_predicted / n_total) if n_total else 0.0

    if n_predicted == 0:
        return TierAgreementMetrics(
            n_total=n_total,
            n_predicted=0,
            coverage=0.0,
            exact_agreement=None,
            within_one_agreement=None,
            under_triage_rate=None,
            over_triage_rate=None,
            quadratic_weighted_kappa=None,
            confusion_matrix=None,
        )

    pred_arr = np.asarray([int(p) for p, _ in pairs], dtype=int)
    actual_arr = np.asarray([int(a) for _, a in pairs], dtype=int)
    diffs = pred_arr - actual_arr

    confusion = np.zeros((N_TIERS, N_TIERS), dtype=int)
    np.add.at(confusion, (actual_arr, pred_arr), 1)

    return TierAgreementMetrics(
        n_total=n_total,
        n_predicted=n_predicted,
        coverage=coverage,
        exact_agreement=float(np.mean(diffs == 0)),
        within_one_agreement=float(np.mean(np.abs(diffs) <= 1)),
        under_triage_rate=float(np.mean(diffs < 0)),
        over_triage_rate=float(np.mean(diffs > 0)),
        quadratic_weighted_kappa=_quadratic_weighted_kappa(confusion),
        confusion_matrix=confusion.tolist(),
    )
