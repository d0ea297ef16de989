"""Audit metrics for attention tiers."""

from attention_triage.metrics.tier_agreement import TierAgreementMetrics, compute_tier_agreement

__all__ = ["TierAgreementMetrics", "compute_tier_agreement"]
