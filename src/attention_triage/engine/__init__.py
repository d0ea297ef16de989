"""Attention/triage scoring engine.

Public API:
- AttentionEvaluator / evaluate_attention: indicator scores -> attention tier
- evaluate_suggestion: attention tier -> recommended intervention
- CORRECTION_STEPS: ordered correction steps applied after accumulation
"""

from attention_triage.engine.attention import AttentionEvaluator, evaluate_attention
from attention_triage.engine.corrections import CORRECTION_STEPS, CorrectionStep
from attention_triage.engine.suggestion import evaluate_suggestion

__all__ = [
    "CORRECTION_STEPS",
    "AttentionEvaluator",
    "CorrectionStep",
    "evaluate_attention",
    "evaluate_suggestion",
]
