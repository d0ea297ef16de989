"""Business logic services.

Public API:
- TriageService: Attention evaluation followed by suggestion, with audit logging
- TriageOutcome: Result of a triage assessment
- TriageCase: Engine inputs adapted from an external payload
- parse_case: Adapt a decoded case payload into a TriageCase
- is_hesitating: Decide whether a report had too little material to be confident
"""

from attention_triage.services.payload import (
    TriageCase,
    parse_case,
    parse_factor_set,
    parse_indicator_scores,
)
from attention_triage.services.triage import TriageOutcome, TriageService, is_hesitating

__all__ = [
    "TriageCase",
    "TriageOutcome",
    "TriageService",
    "is_hesitating",
    "parse_case",
    "parse_factor_set",
    "parse_indicator_scores",
]
