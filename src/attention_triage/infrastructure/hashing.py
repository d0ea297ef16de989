"""Stable hashing helpers for privacy-safe audit logging.

Short SHA-256 prefixes let logs and CLI output correlate a triage case
without recording the subject's raw indicator scores.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Final

HASH_PREFIX_LENGTH: Final[int] = 12


def stable_text_hash(text: str) -> str:
    """Return a stable short hash for a text payload (no raw text)."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:HASH_PREFIX_LENGTH]


def stable_json_hash(payload: Any) -> str:
    """Return a stable short hash for a JSON-serialisable payload.

    Keys are sorted and separators fixed, so logically equal payloads hash
    equally regardless of key order.
    """
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return stable_text_hash(canonical)
