"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os

import pytest

# Set TESTING mode BEFORE any app imports to prevent .env file loading.
os.environ["TESTING"] = "1"

# Clear environment variables BEFORE any imports that might use Pydantic Settings
# This runs at conftest import time, before test collection
_ENV_VARS_TO_CLEAR = [
    "TRIAGE_LOG_TRACE",
    "TRIAGE_HESITATING_MAX_REPRESENTATIONS",
    "TRIAGE_HESITATING_MAX_SCORES",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_INCLUDE_TIMESTAMP",
    "LOG_INCLUDE_CALLER",
]

for _var in _ENV_VARS_TO_CLEAR:
    os.environ.pop(_var, None)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear environment variables that might be set by .env file.

    This ensures tests use code defaults, not local developer overrides.
    Also clears any cached settings to force re-read of defaults.
    """
    for var in _ENV_VARS_TO_CLEAR:
        monkeypatch.delenv(var, raising=False)

    # Clear the settings cache to ensure fresh reads
    from attention_triage.config import get_settings  # noqa: PLC0415

    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_log_context() -> None:
    """Drop any structlog context left behind by a previous test."""
    from attention_triage.infrastructure.logging import clear_context  # noqa: PLC0415

    clear_context()


@pytest.fixture
def sample_case_payload() -> dict[str, object]:
    """Return a decoded case payload as an upstream orchestrator would send it."""
    return {
        "attributes": {"age": 30, "strict": False},
        "scores": [
            {"indicator": "Depression", "positive": 1.5, "negative": 0.2},
            {"indicator": "Anxiety", "positive": 1.8, "negative": 0.2},
        ],
        "reference": "Normal",
        "hesitating": False,
    }
