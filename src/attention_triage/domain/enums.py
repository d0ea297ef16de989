"""Domain enumerations for the attention/triage engine.

This module defines the closed vocabularies the engine reasons over:
- Indicator: Clinical dimensions scored by upstream questionnaire logic
- Reference: Prior normal/abnormal classification from an earlier screening step
- Attention: Ordered triage tier produced by the engine
- Suggestion: Ordered intervention recommended from the triage tier
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Indicator(StrEnum):
    """Psychological indicators consumed by the attention evaluator.

    Values are the stable codes used by the upstream scoring modules.
    """

    PSYCHOSIS = "Psychosis"
    """Psychotic tendency (positive magnitude only is used)."""

    SOCIAL_ADAPTABILITY = "SocialAdaptability"
    """Social adaptability; a negative surplus signals maladjustment."""

    DEPRESSION = "Depression"
    """Depressive tendency."""

    SENSE_OF_SECURITY = "SenseOfSecurity"
    """Sense of security; a negative surplus signals insecurity."""

    STRESS = "Stress"
    """Perceived stress."""

    ANXIETY = "Anxiety"
    """Anxious tendency."""

    OBSESSION = "Obsession"
    """Obsessive-compulsive tendency."""

    OPTIMISM = "Optimism"
    """Optimism; offsets mild depressive signals."""

    PESSIMISM = "Pessimism"
    """Pessimism."""

    UNKNOWN = "Unknown"
    """Upstream scoring could not interpret the input (e.g. unrecognised drawing)."""

    @classmethod
    def parse(cls, value: str) -> Indicator | None:
        """Resolve an indicator from its code, ignoring case.

        Unrecognised codes return None rather than UNKNOWN: UNKNOWN forces
        the attention score, so it must only be produced deliberately.

        Args:
            value: Indicator code (e.g. "Depression", "depression").

        Returns:
            The matching Indicator, or None when the code is not recognised.
        """
        needle = value.strip().lower()
        for indicator in cls:
            if indicator.value.lower() == needle:
                return indicator
        return None


class Reference(StrEnum):
    """Prior classification from an earlier screening step.

    The engine may escalate NORMAL to ABNORMAL but never the reverse.
    """

    NORMAL = "Normal"
    ABNORMAL = "Abnormal"

    @property
    def is_abnormal(self) -> bool:
        """Check whether the reference marks the subject as abnormal."""
        return self is Reference.ABNORMAL

    @classmethod
    def from_code(cls, value: str) -> Reference:
        """Resolve a reference from its code, ignoring case.

        Raises:
            ValueError: If the code names no reference.
        """
        needle = value.strip().lower()
        for reference in cls:
            if reference.value.lower() == needle:
                return reference
        raise ValueError(f"Unknown reference: {value!r}")


class Attention(IntEnum):
    """Triage tier: how urgently a subject needs follow-up.

    Members are ordered by level so tiers can be compared directly.
    """

    NO_ATTENTION = 0
    """No follow-up needed."""

    GENERAL_ATTENTION = 1
    """General attention; routine follow-up."""

    FOCUSED_ATTENTION = 2
    """Focused attention; counselling recommended."""

    SPECIAL_ATTENTION = 3
    """Special attention; psychiatric referral recommended."""

    @property
    def level(self) -> int:
        """Numeric level used for comparisons and serialisation."""
        return int(self)

    @property
    def label(self) -> str:
        """Stable CamelCase label (e.g. "FocusedAttention")."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def from_label(cls, label: str) -> Attention:
        """Resolve an attention tier from its CamelCase label.

        Raises:
            ValueError: If the label does not name a tier.
        """
        for attention in cls:
            if attention.label.lower() == label.strip().lower():
                return attention
        raise ValueError(f"Unknown attention label: {label!r}")


class Suggestion(IntEnum):
    """Recommended intervention, ordered by intensity."""

    NO_INTERVENTION = 0
    """No intervention required."""

    CHATTING_SERVICE = 1
    """Conversational support service."""

    PSYCHOLOGICAL_COUNSELING = 2
    """Referral to psychological counselling."""

    PSYCHIATRY_DEPARTMENT = 3
    """Referral to a psychiatry department."""

    @property
    def label(self) -> str:
        """Stable CamelCase label (e.g. "ChattingService")."""
        return "".join(part.capitalize() for part in self.name.split("_"))
