"""Domain-specific exceptions for the attention/triage engine.

The evaluators themselves never raise; these exceptions belong to the
boundary where external payloads are adapted into engine inputs.

    DomainError (base)
    └── ValidationError
        └── PayloadError
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain errors.

    All domain-specific exceptions should inherit from this class
    to allow for catching all domain errors with a single except clause.
    """


class ValidationError(DomainError):
    """Raised when caller-supplied input fails domain validation."""


class PayloadError(ValidationError):
    """Raised when an external case payload cannot be adapted.

    Carries the dotted path of the offending field so callers can
    report it without echoing the payload itself.
    """

    def __init__(self, path: str, message: str) -> None:
        """Initialize with the offending field path and error message.

        Args:
            path: Dotted path of the field (e.g. "scores[2].positive").
            message: Description of what went wrong.
        """
        self.path = path
        super().__init__(f"{path}: {message}")
