"""Attention Triage: deterministic attention/triage scoring for psychological screening."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("attention-triage")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
__all__ = ["__version__"]
