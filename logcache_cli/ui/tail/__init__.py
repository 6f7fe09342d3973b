"""Tail display package."""

from .display import TailDisplay
from .formatters import TailFormatter, format_duration

__all__ = ["TailDisplay", "TailFormatter", "format_duration"]
