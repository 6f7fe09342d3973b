"""User interface and display components for the log-cache CLI."""

from .meta_display import MetaDisplay
from .tail import TailDisplay, TailFormatter

__all__ = [
    "MetaDisplay",
    "TailDisplay",
    "TailFormatter",
]
