"""Input/output and logging utilities for the log-cache CLI."""

from .envelope_decoder import EnvelopeDecoder
from .logger import get_logger, setup_logging
from .meta_decoder import decode_meta

__all__ = [
    "EnvelopeDecoder",
    "decode_meta",
    "get_logger",
    "setup_logging",
]
