"""log-cache CLI - tail envelopes and inspect cache metadata"""

__version__ = "0.1.0"

# Client exports
from .client import CloudControllerClient, LogCacheClient

# Config exports
from .config import Config

# Core exports
from .core import Cursor, Envelope, TailEngine

# IO exports
from .io import EnvelopeDecoder, get_logger

# UI exports
from .ui import MetaDisplay, TailDisplay, TailFormatter

__all__ = [
    # Version
    "__version__",
    # Core
    "Cursor",
    "Envelope",
    "TailEngine",
    # Clients
    "CloudControllerClient",
    "LogCacheClient",
    # Config
    "Config",
    # IO
    "EnvelopeDecoder",
    "get_logger",
    # UI
    "MetaDisplay",
    "TailDisplay",
    "TailFormatter",
]
