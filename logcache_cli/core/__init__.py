"""Core business logic for the log-cache CLI."""

from .cursor import Cursor
from .envelopes import *
from .exceptions import *
from .tail_engine import TailEngine, TailState

__all__ = [
    # From cursor
    'Cursor',

    # From tail_engine
    'TailEngine',
    'TailState',

    # From envelopes
    'Envelope',
    'Log',
    'LogLevel',
    'Counter',
    'Gauge',
    'GaugeValue',
    'Timer',
    'Event',
    'Unknown',

    # From exceptions
    'LogCacheError',
    'InvalidArgumentsError',
    'ConfigurationError',
    'UnreachableError',
    'UnexpectedStatusError',
    'RequestTimeoutError',
    'MalformedResponseError',
    'SinkWriteError',
]
