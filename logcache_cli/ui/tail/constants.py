"""Constants for tail display."""

from ...core.envelopes import Counter, Event, Gauge, Log, LogLevel, Timer, Unknown

# Nord color palette
NORD_GREEN = "#a3be8c"
NORD_RED = "#bf616a"
NORD_BLUE = "#88c0d0"
NORD_CYAN = "#8fbcbb"
NORD_YELLOW = "#ebcb8b"
NORD_ORANGE = "#d08770"
NORD_PURPLE = "#b48ead"
NORD_GRAY = "#4c566a"
NORD_LIGHT = "#eceff4"

# Timestamps render like 2017-07-14T02:40:00.12+0000
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
CENTISECONDS_DIVISOR = 10_000_000

HEADER_TEMPLATE = "Retrieving logs for {source_id}..."

VARIANT_COLORS = {
    Log: NORD_LIGHT,
    Counter: NORD_CYAN,
    Gauge: NORD_BLUE,
    Timer: NORD_PURPLE,
    Event: NORD_YELLOW,
    Unknown: NORD_GRAY,
}

LEVEL_COLORS = {
    LogLevel.OUT: NORD_GREEN,
    LogLevel.ERR: NORD_RED,
}
