"""Core constants for the log-cache CLI."""

NANOSECONDS_PER_SECOND = 1_000_000_000


# Tail defaults
class TailDefaults:
    """Default values for tail sessions."""

    REQUEST_TIMEOUT = 5.0  # Seconds per read request
    POLL_INTERVAL = 1.0  # Seconds between follow-mode polls
    LINES = 10  # Envelopes requested by the first poll
    RETENTION = 5.0  # Seconds of dedup history kept behind the cursor


# Metadata defaults
class MetaDefaults:
    """Default values for the meta command."""

    REQUEST_TIMEOUT = 10.0
    NAME_BATCH_SIZE = 50  # Source ids per inventory lookup
    NOISE_WINDOW = 60.0  # Seconds of history counted for --noise


class Scopes:
    """Source scopes understood by the meta command."""

    PLATFORM = "platform"
    APPLICATIONS = "applications"
    ALL = "all"

    CHOICES = (PLATFORM, APPLICATIONS, ALL)


# Environment variables resolved into configuration
class EnvVars:
    """Environment variable names."""

    ADDR = "LOG_CACHE_ADDR"
    API_ADDR = "LOG_CACHE_API_ADDR"
    TOKEN = "LOG_CACHE_TOKEN"
    SKIP_AUTH = "LOG_CACHE_SKIP_AUTH"
