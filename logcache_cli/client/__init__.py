"""HTTP clients for log-cache and the Cloud Controller."""

from .cloud_controller import CloudControllerClient
from .log_cache import LogCacheClient

__all__ = ["CloudControllerClient", "LogCacheClient"]
