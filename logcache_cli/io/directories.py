"""XDG Base Directory support for the log-cache CLI."""

import os
from pathlib import Path


def get_config_dir() -> Path:
    """Get the configuration directory.

    Returns ~/.config/logcache/ by default, or respects $XDG_CONFIG_HOME if
    set. The directory is not created; nothing is ever written there.

    Returns:
        Path to the configuration directory
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home) / "logcache"
    return Path.home() / ".config" / "logcache"


def get_config_file() -> Path:
    """Get the default configuration file path."""
    return get_config_dir() / "config.yaml"
