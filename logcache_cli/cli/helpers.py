"""Shared helper functions for CLI commands."""

import asyncio
import signal
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..config import Config
from ..io.logger import get_logger, setup_logging

logger = get_logger("cli")


def load_config(
    config_path: Optional[Path] = None,
    debug: bool = False,
    overrides: Optional[Dict[str, Any]] = None,
) -> Config:
    """Load configuration and apply command-line overrides.

    Args:
        config_path: Optional explicit YAML file
        debug: Force DEBUG logging
        overrides: Dot-notation keys set from flags; None values are skipped

    Returns:
        Validated configuration
    """
    config = Config(config_path=config_path)

    for key_path, value in (overrides or {}).items():
        if value is not None:
            config.set(key_path, value)

    level = "DEBUG" if debug else config.get("logging.level", "WARNING")
    setup_logging(level, config.get("logging.file"))
    return config


def resolve_headers(requested: Optional[bool], stream) -> bool:
    """Show headers when asked to, otherwise only on a terminal."""
    if requested is not None:
        return requested
    return is_terminal(stream)


def is_terminal(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def install_stop_handler(stop: Callable[[], None]) -> bool:
    """Route SIGINT to ``stop`` on the running loop.

    Returns:
        True if the handler was installed
    """
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, stop)
    except (NotImplementedError, RuntimeError, ValueError) as e:
        # Windows event loops and non-main threads cannot install handlers
        logger.debug(f"SIGINT handler not installed: {e}")
        return False
    return True


def remove_stop_handler() -> None:
    loop = asyncio.get_running_loop()
    try:
        loop.remove_signal_handler(signal.SIGINT)
    except (NotImplementedError, RuntimeError, ValueError) as e:
        logger.debug(f"SIGINT handler not removed: {e}")
