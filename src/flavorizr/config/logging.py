"""
Centralized logging configuration.

bootstrap_logging() is called from every entry point (tasks, tests) so that
logging is configured the same way everywhere, using Python's native INI
format when a logging.ini is present.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

VALID_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
DEFAULT_FORMAT = '%(levelname)s: %(name)s: %(message)s'


def _find_logging_config() -> Optional[Path]:
    """
    Find the logging configuration file.

    Looks for logging.ini in the current working directory, then config/.

    Returns:
        Path to logging configuration file, or None if not found.
    """
    for candidate in (Path('logging.ini'), Path('config/logging.ini')):
        if candidate.exists():
            return candidate
    return None


def _resolve_level() -> str:
    """
    Read LOG_LEVEL, falling back to WARNING when unset or invalid.
    """
    log_level = os.environ.get('LOG_LEVEL', '').strip().upper()
    if not log_level:
        return 'WARNING'
    if log_level not in VALID_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{log_level}', using WARNING", file=sys.stderr)
        return 'WARNING'
    return log_level


def bootstrap_logging(name: Optional[str] = None) -> None:
    """
    Bootstrap logging configuration.

    This function:
    1. Loads logging.ini with logging.config.fileConfig() when one is found
    2. Falls back to logging.basicConfig() otherwise
    3. Applies the LOG_LEVEL environment variable to the flavorizr logger

    Args:
        name: Optional name of the logger to report configuration on
    """
    level = _resolve_level()
    config_path = _find_logging_config()

    if config_path is None:
        logging.basicConfig(level=logging.WARNING, format=DEFAULT_FORMAT, stream=sys.stderr)
    else:
        try:
            logging.config.fileConfig(str(config_path), disable_existing_loggers=False)
        except (OSError, ValueError, KeyError, RuntimeError) as e:
            print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
            logging.basicConfig(level=logging.WARNING, format=DEFAULT_FORMAT, stream=sys.stderr)
            config_path = None

    logging.getLogger('flavorizr').setLevel(getattr(logging, level))

    logger = logging.getLogger(name) if name else logging.getLogger('flavorizr')
    logger.debug(f"Logging configured from {config_path or 'defaults'} at {level}")


def setup_logging(debug: bool = False) -> None:
    """Set up logging for a task run, enabling DEBUG output when requested."""
    bootstrap_logging()
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        logging.getLogger('flavorizr').setLevel(logging.DEBUG)
        print("🐛 Debug logging enabled", file=sys.stderr)


def auto_bootstrap_logging():
    """
    Decorator that bootstraps logging when applied.

    Usage:
        auto_bootstrap_logging()(None)  # bootstrap immediately, e.g. in conftest.py
    """
    def decorator(obj):
        bootstrap_logging()
        return obj
    return decorator
