# utils.py
"""
Utility functions for the dots framework.

Helpers used across the application that belong neither to the
simulation nor to rendering: logging setup, config loading and the
small numeric mapping used for line opacity.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any, Optional

from numba import jit

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: The full run configuration. Only its optional "logging"
#       section is read ("level", "format", "log_file"). A "log_file" of
#       null disables the file handler.
#   - Outputs: None
#   - Side Effects: Replaces the handlers of the root logger with a
#     console handler and, when enabled, a rotating file handler. Creates
#     the log directory if needed.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Inputs: path to a JSON file.
#   - Outputs: the decoded dictionary.
#   - Side Effects: None. Missing or malformed files are logged and the
#     original exception is re-raised.
#
# get_section(config, name) -> Dict[str, Any]:
#   - Outputs: config[name] or an empty dict. Never None.
#
# map_range(value, from_low, from_high, to_low, to_high) -> float:
#   - Linear re-mapping of value from one interval onto another. Not
#     clamped. from_low must differ from from_high.

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/dots.log'


def _build_file_handler(log_file_path: str) -> logging.Handler:
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    # Rotates when the log reaches 1MB, keeps 5 backup logs.
    return logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the root logger from the "logging" section of the config.

    Logs go to the console and, unless "log_file" is null, to a
    rotating file.
    """
    log_config = get_section(config, 'logging')
    log_level = str(log_config.get('level', 'INFO')).upper()
    log_format = log_config.get('format', DEFAULT_LOG_FORMAT)
    log_file_path: Optional[str] = log_config.get('log_file', DEFAULT_LOG_FILE)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication if called twice
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)
    handlers = [logging.StreamHandler()]
    if log_file_path:
        handlers.append(_build_file_handler(log_file_path))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path or '<console only>'}")


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise
    logging.info("Configuration loaded successfully.")
    return config


def get_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Returns a config section, treating a missing or null section as empty."""
    return config.get(name) or {}


@jit(nopython=True)
def map_range(value, from_low, from_high, to_low, to_high):
    """Maps value linearly from [from_low, from_high] onto [to_low, to_high]."""
    return to_low + (to_high - to_low) * ((value - from_low) / (from_high - from_low))
