# utils.py
"""
Utility functions for the particle network application.

Logging setup, configuration loading and random number generator
creation. These are shared by every module but belong to none of the
simulation, theme or rendering domains.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any, Optional

import numpy as np

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary optionally containing a "logging" key with
#       "level", "format", "log_file", "max_bytes" and "backup_count".
#   - Outputs: None
#   - Side Effects: Replaces the root logger's handlers with a console
#     handler and, unless log_file is null, a rotating file handler (the
#     log directory is created if needed). Numba's compiler logs are held
#     at WARNING.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Inputs: path to a JSON file.
#   - Outputs: the parsed dictionary.
#   - Raises: FileNotFoundError, json.JSONDecodeError, or ValueError when
#     the top level is not an object. Errors are logged before raising.
#
# create_rng(seed: Optional[int]) -> np.random.Generator:
#   - Inputs: an integer seed, or None for OS entropy.
#   - Outputs: a dedicated NumPy Generator. All particle randomness is drawn
#     from the generator created here.

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/particle_network.log'
DEFAULT_LOG_MAX_BYTES = 1024 * 1024
DEFAULT_LOG_BACKUPS = 5

# Numba logs every compilation pass at DEBUG.
QUIET_LOGGERS = ('numba',)


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the root logger from the "logging" section of the config.

    Logs always go to the console. A rotating log file is added unless
    "log_file" is null; it rotates at "max_bytes" and keeps
    "backup_count" old files.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', DEFAULT_LOG_FORMAT)
    log_file_path = log_config.get('log_file', DEFAULT_LOG_FILE)
    max_bytes = int(log_config.get('max_bytes', DEFAULT_LOG_MAX_BYTES))
    backup_count = int(log_config.get('backup_count', DEFAULT_LOG_BACKUPS))

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Calling setup twice must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=max_bytes, backupCount=backup_count
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info("Logging system initialized.")
    if log_file_path:
        logging.debug(f"Log level set to {log_level}. Log file: {log_file_path} "
                      f"(rotates at {max_bytes} bytes, {backup_count} backups)")
    else:
        logging.debug(f"Log level set to {log_level}. File logging disabled.")


def load_config(path: str) -> Dict[str, Any]:
    """
    Loads a JSON configuration file. The top level must be an object whose
    values are the per-module sections.
    """
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
    if not isinstance(config, dict):
        msg = f"Configuration in {path} must be a JSON object, got {type(config).__name__}."
        logging.error(msg)
        raise ValueError(msg)
    logging.info(f"Configuration loaded: sections {', '.join(sorted(config))}.")
    return config


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Creates the master random number generator."""
    rng = np.random.default_rng(seed)
    if seed is None:
        logging.info("Master RNG initialized from OS entropy (no seed configured).")
    else:
        logging.info(f"Master RNG initialized with seed: {seed}")
    return rng
