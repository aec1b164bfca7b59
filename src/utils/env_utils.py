"""
Environment Utility Functions
===========================

This module contains utility functions for managing environment variables and
the settings the accessibility aggregator reads from them.

Functions:
    load_env_variables: Load environment variables from a .env file.
    get_cutoff: Resolve the travel-time cutoff from the environment.

Example:
    >>> from src.utils.env_utils import load_env_variables, get_cutoff
    >>> dotenv_path, success = load_env_variables()
    >>> cutoff = get_cutoff()  # ACCESSIBILITY_CUTOFF, or 60 when unset
"""

# Standard library imports
import os
import logging
from pathlib import Path
from typing import Tuple, List, Optional

# Third-party imports
from dotenv import load_dotenv

# Local imports
from src.config import CUTOFF_ENV_VAR, DEFAULT_CUTOFF, UNREACHED
from src.utils.logging_utils import LogContext, with_log_context
from src.utils.error_utils import (
    handle_exception,
    convert_exception,
    ExceptionContext,
    ConfigMissingError,
    ConfigValueError,
    ConfigError,
)


@handle_exception(
    custom_mapping={FileNotFoundError: ConfigError, Exception: ConfigError}
)
@with_log_context(module="env_utils", operation="load_env_variables")
def load_env_variables(required_vars: Optional[List[str]] = None) -> Tuple[Path, bool]:
    """
    Load environment variables from .env file.

    Args:
        required_vars: List of required environment variable names

    Returns:
        Tuple of (dotenv_path, success)

    Raises:
        ConfigError: When .env file could not be loaded
        ConfigMissingError: When required variables are missing
    """
    # Project root is 3 levels up from this file
    dotenv_path = Path(__file__).resolve().parent.parent.parent / ".env"

    with LogContext(file_path=str(dotenv_path)):
        logging.info(f"Loading environment variables from {dotenv_path}")

        with ExceptionContext("Loading .env file", ConfigError):
            success = load_dotenv(dotenv_path=dotenv_path)

            if not success:
                logging.warning(f".env file not found at {dotenv_path}")
                return dotenv_path, False

            logging.info(".env file loaded successfully")

        if required_vars:
            missing_vars = [var for var in required_vars if not os.environ.get(var)]
            for var in missing_vars:
                logging.warning(f"Required environment variable missing: {var}")

            if missing_vars:
                missing_vars_str = ", ".join(missing_vars)
                logging.error(
                    f"Missing required environment variables: {missing_vars_str}"
                )
                raise ConfigMissingError(
                    f"Missing required environment variables: {missing_vars_str}"
                )

            logging.info(
                f"All required environment variables are present ({len(required_vars)} checked)"
            )

    return dotenv_path, success


@handle_exception
@with_log_context(module="env_utils", operation="get_cutoff")
def get_cutoff(default: int = DEFAULT_CUTOFF) -> int:
    """
    Resolve the travel-time cutoff, in minutes, for an accessibility run.

    The value comes from the ACCESSIBILITY_CUTOFF environment variable and
    falls back to ``default`` when the variable is unset or empty. It must
    match the cutoff the travel-time surface was generated with.

    Args:
        default: Cutoff to use when the environment does not set one

    Returns:
        int: The cutoff in whole minutes

    Raises:
        ConfigValueError: If the value is not an integer, is negative, or does
            not stay below the unreached sentinel
    """
    raw = os.environ.get(CUTOFF_ENV_VAR, "").strip()
    if not raw:
        logging.debug(f"{CUTOFF_ENV_VAR} not set, using default cutoff {default}")
        return default

    try:
        cutoff = int(raw)
    except ValueError as e:
        raise convert_exception(
            e, ConfigValueError, f"{CUTOFF_ENV_VAR} must be an integer, got {raw!r}"
        ) from e

    if cutoff < 0 or cutoff >= UNREACHED:
        raise ConfigValueError(
            f"{CUTOFF_ENV_VAR} must be between 0 and {UNREACHED - 1} minutes, got {cutoff}"
        )

    logging.info(f"Using cutoff of {cutoff} minutes from {CUTOFF_ENV_VAR}")
    return cutoff
