"""
Utilities Module
===============

Central hub for project-wide utility functions.

Key Components:
-------------
1. Environment Management:
   - load_env_variables(): Loads environment variables from .env files
   - get_cutoff(): Resolves the travel-time cutoff from the environment

2. Logging Utilities:
   - setup_logging(): Configures basic logging
   - setup_structured_logging(): Configures structured logging with context

Usage:
-----
from src.utils import load_env_variables, get_cutoff, setup_logging

load_env_variables()
setup_logging(log_file_name="accessibility.log")
cutoff = get_cutoff()
"""

from .env_utils import load_env_variables, get_cutoff
from .logging_utils import setup_logging, setup_structured_logging

__all__ = [
    "load_env_variables",
    "get_cutoff",
    "setup_logging",
    "setup_structured_logging",
]
