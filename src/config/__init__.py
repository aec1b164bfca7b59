"""
Configuration Module
===================

Central configuration for the accessibility aggregator: project paths, the
default travel-time cutoff and the sentinel surfaces use for unreached pixels.

Key Components:
--------------
1. Base Paths:
   - ROOT: Project root directory
   - LOGS: Directory for application logs

2. Accessibility Settings:
   - DEFAULT_CUTOFF: Cutoff in minutes used when the caller does not pass one
   - UNREACHED: Travel time stored for pixels the origin never reaches
   - CUTOFF_ENV_VAR: Environment variable that overrides the default cutoff

Usage:
-----
from src.config import DEFAULT_CUTOFF, UNREACHED

# Any cutoff a caller passes must stay below the unreached sentinel
assert DEFAULT_CUTOFF < UNREACHED
"""

# Standard library imports
from pathlib import Path

# Define base paths
ROOT = Path(__file__).resolve().parent.parent.parent
LOGS = Path(ROOT, "logs")

# Travel-time surfaces are byte rasters, one minute per step
DEFAULT_CUTOFF = 60
UNREACHED = 255

CUTOFF_ENV_VAR = "ACCESSIBILITY_CUTOFF"
