"""Utility functions and constants."""

from .constants import *

__all__ = ["APP_NAME", "CONFIG_DIR", "CONFIG_ENV", "CONFIG_FILE", "DEFAULT_TIMEOUT", "SERVICE_EXT"]
