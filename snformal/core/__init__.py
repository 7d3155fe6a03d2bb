"""
Core utilities.

This module provides:
- Physical constants
- Configuration and logging
"""

from snformal.core import constants
from snformal.core import config
from snformal.core import logging_config

__all__ = [
    "constants",
    "config",
    "logging_config",
]
