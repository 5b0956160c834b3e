"""
Core Utilities Package

This package contains utility functions and helpers used throughout the application.

Modules:
    - numbers: Locale-aware number parsing and change-percentage math
    - time: UTC timestamps and record age helpers
"""

from core.utils.numbers import clamp, is_number, parse_locale_number, percent_change
from core.utils.time import EPOCH, current_utc_datetime, seconds_since

__all__ = [
    "clamp",
    "is_number",
    "parse_locale_number",
    "percent_change",
    "EPOCH",
    "current_utc_datetime",
    "seconds_since",
]
