"""
Utility modules for PropGo listings.
"""

from .formatting import format_area, format_inr
from .config import Config, get_config

__all__ = ["format_area", "format_inr", "Config", "get_config"]
