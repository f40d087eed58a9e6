"""
ww-common: Shared library for Whisperwire.

Provides common data models, configuration management, structured
logging, and Prometheus metrics helpers used by the compliance service.
"""

from ww_common.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
