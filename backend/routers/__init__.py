"""
Routers package - API endpoint modules.
"""

from . import i18n, keys, translate

__all__ = ["i18n", "keys", "translate"]
