# File: utils/__init__.py
"""Pure Python utilities for the maintenance core.

Submodules:
    - dt_utils: Date/time parsing, day normalization, interval arithmetic

Usage:
    from . import dt_utils
    from .dt_utils import dt_add_interval
"""

from . import dt_utils

__all__ = ["dt_utils"]
