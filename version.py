"""
Version information for the Career Studio job analysis service.

This file is the single source of truth for version numbers.
Both the API app and setup.py read from here.
"""

__version__ = "0.3.0"
__version_info__ = (0, 3, 0)
