"""
Utility functions for PersonTrack.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from persontrack.utils.logging import configure_logging

__all__ = ["configure_logging"]
