"""
Configuration management for the PersonTrack client.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from persontrack.config.settings import ClientSettings, get_settings

__all__ = ["ClientSettings", "get_settings"]
