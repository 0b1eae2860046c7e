"""
PersonTrack: client for streaming person detection results to a remote
detection service.

Author: Yobie Benjamin
Date: 2026-10-19
"""

__version__ = "0.1.0"
__author__ = "Yobie Benjamin"
__license__ = "Apache-2.0"

from persontrack.client import DetectionRecord, SessionClient

__all__ = ["DetectionRecord", "SessionClient"]
