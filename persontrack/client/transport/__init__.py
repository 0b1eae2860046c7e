"""
PersonTrack transport layer.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from persontrack.client.transport.base import Transport
from persontrack.client.transport.http import HTTPTransport
from persontrack.client.transport.local import LocalTransport
from persontrack.client.transport.response import Response

__all__ = ["Transport", "HTTPTransport", "LocalTransport", "Response"]
