"""
PersonTrack Client SDK.

Streams per-frame person detection records to a remote detection service.

Author: Yobie Benjamin
Date: 2026-10-19

Example Usage:
    ```python
    from persontrack.client import DetectionRecord, SessionClient

    with SessionClient("entrance-cam") as client:
        ok = client.send_records(
            [DetectionRecord(id="p-17", age=34, mood=0.8)],
            frame_number=120,
        )
        if not ok:
            print("Server asked us to stop")
    ```
"""

from persontrack.client.exceptions import (
    MalformedEnvelopeError,
    PersonTrackError,
    ProtocolError,
    SessionError,
    TimeoutError,
    TransportError,
)
from persontrack.client.models import (
    DetectionRecord,
    Endpoints,
    FaceRect,
    Point,
    ServerEnvelope,
    SessionState,
)
from persontrack.client.session import SessionClient

__all__ = [
    # Exceptions
    "PersonTrackError",
    "TransportError",
    "TimeoutError",
    "MalformedEnvelopeError",
    "ProtocolError",
    "SessionError",
    # Models
    "DetectionRecord",
    "Endpoints",
    "FaceRect",
    "Point",
    "ServerEnvelope",
    "SessionState",
    # Client
    "SessionClient",
]
