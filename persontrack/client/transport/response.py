"""
Response handle shared between the session client and its transport.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from concurrent.futures import Future


class Response:
    """
    Handle to one in-flight or completed request.

    A transport fills the handle in through ``resolve`` or ``fail``;
    callers only read it. ``ok`` implies ``ready``, and ``raw_response``
    is meaningful only when both are set.
    """

    def __init__(self):
        self.ready = False
        self.ok = False
        self.raw_response = ""
        self.status_code: int | None = None
        self.error = ""
        self.released = False
        # Set by transports that complete the request in the background
        self.pending: Future | None = None

    def is_ready(self) -> bool:
        return self.ready

    def is_ok(self) -> bool:
        return self.ok

    def resolve(self, raw_response: str, status_code: int | None = None) -> None:
        """Mark the request as answered."""
        self.ready = True
        self.ok = True
        self.raw_response = raw_response
        self.status_code = status_code
        self.error = ""
        self.pending = None

    def fail(self, error: str, status_code: int | None = None) -> None:
        """Mark the request as lost or rejected at transport level."""
        self.ready = True
        self.ok = False
        self.raw_response = ""
        self.status_code = status_code
        self.error = error
        self.pending = None

    def release(self) -> None:
        """Drop any background work still attached to this handle."""
        if self.released:
            return
        self.released = True
        if isinstance(self.pending, Future):
            self.pending.cancel()
        self.pending = None

    def __repr__(self) -> str:
        return (
            f"Response(ready={self.ready}, ok={self.ok}, "
            f"status_code={self.status_code}, released={self.released})"
        )
