"""
Transport protocol for the PersonTrack client.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from typing import Protocol

from persontrack.client.transport.response import Response


class Transport(Protocol):
    """Protocol for transport layer between the session client and the service."""

    def request(
        self,
        url: str,
        params: dict[str, str],
        response: Response,
        blocking: bool = True
    ) -> bool:
        """
        Issue a request.

        Args:
            url: Absolute endpoint URL
            params: Flat string-keyed form parameters
            response: Handle to populate with the reply
            blocking: Wait for the reply before returning

        Returns:
            True if the request was issued. This says nothing about whether
            it succeeded; inspect ``response`` for that.
        """
        ...

    def receive(self, response: Response | None = None, blocking: bool = False) -> None:
        """
        Pump in-flight transfers.

        Args:
            response: Handle of interest, or None to pump everything
            blocking: Wait until ``response`` is ready
        """
        ...

    def get_error_description(self) -> str:
        """Return text describing the last transport-level error."""
        ...

    def close(self) -> None:
        """Close transport and cleanup resources."""
        ...
