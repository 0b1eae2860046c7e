"""
Local transport for in-process execution of the detection endpoints.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import json
from collections import deque
from typing import Any, Callable
from urllib.parse import urlparse

from loguru import logger

from persontrack.client.exceptions import TransportError
from persontrack.client.transport.response import Response

Handler = Callable[[dict[str, str]], dict[str, Any] | str]


class LocalTransport:
    """
    Transport that routes requests to in-process handlers by URL path.

    Useful for offline runs and for exercising the session client without
    a server. Blocking requests are answered immediately; non-blocking
    requests are answered, in submission order, when ``receive`` is pumped.
    A handler that raises ``TransportError`` produces a lost response.
    """

    def __init__(self, handlers: dict[str, Handler] | None = None):
        """
        Initialize local transport.

        Args:
            handlers: Mapping of URL path (e.g. "/start_session/") to handler
        """
        self._handlers: dict[str, Handler] = dict(handlers or {})
        self._queued: deque[tuple[Response, Handler, dict[str, str]]] = deque()
        self._error_description = ""
        self._closed = False

    def register(self, path: str, handler: Handler) -> None:
        """Route requests for ``path`` to ``handler``."""
        self._handlers[path] = handler

    @property
    def in_flight(self) -> int:
        return len(self._queued)

    def _run(self, response: Response, handler: Handler, params: dict[str, str]) -> None:
        try:
            body = handler(params)
        except TransportError as e:
            logger.debug(f"Local handler dropped request: {e.message}")
            response.fail(e.message)
            return

        response.resolve(body if isinstance(body, str) else json.dumps(body), 200)

    def request(
        self,
        url: str,
        params: dict[str, str],
        response: Response,
        blocking: bool = True
    ) -> bool:
        if self._closed:
            self._error_description = "Transport is closed"
            return False

        handler = self._handlers.get(urlparse(url).path)
        if handler is None:
            self._error_description = f"Unknown endpoint: {url}"
            return False

        if blocking:
            self._run(response, handler, dict(params))
        else:
            self._queued.append((response, handler, dict(params)))
        return True

    def receive(self, response: Response | None = None, blocking: bool = False) -> None:
        """Answer queued requests in order, stopping after ``response`` if given."""
        while self._queued:
            handle, handler, params = self._queued.popleft()
            if handle.released:
                continue
            self._run(handle, handler, params)
            if handle is response:
                break

    def get_error_description(self) -> str:
        return self._error_description

    def close(self) -> None:
        """Close transport and drop unanswered requests."""
        self._closed = True
        self._queued.clear()
