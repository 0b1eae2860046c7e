"""
HTTP transport for the remote detection service.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable

import requests
from loguru import logger

from persontrack.client.exceptions import TimeoutError, TransportError
from persontrack.client.transport.response import Response


class HTTPTransport:
    """
    Transport for form-encoded POSTs to the detection service.

    Blocking requests run on the calling thread. Non-blocking requests run
    on a small thread pool; their results are copied into the response
    handles only when the caller pumps ``receive``, so a handle never
    changes state behind the caller's back.

    ``requests.Session`` is not thread-safe, so every thread that posts
    (the caller and each pool worker) gets its own session.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        max_workers: int = 4,
        max_consecutive_failures: int = 5,
        proxy_url: str | None = None,
        session_factory: Callable[[], requests.Session] = requests.Session
    ):
        """
        Initialize HTTP transport.

        Args:
            timeout: Per-request timeout in seconds
            max_workers: Threads used for non-blocking requests
            max_consecutive_failures: Failed responses in a row before the
                connection is reported as lost
            proxy_url: Optional HTTP(S) proxy
            session_factory: Builds the per-thread requests sessions
        """
        self.timeout = timeout
        self.max_consecutive_failures = max_consecutive_failures
        self.proxy_url = proxy_url
        self._session_factory = session_factory
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()

        # Session for the constructing thread, normally the caller
        self._thread_session()

        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="persontrack-http"
        )
        self._in_flight: list[Response] = []
        self._consecutive_failures = 0
        self._error_description = ""
        self._closed = False

    @property
    def connection_lost(self) -> bool:
        """True once too many responses in a row have failed."""
        return self._consecutive_failures >= self.max_consecutive_failures

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def _thread_session(self) -> requests.Session:
        """Return the calling thread's session, creating it on first use."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            session.headers.update({"User-Agent": "PersonTrack-Client/0.1.0"})
            if self.proxy_url:
                session.proxies.update({"http": self.proxy_url, "https": self.proxy_url})
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def _post(self, url: str, params: dict[str, str]) -> tuple[int, str]:
        try:
            reply = self._thread_session().post(url, data=params, timeout=self.timeout)
        except requests.Timeout as e:
            raise TimeoutError(f"Request to {url} timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise TransportError(f"HTTP request to {url} failed: {str(e)}") from e

        return reply.status_code, reply.text

    def _record_failure(self, error: str) -> None:
        self._consecutive_failures += 1
        self._error_description = error

        if self._consecutive_failures == self.max_consecutive_failures:
            self._error_description = (
                f"Connection lost after {self._consecutive_failures} "
                f"consecutive failed responses: {error}"
            )
            logger.warning(self._error_description)

    def _settle(self, response: Response, status_code: int, body: str) -> None:
        if 200 <= status_code < 300:
            self._consecutive_failures = 0
            response.resolve(body, status_code)
        else:
            error = f"Server answered HTTP {status_code}"
            self._record_failure(error)
            response.fail(error, status_code)

    def _collect(self, response: Response, future: Future) -> None:
        try:
            status_code, body = future.result()
        except TransportError as e:
            self._record_failure(e.message)
            response.fail(e.message)
            return

        self._settle(response, status_code, body)

    def request(
        self,
        url: str,
        params: dict[str, str],
        response: Response,
        blocking: bool = True
    ) -> bool:
        """
        Send a POST request.

        Returns:
            False if the request could not be issued (transport closed,
            connection refused on a blocking call, pool shut down)
        """
        if self._closed:
            self._error_description = "Transport is closed"
            return False

        if blocking:
            try:
                status_code, body = self._post(url, params)
            except TransportError as e:
                self._record_failure(e.message)
                return False

            self._settle(response, status_code, body)
            return True

        try:
            future = self._executor.submit(self._post, url, dict(params))
        except RuntimeError as e:
            self._error_description = f"Could not queue request to {url}: {str(e)}"
            return False

        response.pending = future
        self._in_flight.append(response)
        return True

    def receive(self, response: Response | None = None, blocking: bool = False) -> None:
        """
        Copy finished transfers into their response handles.

        Args:
            response: Handle to wait for, or None for every in-flight request
            blocking: Wait for the handle (or all handles) before collecting
        """
        if blocking:
            if response is not None:
                waiting = [response.pending] if response.pending is not None else []
            else:
                waiting = [h.pending for h in self._in_flight if h.pending is not None]
            if waiting:
                wait(waiting)

        still_running = []
        for handle in self._in_flight:
            future = handle.pending
            if handle.released or future is None or future.cancelled():
                continue
            if future.done():
                self._collect(handle, future)
            else:
                still_running.append(handle)

        self._in_flight = still_running

    def get_error_description(self) -> str:
        return self._error_description

    def close(self) -> None:
        """Close transport and cleanup resources."""
        if self._closed:
            return

        self._closed = True
        for handle in self._in_flight:
            handle.release()
        self._in_flight = []
        self._executor.shutdown(wait=False, cancel_futures=True)
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
