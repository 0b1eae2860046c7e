"""
Session client for the remote person detection service.

The client opens a session with a blocking request, streams detection
records without waiting on each reply, and reconciles the replies later
in submission order. A reply carrying a non-zero code is the server's
way of asking the client to stop; a reply lost at transport level is
tolerated here and left to the transport's own failure accounting.

Author: Yobie Benjamin
Date: 2026-10-19

Example Usage:
    ```python
    from persontrack.client import DetectionRecord, SessionClient

    with SessionClient("lobby-cam") as client:
        if not client.started:
            raise SystemExit("could not start a session")

        for frame_number, people in frames:
            if not client.send_records(people, frame_number):
                break
        else:
            client.flush()
    ```
"""

from collections import deque
from typing import Iterable

from loguru import logger

from persontrack.client import wire
from persontrack.client.codec import get_param, parse_generic_response
from persontrack.client.exceptions import SessionError
from persontrack.client.models import DetectionRecord, Endpoints, SessionState
from persontrack.client.transport.base import Transport
from persontrack.client.transport.http import HTTPTransport
from persontrack.client.transport.response import Response
from persontrack.config.settings import ClientSettings, get_settings


class SessionClient:
    """
    Owns one detection session and the replies still in flight for it.

    Not safe for concurrent use; one client drives one session.
    """

    def __init__(
        self,
        source_name: str,
        transport: Transport | None = None,
        endpoints: Endpoints | None = None,
        settings: ClientSettings | None = None,
        auto_start: bool = True
    ):
        """
        Initialize the client and, by default, start the session.

        Args:
            source_name: Name of the camera or stream the records come from
            transport: Transport to use; an HTTPTransport is built from
                settings if omitted and closed together with the client
            endpoints: Service endpoints; derived from settings if omitted
            settings: Client settings; process-wide settings if omitted
            auto_start: Start the session during construction
        """
        self.settings = settings or get_settings()
        self.source_name = source_name
        self.endpoints = endpoints or self.settings.endpoints()

        self._owns_transport = transport is None
        self._transport: Transport = transport or HTTPTransport(
            timeout=self.settings.request_timeout_seconds,
            max_workers=self.settings.max_workers,
            max_consecutive_failures=self.settings.max_consecutive_failures,
            proxy_url=self.settings.proxy_url,
        )

        self._session_key = ""
        self._state = SessionState.UNSTARTED
        self._pending: deque[Response] = deque()
        self._started = False
        self._stop_attempted = False
        self._closed = False

        if auto_start:
            self.start(source_name)

    @property
    def started(self) -> bool:
        """True once the server has issued a session key."""
        return self._started

    @property
    def session_key(self) -> str:
        return self._session_key

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def pending_count(self) -> int:
        """Number of replies not yet reconciled."""
        return len(self._pending)

    @property
    def closed(self) -> bool:
        return self._closed

    def _call(self, url: str, params: dict[str, str], action: str) -> Response | None:
        """Issue a blocking request and return the reply if it arrived intact."""
        response = Response()
        if not self._transport.request(url, params, response, blocking=True):
            logger.error(self._transport.get_error_description())
            return None

        if not response.is_ready() or not response.is_ok():
            logger.error(f"Could not {action} a session")
            return None

        return response

    def start(self, source_name: str | None = None) -> bool:
        """
        Open a session with the service.

        Args:
            source_name: Overrides the name given at construction

        Returns:
            True if the server issued a session key
        """
        if self._state is not SessionState.UNSTARTED:
            logger.warning(f"Session already {self._state.value}, not starting again")
            return False

        source_name = source_name if source_name is not None else self.source_name
        response = self._call(
            self.endpoints.start_session_url,
            wire.build_start_request(source_name),
            "start"
        )
        if response is None:
            return False

        envelope, fields = parse_generic_response(response.raw_response)
        if envelope is None:
            return False

        session_key = get_param(fields, "session_key", str)
        if session_key is None:
            logger.error("Bad response formatting. Expecting session key.")
            return False

        self._session_key = session_key
        self._state = SessionState.ACTIVE
        self._started = True
        self.source_name = source_name
        logger.info(f"Started session for source '{source_name}'")
        return True

    def stop(self) -> bool:
        """
        Close the session with the service.

        Attempted even if the session never started, in which case the
        empty key is sent. A failure leaves the state unchanged.

        Returns:
            True if the server acknowledged the stop
        """
        self._stop_attempted = True
        response = self._call(
            self.endpoints.stop_session_url,
            wire.build_stop_request(self._session_key),
            "stop"
        )
        if response is None:
            return False

        envelope, _ = parse_generic_response(response.raw_response)
        if envelope is None:
            return False

        self._state = SessionState.STOPPED
        logger.info(f"Stopped session for source '{self.source_name}'")
        return True

    def send_records(self, records: Iterable[DetectionRecord], frame_number: int) -> bool:
        """
        Send the detection records of one frame.

        Each record is dispatched without waiting for its reply. A failed
        dispatch does not abort the batch.

        Args:
            records: Detection records in frame order
            frame_number: Frame the records were detected in

        Returns:
            True if every record with an identifier was dispatched and no
            reconciled reply asked the client to stop

        Raises:
            SessionError: If the client was already closed
        """
        if self._closed:
            raise SessionError("Cannot send records on a closed session client")

        all_sent = True

        for record in records:
            if not record.has_id():
                logger.warning(f"Skipping record without identifier in frame {frame_number}")
                continue

            request = wire.build_person_request(self._session_key, frame_number, record)

            response = Response()
            if not self._transport.request(
                self.endpoints.send_person_url,
                request,
                response,
                blocking=False
            ):
                logger.error(self._transport.get_error_description())
                all_sent = False
                continue

            self._pending.append(response)
            self._transport.receive(None, blocking=False)
            all_sent &= self.reconcile()

        return all_sent

    def reconcile(self) -> bool:
        """
        Drain ready replies from the head of the pending queue.

        Stops at the first reply that is not ready yet, and right after a
        reply that asks the client to stop; anything behind it stays queued.

        Returns:
            False if a reconciled reply asked the client to stop
        """
        while self._pending and self._pending[0].is_ready():
            response = self._pending.popleft()
            server_says_stop = False

            if response.is_ok():
                envelope, _ = parse_generic_response(response.raw_response)
                server_says_stop = envelope is None
            elif self.settings.escalate_transport_loss:
                logger.error(f"Detection reply lost: {response.error}")
                server_says_stop = True
            else:
                logger.debug(f"Detection reply lost, continuing: {response.error}")

            response.release()

            if server_says_stop:
                logger.warning(
                    f"Stop signal for session '{self.source_name}', "
                    f"{len(self._pending)} replies still queued"
                )
                return False

        return True

    def flush(self) -> bool:
        """
        Wait for every queued reply and reconcile it.

        Blocks on the head of the queue until it is ready, then reconciles.
        Returns early on the first stop signal; replies behind it stay
        queued and are released by ``close``.

        Returns:
            False if a reply asked the client to stop, or if the transport
            could not complete a queued reply
        """
        while self._pending:
            head = self._pending[0]
            self._transport.receive(head, blocking=True)

            if not head.is_ready():
                logger.error(
                    f"Transport could not complete a queued reply, "
                    f"{len(self._pending)} replies left unreconciled"
                )
                return False

            if not self.reconcile():
                return False

        return True

    def close(self) -> None:
        """
        Stop the session and release everything the client holds.

        Safe to call more than once; stop-session is requested only once
        over the client's lifetime. Queued replies are released without
        being reconciled; call ``flush`` first to account for them.
        """
        if self._closed:
            return
        self._closed = True

        try:
            if not self._stop_attempted:
                self.stop()
        finally:
            while self._pending:
                self._pending.popleft().release()

            if self._owns_transport:
                self._transport.close()

    def __enter__(self) -> "SessionClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"SessionClient(source_name={self.source_name!r}, "
            f"state={self._state.value}, pending={len(self._pending)})"
        )
