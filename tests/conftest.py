"""Shared fixtures for PersonTrack tests."""

import json
from urllib.parse import urlparse

import pytest

from persontrack.client.models import DetectionRecord, FaceRect, Point
from persontrack.client.transport.response import Response
from persontrack.config.settings import ClientSettings


class FakeTransport:
    """
    Transport double with manual control over when replies arrive.

    Blocking requests are answered from per-path reply queues. Non-blocking
    requests are parked in ``in_flight`` until a test completes them, or
    until a blocking ``receive`` hands them the answers queued with
    ``arrive_later``.
    """

    def __init__(self):
        self.replies: dict[str, list[tuple[str, bool]]] = {}
        self.requests: list[tuple[str, dict[str, str], bool]] = []
        self.in_flight: list[Response] = []
        self.dispatch_failures = 0
        self.receive_calls = 0
        self.late_replies: list[tuple[str, bool]] = []
        self.closed = False
        self._error = ""

    def reply(self, path: str, body: dict | str, ok: bool = True) -> None:
        """Queue the answer to the next blocking request on ``path``."""
        raw = body if isinstance(body, str) else json.dumps(body)
        self.replies.setdefault(path, []).append((raw, ok))

    def paths(self) -> list[str]:
        return [path for path, _, _ in self.requests]

    def params_for(self, path: str) -> list[dict[str, str]]:
        return [params for p, params, _ in self.requests if p == path]

    def complete(self, index: int, body: dict | str = None, ok: bool = True) -> Response:
        """Answer the ``index``-th non-blocking request."""
        response = self.in_flight[index]
        if ok:
            raw = body if isinstance(body, str) else json.dumps(body or {"code": 0})
            response.resolve(raw, 200)
        else:
            response.fail("Request timed out")
        return response

    def request(self, url, params, response, blocking=True):
        path = urlparse(url).path
        self.requests.append((path, dict(params), blocking))

        if blocking:
            queued = self.replies.get(path)
            if not queued:
                self._error = f"Could not connect to {url}"
                return False
            raw, ok = queued.pop(0)
            if ok:
                response.resolve(raw, 200)
            else:
                response.fail("Server answered HTTP 500", 500)
            return True

        if self.dispatch_failures:
            self.dispatch_failures -= 1
            self._error = f"Could not queue request to {url}"
            return False

        self.in_flight.append(response)
        return True

    def arrive_later(self, body: dict | str, ok: bool = True) -> None:
        """Queue an answer that reaches the next in-flight request only once the caller waits."""
        raw = body if isinstance(body, str) else json.dumps(body)
        self.late_replies.append((raw, ok))

    def receive(self, response=None, blocking=False):
        self.receive_calls += 1
        if not blocking:
            return

        for handle in self.in_flight:
            if handle.is_ready() or handle.released:
                continue
            if not self.late_replies:
                break
            raw, ok = self.late_replies.pop(0)
            if ok:
                handle.resolve(raw, 200)
            else:
                handle.fail("Request timed out")
            if handle is response:
                break

    def get_error_description(self):
        return self._error

    def close(self):
        self.closed = True


@pytest.fixture
def settings():
    """Default settings, isolated from the process environment."""
    return ClientSettings(_env_file=None)


@pytest.fixture
def transport():
    """Fake transport with no replies queued."""
    return FakeTransport()


@pytest.fixture
def started_transport():
    """Fake transport that will grant session key 'abc' and accept a stop."""
    fake = FakeTransport()
    fake.reply("/start_session/", {"code": 0, "session_key": "abc"})
    fake.reply("/stop_session/", {"code": 0})
    return fake


@pytest.fixture
def record():
    """A fully populated detection record."""
    return DetectionRecord(
        id="person-1",
        age=34,
        gender=0.25,
        mood=0.873,
        face_rect=FaceRect(x=120, y=80, width=64, height=72),
        head_yaw=12.5,
        head_pitch=-3.0,
        head_roll=1.25,
        right_eye=Point(x=140, y=100),
        left_eye=Point(x=165, y=101),
        attention_span=2.5,
        emotions=(0.5, 0.1, 0.0, 0.0, 0.05, 1.0),
        clothing_colors=[(255, 0, 0), (0, 255, 0), (16, 32, 171)],
    )


@pytest.fixture
def make_record():
    """Factory for minimal records with the given identifier."""
    def _make(record_id: str = "person-1", **kwargs) -> DetectionRecord:
        return DetectionRecord(id=record_id, **kwargs)
    return _make
