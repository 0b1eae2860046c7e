"""
PersonTrack client models for detection records and server replies.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

Score = Annotated[float, Field(ge=0, le=1)]
ColorChannel = Annotated[int, Field(ge=0, le=255)]

EMOTION_NAMES = ("happy", "surprised", "angry", "disgusted", "afraid", "sad")


class SessionState(str, Enum):
    """Lifecycle state of a detection session."""
    UNSTARTED = "unstarted"
    ACTIVE = "active"
    STOPPED = "stopped"


class Point(BaseModel):
    """Pixel location in the frame."""
    model_config = ConfigDict(frozen=True)

    x: int
    y: int


class FaceRect(BaseModel):
    """Bounding box of a detected face."""
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int = Field(ge=0)
    height: int = Field(ge=0)


class DetectionRecord(BaseModel):
    """
    Per-frame attributes of one tracked person.

    Only ``id`` is required; any attribute left as ``None`` is omitted
    from the wire request.
    """
    model_config = ConfigDict(frozen=True)

    id: str = ""
    age: int | None = Field(None, ge=0)
    gender: Score | None = None
    mood: Score | None = None
    face_rect: FaceRect | None = None
    head_yaw: float | None = None
    head_pitch: float | None = None
    head_roll: float | None = None
    right_eye: Point | None = None
    left_eye: Point | None = None
    attention_span: float | None = None
    emotions: tuple[Score, Score, Score, Score, Score, Score] | None = Field(
        None,
        description="Scores for happy, surprised, angry, disgusted, afraid, sad"
    )
    clothing_colors: list[tuple[ColorChannel, ColorChannel, ColorChannel]] = Field(
        default_factory=list
    )

    def has_id(self) -> bool:
        """Check if the record can be attributed to a tracked person.

        Whitespace-only identifiers count as missing; the identifier itself
        is sent unchanged.
        """
        return bool(self.id.strip())


class ServerEnvelope(BaseModel):
    """Generic ``{code, description?}`` wrapper every endpoint replies with."""
    model_config = ConfigDict(extra="allow", frozen=True)

    code: int
    description: str | None = None

    @property
    def is_success(self) -> bool:
        """Only code 0 is a logical success."""
        return self.code == 0


class Endpoints(BaseModel):
    """Immutable location of the detection service."""
    model_config = ConfigDict(frozen=True)

    base_url: HttpUrl = HttpUrl("http://localhost:8000")
    start_session: str = "/start_session/"
    send_person: str = "/person_detection/"
    stop_session: str = "/stop_session/"

    def _join(self, path: str) -> str:
        return str(self.base_url).rstrip("/") + path

    @property
    def start_session_url(self) -> str:
        return self._join(self.start_session)

    @property
    def send_person_url(self) -> str:
        return self._join(self.send_person)

    @property
    def stop_session_url(self) -> str:
        return self._join(self.stop_session)
