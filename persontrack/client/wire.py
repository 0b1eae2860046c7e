"""
Mapping of detection records onto the form fields the service expects.

All values travel as decimal string literals. Two behaviours are kept
for compatibility with deployed servers: ``neutral`` is always "0", and
every clothing color is written to ``ClothesColors_1`` so only the last
of the first three colors reaches the server.
"""

from typing import Sequence

import numpy as np

from persontrack.client.models import EMOTION_NAMES, DetectionRecord

CLOTHES_COLOR_FIELD = "ClothesColors_1"
MAX_CLOTHES_COLORS = 3


def to_percent(score: float) -> str:
    """Scale a [0, 1] score to an integer percentage, truncating."""
    scaled = np.float32(score) * np.float32(100.0)
    return str(int(scaled))


def to_wire(value: int | float) -> str:
    """Render a number in its native decimal form."""
    if isinstance(value, bool):
        return str(int(value))
    return str(value)


def color_to_hex(color: Sequence[int]) -> str:
    """Format an RGB triple as six lowercase hex digits."""
    r, g, b = color[:3]
    return f"{r:02x}{g:02x}{b:02x}"


def build_start_request(source_name: str) -> dict[str, str]:
    return {"source_name": source_name}


def build_stop_request(session_key: str) -> dict[str, str]:
    return {"session_key": session_key}


def build_person_request(
    session_key: str,
    frame_number: int,
    record: DetectionRecord
) -> dict[str, str]:
    """
    Build the outbound request for one detection record.

    Args:
        session_key: Key issued by the start-session exchange (may be empty)
        frame_number: Frame the record was detected in
        record: Detection record to send

    Returns:
        Ordered field mapping, freshly built for this call
    """
    request = {
        "session_key": session_key,
        "frame": to_wire(frame_number),
        "sdk_name": record.id,
    }

    if record.age is not None:
        request["age"] = to_wire(record.age)
    if record.gender is not None:
        request["gender"] = to_percent(record.gender)
    if record.mood is not None:
        request["mood"] = to_percent(record.mood)

    if record.face_rect is not None:
        request["facePosition_x"] = to_wire(record.face_rect.x)
        request["facePosition_y"] = to_wire(record.face_rect.y)
        request["facePosition_w"] = to_wire(record.face_rect.width)
        request["facePosition_h"] = to_wire(record.face_rect.height)

    if record.head_yaw is not None:
        request["headYaw"] = to_wire(record.head_yaw)
    if record.head_pitch is not None:
        request["headPitch"] = to_wire(record.head_pitch)

    if record.right_eye is not None:
        request["rightEye_x"] = to_wire(record.right_eye.x)
        request["rightEye_y"] = to_wire(record.right_eye.y)
    if record.left_eye is not None:
        request["leftEye_x"] = to_wire(record.left_eye.x)
        request["leftEye_y"] = to_wire(record.left_eye.y)

    if record.head_roll is not None:
        request["head_roll"] = to_wire(record.head_roll)
    if record.attention_span is not None:
        request["attention_span"] = to_wire(record.attention_span)

    request["neutral"] = "0"
    if record.emotions is not None:
        for name, score in zip(EMOTION_NAMES, record.emotions):
            request[name] = to_percent(score)

    # Same key on purpose: the last color written wins.
    for color in record.clothing_colors[:MAX_CLOTHES_COLORS]:
        request[CLOTHES_COLOR_FIELD] = color_to_hex(color)

    return request
