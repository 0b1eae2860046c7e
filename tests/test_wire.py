"""Tests for detection record field mapping."""

from persontrack.client.models import DetectionRecord
from persontrack.client.wire import (
    build_person_request,
    build_start_request,
    build_stop_request,
    color_to_hex,
    to_percent,
    to_wire,
)


class TestNumericTransforms:
    """Test value formatting."""

    def test_percent_truncates(self):
        """Test scores are truncated, not rounded."""
        assert to_percent(0.873) == "87"
        assert to_percent(0.999) == "99"
        assert to_percent(0.0) == "0"
        assert to_percent(1.0) == "100"
        assert to_percent(0.5) == "50"

    def test_native_numbers(self):
        """Test ints and floats keep their natural form."""
        assert to_wire(42) == "42"
        assert to_wire(-7) == "-7"
        assert to_wire(12.5) == "12.5"
        assert to_wire(-3.0) == "-3.0"

    def test_color_hex(self):
        """Test colors are six lowercase hex digits."""
        assert color_to_hex((255, 0, 0)) == "ff0000"
        assert color_to_hex((16, 32, 171)) == "1020ab"
        assert color_to_hex((0, 0, 0)) == "000000"


class TestLifecycleRequests:
    """Test start and stop requests."""

    def test_start_request(self):
        assert build_start_request("lobby") == {"source_name": "lobby"}

    def test_stop_request(self):
        assert build_stop_request("") == {"session_key": ""}


class TestPersonRequest:
    """Test the per-record request."""

    def test_full_record(self, record):
        """Test every attribute lands on its wire field."""
        request = build_person_request("abc", 17, record)

        assert request == {
            "session_key": "abc",
            "frame": "17",
            "sdk_name": "person-1",
            "age": "34",
            "gender": "25",
            "mood": "87",
            "facePosition_x": "120",
            "facePosition_y": "80",
            "facePosition_w": "64",
            "facePosition_h": "72",
            "headYaw": "12.5",
            "headPitch": "-3.0",
            "rightEye_x": "140",
            "rightEye_y": "100",
            "leftEye_x": "165",
            "leftEye_y": "101",
            "head_roll": "1.25",
            "attention_span": "2.5",
            "neutral": "0",
            "happy": "50",
            "surprised": "10",
            "angry": "0",
            "disgusted": "0",
            "afraid": "5",
            "sad": "100",
            "ClothesColors_1": "1020ab",
        }

    def test_wire_order(self, record):
        """Test session key and frame lead the request."""
        request = build_person_request("abc", 1, record)

        assert list(request)[:3] == ["session_key", "frame", "sdk_name"]

    def test_minimal_record(self):
        """Test absent attributes are omitted."""
        request = build_person_request("abc", 3, DetectionRecord(id="p"))

        assert request == {"session_key": "abc", "frame": "3", "sdk_name": "p", "neutral": "0"}

    def test_identifier_sent_unchanged(self):
        """Test surrounding whitespace in the identifier reaches the server."""
        record = DetectionRecord(id=" p1 ")

        assert record.has_id()
        assert build_person_request("k", 1, record)["sdk_name"] == " p1 "

    def test_neutral_is_constant(self):
        """Test neutral is sent as zero whatever the scores."""
        record = DetectionRecord(id="p", emotions=(0.0, 0.0, 0.0, 0.0, 0.0, 0.0))

        assert build_person_request("k", 1, record)["neutral"] == "0"
        assert build_person_request("k", 1, DetectionRecord(id="p"))["neutral"] == "0"

    def test_last_color_wins(self):
        """Test only the last of the first three colors is sent."""
        record = DetectionRecord(
            id="p",
            clothing_colors=[(1, 1, 1), (2, 2, 2), (3, 3, 3), (4, 4, 4)],
        )

        request = build_person_request("k", 1, record)

        assert request["ClothesColors_1"] == "030303"
        assert [k for k in request if k.startswith("ClothesColors")] == ["ClothesColors_1"]

    def test_single_color(self):
        record = DetectionRecord(id="p", clothing_colors=[(170, 187, 204)])

        assert build_person_request("k", 1, record)["ClothesColors_1"] == "aabbcc"

    def test_fresh_mapping_per_call(self, record):
        """Test fields from a previous record never leak into the next one."""
        build_person_request("k", 1, record)
        request = build_person_request("k", 2, DetectionRecord(id="q"))

        assert "ClothesColors_1" not in request
        assert "age" not in request
