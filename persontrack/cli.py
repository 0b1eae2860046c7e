"""
Command line entry point for replaying recorded detections.

Each line of the input file is one frame:
    {"frame": 12, "people": [{"id": "p-1", "age": 31, ...}, ...]}
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Iterator

from loguru import logger
from pydantic import ValidationError

from persontrack.client.models import DetectionRecord
from persontrack.client.session import SessionClient
from persontrack.client.transport.base import Transport
from persontrack.config.settings import ClientSettings
from persontrack.utils.logging import configure_logging

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_NO_SESSION = 2


def read_frames(path: Path) -> Iterator[tuple[int, list[DetectionRecord]]]:
    """Yield (frame_number, records) for every well-formed line of ``path``."""
    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                entry = json.loads(line)
                frame_number = int(entry["frame"])
                records = [DetectionRecord(**person) for person in entry.get("people", [])]
            except (json.JSONDecodeError, KeyError, TypeError, ValueError, ValidationError) as e:
                logger.warning(f"Skipping line {line_number} of {path}: {e}")
                continue
            yield frame_number, records


def replay(
    path: Path,
    source_name: str,
    settings: ClientSettings,
    transport: Transport | None = None
) -> int:
    """
    Stream every frame of a recording through one session.

    Streaming ends at the first frame that is not fully accepted. Otherwise
    every outstanding reply is waited for before the session is stopped.

    Returns:
        Process exit code
    """
    with SessionClient(source_name, transport=transport, settings=settings) as client:
        if not client.started:
            logger.error(f"Could not start a session for '{source_name}'")
            return EXIT_NO_SESSION

        frames = 0
        for frame_number, records in read_frames(path):
            frames += 1
            if not client.send_records(records, frame_number):
                logger.warning(f"Frame {frame_number} was not fully accepted, stopping replay")
                return EXIT_REJECTED

        if not client.flush():
            logger.warning(f"Replayed {frames} frames, a late reply was not accepted")
            return EXIT_REJECTED

        logger.info(f"Replayed {frames} frames")
        return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(description="PersonTrack detection client")
    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_parser = subparsers.add_parser(
        "replay",
        help="Send recorded detections to the detection service"
    )
    replay_parser.add_argument(
        "file",
        type=Path,
        help="JSON-lines file with one frame per line"
    )
    replay_parser.add_argument(
        "--source",
        required=True,
        help="Source name to open the session with"
    )
    replay_parser.add_argument(
        "--base-url",
        default=None,
        help="Detection service URL (overrides PERSONTRACK_BASE_URL)"
    )
    replay_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level"
    )

    args = parser.parse_args(argv)

    if not args.file.exists():
        parser.error(f"no such file: {args.file}")

    overrides = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.log_level:
        overrides["log_level"] = args.log_level
    settings = ClientSettings(**overrides)

    configure_logging(settings)

    return replay(args.file, args.source, settings)


if __name__ == "__main__":
    sys.exit(main())
