"""
Decoding of detection service replies.

Every endpoint answers with a JSON object carrying an integer ``code``
and an optional ``description``. Code 0 is success; any other value is
a protocol-level failure regardless of the HTTP outcome.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import json
from typing import Any, TypeVar

from loguru import logger
from pydantic import ValidationError

from persontrack.client.exceptions import MalformedEnvelopeError, ProtocolError
from persontrack.client.models import ServerEnvelope

T = TypeVar("T")


def parse_json(raw_text: str) -> tuple[dict[str, Any], bool]:
    """
    Parse a raw reply body into a key/value mapping.

    Args:
        raw_text: Reply body as received

    Returns:
        Tuple of (fields, ok). ``fields`` is empty when ``ok`` is False.
    """
    try:
        fields = json.loads(raw_text)
    except (json.JSONDecodeError, TypeError):
        return {}, False

    if not isinstance(fields, dict):
        return {}, False

    return fields, True


def get_param(fields: dict[str, Any], key: str, kind: type[T]) -> T | None:
    """
    Extract a typed field from a parsed reply.

    Numeric strings are accepted for ``int`` fields and scalars are
    accepted for ``str`` fields, as the service is loose about quoting.

    Returns:
        The coerced value, or None if absent or not coercible
    """
    if key not in fields:
        return None

    value = fields[key]
    if value is None:
        return None

    if kind is bool:
        return value if isinstance(value, bool) else None

    if kind is int:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None

    if kind is str:
        if isinstance(value, (dict, list)):
            return None
        return str(value)

    return value if isinstance(value, kind) else None


def decode_envelope(raw_text: str) -> tuple[ServerEnvelope, dict[str, Any]]:
    """
    Decode a reply and enforce the generic envelope rule.

    Returns:
        The envelope and the full field mapping

    Raises:
        MalformedEnvelopeError: If the body is not a JSON object or lacks ``code``
        ProtocolError: If ``code`` is not 0
    """
    fields, ok = parse_json(raw_text)
    if not ok:
        raise MalformedEnvelopeError(
            f"Bad server response format : {raw_text}",
            raw_response=raw_text
        )

    code = get_param(fields, "code", int)
    if code is None:
        raise MalformedEnvelopeError(
            "Bad server response format. Missing 'code'.",
            raw_response=raw_text
        )

    try:
        envelope = ServerEnvelope(
            **{**fields, "code": code, "description": get_param(fields, "description", str)}
        )
    except ValidationError as e:
        raise MalformedEnvelopeError(
            f"Bad server response format : {raw_text}",
            raw_response=raw_text,
            details={"errors": e.errors()}
        ) from e

    if not envelope.is_success:
        raise ProtocolError(
            f"Server returned code {envelope.code}",
            code=envelope.code,
            description=envelope.description,
            details=fields
        )

    return envelope, fields


def parse_generic_response(raw_text: str) -> tuple[ServerEnvelope | None, dict[str, Any]]:
    """
    Decode a reply, logging instead of raising.

    Returns:
        (envelope, fields) on success, (None, fields) on any failure
    """
    try:
        return decode_envelope(raw_text)
    except MalformedEnvelopeError as e:
        logger.error(e.message)
        return None, {}
    except ProtocolError as e:
        if e.description is not None:
            logger.error(f"Server error description : {e.description}")
        else:
            logger.error(f"Server returned code {e.code} without description")
        return None, e.details
