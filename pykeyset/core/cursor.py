"""Opaque cursor codec.

Cursors are fixed-width big-endian byte strings encoded as unpadded
base64url. Three key shapes are supported:

- ``INT64``: 8 bytes, two's-complement signed 64-bit integer.
- ``TIME``: 8 bytes, nanoseconds since the Unix epoch (UTC).
- ``TIME_AND_INT64``: 16 bytes, the time encoding followed by the integer one.

Big-endian layout makes byte-wise comparison of the decoded payload agree
with numeric comparison for non-negative keys, and ``decode(encode(x)) == x``
holds for every representable key.
"""

from __future__ import annotations

import base64
import binascii
import re
import struct
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable

from pykeyset.utils.exceptions import InvalidEncoding, InvalidLength
from pykeyset.utils.types import INT64_MAX, INT64_MIN

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_INT64 = struct.Struct(">q")
_TIME_AND_INT64 = struct.Struct(">qq")
_BASE64URL_RAW = re.compile(r"[A-Za-z0-9_-]*")


def _encode(payload: bytes) -> str:
    return base64.urlsafe_b64encode(payload).rstrip(b"=").decode("ascii")


def _decode(cursor: str, size: int) -> bytes:
    """Decode an unpadded base64url cursor and check its byte length."""
    if not isinstance(cursor, str) or not _BASE64URL_RAW.fullmatch(cursor):
        raise InvalidEncoding(f"invalid cursor encoding: {cursor!r}")
    padded = cursor + "=" * (-len(cursor) % 4)
    try:
        payload = base64.b64decode(padded, altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise InvalidEncoding(f"invalid cursor encoding: {e}") from e
    if len(payload) != size:
        raise InvalidLength(size, len(payload))
    return payload


def _check_int64(value: int, what: str) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"{what} {value} is outside the signed 64-bit range")
    return value


def to_utc(dt: datetime) -> datetime:
    """Normalize a datetime to aware UTC. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def datetime_to_ns(dt: datetime) -> int:
    """Exact nanoseconds since the Unix epoch for a datetime."""
    delta = to_utc(dt) - EPOCH
    seconds = delta.days * 86_400 + delta.seconds
    return _check_int64(seconds * 1_000_000_000 + delta.microseconds * 1_000, "timestamp (ns)")


def ns_to_datetime(ns: int) -> datetime:
    """Aware UTC datetime for nanoseconds since the epoch, truncated to microseconds."""
    return EPOCH + timedelta(microseconds=ns // 1_000)


# --- Integer cursors ---


def encode_int64_cursor(value: int) -> str:
    """Encode a signed 64-bit integer into an opaque cursor."""
    return _encode(_INT64.pack(_check_int64(value, "integer")))


def decode_int64_cursor(cursor: str) -> int:
    """Decode a cursor produced by ``encode_int64_cursor``.

    Raises:
        InvalidEncoding: If the cursor is not unpadded base64url
        InvalidLength: If the payload is not 8 bytes
    """
    (value,) = _INT64.unpack(_decode(cursor, _INT64.size))
    return value


# --- Timestamp cursors ---


def encode_time_ns_cursor(ns: int) -> str:
    """Encode nanoseconds since the Unix epoch into an opaque cursor."""
    return _encode(_INT64.pack(_check_int64(ns, "timestamp (ns)")))


def decode_time_ns_cursor(cursor: str) -> int:
    """Decode a time cursor to nanoseconds since the epoch, without loss."""
    (ns,) = _INT64.unpack(_decode(cursor, _INT64.size))
    return ns


def encode_time_cursor(dt: datetime) -> str:
    """Encode an instant into an opaque cursor.

    The value is normalized to UTC first, so equal instants in different
    zones yield the same cursor.
    """
    return encode_time_ns_cursor(datetime_to_ns(dt))


def decode_time_cursor(cursor: str) -> datetime:
    """Decode a time cursor into an aware UTC datetime."""
    return ns_to_datetime(decode_time_ns_cursor(cursor))


# --- Composite cursors ---


def encode_time_and_int64_cursor(dt: datetime, id: int) -> str:
    """Encode a composite (time, id) key into a single 16-byte cursor."""
    return _encode(_TIME_AND_INT64.pack(datetime_to_ns(dt), _check_int64(id, "integer")))


def decode_time_and_int64_cursor(cursor: str) -> tuple[datetime, int]:
    """Decode a composite cursor into ``(datetime, id)``.

    Raises:
        InvalidEncoding: If the cursor is not unpadded base64url
        InvalidLength: If the payload is not 16 bytes
    """
    ns, id = _TIME_AND_INT64.unpack(_decode(cursor, _TIME_AND_INT64.size))
    return ns_to_datetime(ns), id


class CursorKind(Enum):
    """Key shape of a cursor: payload width plus its codec pair."""

    INT64 = "int64"
    TIME = "time"
    TIME_AND_INT64 = "time_and_int64"

    @property
    def size(self) -> int:
        return _TIME_AND_INT64.size if self is CursorKind.TIME_AND_INT64 else _INT64.size

    @property
    def columns(self) -> int:
        return 2 if self is CursorKind.TIME_AND_INT64 else 1

    def decode(self, cursor: str) -> tuple[Any, ...]:
        """Decode a cursor of this shape into a tuple of key values."""
        if self is CursorKind.INT64:
            return (decode_int64_cursor(cursor),)
        if self is CursorKind.TIME:
            return (decode_time_cursor(cursor),)
        return decode_time_and_int64_cursor(cursor)

    def encode(self, *values: Any) -> str:
        """Encode key values of this shape into a cursor."""
        encoder: Callable[..., str] = _ENCODERS[self]
        return encoder(*values)


_ENCODERS: dict[CursorKind, Callable[..., str]] = {
    CursorKind.INT64: encode_int64_cursor,
    CursorKind.TIME: encode_time_cursor,
    CursorKind.TIME_AND_INT64: encode_time_and_int64_cursor,
}
