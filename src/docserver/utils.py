import os
import re
import time
from datetime import UTC, datetime
from uuid import UUID

LOGIN_RE = re.compile(r"^[A-Za-z0-9]+$")


def is_login(value: str) -> bool:
    return bool(LOGIN_RE.fullmatch(value))


def now() -> datetime:
    return datetime.now(UTC)


def uuid7() -> UUID:
    """Generate a time-ordered UUID (version 7).

    The first 48 bits hold the Unix timestamp in milliseconds, so identifiers
    sort by creation time. The remaining bits are random apart from the
    version and variant fields.
    """
    timestamp_ms = time.time_ns() // 1_000_000
    value = (timestamp_ms & 0xFFFF_FFFF_FFFF) << 80
    value |= int.from_bytes(os.urandom(10), "big")
    value = (value & ~(0xF << 76)) | (0x7 << 76)
    value = (value & ~(0x3 << 62)) | (0x2 << 62)
    return UUID(int=value)
