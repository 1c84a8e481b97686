import datetime
import secrets
from typing import Optional, Tuple

from app.errors import IDGenerationError

# KSUID layout: 4 byte timestamp + 16 byte random payload
KSUID_EPOCH = 1_400_000_000
TIMESTAMP_LENGTH = 4
PAYLOAD_LENGTH = 16
BYTE_LENGTH = TIMESTAMP_LENGTH + PAYLOAD_LENGTH
STRING_LENGTH = 27

# Ordered by ASCII so string order equals numeric order
BASE62_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_BASE62_INDEX = {char: index for index, char in enumerate(BASE62_ALPHABET)}
_MAX_TIMESTAMP = 2**32 - 1


def new_id(now: Optional[datetime.datetime] = None) -> str:
    """
    Return a new time-sortable identifier for a post created at `now`.
    """
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)

    timestamp = int(now.timestamp()) - KSUID_EPOCH
    if not 0 <= timestamp <= _MAX_TIMESTAMP:
        raise IDGenerationError(f"timestamp out of range for id: {now.isoformat()}")

    try:
        payload = secrets.token_bytes(PAYLOAD_LENGTH)
    except (OSError, NotImplementedError) as e:
        raise IDGenerationError(f"entropy source unavailable: {e}") from e

    return _encode(timestamp.to_bytes(TIMESTAMP_LENGTH, "big") + payload)


def parse_id(value: str) -> Tuple[datetime.datetime, bytes]:
    """Split an identifier back into its creation time and random payload."""
    if not is_valid_id(value):
        raise ValueError(f"not a valid id: {value!r}")

    raw = _decode(value)
    seconds = int.from_bytes(raw[:TIMESTAMP_LENGTH], "big") + KSUID_EPOCH
    created = datetime.datetime.fromtimestamp(seconds, tz=datetime.timezone.utc)
    return created, raw[TIMESTAMP_LENGTH:]


def is_valid_id(value: str) -> bool:
    if not isinstance(value, str) or len(value) != STRING_LENGTH:
        return False
    if any(char not in _BASE62_INDEX for char in value):
        return False
    # 27 base62 digits can exceed 20 bytes
    return _to_int(value) < 2 ** (BYTE_LENGTH * 8)


def _encode(raw: bytes) -> str:
    number = int.from_bytes(raw, "big")
    chars = []
    while number:
        number, remainder = divmod(number, 62)
        chars.append(BASE62_ALPHABET[remainder])
    return "".join(reversed(chars)).rjust(STRING_LENGTH, BASE62_ALPHABET[0])


def _decode(value: str) -> bytes:
    return _to_int(value).to_bytes(BYTE_LENGTH, "big")


def _to_int(value: str) -> int:
    number = 0
    for char in value:
        number = number * 62 + _BASE62_INDEX[char]
    return number
