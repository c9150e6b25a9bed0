"""Low-level helpers for the FIX tag-value wire format."""

from __future__ import annotations

import logging
from typing import Callable

from fixwire.errors import DecodeError, DecodeErrorKind

logger = logging.getLogger(__name__)

# A tag-value message can't possibly be shorter than this:
#   8=?|9=?|35=?|10=???|
MIN_FIX_MESSAGE_LEN_IN_BYTES = 20

# "10=" (3 bytes), three checksum digits and the separator.
FIELD_CHECKSUM_LEN_IN_BYTES = 7

_MAX_BODY_LENGTH = 999_999


def parse_u8_from_decimal(digits: bytes) -> int:
    """Parse three zero-padded ASCII digits as an 8-bit value.

    No error detection is performed; arithmetic wraps modulo 256.
    """
    d0, d1, d2 = (byte - ord("0") for byte in digits[:3])
    return (d0 * 100 + d1 * 10 + d2) & 0xFF


def checksum_10(data: bytes) -> int:
    """Return the ``CheckSum(10)`` value of ``data``."""
    return sum(data) & 0xFF


def checksum_digits(message: bytes) -> bytes:
    """Return the three ``CheckSum(10)`` digits at the end of ``message``."""
    return bytes(message[-4:-1])


def verify_checksum(message: bytes) -> None:
    """Raise :class:`DecodeError` if the checksum of ``message`` is wrong."""
    nominal = parse_u8_from_decimal(checksum_digits(message))
    actual = checksum_10(message[: len(message) - FIELD_CHECKSUM_LEN_IN_BYTES])
    if nominal != actual:
        raise DecodeError(DecodeErrorKind.CHECKSUM)


def verify_body_length(data: bytes, start_of_body: int, nominal_body_length: int) -> None:
    """Raise :class:`DecodeError` if ``BodyLength(9)`` does not fit ``data``."""
    end_of_body = len(data) - FIELD_CHECKSUM_LEN_IN_BYTES
    body_length = end_of_body - start_of_body
    if start_of_body > end_of_body or nominal_body_length != body_length:
        logger.debug(
            "BodyLength mismatch: expected %s but is %s.",
            body_length,
            nominal_body_length,
        )
        raise DecodeError(
            DecodeErrorKind.INVALID,
            f"BodyLength is {nominal_body_length}, body has {body_length} bytes",
        )


def encode_raw(
    begin_string: bytes,
    body_writer: Callable[[bytearray], int],
    buffer: bytearray,
    separator: int,
) -> int:
    """Append a complete FIX message to ``buffer`` and return its new length.

    ``body_writer`` appends the body to the buffer and returns the number of
    bytes written. ``BodyLength(9)`` is written zero-padded to six digits and
    ``CheckSum(10)`` is computed over the bytes appended by this call.
    """
    start = len(buffer)
    buffer += b"8="
    buffer += begin_string
    buffer += bytes([separator]) + b"9=000000" + bytes([separator])
    length_slot = slice(len(buffer) - 7, len(buffer) - 1)
    body_length = body_writer(buffer)
    if body_length > _MAX_BODY_LENGTH:
        raise ValueError(f"body of {body_length} bytes does not fit in BodyLength(9)")
    buffer[length_slot] = f"{body_length:06d}".encode("ascii")
    checksum = checksum_10(buffer[start:])
    buffer += b"10=" + f"{checksum:03d}".encode("ascii") + bytes([separator])
    return len(buffer)