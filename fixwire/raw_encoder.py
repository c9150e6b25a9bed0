"""A content-agnostic FIX tag-value encoder."""

from __future__ import annotations

from typing import Optional

from fixwire.config import Config
from fixwire.utils import checksum_10

_MAX_BODY_LENGTH = 999_999


class RawEncoder:
    """Encodes arbitrary payloads, taking care of ``BodyLength(9)`` and ``CheckSum(10)``.

    Call :meth:`set_begin_string` first, then :meth:`extend` with the body,
    then :meth:`finalize`.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config if config is not None else Config()
        self._buffer = bytearray()
        self._body_start: Optional[int] = None

    def set_begin_string(self, begin_string: bytes) -> None:
        """Start a new message with ``BeginString(8)`` set to ``begin_string``."""
        sep = bytes([self.config.separator])
        self._buffer.clear()
        self._buffer += b"8=" + bytes(begin_string) + sep + b"9=000000" + sep
        self._body_start = len(self._buffer)

    def extend(self, data: bytes) -> None:
        """Append ``data`` to the message payload."""
        self._buffer += data

    def finalize(self) -> bytes:
        """Write ``BodyLength(9)`` and ``CheckSum(10)`` and return the message."""
        if self._body_start is None:
            raise RuntimeError("set_begin_string must be called before finalize")
        body_length = len(self._buffer) - self._body_start
        if body_length > _MAX_BODY_LENGTH:
            raise ValueError(f"body of {body_length} bytes does not fit in BodyLength(9)")
        self._buffer[self._body_start - 7 : self._body_start - 1] = (
            f"{body_length:06d}".encode("ascii")
        )
        checksum = checksum_10(self._buffer)
        self._buffer += (
            b"10=" + f"{checksum:03d}".encode("ascii") + bytes([self.config.separator])
        )
        return bytes(self._buffer)