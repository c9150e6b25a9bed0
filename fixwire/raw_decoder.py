"""Minimal decoding of FIX tag-value frames.

Only ``BeginString(8)``, ``BodyLength(9)`` and ``CheckSum(10)`` are looked
at; the rest of the message is left to higher-level decoders.
"""

from __future__ import annotations

import dataclasses
from typing import Optional

from fixwire.config import Config
from fixwire.errors import DecodeError, DecodeErrorKind
from fixwire.utils import (
    FIELD_CHECKSUM_LEN_IN_BYTES,
    MIN_FIX_MESSAGE_LEN_IN_BYTES,
    verify_body_length,
    verify_checksum,
)

_EQUAL_SIGN = ord("=")
_ZERO = ord("0")


@dataclasses.dataclass(frozen=True)
class RawFrame:
    """An immutable view over the raw contents of a FIX message.

    ``payload`` holds every field except ``BeginString(8)``,
    ``BodyLength(9)`` and ``CheckSum(10)``; ``payload_offset`` is where it
    starts within ``data``.
    """

    data: bytes
    begin_string: bytes
    payload: bytes
    payload_offset: int


@dataclasses.dataclass
class _HeaderInfo:
    """Positions of the first two fields of a FIX message."""

    equal_signs: list
    separators: list
    body_length: int

    @property
    def start_of_body(self) -> int:
        # The body starts right after the separator of BodyLength(9).
        return self.separators[1] + 1

    @property
    def begin_string_range(self) -> slice:
        return slice(self.equal_signs[0] + 1, self.separators[0])

    @classmethod
    def parse(cls, data: bytes, separator: int) -> _HeaderInfo:
        info = cls(equal_signs=[0, 0], separators=[0, 0], body_length=0)
        field_i = 0
        for i, byte in enumerate(data):
            if field_i >= 2:
                break
            if byte == _EQUAL_SIGN:
                info.equal_signs[field_i] = i
                info.body_length = 0
            elif byte == separator:
                info.separators[field_i] = i
                field_i += 1
            else:
                info.body_length = info.body_length * 10 + ((byte - _ZERO) & 0xFF)
        if all(info.equal_signs) and all(info.separators):
            return info
        raise DecodeError(DecodeErrorKind.INVALID, "malformed standard header")


class RawDecoder:
    """A bare-bones FIX decoder that checks framing and checksum only."""

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config if config is not None else Config()

    def decode(self, data: bytes) -> RawFrame:
        """Check ``data`` and return it as a :class:`RawFrame`.

        Raises :class:`DecodeError` if the message is malformed or its
        checksum is wrong.
        """
        data = bytes(data)
        if len(data) < MIN_FIX_MESSAGE_LEN_IN_BYTES:
            raise DecodeError(DecodeErrorKind.INVALID, "message is too short")
        info = _HeaderInfo.parse(data, self.config.separator)
        verify_body_length(data, info.start_of_body, info.body_length)
        if self.config.verify_checksum:
            verify_checksum(data)
        start = info.start_of_body
        return RawFrame(
            data=data,
            begin_string=data[info.begin_string_range],
            payload=data[start : start + info.body_length],
            payload_offset=start,
        )

    def buffered(self) -> RawDecoderBuffered:
        """Return a stream decoder that uses ``self`` for decoding."""
        return RawDecoderBuffered(self)


class RawDecoderBuffered:
    """A bare-bones FIX decoder for byte streams.

    Call :meth:`supply_buffer`, fill the returned view completely and then
    call :meth:`current_frame`, until a frame comes back.
    """

    def __init__(self, decoder: Optional[RawDecoder] = None) -> None:
        self.decoder = decoder if decoder is not None else RawDecoder()
        self._buffer = bytearray()
        self._view: Optional[memoryview] = None
        self._error: Optional[DecodeError] = None

    @property
    def config(self) -> Config:
        """The configuration of the underlying decoder."""
        return self.decoder.config

    def _resize(self, length: int) -> None:
        if self._view is not None:
            self._view.release()
            self._view = None
        current = len(self._buffer)
        if length > current:
            self._buffer.extend(bytes(length - current))
        else:
            del self._buffer[length:]

    def supply_buffer(self) -> memoryview:
        """Return a writable view that must be filled before the next attempt.

        The view is invalidated by the next call to this method.
        """
        current = len(self._buffer)
        if current < MIN_FIX_MESSAGE_LEN_IN_BYTES:
            self._resize(MIN_FIX_MESSAGE_LEN_IN_BYTES)
        else:
            try:
                info = _HeaderInfo.parse(bytes(self._buffer), self.config.separator)
            except DecodeError as exc:
                self._error = exc
                return memoryview(bytearray())
            total = info.start_of_body + info.body_length + FIELD_CHECKSUM_LEN_IN_BYTES
            self._resize(total)
        self._view = memoryview(self._buffer)
        return self._view[current:]

    def current_frame(self) -> Optional[RawFrame]:
        """Return the complete frame in the buffer, or ``None`` if not yet there.

        Raises :class:`DecodeError` if the stream turned out to be malformed.
        """
        if self._error is not None:
            raise self._error
        length = len(self._buffer)
        if length in (0, MIN_FIX_MESSAGE_LEN_IN_BYTES):
            return None
        return self.decoder.decode(bytes(self._buffer))