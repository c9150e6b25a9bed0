"""Decoding of FIX tag-value messages into field views."""

from __future__ import annotations

from typing import Optional

from fixwire import tags
from fixwire.config import Config
from fixwire.errors import DecodeError, DecodeErrorKind
from fixwire.message_ref import DuplicateFieldError, FixMessageRef, FixMessageRefBuilder
from fixwire.raw_decoder import RawDecoder, RawDecoderBuffered, RawFrame

_BEGIN_STRING_OFFSET = 2
_EQUAL_SIGN = ord("=")
_ZERO = ord("0")
_NINE = ord("9")


class Decoder:
    """FIX tag-value message decoder."""

    def __init__(self, config: Optional[Config] = None) -> None:
        self._raw_decoder = RawDecoder(config if config is not None else Config())
        self._builder = FixMessageRefBuilder()

    @property
    def config(self) -> Config:
        """The configuration in use."""
        return self._raw_decoder.config

    @config.setter
    def config(self, config: Config) -> None:
        self._raw_decoder.config = config

    def decode(self, data: bytes) -> FixMessageRef:
        """Decode ``data`` into a message; raises :class:`DecodeError`."""
        return self._from_frame(self._raw_decoder.decode(data))

    def buffered(self) -> DecoderBuffered:
        """Return a stream decoder built on ``self``."""
        return DecoderBuffered(self)

    def _from_frame(self, frame: RawFrame) -> FixMessageRef:
        builder = self._builder
        builder.clear()
        separator = self.config.separator
        offset = frame.payload_offset
        try:
            builder.add_field(tags.BEGIN_STRING, _BEGIN_STRING_OFFSET, len(frame.begin_string))
            tag = 0
            tag_digits = 0
            in_tag = True
            value_start = 0
            for i, byte in enumerate(frame.payload):
                if in_tag:
                    if byte == _EQUAL_SIGN:
                        if tag_digits == 0:
                            raise DecodeError(DecodeErrorKind.INVALID, "field without tag")
                        in_tag = False
                        value_start = i + 1
                    elif _ZERO <= byte <= _NINE:
                        tag = tag * 10 + (byte - _ZERO)
                        tag_digits += 1
                    else:
                        raise DecodeError(DecodeErrorKind.INVALID, "malformed tag")
                elif byte == separator:
                    builder.add_field(tag, offset + value_start, i - value_start)
                    tag = 0
                    tag_digits = 0
                    in_tag = True
            if not in_tag or tag_digits:
                raise DecodeError(DecodeErrorKind.INVALID, "unterminated field")
        except DuplicateFieldError as exc:
            raise DecodeError(DecodeErrorKind.INVALID, str(exc)) from exc
        return builder.build(frame.data)


class DecoderBuffered:
    """A FIX message decoder for byte streams.

    Call :meth:`supply_buffer`, fill the returned view completely, then call
    :meth:`current_message` until a message comes back.
    """

    def __init__(self, decoder: Optional[Decoder] = None) -> None:
        self.decoder = decoder if decoder is not None else Decoder()
        self._raw = RawDecoderBuffered(RawDecoder(self.decoder.config))

    @property
    def config(self) -> Config:
        """The configuration in use."""
        return self.decoder.config

    def supply_buffer(self) -> memoryview:
        """Return a writable view that must be filled before the next attempt."""
        return self._raw.supply_buffer()

    def current_message(self) -> Optional[FixMessageRef]:
        """Return the complete message in the buffer, or ``None`` if not yet there."""
        frame = self._raw.current_frame()
        if frame is None:
            return None
        return self.decoder._from_frame(frame)