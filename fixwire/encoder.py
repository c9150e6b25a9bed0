"""A naive FIX tag-value encoder that writes fields as they come."""

from __future__ import annotations

from typing import Dict, Optional

from fixwire import tags
from fixwire.config import Config
from fixwire.serialize import FieldInput, MessageAccumulator, serialize_field


class EncoderNaive(MessageAccumulator):
    """Appends ``tag=value`` pairs, each followed by the separator.

    The ``wrap_*`` calls do not change the bytes written. They record where
    each part of the message ends, as an offset into the buffer.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config if config is not None else Config()
        self._buffer = bytearray()
        self._section_ends: Dict[str, int] = {}

    @property
    def buffer(self) -> bytes:
        """The bytes written so far."""
        return bytes(self._buffer)

    @property
    def section_ends(self) -> Dict[str, int]:
        """Buffer offsets at which the wrapped sections end, by section name."""
        return dict(self._section_ends)

    def set_field(self, tag: int, value: FieldInput) -> None:
        """Append field ``tag`` with ``value``."""
        serialize_field(tag, self._buffer)
        self._buffer += b"="
        serialize_field(value, self._buffer)
        self._buffer.append(self.config.separator)

    def set_begin_string(self, value: bytes) -> None:
        """Append ``BeginString(8)``."""
        self.set_field(tags.BEGIN_STRING, value)

    def _mark_section_end(self, section: str) -> None:
        self._section_ends[section] = len(self._buffer)

    def wrap_std_header(self) -> None:
        """Record the end of the standard header; no bytes are written."""
        self._mark_section_end("header")

    def wrap_body(self) -> None:
        """Record the end of the body; no bytes are written."""
        self._mark_section_end("body")

    def wrap_std_trailer(self) -> None:
        """Record the end of the standard trailer; no bytes are written."""
        self._mark_section_end("trailer")