"""Serialization of field values into FIX tag-value byte buffers."""

from __future__ import annotations

import abc
from typing import Union

FieldInput = Union[bool, int, bytes, bytearray, memoryview]


def serialize_field(value: FieldInput, buffer: bytearray) -> int:
    """Append the wire form of ``value`` to ``buffer``; return bytes written.

    Booleans become ``Y`` or ``N``, integers their decimal form and byte
    strings are copied as they are.
    """
    if isinstance(value, bool):
        data = b"Y" if value else b"N"
    elif isinstance(value, int):
        data = str(value).encode("ascii")
    elif isinstance(value, (bytes, bytearray, memoryview)):
        data = bytes(value)
    else:
        raise TypeError(f"cannot serialize a value of type {type(value).__name__}")
    buffer += data
    return len(data)


class MessageAccumulator(abc.ABC):
    """Something that builds a FIX message one field at a time."""

    @abc.abstractmethod
    def set_field(self, tag: int, value: FieldInput) -> None:
        """Add the field ``tag`` with ``value``."""

    @abc.abstractmethod
    def set_begin_string(self, value: bytes) -> None:
        """Set ``BeginString(8)``."""

    @abc.abstractmethod
    def wrap_std_header(self) -> None:
        """Mark the end of the standard header."""

    @abc.abstractmethod
    def wrap_body(self) -> None:
        """Mark the end of the message body."""

    @abc.abstractmethod
    def wrap_std_trailer(self) -> None:
        """Mark the end of the standard trailer."""