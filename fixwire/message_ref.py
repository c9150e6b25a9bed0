"""Read-only views over decoded FIX tag-value messages."""

from __future__ import annotations

import dataclasses
import datetime as _dt
import re
from typing import Dict, Iterator, Mapping, Optional, Tuple

from fixwire import tags

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U64_MAX = 2**64 - 1
_U64_MASK = _U64_MAX

_INT_PATTERN = re.compile(rb"[+-]?[0-9]+")
_UINT_PATTERN = re.compile(rb"[0-9]+")
_TIMESTAMP_PATTERN = re.compile(r"[0-9]{8}-[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}")


class DuplicateFieldError(ValueError):
    """Raised when a tag is added to a message more than once."""

    def __init__(self, tag: int) -> None:
        self.tag = tag
        super().__init__(f"tag {tag} is already present in the message")


@dataclasses.dataclass(frozen=True)
class _Field:
    index: int
    start: int
    end: int


def _parse_i64(data: bytes) -> Optional[int]:
    if not _INT_PATTERN.fullmatch(data):
        return None
    value = int(data)
    if not _I64_MIN <= value <= _I64_MAX:
        return None
    return value


@dataclasses.dataclass(frozen=True)
class FieldRef:
    """A single field of a :class:`FixMessageRef`."""

    message: FixMessageRef
    _field: _Field

    def raw(self) -> bytes:
        """The raw bytes of the field value."""
        return self.message.data[self._field.start : self._field.end]

    def as_char(self) -> int:
        """The first byte of the value."""
        data = self.raw()
        if not data:
            raise ValueError("empty field has no char value")
        return data[0]

    def as_bool(self) -> bool:
        """Whether the value starts with ``Y``."""
        return self.as_char() == ord("Y")

    def as_i64(self) -> int:
        """The value as a signed 64-bit integer."""
        data = self.raw()
        if not data:
            raise ValueError("empty field has no integer value")
        value = _parse_i64(data)
        if value is None:
            raise ValueError(f"not a 64-bit integer: {data!r}")
        return value

    def as_u64(self) -> int:
        """The value as an unsigned 64-bit integer; an empty value is 0."""
        data = self.raw()
        if not data:
            return 0
        if not _UINT_PATTERN.fullmatch(data):
            raise ValueError(f"not an unsigned integer: {data!r}")
        value = int(data)
        if value > _U64_MAX:
            raise ValueError(f"value does not fit in 64 bits: {data!r}")
        return value


@dataclasses.dataclass(frozen=True)
class FixMessageRef:
    """A decoded FIX message with fast access to fields by tag.

    Iterating yields ``(tag, raw_value)`` pairs in the order the fields
    were added.
    """

    data: bytes
    _fields: Mapping[int, _Field]

    def __iter__(self) -> Iterator[Tuple[int, bytes]]:
        for tag, field in self._fields.items():
            yield tag, self.data[field.start : field.end]

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, tag: object) -> bool:
        return tag in self._fields

    def field(self, tag: int) -> Optional[FieldRef]:
        """The field ``tag``, or ``None`` if absent."""
        field = self._fields.get(tag)
        if field is None:
            return None
        return FieldRef(self, field)

    def field_raw(self, tag: int) -> Optional[bytes]:
        """The raw bytes of field ``tag``, or ``None`` if absent."""
        field = self._fields.get(tag)
        if field is None:
            return None
        return self.data[field.start : field.end]

    def field_as_char(self, tag: int) -> Optional[str]:
        """The first character of field ``tag``, or ``None``."""
        data = self.field_raw(tag)
        if not data:
            return None
        return chr(data[0])

    def field_as_bool(self, tag: int) -> Optional[bool]:
        """Whether field ``tag`` starts with ``Y``, or ``None`` if absent."""
        data = self.field_raw(tag)
        if data is None:
            return None
        return data[:1] == b"Y"

    def field_as_i64(self, tag: int) -> Optional[int]:
        """Field ``tag`` as a 64-bit integer, or ``None``."""
        data = self.field_raw(tag)
        if data is None:
            return None
        return _parse_i64(data)

    def field_as_str(self, tag: int) -> Optional[str]:
        """Field ``tag`` as UTF-8 text, or ``None``."""
        data = self.field_raw(tag)
        if data is None:
            return None
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return None

    def field_as_datetime(self, tag: int) -> Optional[_dt.datetime]:
        """Field ``tag`` as a UTC timestamp ``YYYYMMDD-HH:MM:SS.sss``, or ``None``."""
        text = self.field_as_str(tag)
        if text is None or not _TIMESTAMP_PATTERN.fullmatch(text):
            return None
        try:
            naive = _dt.datetime.strptime(text, "%Y%m%d-%H:%M:%S.%f")
        except ValueError:
            return None
        return naive.replace(tzinfo=_dt.timezone.utc)

    def group(self, tag: int) -> Optional[int]:
        """The entry count declared by the NumInGroup field ``tag``.

        ``None`` when the field is absent or is not a non-negative integer.
        """
        count = self.field_as_i64(tag)
        if count is None or count < 0:
            return None
        return count

    def msg_type(self) -> Optional[str]:
        """``MsgType(35)``."""
        return self.field_as_str(tags.MSG_TYPE)

    def seq_num(self) -> Optional[int]:
        """``MsgSeqNum(34)`` as an unsigned 64-bit integer."""
        value = self.field_as_i64(tags.MSG_SEQ_NUM)
        if value is None:
            return None
        return value & _U64_MASK

    def test_indicator(self) -> Optional[bool]:
        """``TestMessageIndicator(464)``."""
        return self.field_as_bool(tags.TEST_MESSAGE_INDICATOR)


class FixMessageRefBuilder:
    """Collects field positions and builds :class:`FixMessageRef` views."""

    def __init__(self) -> None:
        self._fields: Dict[int, _Field] = {}

    def clear(self) -> None:
        """Remove all fields."""
        self._fields.clear()

    def add_field(self, tag: int, start: int, length: int) -> None:
        """Record field ``tag`` at ``start`` spanning ``length`` bytes."""
        if tag in self._fields:
            raise DuplicateFieldError(tag)
        self._fields[tag] = _Field(len(self._fields), start, start + length)

    def build(self, data: bytes) -> FixMessageRef:
        """Return a message over ``data`` with the fields recorded so far."""
        return FixMessageRef(bytes(data), dict(self._fields))