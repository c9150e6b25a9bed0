"""Concrete values of FIX data types and owned field values."""

from __future__ import annotations

import dataclasses
import datetime as _dt
import enum
import math
import struct
from typing import BinaryIO, Dict, List, Optional, Union

from fixwire.errors import DecodeError, DecodeErrorKind

_U8_MAX = 0xFF
_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFF_FFFF
_U64_MASK = 0xFFFF_FFFF_FFFF_FFFF
_EPOCH = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)


class DataType(enum.Enum):
    """The data types that FIX fields can carry."""

    INT = "int"
    LENGTH = "Length"
    NUM_IN_GROUP = "NumInGroup"
    SEQ_NUM = "SeqNum"
    TAG_NUM = "TagNum"
    DAY_OF_MONTH = "DayOfMonth"
    FLOAT = "float"
    QTY = "Qty"
    PRICE = "Price"
    PRICE_OFFSET = "PriceOffset"
    AMT = "Amt"
    PERCENTAGE = "Percentage"
    CHAR = "char"
    BOOLEAN = "Boolean"
    STRING = "String"
    MULTIPLE_CHAR_VALUE = "MultipleCharValue"
    MULTIPLE_STRING_VALUE = "MultipleStringValue"
    COUNTRY = "Country"
    CURRENCY = "Currency"
    EXCHANGE = "Exchange"
    MONTH_YEAR = "MonthYear"
    UTC_TIMESTAMP = "UTCTimestamp"
    UTC_TIME_ONLY = "UTCTimeOnly"
    UTC_DATE_ONLY = "UTCDateOnly"
    LOCAL_MKT_DATE = "LocalMktDate"
    LANGUAGE = "Language"
    DATA = "data"
    XML_DATA = "XMLData"


def _wrap_i32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _utf8(data: bytes) -> str:
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(DecodeErrorKind.INVALID, "field is not valid UTF-8") from exc


@dataclasses.dataclass(frozen=True)
class FieldValue:
    """A decoded FIX field value tagged with its data type."""

    data_type: DataType
    value: object

    @classmethod
    def decode(cls, data_type: DataType, data: bytes) -> Optional[FieldValue]:
        """Decode ``data`` as ``data_type``.

        Returns ``None`` when the bytes are not a value of that type, raises
        :class:`DecodeError` when they cannot be read at all and
        :class:`ValueError` for data types that have no decoding.
        """
        data = bytes(data)
        if data_type is DataType.INT:
            n = 0
            for byte in data:
                if ord("0") <= byte <= ord("9"):
                    n = n * 10 + (byte - ord("0"))
                elif byte == ord("-"):
                    n = -n
                elif byte != ord("+"):
                    return None
            return cls.of_int(n)
        if data_type is DataType.CHAR:
            if not data:
                raise DecodeError(DecodeErrorKind.INVALID, "empty char field")
            return cls.of_char(chr(data[0]))
        if data_type is DataType.BOOLEAN:
            if not data:
                raise DecodeError(DecodeErrorKind.INVALID, "empty boolean field")
            return cls.of_bool(data[0] == ord("Y"))
        if data_type is DataType.COUNTRY:
            if len(data) != 2:
                return None
            return cls(DataType.COUNTRY, data)
        if data_type is DataType.EXCHANGE:
            return cls(DataType.EXCHANGE, _utf8(data))
        if data_type is DataType.DAY_OF_MONTH:
            text = _utf8(data)
            try:
                day = int(text, 10)
            except ValueError as exc:
                raise DecodeError(DecodeErrorKind.INVALID, "bad DayOfMonth") from exc
            if not 0 <= day <= _U8_MAX or text.strip() != text or "_" in text:
                raise DecodeError(DecodeErrorKind.INVALID, "bad DayOfMonth")
            return cls.of_day_of_month(day)
        if data_type is DataType.SEQ_NUM:
            n = 0
            for byte in data:
                if not ord("0") <= byte <= ord("9"):
                    raise DecodeError(DecodeErrorKind.INVALID, "bad SeqNum")
                n = (n * 10 + (byte - ord("0"))) & _U64_MASK
            return cls.of_seq_num(n)
        if data_type is DataType.STRING:
            return cls.of_string(_utf8(data))
        if data_type is DataType.XML_DATA:
            return cls(DataType.XML_DATA, _utf8(data).encode("utf-8"))
        raise ValueError(f"values of type {data_type.value} cannot be decoded")

    @classmethod
    def of_int(cls, value: int) -> FieldValue:
        """An ``int`` value, truncated to 32 bits."""
        return cls(DataType.INT, _wrap_i32(int(value)))

    @classmethod
    def of_float(cls, value: float) -> FieldValue:
        """A ``float`` value, stored with single precision."""
        return cls(DataType.FLOAT, _to_f32(float(value)))

    @classmethod
    def of_char(cls, value: str) -> FieldValue:
        """A single-character value."""
        if len(value) != 1:
            raise ValueError(f"a char value must be one character, not {value!r}")
        return cls(DataType.CHAR, value)

    @classmethod
    def of_bool(cls, value: bool) -> FieldValue:
        """A ``Boolean`` value."""
        return cls(DataType.BOOLEAN, bool(value))

    @classmethod
    def of_day_of_month(cls, value: int) -> FieldValue:
        """A ``DayOfMonth`` value in 0..255."""
        if not 0 <= value <= _U8_MAX:
            raise ValueError(f"DayOfMonth out of range: {value}")
        return cls(DataType.DAY_OF_MONTH, value)

    @classmethod
    def of_seq_num(cls, value: int) -> FieldValue:
        """A ``SeqNum`` value; must not be negative."""
        if not 0 <= value <= _U64_MASK:
            raise ValueError(f"SeqNum out of range: {value}")
        return cls(DataType.SEQ_NUM, value)

    @classmethod
    def of_string(cls, value: str) -> FieldValue:
        """A ``String`` value."""
        return cls(DataType.STRING, str(value))

    @classmethod
    def of_length(cls, value: int) -> FieldValue:
        """A ``Length`` value; must not be negative."""
        if not 0 <= value <= _U32_MAX:
            raise ValueError(f"Length out of range: {value}")
        return cls(DataType.LENGTH, value)

    def __str__(self) -> str:
        if self.data_type is DataType.BOOLEAN:
            return "Y" if self.value else "N"
        if self.data_type in (DataType.CHAR, DataType.STRING):
            return str(self.value)
        if self.data_type in (DataType.INT, DataType.LENGTH):
            return str(self.value)
        return ""


@dataclasses.dataclass(frozen=True)
class MonthYear:
    """A ``MonthYear`` value; ``day_or_week`` above 35 denotes a week."""

    year: int
    month: int
    day_or_week: int

    WEEK_CUTOFF = 35

    def __str__(self) -> str:
        text = f"{self.year}{self.month}"
        if self.day_or_week > self.WEEK_CUTOFF:
            week = self.day_or_week - self.WEEK_CUTOFF
            if week > 9:
                raise ValueError(f"week {week} cannot be written as one digit")
            return f"{text}w{week}"
        return f"{text}{self.day_or_week}"


@dataclasses.dataclass(frozen=True)
class TagNum:
    """A 16-bit tag number."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _U16_MAX:
            raise ValueError(f"tag number out of range: {self.value}")

    def write(self, writer: BinaryIO) -> None:
        """Write the tag number to ``writer`` as two big-endian bytes."""
        writer.write(self.value.to_bytes(2, "big"))

    @classmethod
    def from_bytes(cls, data: bytes) -> TagNum:
        """Read a tag number from the first two big-endian bytes of ``data``."""
        if len(data) < 2:
            raise ValueError("a tag number needs at least two bytes")
        return cls((data[0] << 8) + data[1])

    def __str__(self) -> str:
        return str(self.value)


GroupEntries = List[Dict[int, "FixFieldValue"]]


@dataclasses.dataclass(frozen=True)
class FixFieldValue:
    """An owned FIX field value: either a single value or a repeating group."""

    value: Union[FieldValue, GroupEntries]

    @property
    def is_group(self) -> bool:
        """Whether this is a repeating group."""
        return not isinstance(self.value, FieldValue)

    @classmethod
    def string(cls, data: bytes) -> Optional[FixFieldValue]:
        """A string value from UTF-8 ``data``, or ``None`` if it is not UTF-8."""
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError:
            return None
        return cls(FieldValue.of_string(text))

    @classmethod
    def from_python(cls, value: object) -> FixFieldValue:
        """Build a field value from a plain Python value.

        Booleans become the chars ``t``/``f``; a pair ``(major, minor)``
        becomes the integer ``(major << 16) + minor``; datetimes become whole
        seconds since the Unix epoch (naive ones are taken as UTC).
        """
        if isinstance(value, bool):
            return cls(FieldValue.of_char("t" if value else "f"))
        if isinstance(value, int):
            return cls(FieldValue.of_int(value))
        if isinstance(value, float):
            return cls(FieldValue.of_float(value))
        if isinstance(value, str):
            return cls(FieldValue.of_string(value))
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls(FieldValue(DataType.DATA, bytes(value)))
        if isinstance(value, tuple) and len(value) == 2:
            major, minor = value
            if not 0 <= major <= _U8_MAX or not 0 <= minor <= _U16_MAX:
                raise ValueError(f"version pair out of range: {value!r}")
            return cls(FieldValue.of_int((major << 16) + minor))
        if isinstance(value, _dt.datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=_dt.timezone.utc)
            elapsed = value - _EPOCH
            if elapsed < _dt.timedelta(0):
                raise ValueError("time is before the Unix epoch")
            return cls(FieldValue.of_int(elapsed // _dt.timedelta(seconds=1)))
        raise TypeError(f"cannot convert {type(value).__name__} to a field value")

    def _atom_of(self, data_type: DataType) -> Optional[object]:
        if isinstance(self.value, FieldValue) and self.value.data_type is data_type:
            return self.value.value
        return None

    def as_length(self) -> Optional[int]:
        """The value if this is a ``Length``, else ``None``."""
        return self._atom_of(DataType.LENGTH)  # type: ignore[return-value]

    def as_int(self) -> Optional[int]:
        """The value if this is an ``int``, else ``None``."""
        return self._atom_of(DataType.INT)  # type: ignore[return-value]

    def as_str(self) -> Optional[str]:
        """The value if this is a ``String``, else ``None``."""
        return self._atom_of(DataType.STRING)  # type: ignore[return-value]