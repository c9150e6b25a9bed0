import datetime as dt

import pytest

from fixwire.message_ref import DuplicateFieldError, FixMessageRefBuilder

DATA = b"8=FIX.4.4|35=D|34=12|464=Y|44=-42|52=20100304-07:59:30.123|58=|"


def _message():
    builder = FixMessageRefBuilder()
    offset = 0
    for chunk in DATA.split(b"|")[:-1]:
        tag, value = chunk.split(b"=", 1)
        builder.add_field(int(tag), offset + len(tag) + 1, len(value))
        offset += len(chunk) + 1
    return builder.build(DATA)


def test_field_raw_returns_value_bytes():
    msg = _message()
    assert msg.field_raw(8) == b"FIX.4.4"
    assert msg.field_raw(35) == b"D"


def test_missing_field_is_none():
    msg = _message()
    assert msg.field_raw(999) is None
    assert msg.field(999) is None
    assert msg.field_as_str(999) is None


def test_typed_accessors():
    msg = _message()
    assert msg.field_as_char(35) == "D"
    assert msg.field_as_bool(464) is True
    assert msg.field_as_bool(35) is False
    assert msg.field_as_i64(44) == -42
    assert msg.field_as_i64(35) is None


def test_standard_header_shortcuts():
    msg = _message()
    assert msg.msg_type() == "D"
    assert msg.seq_num() == 12
    assert msg.test_indicator() is True


def test_datetime_parsing():
    msg = _message()
    assert msg.field_as_datetime(52) == dt.datetime(
        2010, 3, 4, 7, 59, 30, 123000, tzinfo=dt.timezone.utc
    )
    assert msg.field_as_datetime(35) is None


def test_group_is_not_available():
    assert _message().group(268) is None


def test_iteration_keeps_insertion_order():
    msg = _message()
    assert [tag for tag, _ in msg] == [8, 35, 34, 464, 44, 52, 58]
    assert len(msg) == 7
    assert 464 in msg


def test_field_ref_accessors():
    msg = _message()
    assert msg.field(35).raw() == b"D"
    assert msg.field(35).as_char() == ord("D")
    assert msg.field(464).as_bool() is True
    assert msg.field(44).as_i64() == -42
    assert msg.field(34).as_u64() == 12


def test_field_ref_errors():
    msg = _message()
    with pytest.raises(ValueError):
        msg.field(35).as_i64()
    with pytest.raises(ValueError):
        msg.field(58).as_i64()
    with pytest.raises(ValueError):
        msg.field(44).as_u64()
    assert msg.field(58).as_u64() == 0


def test_duplicate_field_is_rejected():
    builder = FixMessageRefBuilder()
    builder.add_field(35, 0, 1)
    with pytest.raises(DuplicateFieldError) as info:
        builder.add_field(35, 2, 1)
    assert info.value.tag == 35


def test_clear_removes_fields_but_built_messages_survive():
    builder = FixMessageRefBuilder()
    builder.add_field(35, 0, 1)
    msg = builder.build(b"D")
    builder.clear()
    builder.add_field(35, 0, 1)
    assert msg.field_raw(35) == b"D"
    assert builder.build(b"X").field_raw(35) == b"X"