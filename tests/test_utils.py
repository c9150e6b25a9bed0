import pytest

from fixwire.errors import DecodeError, DecodeErrorKind
from fixwire.utils import (
    FIELD_CHECKSUM_LEN_IN_BYTES,
    MIN_FIX_MESSAGE_LEN_IN_BYTES,
    checksum_10,
    checksum_digits,
    encode_raw,
    parse_u8_from_decimal,
    verify_body_length,
    verify_checksum,
)

SAMPLE = b"8=FIX.4.2|9=40|35=D|49=AFUNDMGR|56=ABROKER|15=USD|59=0|10=091|"


def test_minimal_message_matches_length_constants():
    minimal = b"8=?|9=5|35=?|10=183|"
    assert len(minimal) == MIN_FIX_MESSAGE_LEN_IN_BYTES
    assert verify_checksum(minimal) is None
    assert checksum_digits(minimal) == b"183"
    start_of_body = len(b"8=?|9=5|")
    assert verify_body_length(minimal, start_of_body, 5) is None
    assert len(minimal) - start_of_body - 5 == FIELD_CHECKSUM_LEN_IN_BYTES


def test_edges_cases_of_checksum_calculation():
    assert checksum_10(b"") == 0
    assert checksum_10(bytes([1])) == 1
    assert checksum_10(bytes([128, 127])) == 255
    assert checksum_10(bytes([128, 128])) == 0


def test_checksum_of_documented_example():
    assert checksum_10(b"hunter2") == 0xC8


def test_correct_retrieval_of_checksum_digits():
    assert checksum_digits(b"8=FIX.4.4|9=1337|35=?|...|10=000|") == b"000"
    assert checksum_digits(b"8=FIX.4.4|9=1337|35=?|...|10=ABC|") == b"ABC"


def test_parse_u8_from_decimal():
    assert parse_u8_from_decimal(b"091") == 91
    assert parse_u8_from_decimal(b"000") == 0
    assert parse_u8_from_decimal(b"255") == 255


def test_verify_checksum_accepts_valid_message():
    assert verify_checksum(SAMPLE) is None


def test_verify_checksum_rejects_bad_checksum():
    bad = b"8=FIX.4.2|9=40|35=D|49=AFUNDMGR|56=ABROKER|15=USD|59=0|10=000|"
    with pytest.raises(DecodeError) as info:
        verify_checksum(bad)
    assert info.value.kind is DecodeErrorKind.CHECKSUM


def test_verify_body_length_accepts_correct_length():
    start_of_body = len(b"8=FIX.4.2|9=40|")
    assert verify_body_length(SAMPLE, start_of_body, 40) is None


def test_verify_body_length_rejects_wrong_length():
    start_of_body = len(b"8=FIX.4.2|9=40|")
    with pytest.raises(DecodeError) as info:
        verify_body_length(SAMPLE, start_of_body, 41)
    assert info.value.kind is DecodeErrorKind.INVALID


def test_verify_body_length_rejects_start_past_end():
    with pytest.raises(DecodeError) as info:
        verify_body_length(SAMPLE, len(SAMPLE), 0)
    assert info.value.kind is DecodeErrorKind.INVALID


def _body_writer(body):
    def write(buffer):
        buffer += body
        return len(body)

    return write


def test_encode_raw_documented_example():
    buffer = bytearray()
    body = b"35=0|49=A|56=B|34=12|52=20100304-07:59:30|"
    total = encode_raw(b"FIX.4.4", _body_writer(body), buffer, ord("|"))
    expected = b"8=FIX.4.4|9=000042|35=0|49=A|56=B|34=12|52=20100304-07:59:30|10=216|"
    assert bytes(buffer) == expected
    assert total == len(expected)


def test_encode_raw_output_verifies():
    buffer = bytearray()
    encode_raw(b"FIX.4.2", _body_writer(b"35=D|15=USD|"), buffer, ord("|"))
    data = bytes(buffer)
    assert verify_checksum(data) is None
    start_of_body = len(b"8=FIX.4.2|9=000000|")
    assert verify_body_length(data, start_of_body, len(b"35=D|15=USD|")) is None


def test_encode_raw_appends_after_existing_content():
    prefix = b"previous-data"
    buffer = bytearray(prefix)
    body = b"35=0|49=A|56=B|34=12|52=20100304-07:59:30|"
    total = encode_raw(b"FIX.4.4", _body_writer(body), buffer, ord("|"))
    assert bytes(buffer[: len(prefix)]) == prefix
    assert bytes(buffer[len(prefix):]) == (
        b"8=FIX.4.4|9=000042|35=0|49=A|56=B|34=12|52=20100304-07:59:30|10=216|"
    )
    assert total == len(buffer)


def test_encode_raw_rejects_oversized_body():
    with pytest.raises(ValueError):
        encode_raw(b"FIX.4.4", _body_writer(b"x" * 1_000_000), bytearray(), ord("|"))