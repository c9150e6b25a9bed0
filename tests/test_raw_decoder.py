import pytest

from fixwire.config import Config
from fixwire.errors import DecodeError, DecodeErrorKind
from fixwire.raw_decoder import RawDecoder, RawDecoderBuffered

SAMPLE = b"8=FIX.4.2|9=40|35=D|49=AFUNDMGR|56=ABROKER|15=USD|59=0|10=091|"


def new_decoder():
    return RawDecoder(Config().with_separator(ord("|")))


def new_decoder_buffered():
    return new_decoder().buffered()


def test_empty_message_is_invalid():
    with pytest.raises(DecodeError) as info:
        new_decoder().decode(b"")
    assert info.value.kind is DecodeErrorKind.INVALID


def test_sample_message_is_valid():
    frame = new_decoder().decode(SAMPLE)
    assert frame.begin_string == b"FIX.4.2"
    assert frame.payload == b"35=D|49=AFUNDMGR|56=ABROKER|15=USD|59=0|"


def test_frame_views_of_heartbeat():
    data = b"8=FIX.4.2|9=42|35=0|49=A|56=B|34=12|52=20100304-07:59:30|10=022|"
    frame = new_decoder().decode(data)
    assert frame.data == data
    assert frame.begin_string == b"FIX.4.2"
    assert len(frame.payload) == 42
    assert data[frame.payload_offset : frame.payload_offset + 42] == frame.payload


def test_message_with_only_msg_type_tag_is_valid():
    frame = new_decoder().decode(b"8=?|9=5|35=?|10=183|")
    assert frame.begin_string == b"?"
    assert frame.payload == b"35=?|"


def test_message_with_empty_payload_is_invalid():
    with pytest.raises(DecodeError) as info:
        new_decoder().decode(b"8=?|9=5|10=082|")
    assert info.value.kind is DecodeErrorKind.INVALID


def test_message_with_bad_checksum_is_invalid():
    msg = b"8=FIX.4.2|9=40|35=D|49=AFUNDMGR|56=ABROKER|15=USD|59=0|10=000|"
    with pytest.raises(DecodeError) as info:
        new_decoder().decode(msg)
    assert info.value.kind is DecodeErrorKind.CHECKSUM


def test_bad_checksum_accepted_without_verification():
    msg = b"8=FIX.4.2|9=40|35=D|49=AFUNDMGR|56=ABROKER|15=USD|59=0|10=000|"
    decoder = RawDecoder(Config(separator=ord("|"), verify_checksum=False))
    assert decoder.decode(msg).begin_string == b"FIX.4.2"


@pytest.mark.parametrize(
    "data",
    [
        b"8=|9=0|10=225|",
        b"8=|9=0|10=|",
        b"8====|9=0|10=|",
        b"|||9=0|10=|",
        b"9999999999999",
        b"-9999999999999",
        b"==============",
        b"9999999999999|",
        b"|999999999999=|",
        b"|999=999999999999999999|=",
    ],
)
def test_edge_cases_dont_cause_panic(data):
    with pytest.raises(DecodeError):
        new_decoder().decode(data)


def test_new_buffered_decoder_has_no_current_frame():
    assert new_decoder_buffered().current_frame() is None


def test_buffered_first_supply_is_minimum_length():
    decoder = new_decoder_buffered()
    assert len(decoder.supply_buffer()) == 20


def test_buffered_reports_malformed_header():
    decoder = RawDecoderBuffered(new_decoder())
    buf = decoder.supply_buffer()
    buf[:] = b"x" * len(buf)
    assert decoder.current_frame() is None
    assert len(decoder.supply_buffer()) == 0
    with pytest.raises(DecodeError) as info:
        decoder.current_frame()
    assert info.value.kind is DecodeErrorKind.INVALID