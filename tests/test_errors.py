import pytest

from fixwire.errors import DecodeError, DecodeErrorKind


@pytest.mark.parametrize("kind", list(DecodeErrorKind))
def test_kind_is_kept(kind):
    err = DecodeError(kind)
    assert err.kind is kind


@pytest.mark.parametrize("kind", list(DecodeErrorKind))
def test_message_names_the_kind(kind):
    err = DecodeError(kind)
    assert kind.name in str(err)


def test_detail_is_included_in_message():
    err = DecodeError(DecodeErrorKind.INVALID, detail="BodyLength mismatch")
    assert "BodyLength mismatch" in str(err)
    assert err.kind is DecodeErrorKind.INVALID


def test_can_be_caught_as_value_error():
    err = DecodeError(DecodeErrorKind.CHECKSUM, detail="bad checksum")
    with pytest.raises(ValueError, match="bad checksum") as info:
        raise err
    assert info.value is err
    assert info.value.kind is DecodeErrorKind.CHECKSUM


def test_kinds_give_distinct_messages():
    messages = {str(DecodeError(kind)) for kind in DecodeErrorKind}
    assert len(messages) == 3