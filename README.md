# fixwire

A small library for FIX tag-value messages: the classic `tag=value` encoding
with a separator byte (SOH, `0x01`, by default) after every field, including
the last one.

## What is in it

- `fixwire.config.Config`: a dataclass with `separator` (an int byte value,
  `0x01` by default), `verify_checksum` (`True` by default) and
  `max_message_size` (`65536` by default). `with_separator()` and
  `with_checksum_verification()` return modified copies. The decoders use
  `separator` and `verify_checksum`; `max_message_size` is carried along but
  not checked by them.
- `fixwire.raw_decoder`: `RawDecoder.decode()` checks the first two fields,
  `BodyLength(9)` and, if enabled, `CheckSum(10)`, and returns a `RawFrame`
  with `data`, `begin_string`, `payload` and `payload_offset`.
  `RawDecoderBuffered` does the same over a byte stream.
- `fixwire.decoder`: `Decoder.decode()` splits a frame into fields and returns
  a `FixMessageRef`. `DecoderBuffered` is the stream version.
- `fixwire.message_ref`: `FixMessageRef` gives lookups by tag
  (`field`, `field_raw`, `field_as_char`, `field_as_bool`, `field_as_i64`,
  `field_as_str`, `field_as_datetime`), shortcuts `msg_type()`, `seq_num()`,
  `test_indicator()`, and `group(tag)`, which returns the entry count held in
  a NumInGroup field. Iterating a message yields `(tag, raw_bytes)` pairs in
  wire order. `FieldRef` offers `raw()`, `as_char()`, `as_bool()`,
  `as_i64()` and `as_u64()`. `FixMessageRefBuilder` records field positions
  and raises `DuplicateFieldError` on a repeated tag.
- `fixwire.raw_encoder.RawEncoder`: write a payload and let it fill in
  `BodyLength(9)` and `CheckSum(10)`.
- `fixwire.encoder.EncoderNaive`: append fields one at a time; the
  `wrap_std_header()`, `wrap_body()` and `wrap_std_trailer()` calls write
  nothing but record the buffer offsets in `section_ends`.
- `fixwire.serialize`: `serialize_field()` writes booleans as `Y`/`N`,
  integers in decimal and bytes unchanged; `MessageAccumulator` is the
  abstract interface `EncoderNaive` implements.
- `fixwire.field_value`: `DataType`, `FieldValue` (with `decode()` and the
  `of_*` constructors), `FixFieldValue`, `MonthYear` and `TagNum`.
- `fixwire.utils`: `checksum_10`, `checksum_digits`, `parse_u8_from_decimal`,
  `verify_checksum`, `verify_body_length` and `encode_raw`.
- `fixwire.tags`: tag numbers of the FIXT 1.1 session-layer fields.
- `fixwire.errors`: `DecodeError` (a `ValueError`) and `DecodeErrorKind`.

## Installing

```
pip install .
```

## Decoding

```python
from fixwire import tags
from fixwire.config import Config
from fixwire.decoder import Decoder

decoder = Decoder(Config().with_separator(ord("|")))
message = decoder.decode(
    b"8=FIX.4.2|9=42|35=0|49=A|56=B|34=12|52=20100304-07:59:30|10=022|"
)
print(message.field_as_str(tags.SENDER_COMP_ID))  # "A"
print(message.msg_type())                         # "0"
print(message.seq_num())                          # 12
```

A malformed message, one whose body length or checksum is wrong, or one that
repeats a tag raises `fixwire.errors.DecodeError`. Its `kind` is a
`DecodeErrorKind` (`INVALID`, `CHECKSUM` or `FIELD_PRESENCE`).

### Reading from a stream

```python
from fixwire.decoder import Decoder

stream = Decoder().buffered()
message = None
while message is None:
    view = stream.supply_buffer()
    view[:] = read_exactly(len(view))  # your own I/O
    message = stream.current_message()
```

Each call to `supply_buffer()` returns a writable view that must be filled
completely before `current_message()` is called.

## Encoding

```python
from fixwire.config import Config
from fixwire.raw_encoder import RawEncoder

encoder = RawEncoder(Config().with_separator(ord("|")))
encoder.set_begin_string(b"FIX.4.4")
encoder.extend(b"35=0|49=A|56=B|34=12|52=20100304-07:59:30|")
print(encoder.finalize())
# b"8=FIX.4.4|9=000042|35=0|49=A|56=B|34=12|52=20100304-07:59:30|10=216|"
```

`BodyLength(9)` is always written as six zero-padded digits, so bodies larger
than 999999 bytes raise `ValueError`.

## What it does not do

This is a codec only. There is no FIX session layer (logon, heartbeats,
sequence-number handling), no network transport and no command-line tool.
Fields are not typed from a data dictionary, repeating groups are not parsed
into entries, and messages are not validated against message definitions.

## Running the tests

```
pip install .[test]
pytest
```