"""Tests for the AMQP field codec used by generated modules."""

import struct
from decimal import Decimal

import pytest

from amqpgen.encoding.amqp import AmqpDecoder, AmqpEncoder
from amqpgen.errors import DecodeError, EncodingError
from amqpgen.io.raw_reader import BytesReader


def _table_bytes(body: bytes) -> bytes:
    return struct.pack(">I", len(body)) + body


################
#  Primitives  #
################


def test_integers_are_big_endian():
    encoder = AmqpEncoder()
    encoder.octet(0x01)
    encoder.short(0x0203)
    encoder.long(0x04050607)
    encoder.longlong(0x08090A0B0C0D0E0F)
    encoder.timestamp(1)
    data = encoder.save()
    assert data == (
        b"\x01"
        b"\x02\x03"
        b"\x04\x05\x06\x07"
        b"\x08\x09\x0a\x0b\x0c\x0d\x0e\x0f"
        b"\x00\x00\x00\x00\x00\x00\x00\x01"
    )

    decoder = AmqpDecoder(data)
    assert decoder.octet() == 0x01
    assert decoder.short() == 0x0203
    assert decoder.long() == 0x04050607
    assert decoder.longlong() == 0x08090A0B0C0D0E0F
    assert decoder.timestamp() == 1


def test_strings():
    encoder = AmqpEncoder()
    encoder.shortstr("amq.direct")
    encoder.longstr("PLAIN AMQPLAIN")
    data = encoder.save()
    assert data[:11] == b"\x0aamq.direct"
    assert data[11:15] == b"\x00\x00\x00\x0e"

    decoder = AmqpDecoder(data)
    assert decoder.shortstr() == "amq.direct"
    assert decoder.longstr() == "PLAIN AMQPLAIN"


def test_shortstr_length_is_bytes_not_characters():
    encoder = AmqpEncoder()
    encoder.shortstr("é")
    assert encoder.save() == b"\x02\xc3\xa9"


def test_shortstr_too_long():
    encoder = AmqpEncoder()
    encoder.shortstr("x" * 255)
    with pytest.raises(EncodingError):
        encoder.shortstr("x" * 256)


@pytest.mark.parametrize("method", ["shortstr", "longstr"])
@pytest.mark.parametrize("value", [123, b"bytes", None])
def test_string_requires_str(method: str, value):
    with pytest.raises(EncodingError, match="Expected a string"):
        getattr(AmqpEncoder(), method)(value)


def test_string_with_lone_surrogate():
    with pytest.raises(EncodingError):
        AmqpEncoder().shortstr("\ud800")


def test_integer_out_of_range():
    with pytest.raises(EncodingError):
        AmqpEncoder().octet(256)
    with pytest.raises(EncodingError):
        AmqpEncoder().short(-1)


def test_truncated_data():
    with pytest.raises(DecodeError):
        AmqpDecoder(b"\x00").short()
    with pytest.raises(DecodeError):
        AmqpDecoder(b"\x05abc").shortstr()


def test_invalid_utf8():
    with pytest.raises(DecodeError):
        AmqpDecoder(b"\x01\xff").shortstr()


def test_decoder_accepts_reader():
    reader = BytesReader(b"\x00\x0a\x00\x28")
    decoder = AmqpDecoder(reader)
    assert decoder.reader is reader
    assert decoder.short() == 10
    assert reader.tell() == 2
    assert decoder.parse("short") == 40
    assert reader.remaining() == 0


##################
#  Field tables  #
##################


def test_table_round_trip():
    value = {
        "product": "RabbitMQ",
        "version": 3,
        "big": 2**40,
        "negative": -5,
        "ratio": 0.5,
        "enabled": True,
        "missing": None,
        "raw": b"\x00\x01",
        "price": Decimal("12.34"),
        "capabilities": {"publisher_confirms": True, "consumer_priorities": False},
        "items": [1, "two", [3]],
    }
    encoder = AmqpEncoder()
    encoder.table(value)
    assert AmqpDecoder(encoder.save()).table() == value


def test_empty_table():
    encoder = AmqpEncoder()
    encoder.table({})
    data = encoder.save()
    assert data == b"\x00\x00\x00\x00"
    assert AmqpDecoder(data).table() == {}


def test_table_wire_format():
    encoder = AmqpEncoder()
    encoder.table({"a": 1, "b": "x"})
    body = b"\x01a" + b"I" + b"\x00\x00\x00\x01" + b"\x01b" + b"S" + b"\x00\x00\x00\x01x"
    assert encoder.save() == _table_bytes(body)


@pytest.mark.parametrize("tag, payload, expected", [
    (b"b", b"\xff", -1),
    (b"B", b"\xff", 255),
    (b"s", b"\xff\xfe", -2),
    (b"u", b"\xff\xfe", 65534),
    (b"I", b"\xff\xff\xff\xff", -1),
    (b"i", b"\xff\xff\xff\xff", 2**32 - 1),
    (b"l", b"\xff" * 8, -1),
    (b"f", struct.pack(">f", 1.5), 1.5),
    (b"d", struct.pack(">d", -2.25), -2.25),
    (b"D", b"\x02\x00\x00\x04\xd2", Decimal("12.34")),
    (b"T", b"\x00\x00\x00\x00\x00\x00\x00\x2a", 42),
    (b"t", b"\x00", False),
    (b"V", b"", None),
])
def test_table_value_tags(tag: bytes, payload: bytes, expected):
    data = _table_bytes(b"\x01k" + tag + payload)
    assert AmqpDecoder(data).table() == {"k": expected}


def test_unknown_table_tag():
    with pytest.raises(DecodeError, match="Unknown field value type"):
        AmqpDecoder(_table_bytes(b"\x01kZ")).table()


def test_table_length_exceeds_data():
    with pytest.raises(DecodeError):
        AmqpDecoder(b"\x00\x00\x00\x10\x01k").table()


def test_table_value_overruns_declared_length():
    # Declared length covers the key and tag, but not the value
    data = b"\x00\x00\x00\x03\x01kB\x07"
    with pytest.raises(DecodeError):
        AmqpDecoder(data).table()


def test_unsupported_table_value():
    with pytest.raises(EncodingError):
        AmqpEncoder().table({"k": object()})
    with pytest.raises(EncodingError):
        AmqpEncoder().table({"k": 2**64})


def test_table_key_must_be_str():
    with pytest.raises(EncodingError, match="Expected a string"):
        AmqpEncoder().table({1: "one"})


#################
#  Field lists  #
#################


def test_consecutive_bits_share_an_octet():
    encoder = AmqpEncoder()
    encoder.fields([
        ("short", 0),
        ("bit", True),
        ("bit", False),
        ("bit", True),
        ("shortstr", "q"),
        ("bit", True),
    ])
    data = encoder.save()
    assert data == b"\x00\x00" + b"\x05" + b"\x01q" + b"\x01"

    decoder = AmqpDecoder(data)
    assert decoder.fields(["short", "bit", "bit", "bit", "shortstr", "bit"]) == [
        0, True, False, True, "q", True,
    ]
    assert decoder.reader.remaining() == 0


def test_more_than_eight_bits():
    bits = [True] * 8 + [False, True]
    encoder = AmqpEncoder()
    encoder.fields([("bit", b) for b in bits])
    data = encoder.save()
    assert data == b"\xff\x02"
    assert AmqpDecoder(data).fields(["bit"] * 10) == bits


def test_empty_field_list():
    encoder = AmqpEncoder()
    encoder.fields([])
    assert encoder.save() == b""
    assert AmqpDecoder(b"").fields([]) == []


def test_optional_fields_flags():
    encoder = AmqpEncoder()
    encoder.optional_fields([
        ("shortstr", "text/plain"),
        ("shortstr", None),
        ("table", None),
        ("octet", 2),
    ])
    data = encoder.save()
    assert data == b"\x90\x00" + b"\x0atext/plain" + b"\x02"
    assert AmqpDecoder(data).optional_fields(["shortstr", "shortstr", "table", "octet"]) == [
        "text/plain", None, None, 2,
    ]


def test_optional_fields_none_present():
    encoder = AmqpEncoder()
    encoder.optional_fields([("shortstr", None)])
    assert encoder.save() == b"\x00\x00"

    encoder = AmqpEncoder()
    encoder.optional_fields([])
    assert encoder.save() == b"\x00\x00"
    assert AmqpDecoder(b"\x00\x00").optional_fields([]) == []


def test_optional_bit_is_carried_by_flag():
    encoder = AmqpEncoder()
    encoder.optional_fields([("bit", True), ("bit", False), ("octet", 1)])
    data = encoder.save()
    assert data == b"\xa0\x00\x01"
    assert AmqpDecoder(data).optional_fields(["bit", "bit", "octet"]) == [True, None, 1]


def test_optional_fields_continuation_word():
    types = ["octet"] * 16
    values = [None] * 15 + [7]
    encoder = AmqpEncoder()
    encoder.optional_fields(list(zip(types, values)))
    data = encoder.save()
    # First word only carries the continuation bit, second word flags property 15
    assert data == b"\x00\x01" + b"\x80\x00" + b"\x07"
    assert AmqpDecoder(data).optional_fields(types) == values
