import struct
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from amqpgen.encoding import FieldDecoder, FieldEncoder
from amqpgen.errors import DecodeError, EncodingError
from amqpgen.io.raw_reader import BytesReader
from amqpgen.io.raw_writer import BytesWriter


# AMQP integers are big-endian and unsigned
_OCTET = struct.Struct('>B')
_SHORT = struct.Struct('>H')
_LONG = struct.Struct('>I')
_LONGLONG = struct.Struct('>Q')

# Signed and floating point values only appear inside field tables
_INT8 = struct.Struct('>b')
_INT16 = struct.Struct('>h')
_INT32 = struct.Struct('>i')
_INT64 = struct.Struct('>q')
_FLOAT = struct.Struct('>f')
_DOUBLE = struct.Struct('>d')

_SHORTSTR_MAX = 255
_INT32_RANGE = range(-2**31, 2**31)
_INT64_RANGE = range(-2**63, 2**63)

# Number of property flags carried by one 16-bit flag word (bit 0 is continuation)
_FLAGS_PER_WORD = 15


def _utf8(value: Any) -> bytes:
    if not isinstance(value, str):
        raise EncodingError(f"Expected a string, got {type(value).__name__}")
    try:
        return value.encode('utf-8')
    except UnicodeEncodeError as e:
        raise EncodingError(f"Cannot encode string as UTF-8: {e}") from e


class AmqpDecoder(FieldDecoder):
    """Decoder for AMQP 0-9-1 method and header frame payloads."""

    __slots__ = ('_data',)

    def __init__(self, data: bytes | BytesReader):
        self._data = data if isinstance(data, BytesReader) else BytesReader(data)

    @property
    def reader(self) -> BytesReader:
        return self._data

    def parse(self, type_str: str) -> Any:
        return getattr(self, type_str)()

    # Primitive parsers -------------------------------------------------

    def octet(self) -> int:
        return self._data.unpack_one(_OCTET)

    def short(self) -> int:
        return self._data.unpack_one(_SHORT)

    def long(self) -> int:
        return self._data.unpack_one(_LONG)

    def longlong(self) -> int:
        return self._data.unpack_one(_LONGLONG)

    def bit(self) -> bool:
        return bool(self.octet())

    def shortstr(self) -> str:
        return self._text(self.octet())

    def longstr(self) -> str:
        return self._text(self.long())

    def table(self) -> dict[str, Any]:
        end = self._end_of(self.long())
        result: dict[str, Any] = {}
        while self._data.position < end:
            key = self.shortstr()
            result[key] = self._field_value()
        self._check_end(end, 'table')
        return result

    def timestamp(self) -> int:
        return self._data.unpack_one(_LONGLONG)

    # Field list parsers -------------------------------------------------

    def fields(self, types: Iterable[str]) -> list[Any]:
        values: list[Any] = []
        bits = 0
        bit_index = 8  # forces a fresh octet for the first bit
        for type_str in types:
            if type_str == 'bit':
                if bit_index == 8:
                    bits = self.octet()
                    bit_index = 0
                values.append(bool(bits >> bit_index & 1))
                bit_index += 1
                continue
            bit_index = 8
            values.append(self.parse(type_str))
        return values

    def optional_fields(self, types: Iterable[str]) -> list[Any | None]:
        words = [self.short()]
        while words[-1] & 1:
            words.append(self.short())

        values: list[Any | None] = []
        for index, type_str in enumerate(types):
            word, position = divmod(index, _FLAGS_PER_WORD)
            present = word < len(words) and bool(words[word] >> (15 - position) & 1)
            if not present:
                values.append(None)
            elif type_str == 'bit':
                # Bit properties are carried by their flag alone
                values.append(True)
            else:
                values.append(self.parse(type_str))
        return values

    # Helpers ------------------------------------------------------------

    def _text(self, length: int) -> str:
        raw = self._data.read(length)
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 string: {e}") from e

    def _end_of(self, length: int) -> int:
        end = self._data.position + length
        if end > self._data.size():
            raise DecodeError(
                f"Declared length {length} exceeds remaining {self._data.remaining()} bytes"
            )
        return end

    def _check_end(self, end: int, what: str) -> None:
        if self._data.position != end:
            raise DecodeError(f"Malformed {what}: read past declared length")

    def _array(self) -> list[Any]:
        end = self._end_of(self.long())
        values = []
        while self._data.position < end:
            values.append(self._field_value())
        self._check_end(end, 'array')
        return values

    def _decimal(self) -> Decimal:
        scale = self.octet()
        value = self._data.unpack_one(_INT32)
        return Decimal(value).scaleb(-scale)

    def _field_value(self) -> Any:
        tag = chr(self.octet())
        data = self._data
        match tag:
            case 't':
                return bool(self.octet())
            case 'b':
                return data.unpack_one(_INT8)
            case 'B':
                return self.octet()
            case 's':
                return data.unpack_one(_INT16)
            case 'u':
                return self.short()
            case 'I':
                return data.unpack_one(_INT32)
            case 'i':
                return self.long()
            case 'l':
                return data.unpack_one(_INT64)
            case 'f':
                return data.unpack_one(_FLOAT)
            case 'd':
                return data.unpack_one(_DOUBLE)
            case 'D':
                return self._decimal()
            case 'S':
                return self.longstr()
            case 'x':
                return data.read(self.long())
            case 'A':
                return self._array()
            case 'T':
                return self.timestamp()
            case 'F':
                return self.table()
            case 'V':
                return None
        raise DecodeError(f"Unknown field value type {tag!r}")


class AmqpEncoder(FieldEncoder):
    """Encoder for AMQP 0-9-1 method and header frame payloads."""

    __slots__ = ('_payload',)

    def __init__(self):
        self._payload = BytesWriter()

    def encode(self, type_str: str, value: Any) -> None:
        """Encode ``value`` based on ``type_str``."""
        getattr(self, type_str)(value)

    def save(self) -> bytes:
        """Return the encoded byte stream."""
        return self._payload.as_bytes()

    # Primitive encoders -------------------------------------------------

    def octet(self, value: int) -> None:
        self._pack(_OCTET, value)

    def short(self, value: int) -> None:
        self._pack(_SHORT, value)

    def long(self, value: int) -> None:
        self._pack(_LONG, value)

    def longlong(self, value: int) -> None:
        self._pack(_LONGLONG, value)

    def bit(self, value: bool) -> None:
        self._pack(_OCTET, 1 if value else 0)

    def shortstr(self, value: str) -> None:
        encoded = _utf8(value)
        if len(encoded) > _SHORTSTR_MAX:
            raise EncodingError(
                f"shortstr is limited to {_SHORTSTR_MAX} bytes, got {len(encoded)}"
            )
        self.octet(len(encoded))
        self._payload.write(encoded)

    def longstr(self, value: str) -> None:
        encoded = _utf8(value)
        self.long(len(encoded))
        self._payload.write(encoded)

    def table(self, value: Mapping[str, Any]) -> None:
        body = AmqpEncoder()
        for key, item in value.items():
            body.shortstr(key)
            body._field_value(item)
        data = body.save()
        self.long(len(data))
        self._payload.write(data)

    def timestamp(self, value: int) -> None:
        self._pack(_LONGLONG, value)

    # Field list encoders ------------------------------------------------

    def fields(self, fields: Iterable[tuple[str, Any]]) -> None:
        bits: list[bool] = []
        for type_str, value in fields:
            if type_str == 'bit':
                if len(bits) == 8:
                    self._flush_bits(bits)
                bits.append(bool(value))
                continue
            self._flush_bits(bits)
            self.encode(type_str, value)
        self._flush_bits(bits)

    def optional_fields(self, fields: Iterable[tuple[str, Any | None]]) -> None:
        fields = list(fields)
        words = [0] * max(1, -(-len(fields) // _FLAGS_PER_WORD))
        present: list[tuple[str, Any]] = []
        for index, (type_str, value) in enumerate(fields):
            if value is None or (type_str == 'bit' and not value):
                continue
            word, position = divmod(index, _FLAGS_PER_WORD)
            words[word] |= 1 << (15 - position)
            if type_str != 'bit':
                present.append((type_str, value))

        for index, word in enumerate(words):
            self.short(word | 1 if index < len(words) - 1 else word)
        for type_str, value in present:
            self.encode(type_str, value)

    # Helpers ------------------------------------------------------------

    def _pack(self, fmt: struct.Struct, value: Any) -> None:
        try:
            self._payload.pack(fmt, value)
        except struct.error as e:
            raise EncodingError(f"Cannot encode {value!r} as '{fmt.format}': {e}") from e

    def _flush_bits(self, bits: list[bool]) -> None:
        if not bits:
            return
        self.octet(sum(1 << index for index, bit in enumerate(bits) if bit))
        bits.clear()

    def _tag(self, tag: str) -> None:
        self.octet(ord(tag))

    def _field_value(self, value: Any) -> None:
        # bool must be tested before int
        if value is None:
            self._tag('V')
        elif isinstance(value, bool):
            self._tag('t')
            self.octet(1 if value else 0)
        elif isinstance(value, int):
            if value in _INT32_RANGE:
                self._tag('I')
                self._pack(_INT32, value)
            elif value in _INT64_RANGE:
                self._tag('l')
                self._pack(_INT64, value)
            else:
                raise EncodingError(f"Integer {value} does not fit in a field table")
        elif isinstance(value, float):
            self._tag('d')
            self._pack(_DOUBLE, value)
        elif isinstance(value, Decimal):
            self._tag('D')
            self._decimal(value)
        elif isinstance(value, str):
            self._tag('S')
            self.longstr(value)
        elif isinstance(value, (bytes, bytearray)):
            self._tag('x')
            self.long(len(value))
            self._payload.write(bytes(value))
        elif isinstance(value, (list, tuple)):
            self._tag('A')
            body = AmqpEncoder()
            for item in value:
                body._field_value(item)
            data = body.save()
            self.long(len(data))
            self._payload.write(data)
        elif isinstance(value, Mapping):
            self._tag('F')
            self.table(value)
        else:
            raise EncodingError(f"Cannot encode {type(value).__name__} in a field table")

    def _decimal(self, value: Decimal) -> None:
        exponent = value.as_tuple().exponent
        if not isinstance(exponent, int):
            raise EncodingError(f"Cannot encode non-finite decimal {value}")
        scale = max(0, -exponent)
        if scale > 255:
            raise EncodingError(f"Decimal scale {scale} exceeds 255")
        self.octet(scale)
        self._pack(_INT32, int(value.scaleb(scale)))


__all__ = ["AmqpDecoder", "AmqpEncoder"]
