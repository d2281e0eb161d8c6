import struct
from typing import Any


class BytesWriter:
    """Append-only buffer that frame payloads are encoded into."""

    __slots__ = ('_buffer',)

    def __init__(self):
        self._buffer = bytearray()

    def write(self, data: bytes) -> int:
        self._buffer.extend(data)
        return len(data)

    def pack(self, fmt: struct.Struct, *values: Any) -> int:
        return self.write(fmt.pack(*values))

    def as_bytes(self) -> bytes:
        return bytes(self._buffer)
