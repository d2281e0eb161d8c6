import struct
from typing import Any

from amqpgen.errors import DecodeError


class BytesReader:
    """Cursor over an in-memory byte buffer."""

    __slots__ = ('_data', 'view', 'position', '_length')

    def __init__(self, data: bytes):
        self._data = data
        self.view = memoryview(data)
        self.position = 0
        self._length = len(data)

    def _ensure(self, size: int) -> None:
        if self.position + size > self._length:
            raise DecodeError(
                f"Unexpected end of data: need {size} bytes at offset "
                f"{self.position}, have {self._length - self.position}"
            )

    def read(self, size: int | None = None) -> bytes:
        if size is None:
            result = self._data[self.position:]
            self.position = self._length
            return result
        self._ensure(size)
        result = self._data[self.position:self.position + size]
        self.position += size
        return result

    def unpack_one(self, fmt: struct.Struct) -> Any:
        """Unpack a single value directly from the buffer.

        Args:
            fmt: pre-compiled Struct describing exactly one value

        Returns:
            The unpacked value
        """
        self._ensure(fmt.size)
        result = fmt.unpack_from(self.view, self.position)[0]
        self.position += fmt.size
        return result

    def tell(self) -> int:
        return self.position

    def remaining(self) -> int:
        return self._length - self.position

    def size(self) -> int:
        return self._length
