from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any


class FieldDecoder(ABC):
    @abstractmethod
    def parse(self, type_str: str) -> Any:
        ...  # pragma: no cover

    # Primitive parsers -------------------------------------------------

    @abstractmethod
    def octet(self) -> int:
        ...  # pragma: no cover

    @abstractmethod
    def short(self) -> int:
        ...  # pragma: no cover

    @abstractmethod
    def long(self) -> int:
        ...  # pragma: no cover

    @abstractmethod
    def longlong(self) -> int:
        ...  # pragma: no cover

    @abstractmethod
    def bit(self) -> bool:
        ...  # pragma: no cover

    @abstractmethod
    def shortstr(self) -> str:
        ...  # pragma: no cover

    @abstractmethod
    def longstr(self) -> str:
        ...  # pragma: no cover

    @abstractmethod
    def table(self) -> dict[str, Any]:
        ...  # pragma: no cover

    @abstractmethod
    def timestamp(self) -> int:
        ...  # pragma: no cover

    # Field list parsers -------------------------------------------------

    @abstractmethod
    def fields(self, types: Iterable[str]) -> list[Any]:
        """Decode values for ``types`` in order."""
        ...  # pragma: no cover

    @abstractmethod
    def optional_fields(self, types: Iterable[str]) -> list[Any | None]:
        """Decode presence flags then the present values; absent entries are None."""
        ...  # pragma: no cover


class FieldEncoder(ABC):
    @abstractmethod
    def encode(self, type_str: str, value: Any) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def save(self) -> bytes:
        ...  # pragma: no cover

    # Primitive encoders -------------------------------------------------

    @abstractmethod
    def octet(self, value: int) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def short(self, value: int) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def long(self, value: int) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def longlong(self, value: int) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def bit(self, value: bool) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def shortstr(self, value: str) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def longstr(self, value: str) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def table(self, value: dict[str, Any]) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def timestamp(self, value: int) -> None:
        ...  # pragma: no cover

    # Field list encoders ------------------------------------------------

    @abstractmethod
    def fields(self, fields: Iterable[tuple[str, Any]]) -> None:
        """Encode ``(type, value)`` pairs in order."""
        ...  # pragma: no cover

    @abstractmethod
    def optional_fields(self, fields: Iterable[tuple[str, Any | None]]) -> None:
        """Encode presence flags followed by the values that are not None."""
        ...  # pragma: no cover
