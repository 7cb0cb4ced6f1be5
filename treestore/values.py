"""Typed values stored in database nodes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class PrimitiveDataType(enum.IntEnum):
    """The primitive types a value can have."""

    NULL = 0
    BINARY = 1
    BOOLEAN = 2
    UNICODE_STRING = 18


class DataTypeModifier(enum.IntEnum):
    """Modifiers applied to a primitive type."""

    NONE = 0


@dataclass(frozen=True)
class DataType:
    """A primitive type together with its modifier."""

    primitive_type: PrimitiveDataType
    modifier: DataTypeModifier = DataTypeModifier.NONE


_NULL_TYPE = DataType(PrimitiveDataType.NULL)


@dataclass(frozen=True)
class Value:
    """A value with a data type; the default value is null."""

    data_type: DataType = _NULL_TYPE
    data: Any = None

    @classmethod
    def binary(cls, data: bytes | bytearray | str) -> "Value":
        """Create a binary value."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        return cls(DataType(PrimitiveDataType.BINARY), bytes(data))

    @classmethod
    def boolean(cls, data: bool) -> "Value":
        """Create a boolean value."""
        return cls(DataType(PrimitiveDataType.BOOLEAN), bool(data))

    @classmethod
    def utf8_string(cls, data: str) -> "Value":
        """Create a Unicode string value."""
        if not isinstance(data, str):
            raise TypeError("a Unicode string value needs a str")
        return cls(DataType(PrimitiveDataType.UNICODE_STRING), data)

    @property
    def is_null(self) -> bool:
        return self.data_type.primitive_type is PrimitiveDataType.NULL

    def _expect(self, primitive_type: PrimitiveDataType) -> Any:
        if self.data_type.primitive_type is not primitive_type:
            raise TypeError(
                f"value has type {self.data_type.primitive_type.name}, not {primitive_type.name}"
            )
        return self.data

    def as_binary(self) -> bytes:
        """Return the data of a binary value."""
        return self._expect(PrimitiveDataType.BINARY)

    def as_boolean(self) -> bool:
        """Return the data of a boolean value."""
        return self._expect(PrimitiveDataType.BOOLEAN)

    def as_utf8_string(self) -> str:
        """Return the data of a Unicode string value."""
        return self._expect(PrimitiveDataType.UNICODE_STRING)