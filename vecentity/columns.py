"""In-memory columns of field data, one typed column per field type."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from numbers import Real
from typing import Any, ClassVar

from vecentity.messages import DataType, FieldData, ScalarField, VectorField
from vecentity.schema import FieldType


class Column(ABC):
    """A named column of values of one field type."""

    field_type: ClassVar[FieldType] = FieldType.NONE

    def __init__(self, name: str, values: Iterable[Any] | None = None) -> None:
        self.name = name
        self._values: list[Any] = list(values) if values is not None else []

    @property
    def data(self) -> list[Any]:
        """The values held by the column."""
        return self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, len={len(self)})"

    @abstractmethod
    def field_data(self) -> FieldData:
        """Return the column as wire field data."""

    @abstractmethod
    def _coerce(self, value: Any) -> Any:
        """Validate ``value`` for this column and return the value to store."""

    def _type_error(self, value: Any) -> TypeError:
        return TypeError(
            f"invalid type, expected {self.field_type}, got {type(value).__name__}"
        )

    def append_value(self, value: Any) -> None:
        """Append one value; raise TypeError if it has the wrong type."""
        self._values.append(self._coerce(value))

    def value_by_idx(self, idx: int) -> Any:
        """Return the value at ``idx``; raise IndexError when out of range."""
        if idx < 0 or idx >= len(self._values):
            raise IndexError("index out of range")
        return self._values[idx]


class ScalarColumn(Column):
    """A column of scalar values."""

    _wire_kind: ClassVar[str] = ""

    def field_data(self) -> FieldData:
        return FieldData(
            type=DataType(int(self.field_type)),
            field_name=self.name,
            scalars=ScalarField(kind=self._wire_kind, data=list(self._values)),
        )


class VectorColumn(Column):
    """A column of fixed-dimension vectors."""

    def __init__(self, name: str, dim: int, values: Iterable[Any] | None = None) -> None:
        super().__init__(name, values)
        self.dim = dim

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, dim={self.dim}, len={len(self)})"
        )


class ColumnBool(ScalarColumn):
    """Column of booleans."""

    field_type = FieldType.BOOL
    _wire_kind = "bool_data"

    def _coerce(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise self._type_error(value)
        return value


class _IntColumn(ScalarColumn):
    _bits: ClassVar[int] = 64

    def _coerce(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._type_error(value)
        low = -(1 << (self._bits - 1))
        high = (1 << (self._bits - 1)) - 1
        if not low <= value <= high:
            raise ValueError(f"value {value} out of range for {self.field_type}")
        return value


class ColumnInt8(_IntColumn):
    """Column of 8-bit integers."""

    field_type = FieldType.INT8
    _wire_kind = "int_data"
    _bits = 8


class ColumnInt16(_IntColumn):
    """Column of 16-bit integers."""

    field_type = FieldType.INT16
    _wire_kind = "int_data"
    _bits = 16


class ColumnInt32(_IntColumn):
    """Column of 32-bit integers."""

    field_type = FieldType.INT32
    _wire_kind = "int_data"
    _bits = 32


class ColumnInt64(_IntColumn):
    """Column of 64-bit integers."""

    field_type = FieldType.INT64
    _wire_kind = "long_data"
    _bits = 64


class _RealColumn(ScalarColumn):
    def _coerce(self, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, Real):
            raise self._type_error(value)
        return float(value)


class ColumnFloat(_RealColumn):
    """Column of single-precision floats."""

    field_type = FieldType.FLOAT
    _wire_kind = "float_data"


class ColumnDouble(_RealColumn):
    """Column of double-precision floats."""

    field_type = FieldType.DOUBLE
    _wire_kind = "double_data"


class _TextColumn(ScalarColumn):
    _wire_kind = "string_data"

    def _coerce(self, value: Any) -> str:
        if not isinstance(value, str):
            raise self._type_error(value)
        return value


class ColumnString(_TextColumn):
    """Column of strings."""

    field_type = FieldType.STRING


class ColumnVarChar(_TextColumn):
    """Column of variable-length strings."""

    field_type = FieldType.VARCHAR


class ColumnBinaryVector(VectorColumn):
    """Column of packed binary vectors, one bytes object per row."""

    field_type = FieldType.BINARY_VECTOR

    def _coerce(self, value: Any) -> bytes:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise self._type_error(value)
        return bytes(value)

    def field_data(self) -> FieldData:
        return FieldData(
            type=DataType.BINARY_VECTOR,
            field_name=self.name,
            vectors=VectorField(
                dim=self.dim,
                binary_vector=b"".join(bytes(v) for v in self._values),
            ),
        )


class ColumnFloatVector(VectorColumn):
    """Column of float vectors, one list of floats per row."""

    field_type = FieldType.FLOAT_VECTOR

    def _coerce(self, value: Any) -> list[float]:
        if not isinstance(value, (list, tuple)):
            raise self._type_error(value)
        if any(isinstance(x, bool) or not isinstance(x, Real) for x in value):
            raise self._type_error(value)
        return [float(x) for x in value]

    def field_data(self) -> FieldData:
        return FieldData(
            type=DataType.FLOAT_VECTOR,
            field_name=self.name,
            vectors=VectorField(
                dim=self.dim,
                float_vector=[x for vector in self._values for x in vector],
            ),
        )