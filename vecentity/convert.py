"""Vector wrappers and conversion of wire field data into columns."""

from __future__ import annotations

import struct
from collections.abc import Callable, Sequence
from typing import Any

from vecentity.columns import (
    Column,
    ColumnBinaryVector,
    ColumnBool,
    ColumnDouble,
    ColumnFloat,
    ColumnFloatVector,
    ColumnInt8,
    ColumnInt16,
    ColumnInt32,
    ColumnInt64,
    ColumnString,
    ColumnVarChar,
)
from vecentity.messages import DataType, FieldData, IDs
from vecentity.schema import FieldType


class FieldDataTypeMismatchError(ValueError):
    """Raised when field data does not hold the payload its type announces."""

    def __init__(self, message: str = "FieldData type not matched") -> None:
        super().__init__(message)


class FloatVector(list):
    """A vector of 32-bit floats used as a search target."""

    def dim(self) -> int:
        """Return the vector dimension."""
        return len(self)

    def serialize(self) -> bytes:
        """Return the vector as little-endian float32 bytes."""
        return struct.pack(f"<{len(self)}f", *self)

    def field_type(self) -> FieldType:
        """Return the field type matching this vector."""
        return FieldType.FLOAT_VECTOR


class BinaryVector(bytes):
    """A packed binary vector; its dimension is counted in bits."""

    def dim(self) -> int:
        """Return the vector dimension in bits."""
        return 8 * len(self)

    def serialize(self) -> bytes:
        """Return the raw bytes of the vector."""
        return bytes(self)

    def field_type(self) -> FieldType:
        """Return the field type matching this vector."""
        return FieldType.BINARY_VECTOR


def _window(values: Sequence[Any], begin: int, end: int) -> list[Any]:
    if end < 0:
        return list(values[begin:])
    return list(values[begin:end])


def id_columns(id_field: IDs | None, begin: int, end: int) -> Column:
    """Convert returned primary keys into a column; ``end < 0`` means to the end."""
    if id_field is None:
        raise ValueError("nil Ids from response")
    if id_field.int_id is not None:
        return ColumnInt64("", _window(id_field.int_id, begin, end))
    if id_field.str_id is not None:
        return ColumnVarChar("", _window(id_field.str_id, begin, end))
    raise ValueError("unsupported id type: no ids set")


def _wrap_signed(bits: int) -> Callable[[int], int]:
    half = 1 << (bits - 1)
    mask = (1 << bits) - 1

    def wrap(value: int) -> int:
        return ((value + half) & mask) - half

    return wrap


_SCALAR_CONVERTERS: dict[DataType, tuple[str, type[Column], Callable[[Any], Any] | None]] = {
    DataType.BOOL: ("bool_data", ColumnBool, None),
    DataType.INT8: ("int_data", ColumnInt8, _wrap_signed(8)),
    DataType.INT16: ("int_data", ColumnInt16, _wrap_signed(16)),
    DataType.INT32: ("int_data", ColumnInt32, None),
    DataType.INT64: ("long_data", ColumnInt64, None),
    DataType.FLOAT: ("float_data", ColumnFloat, None),
    DataType.DOUBLE: ("double_data", ColumnDouble, None),
    DataType.STRING: ("string_data", ColumnString, None),
    DataType.VARCHAR: ("string_data", ColumnVarChar, None),
}


def field_data_column(fd: FieldData, begin: int, end: int) -> Column:
    """Convert scalar field data into a column of rows ``begin:end``.

    A negative ``end`` takes every row from ``begin`` on.
    """
    try:
        data_type = DataType(fd.type)
    except ValueError:
        raise ValueError(f"unsupported data type {fd.type}") from None
    entry = _SCALAR_CONVERTERS.get(data_type)
    if entry is None:
        raise ValueError(f"unsupported data type {data_type.name}")
    kind, column_cls, convert = entry
    scalars = fd.scalars
    if scalars is None or scalars.kind != kind:
        raise FieldDataTypeMismatchError()
    values = scalars.data if convert is None else [convert(v) for v in scalars.data]
    return column_cls(fd.field_name, _window(values, begin, end))


def _chunks(data: Sequence[Any], size: int) -> list[Any]:
    return [data[start : start + size] for start in range(0, len(data) - size + 1, size)]


def field_data_vector(fd: FieldData) -> Column:
    """Convert vector field data into a vector column."""
    vectors = fd.vectors
    if fd.type == DataType.FLOAT_VECTOR:
        data = vectors.float_vector if vectors is not None else None
        if data is None:
            raise FieldDataTypeMismatchError()
        dim = int(vectors.dim)
        if dim <= 0:
            raise ValueError(f"invalid vector dimension {dim}")
        rows = [list(chunk) for chunk in _chunks(data, dim)]
        return ColumnFloatVector(fd.field_name, dim, rows)
    if fd.type == DataType.BINARY_VECTOR:
        data = vectors.binary_vector if vectors is not None else None
        if data is None:
            raise FieldDataTypeMismatchError()
        dim = int(vectors.dim)
        row_len = dim // 8
        if row_len <= 0:
            raise ValueError(f"invalid vector dimension {dim}")
        rows = [bytes(chunk) for chunk in _chunks(data, row_len)]
        return ColumnBinaryVector(fd.field_name, dim, rows)
    raise ValueError("unsupported data type")