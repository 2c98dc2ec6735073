"""Plain message types exchanged with the vector database server."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class DataType(IntEnum):
    """Wire-level data type of a field."""

    NONE = 0
    BOOL = 1
    INT8 = 2
    INT16 = 3
    INT32 = 4
    INT64 = 5
    FLOAT = 10
    DOUBLE = 11
    STRING = 20
    VARCHAR = 21
    BINARY_VECTOR = 100
    FLOAT_VECTOR = 101


@dataclass
class KeyValuePair:
    """A single string key/value pair."""

    key: str = ""
    value: str = ""


@dataclass
class FieldSchema:
    """Wire representation of one field of a collection schema."""

    field_id: int = 0
    name: str = ""
    description: str = ""
    is_primary_key: bool = False
    auto_id: bool = False
    data_type: DataType = DataType.NONE
    type_params: list[KeyValuePair] = field(default_factory=list)
    index_params: list[KeyValuePair] = field(default_factory=list)


@dataclass
class CollectionSchema:
    """Wire representation of a collection schema."""

    name: str = ""
    description: str = ""
    auto_id: bool = False
    fields: list[FieldSchema] = field(default_factory=list)


@dataclass
class ScalarField:
    """Scalar payload of a field.

    ``kind`` names the populated array and is one of ``"bool_data"``,
    ``"int_data"``, ``"long_data"``, ``"float_data"``, ``"double_data"``
    or ``"string_data"``; ``None`` means no array is set.
    """

    kind: str | None = None
    data: list = field(default_factory=list)


@dataclass
class VectorField:
    """Vector payload of a field: either flat floats or packed bits."""

    dim: int = 0
    float_vector: list[float] | None = None
    binary_vector: bytes | None = None


@dataclass
class FieldData:
    """Column data of one field as sent over the wire."""

    type: DataType = DataType.NONE
    field_name: str = ""
    field_id: int = 0
    scalars: ScalarField | None = None
    vectors: VectorField | None = None


@dataclass
class IDs:
    """Primary keys returned by the server: integers or strings."""

    int_id: list[int] | None = None
    str_id: list[str] | None = None