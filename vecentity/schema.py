"""Collection and field schema definitions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import IntEnum

from vecentity.messages import CollectionSchema, DataType, FieldSchema, KeyValuePair

TYPE_PARAM_DIM = "dim"
TYPE_PARAM_MAX_LENGTH = "max_length"


class FieldType(IntEnum):
    """Data type of a collection field."""

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

    def type_name(self) -> str:
        """Return the display name of the type."""
        return _TYPE_NAMES.get(self, "undefined")

    def __str__(self) -> str:
        return _TYPE_DEFS.get(self, "undefined")

    def pb_field_type(self) -> tuple[str, str]:
        """Return the wire array name and element type for this type."""
        return _PB_TYPES.get(self, ("undefined", ""))


_TYPE_NAMES = {
    FieldType.BOOL: "Bool",
    FieldType.INT8: "Int8",
    FieldType.INT16: "Int16",
    FieldType.INT32: "Int32",
    FieldType.INT64: "Int64",
    FieldType.FLOAT: "Float",
    FieldType.DOUBLE: "Double",
    FieldType.STRING: "String",
    FieldType.VARCHAR: "VarChar",
    FieldType.BINARY_VECTOR: "BinaryVector",
    FieldType.FLOAT_VECTOR: "FloatVector",
}

_TYPE_DEFS = {
    FieldType.BOOL: "bool",
    FieldType.INT8: "int8",
    FieldType.INT16: "int16",
    FieldType.INT32: "int32",
    FieldType.INT64: "int64",
    FieldType.FLOAT: "float32",
    FieldType.DOUBLE: "float64",
    FieldType.STRING: "string",
    FieldType.VARCHAR: "string",
    FieldType.BINARY_VECTOR: "[]byte",
    FieldType.FLOAT_VECTOR: "[]float32",
}

_PB_TYPES = {
    FieldType.BOOL: ("Bool", "bool"),
    FieldType.INT8: ("Int", "int32"),
    FieldType.INT16: ("Int", "int32"),
    FieldType.INT32: ("Int", "int32"),
    FieldType.INT64: ("Long", "int64"),
    FieldType.FLOAT: ("Float", "float32"),
    FieldType.DOUBLE: ("Double", "float64"),
    FieldType.STRING: ("String", "string"),
    FieldType.VARCHAR: ("VarChar", "string"),
    FieldType.BINARY_VECTOR: ("[]byte", ""),
    FieldType.FLOAT_VECTOR: ("[]float32", ""),
}


class ConsistencyLevel(IntEnum):
    """Consistency level of a collection."""

    STRONG = 0
    SESSION = 1
    BOUNDED = 2
    EVENTUALLY = 3
    CUSTOMIZED = 4

    def common_consistency_level(self) -> int:
        """Return the wire value of this level."""
        return int(self)


def map_kv_pairs(mapping: Mapping[str, str] | None) -> list[KeyValuePair]:
    """Convert a mapping into a list of key/value pairs."""
    if not mapping:
        return []
    return [KeyValuePair(key=k, value=v) for k, v in mapping.items()]


def kv_pairs_map(pairs: Iterable[KeyValuePair] | None) -> dict[str, str]:
    """Convert key/value pairs into a dict; later keys win."""
    return {pair.key: pair.value for pair in pairs or ()}


@dataclass
class Field:
    """Schema of one field of a collection."""

    id: int = 0
    name: str = ""
    primary_key: bool = False
    auto_id: bool = False
    description: str = ""
    data_type: FieldType = FieldType.NONE
    type_params: dict[str, str] = field(default_factory=dict)
    index_params: dict[str, str] = field(default_factory=dict)

    def to_proto(self) -> FieldSchema:
        """Build the wire representation of this field."""
        return FieldSchema(
            field_id=self.id,
            name=self.name,
            description=self.description,
            is_primary_key=self.primary_key,
            auto_id=self.auto_id,
            data_type=DataType(int(self.data_type)),
            type_params=map_kv_pairs(self.type_params),
            index_params=map_kv_pairs(self.index_params),
        )

    def read_proto(self, proto: FieldSchema) -> Field:
        """Fill this field from its wire representation and return it."""
        self.id = proto.field_id
        self.name = proto.name
        self.primary_key = proto.is_primary_key
        self.auto_id = proto.auto_id
        self.description = proto.description
        self.data_type = FieldType(int(proto.data_type))
        self.type_params = kv_pairs_map(proto.type_params)
        self.index_params = kv_pairs_map(proto.index_params)
        return self


@dataclass
class Schema:
    """Schema of a collection: its name and fields."""

    collection_name: str = ""
    description: str = ""
    auto_id: bool = False
    fields: list[Field] = field(default_factory=list)

    def to_proto(self) -> CollectionSchema:
        """Build the wire representation of this schema."""
        return CollectionSchema(
            name=self.collection_name,
            description=self.description,
            auto_id=self.auto_id,
            fields=[f.to_proto() for f in self.fields],
        )

    def read_proto(self, proto: CollectionSchema) -> Schema:
        """Fill this schema from its wire representation and return it."""
        self.auto_id = proto.auto_id
        self.description = proto.description
        self.collection_name = proto.name
        self.fields = [Field().read_proto(fp) for fp in proto.fields]
        return self