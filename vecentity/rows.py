"""Row-based data: dataclass rows, their schema, and conversion into columns."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterable, Sequence
from types import UnionType
from typing import Annotated, Any, Union, get_args, get_origin

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
from vecentity.schema import TYPE_PARAM_DIM, Field, FieldType, Schema

MILVUS_TAG = "milvus"
MILVUS_TAG_SEP = ";"
MILVUS_TAG_NAME = "NAME"
VECTOR_DIM_TAG = "DIM"
MILVUS_PRIMARY_KEY = "PRIMARY_KEY"
MILVUS_AUTO_ID = "AUTO_ID"
DIM_MAX = 65535

_INTEGER = re.compile(r"[+-]?[0-9]+")
_BYTES_TYPES = (bytes, bytearray)
_SEQUENCE_TYPES = (list, tuple)
_MISSING = object()

_DEFAULT_SCALARS: dict[Any, FieldType] = {
    bool: FieldType.BOOL,
    int: FieldType.INT64,
    float: FieldType.DOUBLE,
    str: FieldType.STRING,
}

_EXPLICIT_BASES: dict[FieldType, type] = {
    FieldType.BOOL: bool,
    FieldType.INT8: int,
    FieldType.INT16: int,
    FieldType.INT32: int,
    FieldType.INT64: int,
    FieldType.FLOAT: float,
    FieldType.DOUBLE: float,
    FieldType.STRING: str,
    FieldType.VARCHAR: str,
}

_SCALAR_COLUMNS: dict[FieldType, type[Column]] = {
    FieldType.BOOL: ColumnBool,
    FieldType.INT8: ColumnInt8,
    FieldType.INT16: ColumnInt16,
    FieldType.INT32: ColumnInt32,
    FieldType.INT64: ColumnInt64,
    FieldType.FLOAT: ColumnFloat,
    FieldType.DOUBLE: ColumnDouble,
    FieldType.STRING: ColumnString,
    FieldType.VARCHAR: ColumnVarChar,
}


@dataclasses.dataclass
class RowBase:
    """Base of row dataclasses; names default to empty strings.

    An empty collection name makes the row's class name the collection name;
    an empty partition name selects the default partition.
    """

    def collection(self) -> str:
        """Return the collection the row belongs to."""
        return ""

    def partition(self) -> str:
        """Return the partition the row belongs to."""
        return ""

    def description(self) -> str:
        """Return the collection description."""
        return ""


def milvus_field(tag: str, **kwargs: Any) -> Any:
    """Declare a dataclass field carrying a row tag such as ``"primary_key;dim:8"``."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[MILVUS_TAG] = tag
    return dataclasses.field(metadata=metadata, **kwargs)


def parse_tag_setting(text: str, sep: str) -> dict[str, str]:
    """Parse a tag into upper-cased keys; a backslash before ``sep`` escapes it."""
    settings: dict[str, str] = {}
    names = text.split(sep)
    i = 0
    while i < len(names):
        j = i
        while names[j].endswith("\\") and i + 1 < len(names):
            i += 1
            names[j] = names[j][:-1] + sep + names[i]
            names[i] = ""
        key, *rest = names[j].split(":")
        key = key.upper().strip()
        if rest:
            settings[key] = ":".join(rest)
        elif key:
            settings[key] = key
        i += 1
    return settings


def _strip_hint(hint: Any) -> tuple[Any, FieldType | None, int | None]:
    """Remove Optional and Annotated layers, collecting a type marker and array length."""
    explicit: FieldType | None = None
    array_len: int | None = None
    while True:
        origin = get_origin(hint)
        if origin is Annotated:
            base, *extras = get_args(hint)
            for extra in extras:
                if isinstance(extra, FieldType):
                    explicit = extra
                elif isinstance(extra, int) and not isinstance(extra, bool):
                    array_len = extra
            hint = base
            continue
        if origin is Union or origin is UnionType:
            args = [a for a in get_args(hint) if a is not type(None)]
            if len(args) == 1:
                hint = args[0]
                continue
        return hint, explicit, array_len


def _element(base: Any) -> Any:
    args = get_args(base)
    return args[0] if args else None


def _is_sequence(base: Any) -> bool:
    return base in _SEQUENCE_TYPES or get_origin(base) in _SEQUENCE_TYPES


def _describe(name: str, hint: Any, settings: dict[str, str]) -> tuple[FieldType, dict[str, str]]:
    if isinstance(hint, str):
        raise ValueError(f"field {name} has unresolved annotation {hint!r}")
    base, explicit, array_len = _strip_hint(hint)

    if explicit is not None and explicit in _EXPLICIT_BASES:
        if base is not _EXPLICIT_BASES[explicit]:
            raise ValueError(f"field {name} is {base}, which cannot hold {explicit.type_name()}")
        return explicit, {}

    if array_len is not None:
        if array_len < 1:
            raise ValueError(f"field {name} has invalid array length {array_len}")
        if base in _BYTES_TYPES:
            result = FieldType.BINARY_VECTOR, {TYPE_PARAM_DIM: str(array_len * 8)}
        elif _is_sequence(base) and _element(base) is float:
            result = FieldType.FLOAT_VECTOR, {TYPE_PARAM_DIM: str(array_len)}
        else:
            raise ValueError(
                f"field {name} is array of {_element(base)}, which is not supported"
            )
    elif base in _DEFAULT_SCALARS:
        result = _DEFAULT_SCALARS[base], {}
    elif base in _BYTES_TYPES or _is_sequence(base):
        dim_str = settings.get(VECTOR_DIM_TAG)
        if dim_str is None:
            raise ValueError(f"field {name} is slice but dim not provided")
        if not _INTEGER.fullmatch(dim_str):
            raise ValueError(f"dim value {dim_str} is not valid")
        dim = int(dim_str)
        if dim < 1 or dim > DIM_MAX:
            raise ValueError(f"dim value {dim} is out of range")
        params = {TYPE_PARAM_DIM: dim_str}
        if base in _BYTES_TYPES:
            result = FieldType.BINARY_VECTOR, params
        elif _element(base) is float:
            result = FieldType.FLOAT_VECTOR, params
        else:
            raise ValueError(
                f"field {name} is slice of {_element(base)}, which is not supported"
            )
    else:
        raise ValueError(f"field {name} is {base}, which is not supported")

    if explicit is not None and explicit != result[0]:
        raise ValueError(f"field {name} is declared {explicit.type_name()} but holds {base}")
    return result


def parse_schema(row: Any) -> Schema:
    """Build a collection schema from a row dataclass instance."""
    schema = Schema(collection_name=row.collection(), description=row.description())
    if isinstance(row, type) or not dataclasses.is_dataclass(row):
        raise TypeError(f"unsupported data type: {row!r}")
    cls = type(row)
    if not schema.collection_name:
        schema.collection_name = cls.__name__
        if not schema.collection_name:
            raise ValueError("collection name not provided")

    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue
        settings = parse_tag_setting(f.metadata.get(MILVUS_TAG, ""), MILVUS_TAG_SEP)
        field = Field(name=f.name)
        if MILVUS_PRIMARY_KEY in settings:
            field.primary_key = True
        if MILVUS_AUTO_ID in settings:
            field.auto_id = True
        if MILVUS_TAG_NAME in settings:
            field.name = settings[MILVUS_TAG_NAME]
        field.data_type, field.type_params = _describe(f.name, f.type, settings)
        schema.fields.append(field)
    return schema


def _vector_dim(field: Field) -> int:
    dim_str = field.type_params.get(TYPE_PARAM_DIM)
    if dim_str is None:
        raise ValueError("vector field with no dim")
    if not _INTEGER.fullmatch(dim_str):
        raise ValueError(f"vector field with bad format dim: {dim_str!r}")
    return int(dim_str)


def _new_column(field: Field) -> Column:
    column_cls = _SCALAR_COLUMNS.get(field.data_type)
    if column_cls is not None:
        return column_cls(field.name, [])
    if field.data_type == FieldType.FLOAT_VECTOR:
        return ColumnFloatVector(field.name, _vector_dim(field), [])
    if field.data_type == FieldType.BINARY_VECTOR:
        return ColumnBinaryVector(field.name, _vector_dim(field), [])
    raise ValueError(f"field {field.name} has unsupported type {field.data_type.type_name()}")


def _field_from_name_tag(row: Any, name: str) -> Any:
    if isinstance(row, type) or not dataclasses.is_dataclass(row):
        raise TypeError(f"unsupported data type: {row!r}")
    row_fields = dataclasses.fields(row)
    for f in row_fields:
        tag = f.metadata.get(MILVUS_TAG, "")
        if tag and parse_tag_setting(tag, MILVUS_TAG_SEP).get(MILVUS_TAG_NAME) == name:
            return getattr(row, f.name)
    if any(f.name == name for f in row_fields):
        return getattr(row, name)
    return _MISSING


def rows_to_columns(rows: Iterable[Any], *args: Schema) -> list[Column]:
    """Convert rows into one column per schema field.

    The schema is the first extra argument, or parsed from the first row.
    """
    rows = list(rows)
    if not rows:
        raise ValueError("0 length column")
    schema = args[0] if args else parse_schema(rows[0])
    columns: dict[str, Column] = {f.name: _new_column(f) for f in schema.fields}
    for row_idx, row in enumerate(rows):
        for field in schema.fields:
            value = _field_from_name_tag(row, field.name)
            if value is _MISSING:
                raise ValueError(f"row {row_idx} does not have field {field.name}")
            columns[field.name].append_value(value)
    return list(columns.values())


__all__: Sequence[str] = (
    "RowBase",
    "milvus_field",
    "parse_schema",
    "parse_tag_setting",
    "rows_to_columns",
)