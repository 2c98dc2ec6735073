# vecentity

Plain Python models for working with a vector database: collection schemas,
typed data columns, index definitions with validated build parameters,
search parameters, and helpers that turn rows into columns.

The package has no runtime dependencies.

## Installation

```
pip install vecentity
```

## Schemas

```python
from vecentity.schema import Schema, Field, FieldType

schema = Schema(
    collection_name="books",
    description="book embeddings",
    fields=[
        Field(name="id", data_type=FieldType.INT64, primary_key=True),
        Field(name="embedding", data_type=FieldType.FLOAT_VECTOR,
              type_params={"dim": "128"}),
    ],
)

proto = schema.to_proto()             # vecentity.messages.CollectionSchema
restored = Schema().read_proto(proto)
```

`FieldType.type_name()` gives the display name of a type (`"Int64"`),
`str(FieldType.INT64)` its value type (`"int64"`), and
`pb_field_type()` the pair naming its wire array and element type
(`("Long", "int64")`). `map_kv_pairs` and `kv_pairs_map` convert between
dicts and lists of `KeyValuePair`. `ConsistencyLevel` lists the
consistency levels of a collection.

The wire message types (`FieldSchema`, `CollectionSchema`, `FieldData`,
`ScalarField`, `VectorField`, `IDs`, `DataType`) are plain dataclasses
and enums in `vecentity.messages`.

## Columns

Each field type has a column class in `vecentity.columns`: `ColumnBool`,
`ColumnInt8`, `ColumnInt16`, `ColumnInt32`, `ColumnInt64`, `ColumnFloat`,
`ColumnDouble`, `ColumnString`, `ColumnVarChar`, `ColumnBinaryVector` and
`ColumnFloatVector`.

```python
from vecentity.columns import ColumnInt64, ColumnFloatVector

ids = ColumnInt64("id", [1, 2, 3])
ids.append_value(4)
len(ids)               # 4
ids.value_by_idx(0)    # 1
ids.data               # [1, 2, 3, 4]
fd = ids.field_data()  # vecentity.messages.FieldData

vectors = ColumnFloatVector("embedding", 2, [[0.1, 0.2]])
vectors.dim            # 2
```

Appending a value of the wrong type raises `TypeError`; an integer outside
the column's bit width raises `ValueError`; an index out of range raises
`IndexError`.

`vecentity.convert` reads data back from wire messages:
`field_data_column(fd, begin, end)`, `field_data_vector(fd)` and
`id_columns(id_field, begin, end)`; pass `end=-1` to read to the end.
Field data whose payload does not match its type raises
`FieldDataTypeMismatchError`, a `ValueError`. `FloatVector` and
`BinaryVector` wrap search vectors: `dim()`, `field_type()`, and
`serialize()`, which gives little-endian float32 bytes or the raw bytes.

## Indexes and search parameters

```python
from vecentity.index import MetricType
from vecentity.indexes import IndexHNSW, IndexHNSWSearchParam

index = IndexHNSW(MetricType.L2, 16, 40)
index.name              # 'HNSW'
index.support_binary()  # False
index.params()
# {'params': '{"M":"16","efConstruction":"40"}',
#  'index_type': 'HNSW', 'metric_type': 'L2'}

search = IndexHNSWSearchParam(64)
search.params()   # {'ef': 64}
```

Built-in indexes: `IndexFlat`, `IndexBinFlat`, `IndexIvfFlat`,
`IndexBinIvfFlat`, `IndexIvfSQ8`, `IndexIvfPQ`, `IndexHNSW`,
`IndexIvfHNSW`, `IndexANNOY`, `IndexDISKANN` and `IndexAUTOINDEX`, each
with a matching `...SearchParam` class. Parameters outside their allowed
range raise `ValueError`; non-integer parameters raise `TypeError`.
`GenericIndex` in `vecentity.index` takes any index type and free-form
parameters without checks.

## Rows

Rows are dataclasses based on `RowBase`. Field options are given with
`milvus_field`, using a `key:value;key` tag syntax for primary keys
(`primary_key`), auto ids (`auto_id`), names (`name:...`) and vector
dimensions (`dim:...`). `bool`, `int`, `float` and `str` map to
`BOOL`, `INT64`, `DOUBLE` and `STRING`; `list[float]` and `bytes` are
vectors and need a `dim` tag. `Annotated[int, FieldType.INT32]` picks
a narrower type, and `Annotated[list[float], 16]` declares a fixed
length vector without a tag.

```python
from dataclasses import dataclass
from vecentity.rows import RowBase, milvus_field, parse_schema, rows_to_columns

@dataclass
class Book(RowBase):
    id: int = milvus_field("primary_key", default=0)
    vector: list[float] = milvus_field("dim:4", default_factory=list)

schema = parse_schema(Book())         # collection name "Book"
columns = rows_to_columns([Book(1, [0.1, 0.2, 0.3, 0.4])])
```

`rows_to_columns` takes an optional `Schema` as its second argument;
otherwise the schema is parsed from the first row. `parse_tag_setting`
parses a tag string on its own.

## Other models

`vecentity.models` holds collection, partition, replica, segment,
compaction, bulk-insert, load-state, RBAC and resource-group records,
such as `Segment.flushed()` and `BulkInsertTaskState.progress()`.

## What this package does not do

It has no client: it opens no connections, sends no requests and talks
to no server. It only builds, validates and converts the data that such
a client would send and receive.

## Running the tests

```
pip install "vecentity[test]"
pytest
```