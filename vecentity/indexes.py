"""Built-in index types with validated construction and search parameters."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from vecentity.index import (
    INDEX_TYPE_KEY,
    METRIC_TYPE_KEY,
    Index,
    IndexType,
    MetricType,
    SearchParam,
)

_FLOAT_VECTOR_SUPPORT = 1
_BINARY_VECTOR_SUPPORT = 1 << 1


@dataclass(frozen=True)
class _ParamSpec:
    """One parameter: its wire key, attribute name and inclusive bounds."""

    key: str
    attr: str
    low: int | None = None
    high: int | None = None

    def check(self, value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{self.key} must be an int, got {type(value).__name__}")
        if self.low is not None and value < self.low:
            raise ValueError(f"{self.key} not valid")
        if self.high is not None and value > self.high:
            raise ValueError(f"{self.key} not valid")


def _text(value: MetricType | str) -> str:
    return value.value if isinstance(value, Enum) else str(value)


class _Parameterised:
    """Shared validation and repr for objects described by a parameter spec."""

    _specs: ClassVar[tuple[_ParamSpec, ...]] = ()

    def _validate(self) -> None:
        for spec in self._specs:
            spec.check(getattr(self, spec.attr))

    def _values(self) -> dict[str, int]:
        return {spec.key: getattr(self, spec.attr) for spec in self._specs}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(vars(self).items(), key=lambda kv: kv[0]))))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({fields})"


class BuiltinIndex(_Parameterised, Index):
    """An index of a known type whose construction parameters are validated."""

    _index_name: ClassVar[str] = ""
    _index_type: ClassVar[IndexType] = IndexType.FLAT
    _vector_support: ClassVar[int] = 0

    def __init__(self, metric_type: MetricType | str) -> None:
        self.metric_type = metric_type
        self._validate()

    @property
    def name(self) -> str:
        return self._index_name

    @property
    def index_type(self) -> IndexType:
        return self._index_type

    def support_binary(self) -> bool:
        """Return whether the index supports binary vectors."""
        return self._vector_support & _BINARY_VECTOR_SUPPORT > 0

    def params(self) -> dict[str, str]:
        """Return the build parameters: JSON-encoded params, index and metric type."""
        encoded = json.dumps(
            {key: str(value) for key, value in self._values().items()},
            sort_keys=True,
            separators=(",", ":"),
        )
        return {
            "params": encoded,
            INDEX_TYPE_KEY: self._index_type.value,
            METRIC_TYPE_KEY: _text(self.metric_type),
        }


class BuiltinSearchParam(_Parameterised, SearchParam):
    """Validated search parameters for a known index type."""

    def __init__(self) -> None:
        self._validate()

    def params(self) -> dict[str, Any]:
        """Return the search parameters keyed by their wire names."""
        return self._values()


_NLIST = _ParamSpec("nlist", "nlist", 1, 65536)
_NPROBE = _ParamSpec("nprobe", "nprobe", 1, 65536)
_HNSW_M = _ParamSpec("M", "m", 4, 64)
_EF_CONSTRUCTION = _ParamSpec("efConstruction", "ef_construction", 8, 512)
_EF = _ParamSpec("ef", "ef", 1, 32768)


class IndexFlat(BuiltinIndex):
    """FLAT index: exhaustive search, no parameters."""

    _index_name = "Flat"
    _index_type = IndexType.FLAT


class IndexBinFlat(BuiltinIndex):
    """BIN_FLAT index for binary vectors."""

    _index_name = "BinFlat"
    _index_type = IndexType.BIN_FLAT
    _vector_support = _BINARY_VECTOR_SUPPORT
    _specs = (_NLIST,)

    def __init__(self, metric_type: MetricType | str, nlist: int) -> None:
        self.nlist = nlist
        super().__init__(metric_type)


class IndexIvfFlat(BuiltinIndex):
    """IVF_FLAT index."""

    _index_name = "IvfFlat"
    _index_type = IndexType.IVF_FLAT
    _specs = (_NLIST,)

    def __init__(self, metric_type: MetricType | str, nlist: int) -> None:
        self.nlist = nlist
        super().__init__(metric_type)


class IndexBinIvfFlat(BuiltinIndex):
    """BIN_IVF_FLAT index for binary vectors."""

    _index_name = "BinIvfFlat"
    _index_type = IndexType.BIN_IVF_FLAT
    _vector_support = _BINARY_VECTOR_SUPPORT
    _specs = (_NLIST,)

    def __init__(self, metric_type: MetricType | str, nlist: int) -> None:
        self.nlist = nlist
        super().__init__(metric_type)


class IndexIvfSQ8(BuiltinIndex):
    """IVF_SQ8 index."""

    _index_name = "IvfSQ8"
    _index_type = IndexType.IVF_SQ8
    _specs = (_NLIST,)

    def __init__(self, metric_type: MetricType | str, nlist: int) -> None:
        self.nlist = nlist
        super().__init__(metric_type)


class IndexIvfPQ(BuiltinIndex):
    """IVF_PQ index; ``m`` must divide the vector dimension (checked by the server)."""

    _index_name = "IvfPQ"
    _index_type = IndexType.IVF_PQ
    _specs = (_NLIST, _ParamSpec("m", "m"), _ParamSpec("nbits", "nbits", 1, 16))

    def __init__(self, metric_type: MetricType | str, nlist: int, m: int, nbits: int) -> None:
        self.nlist = nlist
        self.m = m
        self.nbits = nbits
        super().__init__(metric_type)


class IndexHNSW(BuiltinIndex):
    """HNSW graph index."""

    _index_name = "HNSW"
    _index_type = IndexType.HNSW
    _specs = (_HNSW_M, _EF_CONSTRUCTION)

    def __init__(self, metric_type: MetricType | str, m: int, ef_construction: int) -> None:
        self.m = m
        self.ef_construction = ef_construction
        super().__init__(metric_type)


class IndexIvfHNSW(BuiltinIndex):
    """IVF_HNSW index."""

    _index_name = "IvfHNSW"
    _index_type = IndexType.IVF_HNSW
    _specs = (_NLIST, _HNSW_M, _EF_CONSTRUCTION)

    def __init__(
        self, metric_type: MetricType | str, nlist: int, m: int, ef_construction: int
    ) -> None:
        self.nlist = nlist
        self.m = m
        self.ef_construction = ef_construction
        super().__init__(metric_type)


class IndexANNOY(BuiltinIndex):
    """ANNOY index."""

    _index_name = "ANNOY"
    _index_type = IndexType.ANNOY
    _specs = (_ParamSpec("n_trees", "n_trees", 1, 1024),)

    def __init__(self, metric_type: MetricType | str, n_trees: int) -> None:
        self.n_trees = n_trees
        super().__init__(metric_type)


class IndexDISKANN(BuiltinIndex):
    """DISKANN index, no construction parameters."""

    _index_name = "DISKANN"
    _index_type = IndexType.DISKANN


class IndexAUTOINDEX(BuiltinIndex):
    """AUTOINDEX: the server picks the index, no construction parameters."""

    _index_name = "AUTOINDEX"
    _index_type = IndexType.AUTOINDEX


class IndexFlatSearchParam(BuiltinSearchParam):
    """Search parameters for FLAT: none."""


class IndexBinFlatSearchParam(BuiltinSearchParam):
    """Search parameters for BIN_FLAT."""

    _specs = (_NPROBE,)

    def __init__(self, nprobe: int) -> None:
        self.nprobe = nprobe
        super().__init__()


class IndexIvfFlatSearchParam(BuiltinSearchParam):
    """Search parameters for IVF_FLAT."""

    _specs = (_NPROBE,)

    def __init__(self, nprobe: int) -> None:
        self.nprobe = nprobe
        super().__init__()


class IndexBinIvfFlatSearchParam(BuiltinSearchParam):
    """Search parameters for BIN_IVF_FLAT."""

    _specs = (_NPROBE,)

    def __init__(self, nprobe: int) -> None:
        self.nprobe = nprobe
        super().__init__()


class IndexIvfSQ8SearchParam(BuiltinSearchParam):
    """Search parameters for IVF_SQ8."""

    _specs = (_NPROBE,)

    def __init__(self, nprobe: int) -> None:
        self.nprobe = nprobe
        super().__init__()


class IndexIvfPQSearchParam(BuiltinSearchParam):
    """Search parameters for IVF_PQ."""

    _specs = (_NPROBE,)

    def __init__(self, nprobe: int) -> None:
        self.nprobe = nprobe
        super().__init__()


class IndexHNSWSearchParam(BuiltinSearchParam):
    """Search parameters for HNSW."""

    _specs = (_EF,)

    def __init__(self, ef: int) -> None:
        self.ef = ef
        super().__init__()


class IndexIvfHNSWSearchParam(BuiltinSearchParam):
    """Search parameters for IVF_HNSW."""

    _specs = (_NPROBE, _EF)

    def __init__(self, nprobe: int, ef: int) -> None:
        self.nprobe = nprobe
        self.ef = ef
        super().__init__()


class IndexANNOYSearchParam(BuiltinSearchParam):
    """Search parameters for ANNOY; ``search_k`` is passed through unchecked."""

    _specs = (_ParamSpec("search_k", "search_k"),)

    def __init__(self, search_k: int) -> None:
        self.search_k = search_k
        super().__init__()


class IndexDISKANNSearchParam(BuiltinSearchParam):
    """Search parameters for DISKANN."""

    _specs = (_ParamSpec("search_list", "search_list", 1, 65535),)

    def __init__(self, search_list: int) -> None:
        self.search_list = search_list
        super().__init__()


class IndexAUTOINDEXSearchParam(BuiltinSearchParam):
    """Search parameters for AUTOINDEX."""

    _specs = (_ParamSpec("level", "level", 1, 3),)

    def __init__(self, level: int) -> None:
        self.level = level
        super().__init__()