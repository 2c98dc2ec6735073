"""Index and metric types, and the generic index description."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any

INDEX_TYPE_KEY = "index_type"
METRIC_TYPE_KEY = "metric_type"


class IndexType(str, Enum):
    """Kind of vector index."""

    FLAT = "FLAT"
    BIN_FLAT = "BIN_FLAT"
    IVF_FLAT = "IVF_FLAT"
    BIN_IVF_FLAT = "BIN_IVF_FLAT"
    IVF_PQ = "IVF_PQ"
    IVF_SQ8 = "IVF_SQ8"
    HNSW = "HNSW"
    IVF_HNSW = "IVF_HNSW"
    ANNOY = "ANNOY"
    AUTOINDEX = "AUTOINDEX"
    DISKANN = "DISKANN"

    def __str__(self) -> str:
        return self.value


class MetricType(str, Enum):
    """Distance metric used by an index."""

    L2 = "L2"
    IP = "IP"
    HAMMING = "HAMMING"
    JACCARD = "JACCARD"
    TANIMOTO = "TANIMOTO"
    SUBSTRUCTURE = "SUBSTRUCTURE"
    SUPERSTRUCTURE = "SUPERSTRUCTURE"

    def __str__(self) -> str:
        return self.value


class Index(ABC):
    """An index definition: a name, a type and construction parameters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The index name."""

    @property
    @abstractmethod
    def index_type(self) -> IndexType | str:
        """The index type."""

    @abstractmethod
    def params(self) -> dict[str, str]:
        """Return the parameters sent when the index is built."""


class SearchParam(ABC):
    """Index-specific parameters of a search or query."""

    @abstractmethod
    def params(self) -> dict[str, Any]:
        """Return the parameters sent with a search."""


def _text(value: IndexType | MetricType | str) -> str:
    return value.value if isinstance(value, Enum) else str(value)


class GenericIndex(Index):
    """An index with free-form parameters and no validation."""

    def __init__(
        self,
        name: str,
        index_type: IndexType | str,
        params: Mapping[str, str] | None = None,
    ) -> None:
        self._name = name
        self._index_type = index_type
        self._params = dict(params or {})

    @property
    def name(self) -> str:
        return self._name

    @property
    def index_type(self) -> IndexType | str:
        return self._index_type

    def params(self) -> dict[str, str]:
        """Return the index type merged with the given parameters; given ones win."""
        result = {INDEX_TYPE_KEY: _text(self._index_type)}
        result.update(self._params)
        return result

    def __repr__(self) -> str:
        return (
            f"GenericIndex(name={self._name!r}, index_type={_text(self._index_type)!r}, "
            f"params={self._params!r})"
        )