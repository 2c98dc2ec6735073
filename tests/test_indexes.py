import json

import pytest

from vecentity.index import IndexType, MetricType
from vecentity.indexes import (
    IndexANNOY,
    IndexANNOYSearchParam,
    IndexAUTOINDEX,
    IndexAUTOINDEXSearchParam,
    IndexBinFlat,
    IndexBinFlatSearchParam,
    IndexBinIvfFlat,
    IndexBinIvfFlatSearchParam,
    IndexDISKANN,
    IndexDISKANNSearchParam,
    IndexFlat,
    IndexFlatSearchParam,
    IndexHNSW,
    IndexHNSWSearchParam,
    IndexIvfFlat,
    IndexIvfFlatSearchParam,
    IndexIvfHNSW,
    IndexIvfHNSWSearchParam,
    IndexIvfPQ,
    IndexIvfPQSearchParam,
    IndexIvfSQ8,
    IndexIvfSQ8SearchParam,
)

L2 = MetricType.L2
HAMMING = MetricType.HAMMING


@pytest.mark.parametrize(
    "cls, metric, args, name, index_type, binary, inner",
    [
        (IndexFlat, L2, (), "Flat", "FLAT", False, {}),
        (IndexBinFlat, HAMMING, (10,), "BinFlat", "BIN_FLAT", True, {"nlist": "10"}),
        (IndexIvfFlat, L2, (10,), "IvfFlat", "IVF_FLAT", False, {"nlist": "10"}),
        (IndexBinIvfFlat, HAMMING, (10,), "BinIvfFlat", "BIN_IVF_FLAT", True, {"nlist": "10"}),
        (IndexIvfSQ8, L2, (10,), "IvfSQ8", "IVF_SQ8", False, {"nlist": "10"}),
        (
            IndexIvfPQ,
            L2,
            (10, 8, 8),
            "IvfPQ",
            "IVF_PQ",
            False,
            {"nlist": "10", "m": "8", "nbits": "8"},
        ),
        (IndexHNSW, L2, (16, 40), "HNSW", "HNSW", False, {"M": "16", "efConstruction": "40"}),
        (
            IndexIvfHNSW,
            L2,
            (10, 16, 40),
            "IvfHNSW",
            "IVF_HNSW",
            False,
            {"nlist": "10", "M": "16", "efConstruction": "40"},
        ),
        (IndexANNOY, L2, (8,), "ANNOY", "ANNOY", False, {"n_trees": "8"}),
        (IndexDISKANN, L2, (), "DISKANN", "DISKANN", False, {}),
        (IndexAUTOINDEX, L2, (), "AUTOINDEX", "AUTOINDEX", False, {}),
    ],
)
def test_index_valid(cls, metric, args, name, index_type, binary, inner):
    idx = cls(metric, *args)
    assert idx.name == name
    assert idx.index_type == IndexType(index_type)
    assert idx.support_binary() is binary
    params = idx.params()
    assert params["index_type"] == index_type
    assert params["metric_type"] == metric.value
    assert json.loads(params["params"]) == inner


@pytest.mark.parametrize(
    "cls, metric, args",
    [
        (IndexBinFlat, HAMMING, (0,)),
        (IndexBinFlat, HAMMING, (65537,)),
        (IndexIvfFlat, L2, (0,)),
        (IndexIvfFlat, L2, (65537,)),
        (IndexBinIvfFlat, HAMMING, (0,)),
        (IndexBinIvfFlat, HAMMING, (65537,)),
        (IndexIvfSQ8, L2, (0,)),
        (IndexIvfSQ8, L2, (65537,)),
        (IndexIvfPQ, L2, (0, 8, 8)),
        (IndexIvfPQ, L2, (65537, 8, 8)),
        (IndexIvfPQ, L2, (10, 8, 0)),
        (IndexIvfPQ, L2, (10, 8, 17)),
        (IndexHNSW, L2, (3, 40)),
        (IndexHNSW, L2, (65, 40)),
        (IndexHNSW, L2, (16, 7)),
        (IndexHNSW, L2, (16, 513)),
        (IndexIvfHNSW, L2, (0, 16, 40)),
        (IndexIvfHNSW, L2, (65537, 16, 40)),
        (IndexIvfHNSW, L2, (10, 3, 40)),
        (IndexIvfHNSW, L2, (10, 65, 40)),
        (IndexIvfHNSW, L2, (10, 16, 7)),
        (IndexIvfHNSW, L2, (10, 16, 513)),
        (IndexANNOY, L2, (0,)),
        (IndexANNOY, L2, (1025,)),
    ],
)
def test_index_invalid(cls, metric, args):
    with pytest.raises(ValueError, match="not valid"):
        cls(metric, *args)


def test_index_params_exact_encoding():
    idx = IndexHNSW(L2, 16, 40)
    assert idx.params() == {
        "params": '{"M":"16","efConstruction":"40"}',
        "index_type": "HNSW",
        "metric_type": "L2",
    }


def test_flat_params_empty_json():
    assert IndexFlat(L2).params()["params"] == "{}"


def test_index_metric_as_string():
    assert IndexIvfFlat("IP", 128).params()["metric_type"] == "IP"


def test_index_bounds_inclusive():
    assert json.loads(IndexIvfFlat(L2, 65536).params()["params"]) == {"nlist": "65536"}
    assert json.loads(IndexIvfFlat(L2, 1).params()["params"]) == {"nlist": "1"}


def test_index_rejects_non_int():
    with pytest.raises(TypeError):
        IndexIvfFlat(L2, "10")


def test_ivfpq_error_names_first_bad_param():
    with pytest.raises(ValueError, match="nbits not valid"):
        IndexIvfPQ(L2, 10, 8, 17)


@pytest.mark.parametrize(
    "cls, args, expected",
    [
        (IndexFlatSearchParam, (), {}),
        (IndexBinFlatSearchParam, (10,), {"nprobe": 10}),
        (IndexIvfFlatSearchParam, (10,), {"nprobe": 10}),
        (IndexBinIvfFlatSearchParam, (10,), {"nprobe": 10}),
        (IndexIvfSQ8SearchParam, (10,), {"nprobe": 10}),
        (IndexIvfPQSearchParam, (10,), {"nprobe": 10}),
        (IndexHNSWSearchParam, (16,), {"ef": 16}),
        (IndexIvfHNSWSearchParam, (10, 16), {"nprobe": 10, "ef": 16}),
        (IndexANNOYSearchParam, (-1,), {"search_k": -1}),
        (IndexANNOYSearchParam, (20,), {"search_k": 20}),
        (IndexDISKANNSearchParam, (30,), {"search_list": 30}),
        (IndexAUTOINDEXSearchParam, (1,), {"level": 1}),
    ],
)
def test_search_param_valid(cls, args, expected):
    assert cls(*args).params() == expected


@pytest.mark.parametrize(
    "cls, args",
    [
        (IndexBinFlatSearchParam, (0,)),
        (IndexBinFlatSearchParam, (65537,)),
        (IndexIvfFlatSearchParam, (0,)),
        (IndexIvfFlatSearchParam, (65537,)),
        (IndexBinIvfFlatSearchParam, (0,)),
        (IndexBinIvfFlatSearchParam, (65537,)),
        (IndexIvfSQ8SearchParam, (0,)),
        (IndexIvfSQ8SearchParam, (65537,)),
        (IndexIvfPQSearchParam, (0,)),
        (IndexIvfPQSearchParam, (65537,)),
        (IndexHNSWSearchParam, (0,)),
        (IndexHNSWSearchParam, (32769,)),
        (IndexIvfHNSWSearchParam, (0, 16)),
        (IndexIvfHNSWSearchParam, (65537, 16)),
        (IndexIvfHNSWSearchParam, (10, 0)),
        (IndexIvfHNSWSearchParam, (10, 32769)),
        (IndexDISKANNSearchParam, (0,)),
        (IndexDISKANNSearchParam, (65537,)),
        (IndexAUTOINDEXSearchParam, (0,)),
        (IndexAUTOINDEXSearchParam, (10,)),
        (IndexAUTOINDEXSearchParam, (-1,)),
    ],
)
def test_search_param_invalid(cls, args):
    with pytest.raises(ValueError, match="not valid"):
        cls(*args)


def test_equal_indexes_compare_equal():
    assert IndexIvfFlat(L2, 10) == IndexIvfFlat(L2, 10)
    assert IndexIvfFlat(L2, 10) != IndexIvfFlat(L2, 11)