import pytest

from vecentity.models import (
    IMPORT_PROGRESS,
    BulkInsertState,
    BulkInsertTaskState,
    Collection,
    ReplicaGroup,
    Segment,
    SegmentState,
    ShardReplica,
)
from vecentity.schema import ConsistencyLevel


def test_segment_flushed():
    segment = Segment()
    assert segment.flushed() is False
    segment.state = SegmentState.GROWING
    assert segment.flushed() is False
    segment.state = SegmentState.FLUSHING
    assert segment.flushed() is False
    segment.state = SegmentState.FLUSHED
    assert segment.flushed() is True


@pytest.mark.parametrize(
    "infos, expected",
    [
        ({IMPORT_PROGRESS: "50"}, 50),
        ({IMPORT_PROGRESS: "100"}, 100),
        ({IMPORT_PROGRESS: "+7"}, 7),
        ({IMPORT_PROGRESS: "-3"}, -3),
        ({IMPORT_PROGRESS: "abc"}, 0),
        ({IMPORT_PROGRESS: " 5"}, 0),
        ({IMPORT_PROGRESS: "1_0"}, 0),
        ({IMPORT_PROGRESS: ""}, 0),
        ({IMPORT_PROGRESS: "99999999999999999999"}, 0),
        ({"other": "10"}, 0),
        ({}, 0),
    ],
)
def test_bulk_insert_progress(infos, expected):
    state = BulkInsertTaskState(id=1, state=BulkInsertState.STARTED, infos=infos)
    assert state.progress() == expected


def test_import_progress_key():
    state = BulkInsertTaskState(
        id=2, state=BulkInsertState.STARTED, infos={"progress_percent": "42"}
    )
    assert state.progress() == 42


def test_bulk_insert_state_values():
    assert [int(BulkInsertState(v)) for v in (0, 1, 2, 5, 6, 7)] == [0, 1, 2, 5, 6, 7]
    assert BulkInsertState(2) is BulkInsertState.STARTED
    with pytest.raises(ValueError):
        BulkInsertState(3)


def test_collection_defaults():
    coll = Collection(name="c")
    assert coll.consistency_level is ConsistencyLevel.STRONG
    assert coll.schema is None
    assert coll.physical_channels == []


def test_replica_group_holds_shards():
    shard = ShardReplica(leader_id=3, node_ids=[3, 4], dm_channel_name="dml_0")
    group = ReplicaGroup(replica_id=9, node_ids=[3, 4], shard_replicas=[shard])
    assert group.shard_replicas[0].leader_id == 3
    assert group.shard_replicas[0].dm_channel_name == "dml_0"