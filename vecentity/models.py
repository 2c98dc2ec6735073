"""Metadata models describing server-side objects."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum

from vecentity.schema import ConsistencyLevel, Schema

IMPORT_PROGRESS = "progress_percent"

_ATOI = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class BulkInsertState(IntEnum):
    """State of a bulk-insert task."""

    PENDING = 0
    FAILED = 1
    STARTED = 2
    PERSISTED = 5
    COMPLETED = 6
    FAILED_AND_CLEANED = 7


@dataclass
class BulkInsertTaskState:
    """Status of a bulk-insert task."""

    id: int = 0
    state: BulkInsertState = BulkInsertState.PENDING
    row_count: int = 0
    id_list: list[int] = field(default_factory=list)
    infos: dict[str, str] = field(default_factory=dict)
    collection_id: int = 0
    segment_ids: list[int] = field(default_factory=list)
    create_ts: int = 0

    def progress(self) -> int:
        """Return the reported progress percentage, or 0 if unknown or malformed."""
        raw = self.infos.get(IMPORT_PROGRESS)
        if raw is None or not _ATOI.fullmatch(raw):
            return 0
        value = int(raw)
        if not _INT64_MIN <= value <= _INT64_MAX:
            return 0
        return value


@dataclass
class Collection:
    """Collection metadata."""

    id: int = 0
    name: str = ""
    schema: Schema | None = None
    physical_channels: list[str] = field(default_factory=list)
    virtual_channels: list[str] = field(default_factory=list)
    loaded: bool = False
    consistency_level: ConsistencyLevel = ConsistencyLevel.STRONG
    shard_num: int = 0


@dataclass
class Partition:
    """Partition metadata."""

    id: int = 0
    name: str = ""
    loaded: bool = False


@dataclass
class ShardReplica:
    """A shard within a replica group."""

    leader_id: int = 0
    node_ids: list[int] = field(default_factory=list)
    dm_channel_name: str = ""


@dataclass
class ReplicaGroup:
    """A replica group and its shards."""

    replica_id: int = 0
    node_ids: list[int] = field(default_factory=list)
    shard_replicas: list[ShardReplica] = field(default_factory=list)


class CompactionState(IntEnum):
    """Execution state of a compaction."""

    UNDEFINED = 0
    EXECUTING = 1
    COMPLETED = 2


class CompactionPlanType(IntEnum):
    """Kind of compaction plan."""

    UNDEFINED = 0
    APPLY_DELETE = 1
    MERGE_SEGMENTS = 2


@dataclass
class CompactionPlan:
    """A compaction plan: source segments merged into a target."""

    source: list[int] = field(default_factory=list)
    target: int = 0
    plan_type: CompactionPlanType = CompactionPlanType.UNDEFINED


class LoadState(IntEnum):
    """Load state of a collection or partition."""

    NOT_EXIST = 0
    NOT_LOAD = 1
    LOADING = 2
    LOADED = 3


@dataclass
class User:
    """An access-control user."""

    name: str = ""


@dataclass
class Role:
    """An access-control role."""

    name: str = ""


class PrivilegeObjectType(IntEnum):
    """Kind of object a privilege applies to."""

    COLLECTION = 0
    GLOBAL = 1
    USER = 2


@dataclass
class ResourceGroup:
    """Resource group information."""

    name: str = ""
    capacity: int = 0
    available_nodes_number: int = 0
    loaded_replica: dict[str, int] = field(default_factory=dict)
    outgoing_node_num: dict[str, int] = field(default_factory=dict)
    incoming_node_num: dict[str, int] = field(default_factory=dict)


class SegmentState(IntEnum):
    """Lifecycle state of a segment."""

    NONE = 0
    NOT_EXIST = 1
    GROWING = 2
    SEALED = 3
    FLUSHED = 4
    FLUSHING = 5
    DROPPED = 6
    IMPORTING = 7


@dataclass
class Segment:
    """Segment metadata."""

    id: int = 0
    collection_id: int = 0
    partition_id: int = 0
    index_id: int = 0
    num_rows: int = 0
    state: SegmentState = SegmentState.NONE

    def flushed(self) -> bool:
        """Return whether the segment has been flushed."""
        return self.state == SegmentState.FLUSHED