"""Request and response messages exchanged by the index service."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "LivenessState",
    "ReadinessState",
    "NodeRole",
    "NodeState",
    "Document",
    "AggregationRequest",
    "AggregationResponse",
    "CreateIndexRequest",
    "SearchRequest",
    "SearchResponse",
    "NodeMeta",
    "Node",
    "ShardInfo",
    "IndexInfo",
    "ClusterResponse",
    "LivenessCheckResponse",
    "ReadinessCheckResponse",
]


def _json_object(data: bytes | str, what: str) -> dict[str, Any]:
    """Decode *data* as a JSON object; ``null`` decodes to an empty dict."""
    value = json.loads(data)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(value).__name__}")
    return value


class LivenessState(enum.IntEnum):
    UNKNOWN = 0
    ALIVE = 1
    DEAD = 2


class ReadinessState(enum.IntEnum):
    UNKNOWN = 0
    READY = 1
    NOT_READY = 2


class NodeRole(enum.IntEnum):
    UNKNOWN = 0
    INDEXER = 1
    SEARCHER = 2


class NodeState(enum.IntEnum):
    UNKNOWN = 0
    ALIVE = 1
    SUSPECT = 2
    DEAD = 3
    LEFT = 4


@dataclass
class Document:
    """A document: its identifier and its fields as JSON bytes."""

    id: str = ""
    fields: bytes = b""
    score: float = 0.0
    timestamp: int = 0

    def fields_dict(self) -> dict[str, Any]:
        """Decode the JSON fields; raises ValueError on malformed data."""
        return _json_object(self.fields, "document fields")


@dataclass
class AggregationRequest:
    """An aggregation by type name with its options as JSON bytes."""

    type: str = ""
    options: bytes = b""

    def options_dict(self) -> dict[str, Any]:
        """Decode the JSON options; raises ValueError on malformed data."""
        return _json_object(self.options, "aggregation options")


@dataclass
class AggregationResponse:
    buckets: dict[str, float] = field(default_factory=dict)


@dataclass
class CreateIndexRequest:
    index_name: str = ""
    index_uri: str = ""
    lock_uri: str = ""
    index_mapping: bytes = b""
    num_shards: int = 0
    default_search_field: str = ""
    default_analyzer: bytes = b""


@dataclass
class SearchRequest:
    index_name: str = ""
    shard_names: list[str] = field(default_factory=list)
    query: str = ""
    boost: float = 0.0
    start: int = 0
    num: int = 0
    sort_by: str = ""
    fields: list[str] = field(default_factory=list)
    aggregations: dict[str, AggregationRequest] = field(default_factory=dict)


@dataclass
class SearchResponse:
    index_name: str = ""
    documents: list[Document] = field(default_factory=list)
    hits: int = 0
    aggregations: dict[str, AggregationResponse] = field(default_factory=dict)


@dataclass
class NodeMeta:
    grpc_port: int = 0
    http_port: int = 0
    roles: list[NodeRole] = field(default_factory=list)


@dataclass
class Node:
    addr: str = ""
    port: int = 0
    meta: NodeMeta = field(default_factory=NodeMeta)
    state: NodeState = NodeState.UNKNOWN


@dataclass
class ShardInfo:
    shard_uri: str = ""
    shard_lock_uri: str = ""


@dataclass
class IndexInfo:
    index_uri: str = ""
    index_lock_uri: str = ""
    shards: dict[str, ShardInfo] = field(default_factory=dict)


@dataclass
class ClusterResponse:
    nodes: dict[str, Node] = field(default_factory=dict)
    indexes: dict[str, IndexInfo] = field(default_factory=dict)
    indexer_assignment: bytes = b""
    searcher_assignment: bytes = b""


@dataclass
class LivenessCheckResponse:
    state: LivenessState = LivenessState.UNKNOWN


@dataclass
class ReadinessCheckResponse:
    state: ReadinessState = ReadinessState.UNKNOWN