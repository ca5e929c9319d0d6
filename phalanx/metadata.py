"""Index and shard metadata records and their JSON encoding."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "ShardMetadata",
    "IndexMetadata",
    "shard_metadata_from_bytes",
    "index_metadata_from_bytes",
]

_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _encode(obj: dict[str, Any]) -> bytes:
    text = json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
    for char, escaped in _HTML_ESCAPES:
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def _load_object(data: bytes | str) -> dict[str, Any]:
    value = json.loads(data)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object, got {type(value).__name__}")
    return value


def _string(obj: dict[str, Any], key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {value!r}")
    return value


def _integer(obj: dict[str, Any], key: str) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def _mapping(obj: dict[str, Any], key: str) -> dict[str, Any]:
    value = obj.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{key} must be an object, got {value!r}")
    return value


@dataclass
class ShardMetadata:
    shard_name: str = ""
    shard_uri: str = ""
    shard_lock_uri: str = ""
    shard_version: int = 0

    def to_bytes(self) -> bytes:
        """Encode the shard metadata as compact JSON."""
        return _encode(
            {
                "shard_name": self.shard_name,
                "shard_uri": self.shard_uri,
                "shard_lock_uri": self.shard_lock_uri,
                "shard_update_timestamp": self.shard_version,
            }
        )


@dataclass
class IndexMetadata:
    index_name: str = ""
    index_uri: str = ""
    index_lock_uri: str = ""
    index_mapping: dict[str, Any] = field(default_factory=dict)
    index_mapping_version: int = 0
    default_search_field: str = ""
    default_analyzer: dict[str, Any] = field(default_factory=dict)
    shard_metadata_map: dict[str, ShardMetadata] = field(default_factory=dict)

    def to_bytes(self) -> bytes:
        """Encode the index metadata as compact JSON, without its shards."""
        return _encode(
            {
                "index_name": self.index_name,
                "index_uri": self.index_uri,
                "index_lock_uri": self.index_lock_uri,
                "index_mapping": self.index_mapping,
                "index_mapping_version": self.index_mapping_version,
                "default_search_field": self.default_search_field,
                "default_analyzer": self.default_analyzer,
            }
        )


def shard_metadata_from_bytes(data: bytes | str) -> ShardMetadata:
    """Decode shard metadata from JSON; raises ValueError on bad input."""
    obj = _load_object(data)
    return ShardMetadata(
        shard_name=_string(obj, "shard_name"),
        shard_uri=_string(obj, "shard_uri"),
        shard_lock_uri=_string(obj, "shard_lock_uri"),
        shard_version=_integer(obj, "shard_update_timestamp"),
    )


def index_metadata_from_bytes(data: bytes | str) -> IndexMetadata:
    """Decode index metadata from JSON with an empty shard map."""
    obj = _load_object(data)
    return IndexMetadata(
        index_name=_string(obj, "index_name"),
        index_uri=_string(obj, "index_uri"),
        index_lock_uri=_string(obj, "index_lock_uri"),
        index_mapping=_mapping(obj, "index_mapping"),
        index_mapping_version=_integer(obj, "index_mapping_version"),
        default_search_field=_string(obj, "default_search_field"),
        default_analyzer=_mapping(obj, "default_analyzer"),
        shard_metadata_map={},
    )