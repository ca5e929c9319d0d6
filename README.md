# phalanx

Building blocks for a distributed full-text search engine. The package is
plain Python and needs no third-party libraries.

- `phalanx.metadata`: index and shard metadata records and their JSON form.
- `phalanx.hashring`: weighted rendezvous (highest random weight) hashing,
  used to pick the shard that owns a document ID.
- `phalanx.aggregations`: terms, range, date-range, sum, min, max and avg
  aggregation definitions built from JSON-style option dictionaries.
- `phalanx.messages`: the request and response messages of the index
  service, as dataclasses and enums.
- `phalanx.documents`: parsers for newline-delimited document uploads and
  document ID lists.
- `phalanx.fileutil`: small path checks.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Metadata

```python
from phalanx.metadata import (
    IndexMetadata,
    ShardMetadata,
    index_metadata_from_bytes,
    shard_metadata_from_bytes,
)

shard = ShardMetadata(
    shard_name="shard-abc12345",
    shard_uri="file:///tmp/indexes/example/shard-abc12345",
)
data = shard.to_bytes()
assert shard_metadata_from_bytes(data) == shard
```

`ShardMetadata.to_bytes` writes compact JSON with the keys `shard_name`,
`shard_uri`, `shard_lock_uri` and `shard_update_timestamp` (the
`shard_version` attribute). `IndexMetadata.to_bytes` writes the index's
name, URIs, mapping, mapping version, default search field and default
analyzer, but not its `shard_metadata_map`; `index_metadata_from_bytes`
always returns an empty shard map. Malformed input raises `ValueError`.

## Shard placement

```python
from phalanx.hashring import RendezvousRing

ring = RendezvousRing()
ring.add("shard-a")
ring.add("shard-b", 2.0)
owner = ring.lookup("doc-1")   # "shard-a" or "shard-b", stable for this key
ring.remove("shard-b")
assert "shard-b" not in ring and len(ring) == 1
```

`lookup` returns `""` when the ring is empty. Weights must be positive and
finite; otherwise `add` raises `ValueError`. Adding or removing a member
only moves the keys that member wins or loses.

## Aggregations

```python
from phalanx.aggregations import new_aggregations, range_from_options, sort_by_count

prices = range_from_options({
    "field": "price",
    "ranges": {
        "low": {"low": 0, "high": 500},
        "high": {"low": 500, "high": 1000},
    },
})
assert prices.ranges[0].contains(100)

aggs = new_aggregations({
    "tags": {"type": "terms", "options": b'{"field": "tags", "size": 5}'},
    "total": {"type": "sum", "options": {"field": "price"}},
})

for pair in sort_by_count({"a": 3.0, "b": 7.0, "c": 1.0}):
    print(pair.name, pair.count)   # b, a, c
```

- `terms_from_options` reads `field`, `min_length`, `max_length` and
  `size` (default 10); `TermsAggregation.accepts` applies the length limits
  in bytes, a limit of zero or less meaning no limit.
- `range_from_options` builds `NamedRange` buckets with
  `low <= value < high`.
- `date_range_from_options` builds `NamedDateRange` buckets with
  `start <= moment < end` from RFC 3339 strings.
- `sum_from_options`, `min_from_options`, `max_from_options` and
  `avg_from_options` build a `MetricAggregation` over `field`.
- `new_aggregations` takes requests as mappings or objects with `type` and
  `options` (a dict or JSON bytes/str, such as an `AggregationRequest`) and
  skips unknown types.

Missing or malformed options raise `AggregationError`, a `ValueError`.

## Messages

`phalanx.messages` holds `CreateIndexRequest`, `SearchRequest`,
`SearchResponse`, `ClusterResponse`, `LivenessCheckResponse`,
`ReadinessCheckResponse` and the records they contain (`Document`,
`AggregationRequest`, `AggregationResponse`, `Node`, `NodeMeta`,
`IndexInfo`, `ShardInfo`), with the enums `LivenessState`,
`ReadinessState`, `NodeRole` and `NodeState`. `Document.fields_dict` and
`AggregationRequest.options_dict` decode their JSON bytes into a dict.

## Document uploads

```python
from phalanx.documents import parse_document_ids, parse_documents

docs = parse_documents(b'{"_id": "1", "title": "hello"}\n{"_id": "2"}\n')
assert [d.id for d in docs] == ["1", "2"]

assert parse_document_ids("1\n2\n") == ["1", "2"]
```

Both accept bytes, a string, an iterable of lines or a binary file. Each
document must be a JSON object with a string `_id`, or
`DocumentIdMissingError` is raised; the raw line becomes the document's
`fields`.

## File helpers

`phalanx.fileutil.file_exists`, `is_file` and `is_dir` check a path.
`file_exists` returns `False` only when the path is known to be absent.

## What this package does not do

It has no storage backend and no in-memory metadata store that keeps
indexes and shards in step with storage; metadata is only turned into and
out of bytes. It has no index, no query execution and no search over
documents: aggregations are definitions, not results. It does not render
responses to the JSON of an HTTP API, and it starts no server and provides
no command-line program.