"""Metadata records, rendezvous shard placement, aggregations, messages and document parsing for a distributed search engine."""

__version__ = "0.1.0"