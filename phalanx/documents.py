"""Parsing of newline-delimited document and identifier uploads."""

from __future__ import annotations

import json
from typing import IO, Iterable, Iterator, Union

from phalanx.messages import Document

__all__ = ["DocumentIdMissingError", "parse_documents", "parse_document_ids"]

ID_FIELD_NAME = "_id"

Lines = Union[bytes, str, Iterable[Union[bytes, str]], IO[bytes]]


class DocumentIdMissingError(ValueError):
    """Raised when a document carries no string identifier."""

    def __str__(self) -> str:
        return Exception.__str__(self) or "document ID does not exist"


def _as_bytes(chunk: bytes | str) -> bytes:
    return chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)


def _chunks(lines: Lines) -> Iterator[bytes]:
    """Yield non-empty newline-terminated chunks, keeping the newline."""
    if isinstance(lines, (bytes, bytearray, str)):
        data = _as_bytes(lines)
        start = 0
        while start < len(data):
            end = data.find(b"\n", start)
            end = len(data) if end < 0 else end + 1
            yield data[start:end]
            start = end
        return
    for chunk in lines:
        data = _as_bytes(chunk)
        if data:
            yield data


def parse_documents(lines: Lines) -> list[Document]:
    """Parse one JSON object per line into documents.

    Each object must hold a string ``_id``; the line itself becomes the
    document's fields. Raises ValueError on malformed JSON and
    DocumentIdMissingError when the identifier is absent.
    """
    documents = []
    for chunk in _chunks(lines):
        fields = json.loads(chunk)
        if fields is not None and not isinstance(fields, dict):
            raise ValueError(f"document must be a JSON object: {chunk!r}")
        doc_id = (fields or {}).get(ID_FIELD_NAME)
        if not isinstance(doc_id, str):
            raise DocumentIdMissingError()
        documents.append(Document(id=doc_id, fields=chunk))
    return documents


def parse_document_ids(lines: Lines) -> list[str]:
    """Return one identifier per line, with surrounding whitespace removed."""
    return [chunk.decode("utf-8").strip() for chunk in _chunks(lines)]