"""Read results — documents decoded on demand, with optional conversion."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, TypeVar

from firelite.contracts.document import Document
from firelite.protocol.mapper import jsonify

T = TypeVar("T")

FromConverter = Callable[["DocumentResult[dict[str, Any]]"], Any]


class DocumentResult(Generic[T]):
    """Outcome of a single-document read.

    A missing document (404, or a document without ``fields``) gives a
    result whose ``exists`` is False and whose ``id`` / ``to_json()`` are
    *None*.
    """

    def __init__(self, document: Document | None, convert: FromConverter | None = None):
        self._document = document
        self._convert = convert

    @property
    def exists(self) -> bool:
        return self._document is not None and self._document.exists

    @property
    def id(self) -> str | None:
        if not self.exists:
            return None
        return self._document.id

    @property
    def document(self) -> Document | None:
        return self._document

    def to_json(self) -> T | None:
        if not self.exists:
            return None
        if self._convert is None:
            return jsonify(self._document)
        # The converter sees an unconverted view of the same document.
        return self._convert(DocumentResult(self._document))


class CollectionResult(Generic[T]):
    """Outcome of a collection listing; only existing documents are kept."""

    def __init__(self, documents: Iterable[Document], convert: FromConverter | None = None):
        self._results: list[DocumentResult[T]] = []
        for document in documents:
            result = DocumentResult(document, convert)
            if result.exists:
                self._results.append(result)

    def __len__(self) -> int:
        return len(self._results)

    @property
    def length(self) -> int:
        return len(self._results)

    def to_list(self) -> list[T]:
        return [result.to_json() for result in self._results]


class QueryResult(CollectionResult[T]):
    """Outcome of a ``runQuery`` call."""
