"""Single-call document operations.

``read(ref)`` gives the read side (find, list, query), ``write(ref)`` the
write side (set, update, delete, create).  Both are thin layers over the
request builder, the query compiler and the write encoder.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar

from firelite.contracts.document import Document
from firelite.persistence.ids import document_id
from firelite.persistence.reference import Reference
from firelite.persistence.request import build_request, request
from firelite.protocol.query import QueryClause, compile_query
from firelite.protocol.write import WriteBuilder
from firelite.services.batch import commit, convert_for_write
from firelite.services.result import (
    CollectionResult,
    DocumentResult,
    FromConverter,
    QueryResult,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Reader(Generic[T]):
    """Read operations on one reference.

    ``convert`` maps each found document to something else; a converter set
    on the reference itself takes precedence.  ``picks`` limits the returned
    fields.
    """

    def __init__(
        self,
        reference: Reference,
        convert: FromConverter | None = None,
        picks: Iterable[str] | None = None,
        transaction_id: str | None = None,
    ):
        self._reference = reference
        self._picks = list(picks) if picks is not None else None
        self._transaction_id = transaction_id
        converter = reference.converter
        if converter is not None and converter.from_ is not None:
            self._convert = converter.from_
        else:
            self._convert = convert

    def _requests(self):
        return build_request(self._reference.firestore, self._transaction_id)

    async def find(self) -> DocumentResult[T]:
        """Fetch a single document; a missing one gives an empty result."""
        fs = self._reference.firestore
        data = await request(
            fs.http, self._requests().for_find(self._reference, self._picks), disable_404=True
        )
        document = Document.model_validate(data) if data else None
        return DocumentResult(document, self._convert)

    async def find_all(self) -> CollectionResult[T]:
        """List the documents of a collection."""
        fs = self._reference.firestore
        data = await request(
            fs.http, self._requests().for_find_all(self._reference, self._picks), disable_404=True
        )
        raw_documents = (data or {}).get("documents") or []
        return CollectionResult(
            [Document.model_validate(raw) for raw in raw_documents], self._convert
        )

    async def query(self, *clauses: QueryClause) -> QueryResult[T]:
        """Run a structured query against this collection.

        Takes ``where``, ``order_by``, ``start``, ``end``, ``limit`` and
        ``offset`` clauses.
        """
        return await self._run_query(clauses, all_descendants=False)

    async def group_query(self, *clauses: QueryClause) -> QueryResult[T]:
        """Like ``query``, across every collection with the same id."""
        return await self._run_query(clauses, all_descendants=True)

    async def _run_query(
        self, clauses: Iterable[QueryClause], all_descendants: bool
    ) -> QueryResult[T]:
        compiled = compile_query(
            self._reference.path, clauses, self._picks, all_descendants
        )
        fs = self._reference.firestore
        data = await request(
            fs.http, self._requests().for_query(self._reference, compiled), disable_404=True
        )
        # Entries without a document only report progress (e.g. skipped results).
        documents = [
            Document.model_validate(entry["document"])
            for entry in data or []
            if entry.get("document")
        ]
        return QueryResult(documents, self._convert)


class Writer(Generic[T]):
    """Write operations on one reference, each committed on its own."""

    def __init__(
        self,
        reference: Reference,
        convert: Callable[[T], Mapping[str, Any]] | None = None,
    ):
        self._reference = reference
        self._convert = convert

    def _data(self, data: T) -> Mapping[str, Any]:
        return convert_for_write(self._reference, data, self._convert)

    async def set(self, data: T, merge: bool = False) -> None:
        """Write the document; with ``merge`` only the given fields change."""
        builder = WriteBuilder().set(self._reference, self._data(data), merge)
        await commit(self._reference.firestore, builder)

    async def update(self, data: T) -> None:
        builder = WriteBuilder().update(self._reference, self._data(data))
        await commit(self._reference.firestore, builder)

    async def delete(self) -> None:
        builder = WriteBuilder().delete(self._reference)
        await commit(self._reference.firestore, builder)

    async def create(self, data: T) -> str:
        """Add a document to the collection at this reference; returns its id."""
        doc_id = document_id()
        fs = self._reference.firestore
        await request(
            fs.http, build_request(fs).for_create(self._reference, self._data(data), doc_id)
        )
        logger.debug("Created %s/%s", self._reference.relative_path, doc_id)
        return doc_id


def read(
    reference: Reference,
    convert: FromConverter | None = None,
    picks: Iterable[str] | None = None,
) -> Reader[Any]:
    return Reader(reference, convert=convert, picks=picks)


def write(
    reference: Reference, convert: Callable[[Any], Mapping[str, Any]] | None = None
) -> Writer[Any]:
    return Writer(reference, convert=convert)
