"""firelite — async client for the Firestore REST API.

    fs = Firestore(Credential(project_id="my-project", token=token))
    users = reference(fs, "users")

    await write(reference(fs, "users", "alice")).set({"name": "Alice", "visits": 0})
    result = await read(users).query(where("visits", ">=", 1), order_by("name"), limit(10))

    await transactor(fs).run(lambda tx: tx.update(counter, {"count": increment(1)}))
"""

from firelite.config import Settings
from firelite.contracts.common import Credential, GeoPoint
from firelite.persistence.client import Firestore, firestore
from firelite.persistence.errors import (
    BatchClosedError,
    FireliteError,
    NotFoundError,
    QueryValidationError,
    RemoteError,
    RequestTooLargeError,
)
from firelite.persistence.ids import document_id
from firelite.persistence.reference import Reference, reference
from firelite.protocol.mapper import classify, decode, encode, firestify, jsonify
from firelite.protocol.query import (
    compile_query,
    end,
    limit,
    offset,
    order_by,
    start,
    where,
)
from firelite.protocol.write import (
    UNSET,
    WriteBuilder,
    append,
    build_write,
    increment,
    maximum,
    minimum,
    remove,
    server_timestamp,
)
from firelite.services.batch import Batch, batch
from firelite.services.documents import Reader, Writer, read, write
from firelite.services.result import CollectionResult, DocumentResult, QueryResult
from firelite.services.transaction import Transaction, Transactor, transactor

__all__ = [
    "Settings",
    "Credential",
    "GeoPoint",
    "Firestore",
    "firestore",
    "BatchClosedError",
    "FireliteError",
    "NotFoundError",
    "QueryValidationError",
    "RemoteError",
    "RequestTooLargeError",
    "document_id",
    "Reference",
    "reference",
    "classify",
    "decode",
    "encode",
    "firestify",
    "jsonify",
    "compile_query",
    "end",
    "limit",
    "offset",
    "order_by",
    "start",
    "where",
    "UNSET",
    "WriteBuilder",
    "append",
    "build_write",
    "increment",
    "maximum",
    "minimum",
    "remove",
    "server_timestamp",
    "Batch",
    "batch",
    "Reader",
    "Writer",
    "read",
    "write",
    "CollectionResult",
    "DocumentResult",
    "QueryResult",
    "Transaction",
    "Transactor",
    "transactor",
]
