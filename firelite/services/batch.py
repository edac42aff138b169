"""Batched writes — several mutations committed atomically."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from firelite.persistence.client import Firestore
from firelite.persistence.errors import BatchClosedError
from firelite.persistence.reference import Reference
from firelite.persistence.request import build_request, request
from firelite.protocol.write import WriteBuilder

logger = logging.getLogger(__name__)


def convert_for_write(
    reference: Reference,
    data: Any,
    convert: Callable[[Any], Mapping[str, Any]] | None = None,
) -> Mapping[str, Any]:
    """Apply the reference's ``to`` converter, else ``convert``, else nothing."""
    converter = reference.converter
    to = converter.to if converter is not None and converter.to is not None else convert
    return to(data) if to is not None else data


async def commit(firestore: Firestore, builder: WriteBuilder) -> dict[str, Any] | None:
    """Send every buffered write in one ``:commit`` call."""
    logger.debug("Committing %d write(s)", len(builder))
    return await request(firestore.http, build_request(firestore).for_batch(builder))


class Batch:
    """Atomic update of multiple documents.

    Writes are buffered locally and sent by ``commit()``; a batch can be
    committed successfully only once.

        await (
            batch(fs)
            .set(alice, {"name": "Alice"})
            .update(counter, {"count": increment(1)})
            .delete(stale)
            .commit()
        )
    """

    def __init__(self, firestore: Firestore):
        self._firestore = firestore
        self._builder = WriteBuilder()
        self._committed = False

    def _ensure_open(self) -> None:
        if self._committed:
            raise BatchClosedError("Batch was already committed")

    def set(self, reference: Reference, data: Any, merge: bool = False) -> "Batch":
        """Write a document; with ``merge`` it must already exist.

        Use ``increment``, ``maximum``, ``minimum``, ``append``, ``remove`` or
        ``server_timestamp`` values for server-side field transforms.
        """
        self._ensure_open()
        self._builder.set(reference, convert_for_write(reference, data), merge)
        return self

    def update(self, reference: Reference, data: Any) -> "Batch":
        self._ensure_open()
        self._builder.update(reference, convert_for_write(reference, data))
        return self

    def delete(self, reference: Reference) -> "Batch":
        self._ensure_open()
        self._builder.delete(reference)
        return self

    def build(self) -> dict[str, Any]:
        return self._builder.build()

    async def commit(self) -> dict[str, Any] | None:
        self._ensure_open()
        response = await commit(self._firestore, self._builder)
        self._committed = True
        return response


def batch(firestore: Firestore) -> Batch:
    return Batch(firestore)
