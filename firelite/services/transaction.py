"""Optimistic transactions with whole-function retry.

``Transactor.run`` calls the user function with a ``Transaction`` handle,
then commits whatever the function buffered.  Any failure retries the whole
function, up to ``max_attempt`` calls, except 404 and 413 errors and query
validation errors, which stop the loop at once.

The write buffer belongs to the ``Transactor`` and is never cleared: writes
queued by a failed attempt are committed again, together with the writes of
every later attempt.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable, TypeVar, Union

from firelite.contracts.enums import TransactionState
from firelite.persistence.client import Firestore
from firelite.persistence.errors import NON_RETRYABLE_CODES, QueryValidationError
from firelite.persistence.reference import Reference
from firelite.protocol.write import Write, WriteBuilder
from firelite.services.batch import commit, convert_for_write
from firelite.services.documents import Reader
from firelite.services.result import CollectionResult, DocumentResult, FromConverter

logger = logging.getLogger(__name__)

R = TypeVar("R")

DEFAULT_MAX_ATTEMPT = 5


class Transaction:
    """Handle given to a transaction function.

    Reads go straight to the server; writes are only buffered and are sent
    by the commit that follows the function.
    """

    def __init__(self, builder: WriteBuilder):
        self._builder = builder

    async def find(
        self,
        reference: Reference,
        convert: FromConverter | None = None,
        picks: Iterable[str] | None = None,
    ) -> DocumentResult[Any]:
        return await Reader(reference, convert=convert, picks=picks).find()

    async def find_all(
        self,
        reference: Reference,
        convert: FromConverter | None = None,
        picks: Iterable[str] | None = None,
    ) -> CollectionResult[Any]:
        return await Reader(reference, convert=convert, picks=picks).find_all()

    def set(self, reference: Reference, data: Any, merge: bool = False) -> "Transaction":
        self._builder.set(reference, convert_for_write(reference, data), merge)
        return self

    def update(self, reference: Reference, data: Any) -> "Transaction":
        self._builder.update(reference, convert_for_write(reference, data))
        return self

    def delete(self, reference: Reference) -> "Transaction":
        self._builder.delete(reference)
        return self


class Transactor:
    """Runs transaction functions against one ``Firestore`` handle.

    State moves ``IDLE -> ATTEMPTING -> COMMITTED``, or through
    ``RETRYING -> ATTEMPTING`` on a retryable failure, or ends in ``FAILED``.
    """

    def __init__(self, firestore: Firestore):
        self._firestore = firestore
        self._builder = WriteBuilder()
        self._transaction = Transaction(self._builder)
        self._state = TransactionState.IDLE
        self._attempts = 0

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def attempts(self) -> int:
        """Number of function calls made by the last ``run``."""
        return self._attempts

    @property
    def writes(self) -> tuple[Write, ...]:
        return self._builder.writes

    async def run(
        self,
        fn: Callable[[Transaction], Union[R, Awaitable[R]]],
        max_attempt: int = DEFAULT_MAX_ATTEMPT,
    ) -> R:
        """Call ``fn`` and commit its writes, retrying on failure.

        Returns what ``fn`` returned (awaited if needed), not the commit
        response.
        """
        if max_attempt < 1:
            raise ValueError("max_attempt must be at least 1")

        self._attempts = 0
        for attempt in range(1, max_attempt + 1):
            self._state = TransactionState.ATTEMPTING
            self._attempts = attempt
            try:
                result = fn(self._transaction)
                if inspect.isawaitable(result):
                    result = await result
                await commit(self._firestore, self._builder)
            except Exception as exc:
                code = getattr(exc, "code", None)
                if (
                    isinstance(exc, QueryValidationError)
                    or code in NON_RETRYABLE_CODES
                    or attempt == max_attempt
                ):
                    self._state = TransactionState.FAILED
                    raise
                self._state = TransactionState.RETRYING
                logger.warning(
                    "Transaction attempt %d/%d failed, retrying: %s",
                    attempt,
                    max_attempt,
                    exc,
                )
                continue
            self._state = TransactionState.COMMITTED
            return result

        raise AssertionError("unreachable")


def transactor(firestore: Firestore) -> Transactor:
    return Transactor(firestore)
