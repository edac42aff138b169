"""HTTP requests against the Firestore REST API.

``RequestBuilder`` turns references, queries and write buffers into
``HttpRequest`` descriptions; ``request`` sends one and translates error
bodies into ``RemoteError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Mapping
from urllib.parse import urlencode

import httpx

from firelite.persistence.client import Firestore
from firelite.persistence.errors import RemoteError
from firelite.persistence.reference import Reference
from firelite.protocol.mapper import firestify

if TYPE_CHECKING:
    from firelite.protocol.query import CompiledQuery
    from firelite.protocol.write import WriteBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


class RequestBuilder:
    """Builds the HTTP calls for one ``Firestore`` handle.

    With a ``transaction_id``, reads are issued inside that transaction.
    """

    def __init__(self, firestore: Firestore, transaction_id: str | None = None):
        self._firestore = firestore
        self._transaction_id = transaction_id
        self._headers = {"content-type": "application/json"}
        token = firestore.credential.token
        if token:
            self._headers["authorization"] = f"Bearer {token}"

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def _read_url(self, reference: Reference, picks: Iterable[str] | None) -> str:
        params: list[tuple[str, str]] = []
        if self._transaction_id is not None:
            params.append(("transaction", self._transaction_id))
        for name in picks or ():
            params.append(("mask.fieldPaths", name))
        if not params:
            return reference.path
        return f"{reference.path}?{urlencode(params)}"

    def for_find(self, reference: Reference, picks: Iterable[str] | None = None) -> HttpRequest:
        """GET a single document."""
        return HttpRequest("GET", self._read_url(reference, picks), self.headers)

    def for_find_all(self, reference: Reference, picks: Iterable[str] | None = None) -> HttpRequest:
        """GET (list) the documents of a collection."""
        return HttpRequest("GET", self._read_url(reference, picks), self.headers)

    def for_query(self, reference: Reference, query: CompiledQuery) -> HttpRequest:
        """POST a structured query to the collection's parent."""
        parent = reference.path.rsplit("/", 1)[0]
        return HttpRequest("POST", f"{parent}:runQuery", self.headers, query.to_wire())

    def for_create(
        self, reference: Reference, data: Mapping[str, Any], document_id: str
    ) -> HttpRequest:
        """POST a new document with a client-chosen id into a collection."""
        url = f"{reference.path}?{urlencode({'documentId': document_id})}"
        return HttpRequest("POST", url, self.headers, firestify(data))

    def for_batch(self, builder: WriteBuilder) -> HttpRequest:
        """POST the buffered writes to ``:commit``."""
        return HttpRequest("POST", f"{self._firestore.path}:commit", self.headers, builder.build())


def build_request(firestore: Firestore, transaction_id: str | None = None) -> RequestBuilder:
    return RequestBuilder(firestore, transaction_id)


def _error_from(resp: httpx.Response) -> RemoteError:
    """First ``{error: {code, message}}`` in the body, or the raw status."""
    try:
        body = resp.json()
    except ValueError:
        return RemoteError(code=resp.status_code, message=resp.text)
    if isinstance(body, list):
        body = body[0] if body else {}
    payload = body.get("error") if isinstance(body, dict) else None
    if not isinstance(payload, dict):
        return RemoteError(code=resp.status_code, message=resp.text)
    return RemoteError.from_payload(payload, default_code=resp.status_code)


async def request(
    client: httpx.AsyncClient,
    call: HttpRequest,
    disable_404: bool = False,
) -> Any:
    """Send ``call`` and return the decoded JSON body.

    With ``disable_404`` a not-found error yields *None* instead of raising.
    """
    logger.debug("%s %s", call.method, call.url)
    resp = await client.request(
        call.method, call.url, headers=call.headers, json=call.body
    )
    if not resp.is_success:
        error = _error_from(resp)
        if disable_404 and error.code == 404:
            logger.debug("Not found: %s", call.url)
            return None
        raise error
    if not resp.content:
        return None
    return resp.json()
