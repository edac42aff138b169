"""Tests for request building and error translation."""

from __future__ import annotations

import httpx
import pytest

from firelite.contracts.common import Credential
from firelite.persistence.client import Firestore
from firelite.persistence.errors import NotFoundError, RemoteError, RequestTooLargeError
from firelite.persistence.reference import reference
from firelite.persistence.request import build_request, request
from firelite.protocol.query import compile_query, limit
from firelite.protocol.write import WriteBuilder

ROOT = "https://firestore.googleapis.com/v1/projects/project/databases/(default)/documents"

FS = Firestore(Credential(project_id="project", token="token"))


class TestRequestBuilder:
    @pytest.mark.parametrize("method", ["for_find", "for_find_all"])
    def test_url_with_mask_and_transaction(self, method):
        ref = reference(FS, "collection", "document")
        call = getattr(build_request(FS, "transactionId"), method)(ref, ["id", "name"])
        assert call.method == "GET"
        assert call.url == (
            f"{ROOT}/collection/document"
            "?transaction=transactionId&mask.fieldPaths=id&mask.fieldPaths=name"
        )

    @pytest.mark.parametrize("method", ["for_find", "for_find_all"])
    def test_url_without_mask_and_transaction(self, method):
        ref = reference(FS, "collection", "document")
        call = getattr(build_request(FS), method)(ref)
        assert call.url == f"{ROOT}/collection/document"

    def test_bearer_token(self):
        call = build_request(FS).for_find(reference(FS, "c", "d"))
        assert call.headers == {
            "content-type": "application/json",
            "authorization": "Bearer token",
        }

    def test_no_token_no_authorization(self):
        fs = Firestore(Credential(project_id="project"))
        call = build_request(fs).for_find(reference(fs, "c", "d"))
        assert "authorization" not in call.headers

    def test_query_posts_to_parent(self):
        nested = reference(FS, "users", "alice", "posts")
        query = compile_query(nested.path, [limit(1)])
        call = build_request(FS).for_query(nested, query)
        assert call.method == "POST"
        assert call.url == f"{ROOT}/users/alice:runQuery"
        assert call.body == query.to_wire()

        top = reference(FS, "users")
        assert build_request(FS).for_query(top, query).url == f"{ROOT}:runQuery"

    def test_create(self):
        call = build_request(FS).for_create(reference(FS, "users"), {"name": "Alice"}, "abc")
        assert call.url == f"{ROOT}/users?documentId=abc"
        assert call.body == {"fields": {"name": {"stringValue": "Alice"}}}

    def test_batch(self):
        builder = WriteBuilder("tx").delete(reference(FS, "users", "alice"))
        call = build_request(FS).for_batch(builder)
        assert call.url == f"{ROOT}:commit"
        assert call.body == builder.build()


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _find_call():
    return build_request(FS).for_find(reference(FS, "collection", "document"))


class TestRequest:
    async def test_success(self):
        seen = {}

        def handler(req: httpx.Request) -> httpx.Response:
            seen["auth"] = req.headers.get("authorization")
            return httpx.Response(200, json={"name": "x"})

        async with _client(handler) as client:
            assert await request(client, _find_call()) == {"name": "x"}
        assert seen["auth"] == "Bearer token"

    async def test_empty_body(self):
        async with _client(lambda req: httpx.Response(200)) as client:
            assert await request(client, _find_call()) is None

    async def test_not_found(self):
        body = {"error": {"code": 404, "message": "data not found"}}
        async with _client(lambda req: httpx.Response(404, json=body)) as client:
            with pytest.raises(NotFoundError) as excinfo:
                await request(client, _find_call())
            assert excinfo.value.payload == {"code": 404, "message": "data not found"}

            assert await request(client, _find_call(), disable_404=True) is None

    async def test_request_too_large(self):
        body = {"error": {"code": 413, "message": "too large", "status": "INVALID_ARGUMENT"}}
        async with _client(lambda req: httpx.Response(413, json=body)) as client:
            with pytest.raises(RequestTooLargeError) as excinfo:
                await request(client, _find_call())
        assert excinfo.value.status == "INVALID_ARGUMENT"

    async def test_list_body_raises_first_error(self):
        body = [
            {"error": {"code": 400, "message": "first"}},
            {"error": {"code": 500, "message": "second"}},
        ]
        async with _client(lambda req: httpx.Response(400, json=body)) as client:
            with pytest.raises(RemoteError, match="first") as excinfo:
                await request(client, _find_call())
        assert excinfo.value.code == 400

    async def test_non_json_error(self):
        async with _client(lambda req: httpx.Response(502, text="Bad Gateway")) as client:
            with pytest.raises(RemoteError) as excinfo:
                await request(client, _find_call())
        assert excinfo.value.code == 502
        assert excinfo.value.message == "Bad Gateway"
