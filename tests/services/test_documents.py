"""Tests for read/write document operations against the fake backend."""

from __future__ import annotations

import pytest

from firelite.persistence.errors import NotFoundError, RemoteError
from firelite.persistence.reference import reference
from firelite.protocol.query import limit, order_by, start, where
from firelite.protocol.write import increment, server_timestamp
from firelite.services.documents import read, write

ROOT_NAME = "projects/project/databases/(default)/documents"


class TestFind:
    async def test_existing_document(self, fs, server):
        server.put(
            f"{ROOT_NAME}/users/alice",
            {"name": {"stringValue": "Alice"}, "visits": {"integerValue": "3"}},
        )
        result = await read(reference(fs, "users", "alice")).find()
        assert result.exists
        assert result.id == "alice"
        assert result.to_json() == {"name": "Alice", "visits": 3}

    async def test_missing_document_is_empty(self, fs):
        result = await read(reference(fs, "users", "nobody")).find()
        assert not result.exists
        assert result.id is None
        assert result.to_json() is None

    async def test_picks_mask_fields(self, fs, server):
        server.put(
            f"{ROOT_NAME}/users/alice",
            {"name": {"stringValue": "Alice"}, "visits": {"integerValue": "3"}},
        )
        result = await read(reference(fs, "users", "alice"), picks=["name"]).find()
        assert result.to_json() == {"name": "Alice"}

    async def test_converter_on_reference(self, fs, server):
        server.put(f"{ROOT_NAME}/users/alice", {"name": {"stringValue": "Alice"}})
        ref = reference(fs, "users/alice").with_converter(
            from_=lambda it: {"id": it.id, "upper": it.to_json()["name"].upper()}
        )
        result = await read(ref).find()
        assert result.to_json() == {"id": "alice", "upper": "ALICE"}


class TestFindAll:
    async def test_lists_collection(self, fs, server):
        server.put(f"{ROOT_NAME}/users/alice", {"name": {"stringValue": "Alice"}})
        server.put(f"{ROOT_NAME}/users/bob", {"name": {"stringValue": "Bob"}})
        server.put(f"{ROOT_NAME}/teams/red", {"name": {"stringValue": "Red"}})

        result = await read(
            reference(fs, "users"), convert=lambda it: (it.id, it.to_json()["name"])
        ).find_all()
        assert len(result) == 2
        assert result.to_list() == [("alice", "Alice"), ("bob", "Bob")]

    async def test_empty_collection(self, fs):
        result = await read(reference(fs, "users")).find_all()
        assert result.length == 0
        assert result.to_list() == []


class TestQuery:
    async def _seed(self, server):
        for name, visits in [("alice", 3), ("bob", 7), ("carol", 5)]:
            server.put(
                f"{ROOT_NAME}/users/{name}",
                {"name": {"stringValue": name}, "visits": {"integerValue": str(visits)}},
            )

    async def test_filter_order_limit(self, fs, server):
        await self._seed(server)
        result = await read(reference(fs, "users")).query(
            where("visits", ">=", 4), order_by("visits", "desc"), limit(5)
        )
        assert [doc["name"] for doc in result.to_list()] == ["bob", "carol"]

    async def test_no_match_is_empty(self, fs, server):
        await self._seed(server)
        result = await read(reference(fs, "users")).query(where("visits", ">", 100))
        assert len(result) == 0
        assert result.to_list() == []

    async def test_group_query_spans_subcollections(self, fs, server):
        server.put(f"{ROOT_NAME}/users/alice/posts/p1", {"title": {"stringValue": "one"}})
        server.put(f"{ROOT_NAME}/users/bob/posts/p2", {"title": {"stringValue": "two"}})

        plain = await read(reference(fs, "posts")).query()
        grouped = await read(reference(fs, "posts")).group_query(order_by("title"))
        assert plain.to_list() == []
        assert [doc["title"] for doc in grouped.to_list()] == ["one", "two"]

    async def test_remote_error_propagates(self, fs):
        with pytest.raises(RemoteError) as excinfo:
            await read(reference(fs, "users")).query(start("from", 1))
        assert excinfo.value.code == 400


class TestWrite:
    async def test_set_then_merge(self, fs, server):
        ref = reference(fs, "users", "alice")
        await write(ref).set({"name": "Alice", "visits": 1})
        await write(ref).set({"visits": increment(2), "seen": server_timestamp()}, merge=True)

        result = await read(ref).find()
        doc = result.to_json()
        assert doc["name"] == "Alice"
        assert doc["visits"] == 3
        assert "seen" in doc

    async def test_update_missing_document_fails(self, fs):
        with pytest.raises(NotFoundError):
            await write(reference(fs, "users", "ghost")).update({"name": "Ghost"})

    async def test_delete(self, fs, server):
        server.put(f"{ROOT_NAME}/users/alice", {"name": {"stringValue": "Alice"}})
        await write(reference(fs, "users", "alice")).delete()
        assert f"{ROOT_NAME}/users/alice" not in server.store

    async def test_create_returns_generated_id(self, fs, server):
        doc_id = await write(reference(fs, "users")).create({"name": "Dora"})
        assert len(doc_id) == 20
        stored = server.store[f"{ROOT_NAME}/users/{doc_id}"]
        assert stored["fields"] == {"name": {"stringValue": "Dora"}}

    async def test_to_converter_applied_once(self, fs, server):
        ref = reference(fs, "users", "alice").with_converter(
            to=lambda user: {"name": user["display"]}
        )
        await write(ref).set({"display": "Alice"})
        assert server.store[f"{ROOT_NAME}/users/alice"]["fields"] == {
            "name": {"stringValue": "Alice"}
        }
