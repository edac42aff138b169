"""Tests for document and collection references."""

from __future__ import annotations

import pytest

from firelite.contracts.common import Credential
from firelite.persistence.client import Firestore
from firelite.persistence.reference import reference

FS = Firestore(Credential(project_id="project"))


class TestReference:
    @pytest.mark.parametrize(
        "ref",
        [
            reference(FS, "/collection/document"),
            reference(FS, "collection", "document"),
            reference(FS, "collection/document"),
            reference(FS, "collection/document").with_converter(from_=lambda it: it.id),
        ],
    )
    def test_path_forms(self, ref):
        assert ref.id == "document"
        assert ref.parent.id == "collection"
        assert ref == reference(FS, "collection", "document")

    def test_path_and_name(self):
        ref = reference(FS, "users", "alice", "posts", "p1")
        assert ref.path == (
            "https://firestore.googleapis.com/v1/projects/project/databases/(default)"
            "/documents/users/alice/posts/p1"
        )
        assert ref.name == "projects/project/databases/(default)/documents/users/alice/posts/p1"
        assert ref.parent.parent.id == "alice"

    def test_top_level_collection_has_no_parent(self):
        assert reference(FS, "users").parent is None

    def test_with_converter_keeps_path(self):
        ref = reference(FS, "users", "alice")
        converted = ref.with_converter(to=lambda user: {"name": user})
        assert converted.path == ref.path
        assert converted.converter.from_ is None
        assert converted.converter.to("Alice") == {"name": "Alice"}
        assert ref.converter is None

    def test_custom_database(self):
        fs = Firestore(Credential(project_id="project"), database="other")
        assert reference(fs, "users").name == "projects/project/databases/other/documents/users"
