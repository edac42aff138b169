"""Shared fixtures for service tests."""

from __future__ import annotations

import httpx
import pytest

from firelite.contracts.common import Credential
from firelite.persistence.client import Firestore
from tests.persistence.fake_firestore import FakeFirestoreServer

PROJECT_ID = "project"


@pytest.fixture
def server():
    """In-memory Firestore REST backend, fresh for every test."""
    return FakeFirestoreServer()


@pytest.fixture
async def fs(server):
    """Firestore handle whose HTTP client is wired to the fake backend."""
    transport = httpx.ASGITransport(app=server.app)
    async with httpx.AsyncClient(transport=transport) as http:
        yield Firestore(Credential(project_id=PROJECT_ID, token="token"), http_client=http)
