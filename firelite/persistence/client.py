"""Firestore handle — project root, credential and HTTP transport."""

from __future__ import annotations

import logging

import httpx

from firelite.config import DEFAULT_BASE_URL, DEFAULT_DATABASE, Settings
from firelite.contracts.common import Credential

logger = logging.getLogger(__name__)


class Firestore:
    """Entry point bound to one project database.

    The HTTP transport is injectable: pass an ``httpx.AsyncClient`` (tests use
    one built on ``httpx.MockTransport``).  Without one, a client is created
    lazily on first use and closed by ``aclose()``.
    """

    def __init__(
        self,
        credential: Credential,
        http_client: httpx.AsyncClient | None = None,
        database: str = DEFAULT_DATABASE,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ):
        self._credential = credential
        self._client = http_client
        self._owns_client = http_client is None
        self._database = database
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient | None = None
    ) -> "Firestore":
        return cls(
            Credential(project_id=settings.project_id, token=settings.token),
            http_client=http_client,
            database=settings.database,
            base_url=settings.base_url,
            timeout=settings.timeout,
        )

    @classmethod
    def from_env(cls, http_client: httpx.AsyncClient | None = None) -> "Firestore":
        return cls.from_settings(Settings.from_env(), http_client=http_client)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def credential(self) -> Credential:
        return self._credential

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def path(self) -> str:
        """Root URL of the documents tree."""
        return (
            f"{self._base_url}/projects/{self._credential.project_id}"
            f"/databases/{self._database}/documents"
        )

    @property
    def http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            logger.info("Created HTTP client for project %s", self._credential.project_id)
        return self._client

    def resource_name(self, url: str) -> str:
        """Strip the API base URL, leaving ``projects/.../documents/...``."""
        prefix = self._base_url + "/"
        return url[len(prefix):] if url.startswith(prefix) else url

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the HTTP client if this handle created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "Firestore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def firestore(
    credential: Credential, http_client: httpx.AsyncClient | None = None, **options
) -> Firestore:
    """Shorthand for ``Firestore(credential, http_client, **options)``."""
    return Firestore(credential, http_client=http_client, **options)
