"""Runtime configuration read from the environment.

A ``.env`` file in the working directory is loaded first, so local
development does not need exported variables:

    FIRESTORE_PROJECT_ID=my-project
    FIRESTORE_TOKEN=...            # optional bearer token
    FIRESTORE_DATABASE=(default)
    FIRESTORE_BASE_URL=http://localhost:8080/v1   # e.g. the emulator
    FIRESTORE_TIMEOUT=30
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://firestore.googleapis.com/v1"
DEFAULT_DATABASE = "(default)"


class Settings(BaseModel):
    """Connection settings for a ``Firestore`` handle."""

    project_id: str = Field(..., min_length=1)
    token: str | None = None
    database: str = DEFAULT_DATABASE
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=30.0, gt=0)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``FIRESTORE_*`` variables (after loading ``.env``)."""
        load_dotenv()
        return cls(
            project_id=os.environ.get("FIRESTORE_PROJECT_ID", ""),
            token=os.environ.get("FIRESTORE_TOKEN") or None,
            database=os.environ.get("FIRESTORE_DATABASE", DEFAULT_DATABASE),
            base_url=os.environ.get("FIRESTORE_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            timeout=float(os.environ.get("FIRESTORE_TIMEOUT", "30")),
        )
