"""Client-side document ids."""

from __future__ import annotations

import random
import string

_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
DOCUMENT_ID_LENGTH = 20


def document_id() -> str:
    """Random 20-character alphanumeric id, same shape the server generates."""
    return "".join(random.choices(_ALPHABET, k=DOCUMENT_ID_LENGTH))
