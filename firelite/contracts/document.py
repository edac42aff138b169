"""Document — the REST representation of a stored document.

See https://cloud.google.com/firestore/docs/reference/rest/v1/projects.databases.documents#Document
"""

from __future__ import annotations

from pydantic import Field

from firelite.contracts.common import WireModel
from firelite.contracts.values import WireValue


class Document(WireModel):
    """A document as returned by ``get``, ``list`` and ``runQuery``.

    Every member is optional: list responses may carry a document that has
    a name but no ``fields``, which is treated as non-existent.
    """

    name: str | None = None
    fields: dict[str, WireValue] | None = None
    create_time: str | None = Field(default=None, alias="createTime")
    update_time: str | None = Field(default=None, alias="updateTime")

    @property
    def exists(self) -> bool:
        return self.fields is not None

    @property
    def id(self) -> str | None:
        """Last segment of the resource name."""
        if not self.name:
            return None
        return self.name.rsplit("/", 1)[-1]
