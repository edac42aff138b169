"""Write encoder — documents and field transforms to commit instructions.

``build_write`` turns one ``(path, data, exists)`` triple into a ``Write``.
Values wrapped by ``increment``, ``maximum``, ``minimum``, ``append``,
``remove`` or ``server_timestamp`` are routed to server-side field
transforms; every other value is written as-is under an update mask.

See https://cloud.google.com/firestore/docs/reference/rest/v1/Write
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from numbers import Real
from typing import TYPE_CHECKING, Any, Mapping

from firelite.contracts.enums import ServerValue
from firelite.protocol.mapper import firestify, to_wire
from firelite.protocol.markers import UNSET, Transformer

if TYPE_CHECKING:
    from firelite.persistence.reference import Reference


def increment(value: int | float) -> Transformer:
    """Add ``value`` to the field's current value."""
    if not isinstance(value, Real) or isinstance(value, bool):
        raise TypeError(f"increment expects a number, got {type(value).__name__}")
    return Transformer({"increment": to_wire(value)})


def maximum(value: Any) -> Transformer:
    """Set the field to the larger of its current value and ``value``."""
    return Transformer({"maximum": to_wire(value)})


def minimum(value: Any) -> Transformer:
    """Set the field to the smaller of its current value and ``value``."""
    return Transformer({"minimum": to_wire(value)})


def append(*values: Any) -> Transformer:
    """Append each value not already present in the array field.

    A missing or non-array field is first set to the empty array.
    """
    return Transformer(
        {"appendMissingElements": {"values": [to_wire(value) for value in values]}}
    )


def remove(*values: Any) -> Transformer:
    """Remove every occurrence of the values from the array field."""
    return Transformer(
        {"removeAllFromArray": {"values": [to_wire(value) for value in values]}}
    )


def server_timestamp() -> Transformer:
    """The time the server processed the request, millisecond precision."""
    return Transformer({"setToServerValue": ServerValue.REQUEST_TIME.value})


@dataclass(frozen=True)
class Write:
    """One document mutation inside a commit."""

    delete: str | None = None
    update: dict[str, Any] | None = None
    update_mask: tuple[str, ...] | None = None
    exists: bool | None = None
    update_transforms: tuple[dict[str, Any], ...] | None = None
    transform: dict[str, Any] | None = None

    def to_wire(self) -> dict[str, Any]:
        if self.delete is not None:
            return {"delete": self.delete}
        write: dict[str, Any] = {}
        if self.update is not None:
            write["update"] = copy.deepcopy(self.update)
            write["updateMask"] = {"fieldPaths": list(self.update_mask or ())}
            write["currentDocument"] = {"exists": self.exists}
        if self.update_transforms is not None:
            write["updateTransforms"] = copy.deepcopy(list(self.update_transforms))
        if self.transform is not None:
            write["transform"] = copy.deepcopy(self.transform)
        return write


def build_write(path: str, data: Mapping[str, Any] | None = None, exists: bool = False) -> Write:
    """Encode ``data`` as a write against the document resource ``path``.

    No ``data`` means delete.  Plain values become an update whose mask
    names each of them; transform markers ride along as
    ``updateTransforms``, or form a standalone ``transform`` when there is
    nothing plain to write.
    """
    if data is None:
        return Write(delete=path)

    plain: dict[str, Any] = {}
    transforms: list[dict[str, Any]] = []
    for key, value in data.items():
        if value is UNSET:
            continue
        if isinstance(value, Transformer):
            transforms.append({"fieldPath": key, **value.target})
            continue
        plain[key] = value

    if not plain:
        if not transforms:
            return Write()
        return Write(transform={"document": path, "fieldTransforms": transforms})

    return Write(
        update={**firestify(plain), "name": path},
        update_mask=tuple(plain),
        exists=exists,
        update_transforms=tuple(transforms) if transforms else None,
    )


class WriteBuilder:
    """Ordered buffer of writes, sent verbatim as a commit body.

    Each mutating call returns the builder itself so calls can be chained.
    """

    def __init__(self, transaction_id: str | None = None):
        self._writes: list[Write] = []
        self._transaction_id = transaction_id

    @property
    def writes(self) -> tuple[Write, ...]:
        return tuple(self._writes)

    @property
    def transaction_id(self) -> str | None:
        return self._transaction_id

    def __len__(self) -> int:
        return len(self._writes)

    def set(self, reference: Reference, data: Mapping[str, Any], merge: bool = False) -> "WriteBuilder":
        """Write ``data``; with ``merge`` the document must already exist."""
        self._writes.append(build_write(reference.name, data, merge))
        return self

    def update(self, reference: Reference, data: Mapping[str, Any]) -> "WriteBuilder":
        """Write ``data`` into an existing document."""
        self._writes.append(build_write(reference.name, data, True))
        return self

    def delete(self, reference: Reference) -> "WriteBuilder":
        self._writes.append(build_write(reference.name))
        return self

    def build(self) -> dict[str, Any]:
        """Commit body: ``{"writes": [...], "transaction"?: id}``."""
        body: dict[str, Any] = {"writes": [write.to_wire() for write in self._writes]}
        if self._transaction_id is not None:
            body["transaction"] = self._transaction_id
        return body
