"""Placeholder values understood by the write encoder."""

from __future__ import annotations

from typing import Any


class _Unset:
    """Placeholder for a key that must be left out of the write."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class Transformer:
    """Marker for a server-side field transform.

    ``target`` is the wire ``FieldTransform`` body without its ``fieldPath``.
    Only valid as a top-level value of the data passed to a write.
    """

    __slots__ = ("target",)

    def __init__(self, target: dict[str, Any]):
        self.target = target

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transformer):
            return NotImplemented
        return self.target == other.target

    def __repr__(self) -> str:
        return f"Transformer({self.target!r})"
