"""References — addresses of documents and collections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from firelite.persistence.client import Firestore

if TYPE_CHECKING:
    from firelite.services.result import DocumentResult

T = TypeVar("T")


@dataclass(frozen=True)
class Converter(Generic[T]):
    """Hooks applied on the way out of (``from_``) and into (``to``) the store."""

    from_: Callable[["DocumentResult[dict[str, Any]]"], T] | None = None
    to: Callable[[T], dict[str, Any]] | None = None


class Reference(Generic[T]):
    """A document or collection path under a ``Firestore`` root.

    ``path`` is the full URL, ``name`` the resource name used inside write
    instructions, ``id`` the last path segment.
    """

    def __init__(
        self,
        firestore: Firestore,
        relative_path: str,
        converter: Converter[T] | None = None,
    ):
        self._firestore = firestore
        self._relative_path = relative_path.strip("/")
        self._converter = converter

    @property
    def firestore(self) -> Firestore:
        return self._firestore

    @property
    def relative_path(self) -> str:
        return self._relative_path

    @property
    def path(self) -> str:
        return f"{self._firestore.path}/{self._relative_path}"

    @property
    def name(self) -> str:
        return self._firestore.resource_name(self.path)

    @property
    def id(self) -> str:
        return self._relative_path.rsplit("/", 1)[-1]

    @property
    def parent(self) -> "Reference[Any] | None":
        """Reference one segment up, or *None* for a top-level collection."""
        if "/" not in self._relative_path:
            return None
        return Reference(self._firestore, self._relative_path.rsplit("/", 1)[0])

    @property
    def converter(self) -> Converter[T] | None:
        return self._converter

    def with_converter(
        self,
        from_: Callable[["DocumentResult[dict[str, Any]]"], Any] | None = None,
        to: Callable[[Any], dict[str, Any]] | None = None,
    ) -> "Reference[Any]":
        """Same path, with conversion hooks for reads and writes."""
        return Reference(self._firestore, self._relative_path, Converter(from_=from_, to=to))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reference):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return f"Reference({self._relative_path!r})"


def reference(firestore: Firestore, path: str, *paths: str) -> Reference[Any]:
    """Build a reference from one or more path pieces.

    ``reference(fs, "users", "alice")``, ``reference(fs, "users/alice")`` and
    ``reference(fs, "/users/alice")`` all address the same document.
    """
    pieces = [path.strip("/"), *(piece.strip("/") for piece in paths)]
    return Reference(firestore, "/".join(piece for piece in pieces if piece))
