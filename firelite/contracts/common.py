"""Base classes and shared types for firelite contracts.

Conventions (all wire contracts):
- **Field names**: snake_case in Python, camelCase on the wire (aliases)
- **Timestamps**: UTC, ISO 8601 with millisecond precision and a ``Z`` suffix
- **Coordinates**: WGS84 decimal degrees
- **Integers**: the REST API may send ``integerValue`` as a JSON string;
  validation coerces it back to ``int``
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class WireModel(BaseModel):
    """Base model for objects exchanged with the REST API.

    - Python attributes may be populated by name or by wire alias.
    - ``to_wire()`` dumps with wire aliases, JSON-safe.
    - ``from_wire()`` hydrates from a decoded JSON body.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict using wire names."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "WireModel":
        return cls.model_validate(data)


class GeoPoint(BaseModel):
    """WGS84 geographic coordinate."""

    latitude: float = 0.0
    longitude: float = 0.0

    model_config = ConfigDict(frozen=True)


class Credential(BaseModel):
    """Project identity and optional bearer token.

    The token comes from Firebase Authentication or Google OAuth; it is
    never refreshed here.
    """

    project_id: str
    token: str | None = None

    model_config = ConfigDict(frozen=True)
