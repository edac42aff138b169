"""Wire values — the tagged representation of a single field value.

Every value on the wire is a JSON object with exactly one key naming its
type, e.g. ``{"integerValue": "1"}`` or ``{"mapValue": {"fields": {...}}}``.
Each tag has its own model here; ``WireValue`` is the closed union of them,
dispatched on that single key when validating raw JSON.

See https://cloud.google.com/firestore/docs/reference/rest/v1/Value
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Union

from pydantic import Discriminator, Field, Tag, TypeAdapter

from firelite.contracts.common import GeoPoint, WireModel
from firelite.contracts.enums import ValueTag


class NullValue(WireModel):
    tag: ClassVar[ValueTag] = ValueTag.NULL

    null_value: None = Field(default=None, alias="nullValue")


class BooleanValue(WireModel):
    tag: ClassVar[ValueTag] = ValueTag.BOOLEAN

    boolean_value: bool = Field(..., alias="booleanValue")


class IntegerValue(WireModel):
    tag: ClassVar[ValueTag] = ValueTag.INTEGER

    integer_value: int = Field(..., alias="integerValue")


class DoubleValue(WireModel):
    tag: ClassVar[ValueTag] = ValueTag.DOUBLE

    double_value: float = Field(..., alias="doubleValue")


class TimestampValue(WireModel):
    tag: ClassVar[ValueTag] = ValueTag.TIMESTAMP

    timestamp_value: str = Field(..., alias="timestampValue")


class StringValue(WireModel):
    tag: ClassVar[ValueTag] = ValueTag.STRING

    string_value: str = Field(..., alias="stringValue")


class BytesValue(WireModel):
    """Base64-encoded binary payload."""

    tag: ClassVar[ValueTag] = ValueTag.BYTES

    bytes_value: str = Field(..., alias="bytesValue")


class ReferenceValue(WireModel):
    """Resource name of another document."""

    tag: ClassVar[ValueTag] = ValueTag.REFERENCE

    reference_value: str = Field(..., alias="referenceValue")


class GeoPointValue(WireModel):
    tag: ClassVar[ValueTag] = ValueTag.GEO_POINT

    geo_point_value: GeoPoint = Field(..., alias="geoPointValue")


class MapFields(WireModel):
    fields: dict[str, WireValue] = Field(default_factory=dict)


class ArrayValues(WireModel):
    # The API omits ``values`` for an empty array.
    values: list[WireValue] = Field(default_factory=list)


class MapValue(WireModel):
    tag: ClassVar[ValueTag] = ValueTag.MAP

    map_value: MapFields = Field(default_factory=MapFields, alias="mapValue")


class ArrayValue(WireModel):
    tag: ClassVar[ValueTag] = ValueTag.ARRAY

    array_value: ArrayValues = Field(default_factory=ArrayValues, alias="arrayValue")


def _tag_of(value: Any) -> str | None:
    """Return the tag of a raw JSON object or of a wire model instance."""
    if isinstance(value, dict):
        return next(iter(value), None)
    tag = getattr(value, "tag", None)
    return tag.value if isinstance(tag, ValueTag) else None


WireValue = Annotated[
    Union[
        Annotated[NullValue, Tag(ValueTag.NULL.value)],
        Annotated[BooleanValue, Tag(ValueTag.BOOLEAN.value)],
        Annotated[IntegerValue, Tag(ValueTag.INTEGER.value)],
        Annotated[DoubleValue, Tag(ValueTag.DOUBLE.value)],
        Annotated[TimestampValue, Tag(ValueTag.TIMESTAMP.value)],
        Annotated[StringValue, Tag(ValueTag.STRING.value)],
        Annotated[BytesValue, Tag(ValueTag.BYTES.value)],
        Annotated[ReferenceValue, Tag(ValueTag.REFERENCE.value)],
        Annotated[GeoPointValue, Tag(ValueTag.GEO_POINT.value)],
        Annotated[MapValue, Tag(ValueTag.MAP.value)],
        Annotated[ArrayValue, Tag(ValueTag.ARRAY.value)],
    ],
    Discriminator(_tag_of),
]

MapFields.model_rebuild()
ArrayValues.model_rebuild()
MapValue.model_rebuild()
ArrayValue.model_rebuild()

_WIRE_VALUE = TypeAdapter(WireValue)


def parse_value(raw: Any) -> WireValue:
    """Validate a raw JSON object into its wire value model."""
    return _WIRE_VALUE.validate_python(raw)


def dump_value(value: WireValue) -> dict[str, Any]:
    """Dump a wire value model to its single-key JSON object."""
    return _WIRE_VALUE.dump_python(value, mode="json", by_alias=True)
