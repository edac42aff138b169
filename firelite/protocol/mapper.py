"""Value codec — native Python values to and from tagged wire values.

``classify`` picks the wire tag for a native value, ``encode`` wraps a
native value under that tag and ``decode`` unwraps it again.  ``firestify``
and ``jsonify`` apply the same conversion to a whole document ``fields``
mapping.

Timestamps are one-way: ``datetime`` encodes to ``timestampValue`` but
decodes to its ISO 8601 string, never back to a ``datetime``.
"""

from __future__ import annotations

import base64
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from numbers import Real
from typing import Any

from firelite.contracts.common import GeoPoint
from firelite.contracts.enums import ValueTag
from firelite.contracts.values import (
    ArrayValue,
    ArrayValues,
    BooleanValue,
    BytesValue,
    DoubleValue,
    GeoPointValue,
    IntegerValue,
    MapFields,
    MapValue,
    NullValue,
    ReferenceValue,
    StringValue,
    TimestampValue,
    WireValue,
    dump_value,
    parse_value,
)
from firelite.protocol.markers import UNSET, Transformer

_TIMESTAMP_RE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}Z"
)
_GEO_POINT_KEYS = frozenset({"latitude", "longitude"})


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_geo_point(value: Any) -> bool:
    if isinstance(value, GeoPoint):
        return True
    return (
        isinstance(value, Mapping)
        and set(value.keys()) == _GEO_POINT_KEYS
        and all(_is_number(value[key]) for key in _GEO_POINT_KEYS)
    )


def classify(value: Any) -> ValueTag:
    """Return the wire tag for a native value.

    Rules are checked in order; the first match wins.  Anything no rule
    recognises is sent as a reference.
    """
    if value is None:
        return ValueTag.NULL
    if isinstance(value, bool):
        return ValueTag.BOOLEAN
    if _is_number(value):
        return ValueTag.INTEGER if value % 1 == 0 else ValueTag.DOUBLE
    if isinstance(value, (list, tuple)):
        return ValueTag.ARRAY
    if isinstance(value, datetime):
        return ValueTag.TIMESTAMP
    if _is_geo_point(value):
        return ValueTag.GEO_POINT
    if isinstance(value, Mapping):
        return ValueTag.MAP
    if isinstance(value, str):
        if _TIMESTAMP_RE.search(value):
            return ValueTag.TIMESTAMP
        return ValueTag.STRING
    if isinstance(value, (bytes, bytearray)):
        return ValueTag.BYTES
    return ValueTag.REFERENCE


def format_timestamp(value: datetime) -> str:
    """UTC ISO 8601 with millisecond precision, e.g. ``2021-10-25T22:49:25.790Z``.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def encode(value: Any) -> WireValue:
    """Wrap a native value under the tag chosen by ``classify``.

    Field transforms are only valid as top-level write values and raise
    ``TypeError`` here.  ``UNSET`` is dropped from mappings and rejected
    anywhere else.
    """
    if isinstance(value, Transformer):
        raise TypeError(f"Field transform not allowed here: {value!r}")
    if value is UNSET:
        raise TypeError("UNSET is only allowed as a mapping value")
    tag = classify(value)
    if tag is ValueTag.NULL:
        return NullValue()
    if tag is ValueTag.BOOLEAN:
        return BooleanValue(boolean_value=value)
    if tag is ValueTag.INTEGER:
        return IntegerValue(integer_value=int(value))
    if tag is ValueTag.DOUBLE:
        return DoubleValue(double_value=float(value))
    if tag is ValueTag.ARRAY:
        return ArrayValue(array_value=ArrayValues(values=[encode(it) for it in value]))
    if tag is ValueTag.TIMESTAMP:
        text = format_timestamp(value) if isinstance(value, datetime) else value
        return TimestampValue(timestamp_value=text)
    if tag is ValueTag.GEO_POINT:
        if isinstance(value, GeoPoint):
            return GeoPointValue(geo_point_value=value)
        return GeoPointValue(
            geo_point_value=GeoPoint(latitude=value["latitude"], longitude=value["longitude"])
        )
    if tag is ValueTag.MAP:
        return MapValue(map_value=MapFields(fields=_encode_fields(value)))
    if tag is ValueTag.STRING:
        return StringValue(string_value=value)
    if tag is ValueTag.BYTES:
        return BytesValue(bytes_value=base64.b64encode(bytes(value)).decode("ascii"))
    # References carry their resource name next to their URL.
    name = getattr(value, "name", None)
    if isinstance(name, str) and hasattr(value, "path"):
        return ReferenceValue(reference_value=name)
    return ReferenceValue(reference_value=str(value))


def decode(value: WireValue) -> Any:
    """Unwrap a wire value model into its native value."""
    if isinstance(value, NullValue):
        return None
    if isinstance(value, BooleanValue):
        return value.boolean_value
    if isinstance(value, IntegerValue):
        return value.integer_value
    if isinstance(value, DoubleValue):
        return value.double_value
    if isinstance(value, TimestampValue):
        return value.timestamp_value
    if isinstance(value, StringValue):
        return value.string_value
    if isinstance(value, BytesValue):
        return base64.b64decode(value.bytes_value)
    if isinstance(value, ReferenceValue):
        return value.reference_value
    if isinstance(value, GeoPointValue):
        point = value.geo_point_value
        return {"latitude": point.latitude, "longitude": point.longitude}
    if isinstance(value, MapValue):
        return {key: decode(it) for key, it in value.map_value.fields.items()}
    if isinstance(value, ArrayValue):
        return [decode(it) for it in value.array_value.values]
    raise TypeError(f"Not a wire value: {type(value).__name__}")


def _encode_fields(data: Mapping[str, Any]) -> dict[str, WireValue]:
    return {str(key): encode(value) for key, value in data.items() if value is not UNSET}


def to_wire(value: Any) -> dict[str, Any]:
    """Encode a native value straight to its JSON wire form."""
    return dump_value(encode(value))


def from_wire(raw: Mapping[str, Any]) -> Any:
    """Decode a raw JSON wire value to its native value."""
    return decode(parse_value(raw))


def firestify(data: Mapping[str, Any]) -> dict[str, Any]:
    """Native document to the REST ``{"fields": {...}}`` shape."""
    return {"fields": {key: dump_value(value) for key, value in _encode_fields(data).items()}}


def jsonify(document: Any) -> dict[str, Any]:
    """REST document (or anything carrying ``fields``) to a native dict.

    Accepts a ``Document`` model or a raw ``{"fields": {...}}`` mapping.
    """
    if isinstance(document, Mapping):
        fields = document.get("fields") or {}
        return {key: from_wire(raw) for key, raw in fields.items()}
    return {key: decode(value) for key, value in (document.fields or {}).items()}
