"""firelite contracts — Pydantic v2 models for the Firestore REST wire format.

Wire shapes
-----------

- ``WireValue`` — single-key tagged value (``{"integerValue": "1"}``),
  one model per tag, see ``firelite.contracts.values``
- ``Document`` — ``{name, fields, createTime, updateTime}``
- ``GeoPoint`` — ``{latitude, longitude}``

Client-side only
----------------
- ``Credential`` — project id and optional bearer token
"""

from firelite.contracts.enums import (
    ClauseKind,
    ClausePolicy,
    Direction,
    Operator,
    ServerValue,
    TransactionState,
    ValueTag,
)
from firelite.contracts.common import Credential, GeoPoint, WireModel
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
from firelite.contracts.document import Document

__all__ = [
    # Enums
    "ClauseKind",
    "ClausePolicy",
    "Direction",
    "Operator",
    "ServerValue",
    "TransactionState",
    "ValueTag",
    # Common
    "Credential",
    "GeoPoint",
    "WireModel",
    # Wire values
    "ArrayValue",
    "ArrayValues",
    "BooleanValue",
    "BytesValue",
    "DoubleValue",
    "GeoPointValue",
    "IntegerValue",
    "MapFields",
    "MapValue",
    "NullValue",
    "ReferenceValue",
    "StringValue",
    "TimestampValue",
    "WireValue",
    "dump_value",
    "parse_value",
    # Documents
    "Document",
]
