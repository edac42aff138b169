"""Enumerations shared across the wire contracts."""

from enum import Enum


class ValueTag(str, Enum):
    """Key under which a wire value carries its payload."""
    NULL = "nullValue"
    BOOLEAN = "booleanValue"
    INTEGER = "integerValue"
    DOUBLE = "doubleValue"
    TIMESTAMP = "timestampValue"
    STRING = "stringValue"
    BYTES = "bytesValue"
    REFERENCE = "referenceValue"
    GEO_POINT = "geoPointValue"
    ARRAY = "arrayValue"
    MAP = "mapValue"


class Operator(str, Enum):
    """Field filter operators of a structured query."""
    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL = "LESS_THAN_OR_EQUAL"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"
    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    ARRAY_CONTAINS = "ARRAY_CONTAINS"
    ARRAY_CONTAINS_ANY = "ARRAY_CONTAINS_ANY"
    IN = "IN"
    NOT_IN = "NOT_IN"


class Direction(str, Enum):
    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


class ClauseKind(str, Enum):
    """Discriminant of a query clause token."""
    WHERE = "where"
    ORDER_BY = "orderBy"
    START_AT = "startAt"
    END_AT = "endAt"
    LIMIT = "limit"
    OFFSET = "offset"


class ClausePolicy(str, Enum):
    """How the compiler folds repeated clauses of one kind."""
    ACCUMULATE = "accumulate"
    OVERWRITE = "overwrite"
    REJECT_DUPLICATE = "reject_duplicate"


class ServerValue(str, Enum):
    REQUEST_TIME = "REQUEST_TIME"


class TransactionState(str, Enum):
    """Lifecycle of a transaction run."""
    IDLE = "idle"
    ATTEMPTING = "attempting"
    RETRYING = "retrying"
    COMMITTED = "committed"
    FAILED = "failed"
