"""Structured-query compiler.

Clause builders (``where``, ``order_by``, ``start``, ``end``, ``limit``,
``offset``) each return a ``QueryClause`` whose payload is already in wire
form.  ``compile_query`` folds a sequence of clauses into one structured
query.

See https://cloud.google.com/firestore/docs/reference/rest/v1/StructuredQuery
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Iterable, Literal

from firelite.contracts.enums import ClauseKind, ClausePolicy, Direction, Operator
from firelite.persistence.errors import QueryValidationError
from firelite.protocol.mapper import to_wire

OPERATORS: dict[str, Operator] = {
    "<": Operator.LESS_THAN,
    "<=": Operator.LESS_THAN_OR_EQUAL,
    ">": Operator.GREATER_THAN,
    ">=": Operator.GREATER_THAN_OR_EQUAL,
    "==": Operator.EQUAL,
    "!=": Operator.NOT_EQUAL,
    "array-contains": Operator.ARRAY_CONTAINS,
    "array-contains-any": Operator.ARRAY_CONTAINS_ANY,
    "in": Operator.IN,
    "not-in": Operator.NOT_IN,
}

DIRECTIONS: dict[str, Direction] = {
    "asc": Direction.ASCENDING,
    "desc": Direction.DESCENDING,
}

# Filters and orders pile up; limit/offset silently take the last value;
# a second cursor of the same kind is an error.
CLAUSE_POLICIES: dict[ClauseKind, ClausePolicy] = {
    ClauseKind.WHERE: ClausePolicy.ACCUMULATE,
    ClauseKind.ORDER_BY: ClausePolicy.ACCUMULATE,
    ClauseKind.LIMIT: ClausePolicy.OVERWRITE,
    ClauseKind.OFFSET: ClausePolicy.OVERWRITE,
    ClauseKind.START_AT: ClausePolicy.REJECT_DUPLICATE,
    ClauseKind.END_AT: ClausePolicy.REJECT_DUPLICATE,
}

_CLAUSE_NAMES = {
    ClauseKind.START_AT: "start",
    ClauseKind.END_AT: "end",
}


@dataclass(frozen=True)
class QueryClause:
    """One query token, consumed once by ``compile_query``."""

    kind: ClauseKind
    payload: Any


# ------------------------------------------------------------------
# Clause builders
# ------------------------------------------------------------------


def where(field: str, op: str, value: Any) -> QueryClause:
    """Filter on ``field``; ``op`` is one of the keys of ``OPERATORS``."""
    operator = OPERATORS.get(op)
    if operator is None:
        raise QueryValidationError(f"Unknown operator: {op!r}")
    return QueryClause(
        ClauseKind.WHERE,
        {
            "fieldFilter": {
                "field": {"fieldPath": field},
                "op": operator.value,
                "value": to_wire(value),
            }
        },
    )


def order_by(field: str, direction: Literal["asc", "desc"] = "asc") -> QueryClause:
    resolved = DIRECTIONS.get(direction)
    if resolved is None:
        raise QueryValidationError(f"Unknown direction: {direction!r}")
    return QueryClause(
        ClauseKind.ORDER_BY,
        {"field": {"fieldPath": field}, "direction": resolved.value},
    )


def _cursor(values: tuple[Any, ...], before: bool) -> dict[str, Any]:
    return {"values": [to_wire(value) for value in values], "before": before}


def start(mode: Literal["from", "after"], *values: Any) -> QueryClause:
    """Starting point: ``from`` includes the cursor position, ``after`` skips it.

    Can only be used once on the same query.
    """
    if mode not in ("from", "after"):
        raise QueryValidationError(f"Unknown start mode: {mode!r}")
    return QueryClause(ClauseKind.START_AT, _cursor(values, before=mode == "from"))


def end(mode: Literal["to", "before"], *values: Any) -> QueryClause:
    """End point: ``to`` includes the cursor position, ``before`` stops short of it.

    Can only be used once on the same query.
    """
    if mode not in ("to", "before"):
        raise QueryValidationError(f"Unknown end mode: {mode!r}")
    return QueryClause(ClauseKind.END_AT, _cursor(values, before=mode == "before"))


def limit(count: int) -> QueryClause:
    """Maximum number of results."""
    return QueryClause(ClauseKind.LIMIT, count)


def offset(count: int) -> QueryClause:
    """Number of results to skip."""
    return QueryClause(ClauseKind.OFFSET, count)


# ------------------------------------------------------------------
# Compilation
# ------------------------------------------------------------------


@dataclass(frozen=True)
class CompiledQuery:
    collection_id: str
    all_descendants: bool = False
    select: tuple[str, ...] | None = None
    where: dict[str, Any] | None = None
    order_by: tuple[dict[str, Any], ...] = ()
    start_at: dict[str, Any] | None = None
    end_at: dict[str, Any] | None = None
    limit: int | None = None
    offset: int | None = None

    def to_wire(self) -> dict[str, Any]:
        """Request body for ``runQuery``."""
        query: dict[str, Any] = {
            "from": [
                {"collectionId": self.collection_id, "allDescendants": self.all_descendants}
            ],
        }
        if self.select is not None:
            query["select"] = {"fields": [{"fieldPath": name} for name in self.select]}
        if self.where is not None:
            query["where"] = copy.deepcopy(self.where)
        if self.order_by:
            query["orderBy"] = copy.deepcopy(list(self.order_by))
        if self.start_at is not None:
            query["startAt"] = copy.deepcopy(self.start_at)
        if self.end_at is not None:
            query["endAt"] = copy.deepcopy(self.end_at)
        if self.limit is not None:
            query["limit"] = self.limit
        if self.offset is not None:
            query["offset"] = self.offset
        return {"structuredQuery": query}


def compile_query(
    source_path: str,
    clauses: Iterable[QueryClause],
    picks: Iterable[str] | None = None,
    all_descendants: bool = False,
) -> CompiledQuery:
    """Fold ``clauses`` into a query over the collection at ``source_path``.

    Raises ``QueryValidationError`` when a cursor clause is repeated.
    """
    filters: list[dict[str, Any]] = []
    orders: list[dict[str, Any]] = []
    slots: dict[ClauseKind, Any] = {}

    for clause in clauses:
        policy = CLAUSE_POLICIES[clause.kind]
        if policy is ClausePolicy.ACCUMULATE:
            target = filters if clause.kind is ClauseKind.WHERE else orders
            target.append(clause.payload)
        elif policy is ClausePolicy.REJECT_DUPLICATE:
            if clause.kind in slots:
                raise QueryValidationError(
                    f"{_CLAUSE_NAMES[clause.kind]} can only be used once on the same query."
                )
            slots[clause.kind] = clause.payload
        else:
            slots[clause.kind] = clause.payload

    if not filters:
        condition = None
    elif len(filters) == 1:
        condition = filters[0]
    else:
        condition = {"compositeFilter": {"op": "AND", "filters": filters}}

    return CompiledQuery(
        collection_id=source_path.rstrip("/").rsplit("/", 1)[-1],
        all_descendants=all_descendants,
        select=tuple(picks) if picks is not None else None,
        where=condition,
        order_by=tuple(orders),
        start_at=slots.get(ClauseKind.START_AT),
        end_at=slots.get(ClauseKind.END_AT),
        limit=slots.get(ClauseKind.LIMIT),
        offset=slots.get(ClauseKind.OFFSET),
    )
