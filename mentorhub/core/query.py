"""Filter/sort compilation primitives for listing endpoints.

A listing request is compiled into a :class:`CompiledPredicate`: an ordered
set of WHERE clauses, an optional post-aggregation HAVING clause and an
ORDER BY expression drawn from an allow-list. Clauses are SQLAlchemy
expressions, so request values only ever reach the database as bound
parameters; nothing here renders user input into statement text.

The same predicate is applied, unmodified, to the page query (with
LIMIT/OFFSET) and to the count query (without), which keeps pagination
totals consistent with page boundaries.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional

from sqlalchemy import Select, or_
from sqlalchemy.sql.elements import ColumnElement


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, raw: Any, default: Optional["SortOrder"] = None) -> "SortOrder":
        """Total mapping from arbitrary input to a member (DESC unless told otherwise)."""
        default = default or cls.DESC
        if raw is None:
            return default
        try:
            return cls(str(raw).strip().upper())
        except ValueError:
            return default

    def apply(self, expression: ColumnElement) -> ColumnElement:
        return expression.asc() if self is SortOrder.ASC else expression.desc()


def clean_text(raw: Any) -> Optional[str]:
    """Return a stripped string, or None when the value is absent or blank."""
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def parse_finite_number(raw: Any) -> Optional[float]:
    """Parse a numeric filter value; invalid input yields None, never 0."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def like_pattern(term: str) -> str:
    return f"%{term}%"


@dataclass(frozen=True)
class CompiledPredicate:
    where: tuple[ColumnElement[bool], ...] = ()
    having: Optional[ColumnElement[bool]] = None
    order_by: tuple[ColumnElement, ...] = ()

    def clauses(self) -> list[ColumnElement[bool]]:
        """WHERE clauses followed by the HAVING clause, in binding order."""
        out = list(self.where)
        if self.having is not None:
            out.append(self.having)
        return out

    def bound_values(self) -> list[Any]:
        values: list[Any] = []
        for clause in self.clauses():
            values.extend(clause.compile().params.values())
        return values

    def filter(self, stmt: Select) -> Select:
        """Apply WHERE and HAVING only (for count queries)."""
        if self.where:
            stmt = stmt.where(*self.where)
        if self.having is not None:
            stmt = stmt.having(self.having)
        return stmt

    def apply(self, stmt: Select) -> Select:
        """Apply WHERE, HAVING and ORDER BY (for page queries)."""
        stmt = self.filter(stmt)
        if self.order_by:
            stmt = stmt.order_by(*self.order_by)
        return stmt


@dataclass
class PredicateBuilder:
    """Accumulates bound filter clauses in the order they are added."""

    _where: list[ColumnElement[bool]] = field(default_factory=list)
    _having: Optional[ColumnElement[bool]] = None

    def equals(self, column: ColumnElement, value: Any) -> "PredicateBuilder":
        if value is not None:
            self._where.append(column == value)
        return self

    def matches_any(self, columns: Iterable[ColumnElement], term: Optional[str]) -> "PredicateBuilder":
        """Case-insensitive substring match on any of *columns* (one clause)."""
        if term is not None:
            pattern = like_pattern(term)
            self._where.append(or_(*(column.ilike(pattern) for column in columns)))
        return self

    def having_at_least(self, aggregate: ColumnElement, threshold: Optional[float]) -> "PredicateBuilder":
        if threshold is not None:
            self._having = aggregate >= threshold
        return self

    def build(self, *order_by: ColumnElement) -> CompiledPredicate:
        return CompiledPredicate(
            where=tuple(self._where),
            having=self._having,
            order_by=tuple(order_by),
        )
