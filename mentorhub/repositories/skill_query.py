"""Compilation of the skill listing query string.

``compile_skill_query`` turns untrusted, optional query parameters into a
:class:`~mentorhub.core.query.CompiledPredicate` plus a normalized page and
page size. It never raises: malformed input degrades to documented defaults.

Recognized parameters::

    category     exact match on Skill.category
    skill_level  exact match on Skill.skill_level
    search       case-insensitive substring of title OR description
    min_rating   post-aggregation AVG(rating) >= value (finite numbers only)
    sort_by      created_at | title | category | skill_level | rating
    order        asc | desc (default desc)
    page         >= 1 (default 1)
    limit        1..100 (default 20)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from sqlalchemy import func

from mentorhub.core.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, normalize_limit, normalize_page
from mentorhub.core.query import (
    CompiledPredicate,
    PredicateBuilder,
    SortOrder,
    clean_text,
    parse_finite_number,
)
from mentorhub.domain.skill import Skill, SkillEndorsement

# Computed per skill in the grouped listing query
AVG_RATING = func.coalesce(func.avg(SkillEndorsement.rating), 0).label("avg_rating")
ENDORSEMENT_COUNT = func.count(SkillEndorsement.id).label("endorsement_count")


class SkillSortField(str, Enum):
    CREATED_AT = "created_at"
    TITLE = "title"
    CATEGORY = "category"
    SKILL_LEVEL = "skill_level"
    RATING = "rating"

    @classmethod
    def parse(cls, raw: Any) -> "SkillSortField":
        try:
            return cls(str(raw).strip()) if raw is not None else cls.CREATED_AT
        except ValueError:
            return cls.CREATED_AT

    @property
    def expression(self):
        return _SORT_EXPRESSIONS[self]


_SORT_EXPRESSIONS = {
    SkillSortField.CREATED_AT: Skill.created_at,
    SkillSortField.TITLE: Skill.title,
    SkillSortField.CATEGORY: Skill.category,
    SkillSortField.SKILL_LEVEL: Skill.skill_level,
    SkillSortField.RATING: AVG_RATING,
}


@dataclass(frozen=True)
class SkillListQuery:
    """One listing request, normalized. Built per request and then discarded."""

    category: Optional[str] = None
    skill_level: Optional[str] = None
    search: Optional[str] = None
    min_rating: Optional[float] = None
    sort_by: SkillSortField = SkillSortField.CREATED_AT
    order: SortOrder = SortOrder.DESC
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "SkillListQuery":
        return cls(
            category=clean_text(params.get("category")),
            skill_level=clean_text(params.get("skill_level")),
            search=clean_text(params.get("search")),
            min_rating=parse_finite_number(params.get("min_rating")),
            sort_by=SkillSortField.parse(params.get("sort_by")),
            order=SortOrder.parse(params.get("order")),
            page=normalize_page(params.get("page")),
            limit=normalize_limit(params.get("limit")),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def predicate(self) -> CompiledPredicate:
        builder = (
            PredicateBuilder()
            .equals(Skill.category, self.category)
            .equals(Skill.skill_level, self.skill_level)
            .matches_any((Skill.title, Skill.description), self.search)
            .having_at_least(func.avg(SkillEndorsement.rating), self.min_rating)
        )
        # Skill.id breaks ties so page boundaries are stable
        return builder.build(
            self.order.apply(self.sort_by.expression),
            self.order.apply(Skill.id),
        )


def compile_skill_query(params: Mapping[str, Any]) -> tuple[CompiledPredicate, int, int]:
    """Return ``(predicate, page, limit)`` for raw listing parameters."""
    query = SkillListQuery.from_params(params)
    return query.predicate(), query.page, query.limit
