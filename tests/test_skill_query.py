import re
import unittest

from mentorhub.core.query import SortOrder
from mentorhub.domain.skill import Skill
from mentorhub.repositories.skill_query import SkillListQuery, SkillSortField, compile_skill_query

_PLACEHOLDER = re.compile(r"(?<!:):[A-Za-z_]\w*")


def _sql(clause) -> str:
    return str(clause.compile())


def _placeholders(predicate) -> int:
    return sum(len(_PLACEHOLDER.findall(_sql(c))) for c in predicate.clauses())


class SkillQueryNormalizationTests(unittest.TestCase):
    def test_defaults_for_empty_params(self):
        query = SkillListQuery.from_params({})
        self.assertEqual(query, SkillListQuery())
        self.assertIs(query.sort_by, SkillSortField.CREATED_AT)
        self.assertIs(query.order, SortOrder.DESC)
        self.assertEqual((query.page, query.limit, query.offset), (1, 20, 0))

    def test_category_page_and_limit_scenario(self):
        predicate, page, limit = compile_skill_query({"category": "design", "page": "2", "limit": "10"})
        query = SkillListQuery.from_params({"category": "design", "page": "2", "limit": "10"})

        self.assertEqual((page, limit, query.offset), (2, 10, 10))
        self.assertEqual(len(predicate.where), 1)
        self.assertIn("skillshowcase.category", _sql(predicate.where[0]))
        self.assertEqual(predicate.bound_values(), ["design"])
        self.assertIsNone(predicate.having)

    def test_limit_and_page_are_clamped(self):
        for raw_limit, expected in (("0", 1), ("-4", 1), ("1000", 100), ("x", 20)):
            with self.subTest(limit=raw_limit):
                _, _, limit = compile_skill_query({"limit": raw_limit})
                self.assertEqual(limit, expected)
        for raw_page in ("0", "-1", "first", None):
            with self.subTest(page=raw_page):
                _, page, _ = compile_skill_query({"page": raw_page})
                self.assertEqual(page, 1)

    def test_unknown_sort_field_and_order_fall_back(self):
        query = SkillListQuery.from_params({"sort_by": "DROP TABLE", "order": "sideways"})
        self.assertIs(query.sort_by, SkillSortField.CREATED_AT)
        self.assertIs(query.order, SortOrder.DESC)

        predicate = query.predicate()
        default = SkillListQuery().predicate()
        self.assertEqual(_sql(predicate.order_by[0]), _sql(default.order_by[0]))
        self.assertEqual(_sql(predicate.order_by[0]), _sql(Skill.created_at.desc()))
        self.assertNotIn("DROP", " ".join(_sql(c) for c in predicate.order_by))

    def test_sort_order_default_is_overridable(self):
        self.assertIs(SortOrder.parse(None), SortOrder.DESC)
        self.assertIs(SortOrder.parse(None, default=SortOrder.ASC), SortOrder.ASC)
        self.assertIs(SortOrder.parse("bogus", default=SortOrder.ASC), SortOrder.ASC)

    def test_order_is_case_insensitive(self):
        self.assertIs(SkillListQuery.from_params({"order": "asc"}).order, SortOrder.ASC)
        self.assertIs(SkillListQuery.from_params({"order": "Desc"}).order, SortOrder.DESC)
        predicate, _, _ = compile_skill_query({"sort_by": "title", "order": "asc"})
        self.assertEqual(_sql(predicate.order_by[0]), _sql(Skill.title.asc()))

    def test_every_allow_listed_field_is_accepted(self):
        for field in SkillSortField:
            with self.subTest(field=field):
                self.assertIs(SkillListQuery.from_params({"sort_by": field.value}).sort_by, field)

    def test_invalid_min_rating_is_omitted_not_zeroed(self):
        for raw in ("abc", "", "nan", "inf", None):
            with self.subTest(min_rating=raw):
                predicate, _, _ = compile_skill_query({"min_rating": raw})
                self.assertIsNone(predicate.having)
                self.assertEqual(predicate.bound_values(), [])

    def test_valid_min_rating_becomes_having_clause(self):
        predicate, _, _ = compile_skill_query({"min_rating": "3.5"})
        self.assertEqual(predicate.where, ())
        self.assertIn("avg(skill_endorsements.rating) >=", _sql(predicate.having))
        self.assertEqual(predicate.bound_values(), [3.5])

    def test_search_binds_two_placeholders_to_the_same_pattern(self):
        predicate, _, _ = compile_skill_query({"search": "java"})
        self.assertEqual(len(predicate.where), 1)
        self.assertEqual(_placeholders(predicate), 2)
        self.assertEqual(predicate.bound_values(), ["%java%", "%java%"])

    def test_blank_filters_add_no_clauses(self):
        predicate, _, _ = compile_skill_query({"category": "  ", "skill_level": "", "search": None})
        self.assertEqual(predicate.clauses(), [])


class SkillQuerySafetyTests(unittest.TestCase):
    HOSTILE = {
        "category": "x' OR '1'='1",
        "skill_level": "advanced; DELETE FROM users",
        "search": "%_'--",
        "min_rating": "4",
        "sort_by": "rating",
        "order": "asc",
    }

    def test_placeholder_count_matches_bound_values(self):
        for params in (
            {},
            {"category": "design"},
            {"search": "java", "skill_level": "expert"},
            {"min_rating": "2", "category": "data"},
            self.HOSTILE,
        ):
            with self.subTest(params=params):
                predicate, _, _ = compile_skill_query(params)
                self.assertEqual(_placeholders(predicate), len(predicate.bound_values()))

    def test_user_values_never_appear_in_statement_text(self):
        predicate, _, _ = compile_skill_query(self.HOSTILE)
        text = " ".join(_sql(c) for c in predicate.clauses() + list(predicate.order_by))
        for value in ("OR '1'='1", "DELETE FROM", "'--"):
            self.assertNotIn(value, text)
        self.assertEqual(
            predicate.bound_values(),
            ["x' OR '1'='1", "advanced; DELETE FROM users", "%%_'--%", "%%_'--%", 4.0],
        )

    def test_compilation_is_idempotent(self):
        first, page1, limit1 = compile_skill_query(self.HOSTILE)
        second, page2, limit2 = compile_skill_query(self.HOSTILE)
        self.assertEqual((page1, limit1), (page2, limit2))
        self.assertEqual([_sql(c) for c in first.clauses()], [_sql(c) for c in second.clauses()])
        self.assertEqual(first.bound_values(), second.bound_values())
        self.assertEqual(
            [_sql(c) for c in first.order_by], [_sql(c) for c in second.order_by]
        )
