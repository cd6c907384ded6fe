"""
Tests for the hand-written SQL helpers:
- sql_for_partial_update
- WhereClause
- run_query placeholder rewriting
"""

import pytest

from app.core.exceptions import BadRequestError
from app.core.sql import PartialUpdate, WhereClause, run_query, sql_for_partial_update


class TestPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_single_item(self):
        result = sql_for_partial_update({"firstName": "Test"}, {"firstName": "first_name"})

        assert result == PartialUpdate(set_cols='"first_name"=$1', values=["Test"])

    def test_multiple_items(self):
        result = sql_for_partial_update(
            {"firstName": "Test", "lastName": "Tester", "age": 30},
            {"firstName": "first_name", "lastName": "last_name"},
        )

        assert result.set_cols == '"first_name"=$1, "last_name"=$2, "age"=$3'
        assert result.values == ["Test", "Tester", 30]

    def test_unmapped_fields_keep_their_name(self):
        result = sql_for_partial_update(
            {"firstName": "Test", "age": 30},
            {"firstName": "first_name"},
        )

        assert result.set_cols == '"first_name"=$1, "age"=$2'
        assert result.values == ["Test", 30]

    def test_no_translation_table(self):
        result = sql_for_partial_update({"title": "new", "salary": None})

        assert result.set_cols == '"title"=$1, "salary"=$2'
        assert result.values == ["new", None]

    def test_placeholders_follow_input_order(self):
        data = {f"f{i}": i for i in range(12)}

        result = sql_for_partial_update(data, {})

        cols = result.set_cols.split(", ")
        assert len(cols) == len(data)
        assert cols == [f'"f{i}"=${i + 1}' for i in range(12)]
        assert result.values == list(range(12))

    def test_empty_data_raises_bad_request(self):
        with pytest.raises(BadRequestError):
            sql_for_partial_update({}, {})


class TestWhereClause:
    """Tests for WhereClause"""

    def test_empty_renders_nothing(self):
        where = WhereClause()

        assert str(where) == ""
        assert not where
        assert where.values == []

    def test_predicates_are_anded_and_numbered(self):
        where = WhereClause()
        where.add("LOWER(name) LIKE {}", "%net%")
        where.add("num_employees >= {}", 10)
        where.add("num_employees <= {}", 20)

        assert str(where) == (
            "WHERE LOWER(name) LIKE $1 AND num_employees >= $2 AND num_employees <= $3"
        )
        assert where.values == ["%net%", 10, 20]

    def test_predicate_without_values(self):
        where = WhereClause()
        where.add("salary >= {}", 5)
        where.add("equity IS NOT NULL AND equity > 0")

        assert str(where) == "WHERE salary >= $1 AND equity IS NOT NULL AND equity > 0"
        assert where.values == [5]


class TestRunQuery:
    """Tests for run_query against the SQLite test database"""

    def test_positional_values_bind_in_order(self, db_session):
        row = run_query(db_session, "SELECT $2 AS b, $1 AS a", ["first", "second"]).mappings().one()

        assert row["a"] == "first"
        assert row["b"] == "second"

    def test_double_digit_placeholders(self, db_session):
        values = list(range(1, 12))
        sql = "SELECT " + ", ".join(f"${i} AS c{i}" for i in values)

        row = run_query(db_session, sql, values).mappings().one()

        assert row["c11"] == 11
        assert row["c1"] == 1
