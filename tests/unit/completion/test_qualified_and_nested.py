"""Tests for qualified (``alias.``) completion and subquery isolation."""

import pytest

from sqlscope.catalog import DataType
from sqlscope.completion import Cursor, Suggestion, search

UUID = DataType("uuid")
TEXT = DataType("text")
FLOAT = DataType("float")


class TestQualifiedColumns:
    """Text like ``a.`` before the cursor narrows suggestions to one table."""

    def test_qualified_by_table_name(self, make_database):
        database = make_database([("a", [("aid", UUID)]), ("b", [("bid", UUID)])])
        result = search("SELECT a.  FROM a JOIN b ON a.id = b.id", Cursor(9), database)
        assert result == [Suggestion.column("aid", UUID)]

    def test_qualified_by_alias(self, make_database):
        database = make_database(
            [("users", [("id", UUID), ("email", TEXT)]), ("orders", [("order_id", UUID)])]
        )
        result = search("SELECT u.  FROM users u, orders o", Cursor(9), database)
        assert result == [Suggestion.column("id", UUID), Suggestion.column("email", TEXT)]

    def test_qualified_by_as_alias(self, make_database):
        database = make_database([("users", [("id", UUID)]), ("orders", [("order_id", UUID)])])
        result = search("SELECT o.  FROM users AS u JOIN orders AS o ON u.id = o.id", Cursor(9), database)
        assert result == [Suggestion.column("order_id", UUID)]

    def test_partial_column_after_dot(self, make_database):
        """Text typed after the dot does not change the qualifier."""
        database = make_database([("users", [("id", UUID), ("email", TEXT)])])
        result = search("SELECT u.em FROM users u", Cursor(11), database)
        assert result == [Suggestion.column("id", UUID), Suggestion.column("email", TEXT)]

    def test_whitespace_before_dot(self, make_database):
        """Whitespace between the qualifier and the dot is ignored."""
        database = make_database([("users", [("id", UUID)])])
        result = search("SELECT u .  FROM users u", Cursor(10), database)
        assert result == [Suggestion.column("id", UUID)]

    def test_alias_shadows_same_named_table(self, make_database):
        """An alias wins over a real table that happens to share its name."""
        database = make_database(
            [("real", [("rid", UUID), ("rval", TEXT)]), ("fake", [("fid", UUID)])]
        )
        result = search("SELECT fake.  FROM real AS fake, fake", Cursor(12), database)
        assert result == [Suggestion.column("rid", UUID), Suggestion.column("rval", TEXT)]

    def test_later_alias_mapping_wins(self, make_database):
        database = make_database([("a", [("aid", UUID)]), ("b", [("bid", UUID)])])
        result = search("SELECT x.  FROM a x, b x", Cursor(9), database)
        assert result == [Suggestion.column("bid", UUID)]

    def test_qualifier_outside_from_list_still_looked_up(self, make_database):
        """A qualifier naming a catalog table works even if not in the FROM list."""
        database = make_database([("a", [("aid", UUID)]), ("other", [("oid", UUID)])])
        result = search("SELECT other.  FROM a", Cursor(13), database)
        assert result == [Suggestion.column("oid", UUID)]

    def test_unknown_qualifier(self, make_database):
        database = make_database([("a", [("aid", UUID)])])
        assert search("SELECT zz.  FROM a", Cursor(10), database) == []

    def test_dot_inside_function_call(self, make_database):
        database = make_database([("users", [("id", UUID), ("score", FLOAT)])])
        result = search("SELECT COALESCE(u. , 1.0) FROM users u", Cursor(18), database)
        assert result == [Suggestion.column("id", UUID), Suggestion.column("score", FLOAT)]

    def test_dot_before_select_is_ignored(self, make_database):
        """A dot from an earlier statement does not qualify the current one."""
        database = make_database([("a", [("aid", UUID)]), ("b", [("bid", UUID)])])
        result = search("SELECT b.bid FROM b; SELECT  FROM a", Cursor(28), database)
        assert result == [Suggestion.column("aid", UUID)]

    def test_numeric_literal_is_not_a_qualifier(self, make_database):
        """A number before the dot is looked up like any word and finds nothing."""
        database = make_database([("a", [("aid", UUID)])])
        assert search("SELECT 1.  FROM a", Cursor(9), database) == []


class TestSubqueryIsolation:
    """Each SELECT sees only the FROM list at its own nesting depth."""

    def test_inner_select_in_projection(self, make_database):
        database = make_database([("inner", [("iid", UUID)]), ("outer", [("oid", UUID)])])
        result = search("SELECT (SELECT  FROM inner) FROM outer", Cursor(15), database)
        assert result == [Suggestion.column("iid", UUID)]

    def test_outer_select_skips_projection_subquery(self, make_database):
        database = make_database([("inner", [("iid", UUID)]), ("outer", [("oid", UUID)])])
        result = search("SELECT , (SELECT x FROM inner) FROM outer", Cursor(7), database)
        assert result == [Suggestion.column("oid", UUID)]

    def test_outer_select_after_subquery(self, make_database):
        """Cursor after a closed subquery resolves against the inner SELECT."""
        database = make_database([("inner", [("iid", UUID)]), ("outer", [("oid", UUID)])])
        sql = "SELECT (SELECT x FROM inner),  FROM outer"
        result = search(sql, Cursor(30), database)
        # The last SELECT before the cursor is the closed inner one.
        assert result == [Suggestion.column("iid", UUID)]

    def test_doubly_nested(self, make_database):
        database = make_database(
            [("a", [("aid", UUID)]), ("b", [("bid", UUID)]), ("c", [("cid", UUID)])]
        )
        sql = "SELECT (SELECT (SELECT  FROM c) FROM b) FROM a"
        result = search(sql, Cursor(23), database)
        assert result == [Suggestion.column("cid", UUID)]

    def test_inner_from_list_ends_at_paren(self, make_database):
        database = make_database([("a", [("aid", UUID)]), ("b", [("bid", UUID)])])
        sql = "SELECT x FROM a WHERE a.id IN (SELECT  FROM b) AND a.z = 1"
        result = search(sql, Cursor(38), database)
        assert result == [Suggestion.column("bid", UUID)]

    def test_subquery_in_from_is_skipped(self, make_database):
        """Tables inside a derived table are not part of the outer FROM list."""
        database = make_database([("a", [("aid", UUID)]), ("b", [("bid", UUID)])])
        sql = "SELECT  FROM (SELECT * FROM b) AS sub, a"
        result = search(sql, Cursor(7), database)
        assert result == [Suggestion.column("aid", UUID)]

    def test_derived_table_alias_has_no_columns(self, make_database):
        database = make_database([("b", [("bid", UUID)])])
        sql = "SELECT sub.  FROM (SELECT * FROM b) AS sub"
        assert search(sql, Cursor(11), database) == []

    def test_unbalanced_open_paren(self, make_database):
        """An unclosed subquery still resolves its own FROM list."""
        database = make_database([("a", [("aid", UUID)]), ("b", [("bid", UUID)])])
        result = search("SELECT x FROM a WHERE id IN (SELECT  FROM b", Cursor(36), database)
        assert result == [Suggestion.column("bid", UUID)]


class TestNoScope:
    """Inputs with no usable SELECT/FROM produce an empty result."""

    @pytest.mark.parametrize(
        ("sql", "cursor"),
        [
            pytest.param("", 0, id="empty"),
            pytest.param("   ", 2, id="whitespace"),
            pytest.param("SELECT", 6, id="bare-select"),
            pytest.param("FROM a", 0, id="cursor-at-start"),
            pytest.param("INSERT INTO a VALUES (1)", 10, id="no-select"),
            pytest.param("SELECT  FROM", 7, id="from-without-tables"),
            pytest.param("SELECT  FROM a", 0, id="cursor-before-select"),
        ],
    )
    def test_empty(self, make_database, sql, cursor):
        database = make_database([("a", [("aid", UUID)])])
        assert search(sql, Cursor(cursor), database) == []

    def test_cursor_past_end(self, make_database):
        """A cursor beyond the buffer behaves like the end of the text."""
        database = make_database([("a", [("aid", UUID)])])
        assert search("SELECT  FROM a", Cursor(100), database) == [Suggestion.column("aid", UUID)]

    def test_unicode_offsets_are_characters(self, make_database):
        """Offsets count characters, so non-ASCII text before the cursor is fine."""
        database = make_database([("a", [("aid", UUID)])])
        sql = "SELECT 'é',  FROM a"
        assert search(sql, Cursor(12), database) == [Suggestion.column("aid", UUID)]
