import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from minisql.clauses import (
    extract_assignments,
    extract_name_after_keyword,
    extract_where_equality,
    find_keyword,
    find_unquoted,
    has_open_quote,
    parse_literal,
    parse_parenthesized_list,
    split_quoted,
    strip_statement_terminator,
)


def test_find_keyword_is_case_insensitive():
    assert find_keyword("insert into t", "INTO") == 7
    assert find_keyword("abc", "") == 0
    assert find_keyword("abc", "x") == -1


def test_find_keyword_whole_word_skips_identifiers_and_quotes():
    text = "ALTER TABLE addresses DROP x"
    assert find_keyword(text, "ADD") == 12
    assert find_keyword(text, "ADD", whole_word=True) == -1

    assert find_keyword("SET name='where' WHERE id=1", "WHERE", whole_word=True) == 17


def test_strip_statement_terminator_removes_one_semicolon():
    assert strip_statement_terminator("  SELECT * FROM t ;  ") == "SELECT * FROM t"
    assert strip_statement_terminator("a;;") == "a;"
    assert strip_statement_terminator("   ") == ""


def test_parse_literal_removes_matching_quotes_only():
    assert parse_literal(' "Ann" ') == "Ann"
    assert parse_literal("'x'") == "x"
    assert parse_literal("'x\"") == "'x\""
    assert parse_literal("42;") == "42"
    assert parse_literal('"') == '"'


def test_split_quoted_respects_both_quote_styles():
    assert split_quoted('1, "a, b", \'c,d\'') == ["1", '"a, b"', "'c,d'"]
    assert split_quoted("\"it's, ok\", x") == ["\"it's, ok\"", "x"]
    assert split_quoted("a,") == ["a"]
    assert split_quoted("") == []


def test_find_unquoted():
    assert find_unquoted('name = "a=b"', "=") == 5
    assert find_unquoted('"a;b";', ";") == 5
    assert find_unquoted("'x=1'", "=") == -1


def test_parse_parenthesized_list():
    assert parse_parenthesized_list('(1, "Ann")') == ["1", "Ann"]
    assert parse_parenthesized_list('(3, "a, b")') == ["3", "a, b"]
    assert parse_parenthesized_list("(a, , b)") == ["a", "", "b"]
    assert parse_parenthesized_list("id, name") == ["id", "name"]


def test_parse_parenthesized_list_empty_gives_single_empty_literal():
    assert parse_parenthesized_list("()") == [""]
    assert parse_parenthesized_list("") == [""]


def test_extract_where_equality():
    assert extract_where_equality("DELETE FROM t WHERE id=1;") == ("id", "1")
    assert extract_where_equality('SELECT * FROM t where name = "a=b"') == ("name", "a=b")


def test_extract_where_equality_absent():
    assert extract_where_equality("SELECT * FROM t") is None
    assert extract_where_equality("SELECT * FROM t WHERE id > 1") is None


def test_extract_assignments():
    assert extract_assignments('SET name="Bob", age = 3') == {"name": "Bob", "age": "3"}
    assert extract_assignments("a='x,y'") == {"a": "x,y"}


def test_extract_assignments_skips_fragment_without_equals(caplog):
    with caplog.at_level(logging.WARNING, logger="minisql.clauses"):
        assert extract_assignments('SET name="x", bogus') == {"name": "x"}
    assert "bogus" in caplog.text


def test_extract_name_after_keyword():
    assert extract_name_after_keyword("INSERT INTO t VALUES (1)", "INTO") == "t"
    assert extract_name_after_keyword("CREATE TABLE t(a)", "TABLE") == "t"
    assert extract_name_after_keyword("DROP TABLE t;", "TABLE") == "t"
    assert extract_name_after_keyword("t WHERE id=1", "") == "t"
    assert extract_name_after_keyword("SELECT 1", "FROM") == ""


def test_has_open_quote():
    assert has_open_quote("VALUES (1, O'Brien);")
    assert has_open_quote('SET a = "x;')
    assert not has_open_quote("VALUES ('x;y', \"it's\");")
    assert not has_open_quote("")
