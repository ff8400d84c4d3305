import pytest

from pager.boundaries import boundaries_from_pages
from pager.models import SearchMatch
from pager.paginate import paginate, split_pages
from pager.search import search


def _search(text, query, size=10, **kw):
    return search(text, query, paginate(text, size), size, **kw)


def test_finds_every_occurrence_in_order():
    rows = _search("abc abc abc", "abc", size=4)
    assert [m.index for m in rows] == [0, 4, 8]
    assert [m.page for m in rows] == [0, 1, 2]
    assert rows[0] == SearchMatch(index=0, page=0, context="abc abc abc")


def test_is_case_insensitive():
    rows = _search("Hello World", "WORLD")
    assert [m.index for m in rows] == [6]


def test_query_is_literal():
    rows = _search("a.b axb a.b", "a.b")
    assert [m.index for m in rows] == [0, 8]


@pytest.mark.parametrize("query", ["(", "[x", "*", "a+", "\\", "$"])
def test_metacharacters_do_not_break_the_pattern(query):
    text = "f(x) [x * a+ \\ $5"
    rows = _search(text, query)
    assert rows
    assert all(text[m.index:m.index + len(query)] == query for m in rows)


def test_result_count_is_capped_at_100():
    text = "a" * 500
    rows = search(text, "a", paginate(text, 50), 50)
    assert len(rows) == 100
    assert [m.index for m in rows] == list(range(100))


def test_limit_overrides_the_cap():
    text = "x " * 20
    assert len(_search(text.strip(), "x", limit=5)) == 5


@pytest.mark.parametrize("query", ["", "   ", "\n\t"])
def test_blank_query_gives_no_results(query):
    assert _search("some text", query) == []


def test_no_match_gives_empty_list():
    assert _search("some text", "absent") == []


def test_context_is_clipped_with_ellipses():
    text = "x" * 40 + " needle " + "y" * 40
    rows = _search(text, "needle", size=20)
    assert len(rows) == 1
    m = rows[0]
    assert m.index == 41
    assert m.context == "..." + text[11:77] + "..."


def test_context_near_the_start_has_no_leading_ellipsis():
    text = "needle " + "y" * 60
    m = _search(text, "needle", size=20)[0]
    assert m.context == text[:36] + "..."


def test_match_page_holds_the_match():
    text = "The quick brown fox jumps over the lazy dog"
    pages = split_pages(text, 10)
    bounds = boundaries_from_pages(pages)
    for query in ("quick", "fox", "over", "lazy", "dog"):
        m = search(text, query, [p.content for p in pages], 10)[0]
        b = bounds[m.page]
        assert b.start <= m.index < b.end
