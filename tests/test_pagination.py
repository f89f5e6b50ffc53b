from question_bank.query.pagination import PageWindow, paginate, parse_page_number
from question_bank.query.selection import parse_select, parse_sort


def test_middle_page_has_next_and_prev():
    result = paginate("2", "25", total=100)
    assert result.window == PageWindow(start_index=25, end_index=50)
    assert result.descriptor == {"next": {"page": 3, "limit": 25}, "prev": {"page": 1, "limit": 25}}


def test_single_page_has_no_descriptors():
    result = paginate("1", "25", total=25)
    assert result.descriptor == {}
    assert paginate(None, None, total=3).descriptor == {}


def test_last_page_only_has_prev():
    result = paginate("4", "25", total=100)
    assert result.descriptor == {"prev": {"page": 3, "limit": 25}}


def test_defaults_for_missing_or_garbage_input():
    result = paginate(None, "lots", total=0)
    assert (result.page, result.limit) == (1, 25)
    assert result.window == PageWindow(0, 25)


def test_leading_integer_is_used():
    assert parse_page_number("3abc", 1) == 3
    assert parse_page_number(" 7", 1) == 7


def test_zero_falls_back_and_negative_clamps():
    assert parse_page_number("0", 25) == 25
    assert parse_page_number("-4", 1) == 1
    result = paginate("-2", "-10", total=10)
    assert (result.page, result.limit) == (1, 1)
    assert result.skip == 0


def test_configured_default_limit():
    assert paginate(None, None, total=100, default_limit=10).limit == 10


def test_select_and_sort_parsing():
    assert parse_select("questionText,level") == {"questionText": 1, "level": 1}
    assert parse_select("-options") == {"options": 0}
    assert parse_select("") is None
    assert parse_sort(None) == [("createdAt", -1)]
    assert parse_sort("level,-points") == [("level", 1), ("points", -1)]
