"""Tests for document search and the search cursor."""

from loglens.options import DisplayOptions
from loglens.search import SearchState, search_document


def test_search_is_case_insensitive(make_document, plain_options):
    doc = make_document(["Error: disk", "ok", "an error", "ERRORS", "fine"])

    assert search_document(doc, "error", plain_options) == [0, 2, 3]


def test_search_is_literal(make_document, plain_options):
    doc = make_document(["a.b", "axb", "[x]"])

    assert search_document(doc, ".", plain_options) == [0]
    assert search_document(doc, "[x]", plain_options) == [2]


def test_search_matches_transformed_text(make_document):
    doc = make_document(["first\\nsecond", "plain"])

    options = DisplayOptions(unescape=True, keep_one_line=True)
    assert search_document(doc, "first second", options) == [0]
    assert search_document(doc, "first second", DisplayOptions()) == []


def test_empty_pattern_matches_nothing(make_document, plain_options):
    doc = make_document(["a", "b"])

    assert search_document(doc, "", plain_options) == []


def test_run_positions_on_first_match(make_document, plain_options):
    doc = make_document(["x", "needle", "y", "needle"])

    state = SearchState.run(doc, "needle", plain_options)

    assert state.active
    assert state.matches == [1, 3]
    assert state.cursor == 0
    assert state.current == 1


def test_run_without_matches(make_document, plain_options):
    doc = make_document(["x", "y"])

    state = SearchState.run(doc, "needle", plain_options)

    assert state.active
    assert state.cursor == -1
    assert state.current is None
    assert state.next_match() is None
    assert state.prev_match() is None
    assert state.cursor == -1


def test_run_with_empty_pattern_is_inactive(make_document, plain_options):
    doc = make_document(["x"])

    state = SearchState.run(doc, "", plain_options)

    assert not state.active
    assert state.current is None


def test_cursor_wraps_in_both_directions():
    state = SearchState(pattern="p", matches=[2, 5, 9], cursor=0)

    assert state.prev_match() == 9
    assert state.cursor == 2
    assert state.next_match() == 2
    assert state.next_match() == 5
    assert state.next_match() == 9
    assert state.next_match() == 2
