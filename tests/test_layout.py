"""Tests for the wrap-aware page layout."""

import pytest

from loglens.ansi import visible_width
from loglens.constants import PagerConstants
from loglens.layout import render_page, rows_needed, text_width, truncate_to
from loglens.options import DisplayOptions


def shown(result):
    return [line.index for line in result.lines]


def test_short_lines_take_one_row_each(make_document, plain_options):
    doc = make_document(["a", "bb", "ccc", "dddd", "eeeee"])

    result = render_page(doc, 0, 3, 80, plain_options)

    assert shown(result) == [0, 1, 2]
    assert result.last_line == 2
    assert result.rows_used == 3
    assert [line.rows for line in result.lines] == [1, 1, 1]


def test_render_from_middle(make_document, plain_options):
    doc = make_document(["a", "bb", "ccc", "dddd", "eeeee"])

    result = render_page(doc, 2, 3, 80, plain_options)

    assert shown(result) == [2, 3, 4]
    assert result.first_line == 2
    assert [line.text for line in result.lines] == ["ccc", "dddd", "eeeee"]


def test_short_document_leaves_rows_unused(make_document, plain_options):
    doc = make_document(["one", "two"])

    result = render_page(doc, 0, 10, 80, plain_options)

    assert shown(result) == [0, 1]
    assert result.rows_used == 2


def test_wrapped_lines_count_every_row(make_document, plain_options):
    doc = make_document(["x" * 30, "y" * 15, "z"])

    result = render_page(doc, 0, 10, 20, plain_options)

    assert [line.rows for line in result.lines] == [2, 1, 1]
    assert result.rows_used == 4


def test_empty_line_takes_one_row(make_document, plain_options):
    doc = make_document(["", "", "x"])

    result = render_page(doc, 0, 5, 80, plain_options)

    assert [line.rows for line in result.lines] == [1, 1, 1]


def test_first_line_too_tall_is_truncated(make_document, plain_options):
    doc = make_document(["x" * 300, "next"])

    result = render_page(doc, 0, 5, 20, plain_options)

    assert shown(result) == [0]
    line = result.lines[0]
    assert line.truncated
    assert line.rows == 5
    assert line.text.endswith(PagerConstants.TRUNCATION_MARKER)
    assert visible_width(line.text) == 100
    assert result.rows_used == 5


def test_later_line_truncated_to_remaining_rows(make_document, plain_options):
    doc = make_document(["a", "b" * 100, "c"])

    result = render_page(doc, 0, 5, 20, plain_options)

    assert shown(result) == [0, 1]
    assert result.lines[1].truncated
    assert result.lines[1].rows == 4
    assert visible_width(result.lines[1].text) == 80
    assert result.rows_used == 5
    assert result.last_line == 1


def test_spill_guard_defers_line_to_next_page(make_document, plain_options):
    doc = make_document(["x" * 20, "y" * 20, "z" * 20, "w" * 60])

    result = render_page(doc, 0, 5, 20, plain_options)

    # Only two rows remain for a three-row line, so it starts the next page
    assert shown(result) == [0, 1, 2]
    assert result.last_line == 2
    assert result.rows_used == 3
    assert not any(line.truncated for line in result.lines)


def test_full_page_stops_before_next_line(make_document, plain_options):
    doc = make_document([f"line {i}" for i in range(20)])

    result = render_page(doc, 0, 3, 80, plain_options)

    assert shown(result) == [0, 1, 2]


def test_line_numbers_narrow_the_text(make_document):
    options = DisplayOptions(show_line_number=True)
    doc = make_document(["x" * 22, "y" * 23])

    result = render_page(doc, 0, 10, 30, options)

    assert [line.rows for line in result.lines] == [1, 2]
    assert [line.number for line in result.lines] == [1, 2]


def test_text_width_minimum():
    assert text_width(80, False) == 80
    assert text_width(80, True) == 72
    assert text_width(12, True) == PagerConstants.MIN_TEXT_WIDTH
    assert text_width(4, False) == PagerConstants.MIN_TEXT_WIDTH


def test_rows_needed():
    assert rows_needed(0, 80) == 1
    assert rows_needed(80, 80) == 1
    assert rows_needed(81, 80) == 2
    assert rows_needed(240, 80) == 3


def test_escape_sequences_take_no_columns(make_document, plain_options):
    doc = make_document(["\x1b[31m" + "x" * 80 + "\x1b[0m"])

    result = render_page(doc, 0, 5, 80, plain_options)

    assert result.lines[0].rows == 1


def test_tabs_and_wide_characters_are_measured(make_document, plain_options):
    doc = make_document(["\t" * 10, "漢" * 40, "漢" * 41])

    result = render_page(doc, 0, 10, 80, plain_options)

    assert [line.rows for line in result.lines] == [1, 1, 2]


def test_transforms_are_applied(make_document):
    options = DisplayOptions(unescape=True, keep_one_line=True, trim_space=True)
    doc = make_document(["   a\\nb\\tc   "])

    result = render_page(doc, 0, 5, 80, options)

    assert result.lines[0].text == "a b\tc"


def test_search_pattern_is_highlighted(make_document, plain_options):
    doc = make_document(["alpha", "Beta", "gamma"])

    result = render_page(doc, 0, 5, 80, plain_options, search_pattern="beta")

    assert result.lines[0].text == "alpha"
    assert result.lines[1].text == (
        PagerConstants.HIGHLIGHT_START + "Beta" + PagerConstants.HIGHLIGHT_END)


def test_start_out_of_range(make_document, plain_options):
    doc = make_document(["a", "b"])

    with pytest.raises(IndexError):
        render_page(doc, 2, 5, 80, plain_options)
    with pytest.raises(IndexError):
        render_page(doc, -1, 5, 80, plain_options)


def test_truncate_to_plain_text():
    assert truncate_to("x" * 50, 10) == "x" * 7 + "..."


def test_truncate_to_closes_open_highlight():
    on, off = PagerConstants.HIGHLIGHT_START, PagerConstants.HIGHLIGHT_END
    text = "ab" + on + "cdefgh" + off

    result = truncate_to(text, 7)

    assert result == "ab" + on + "cd" + off + "..."
    assert visible_width(result) == 7
