"""Tests for text transforms and the JSON formatter."""

import json

import pytest

from loglens.jsonfmt import is_well_formed, pretty_print
from loglens.options import DisplayOptions
from loglens.transform import apply_display_transforms, chomp, trim, unescape


def test_unescape_keep_one_line():
    """Escaped newline becomes a space, escaped tab a real tab."""
    assert unescape("a\\nb\\tc", keep_one_line=True) == "a b\tc"


def test_unescape_keep_one_line_drops_carriage_return():
    assert unescape("a\\r\\nb", keep_one_line=True) == "a b"


def test_unescape_multi_line():
    assert unescape("a\\nb\\tc\\rd") == "a\nb\tc\rd"


def test_unescape_quotes_and_backslash():
    assert unescape('say \\"hi\\" it\\\'s') == 'say "hi" it\'s'
    assert unescape("C:\\\\temp") == "C:\\temp"


def test_unescape_is_single_pass():
    # An escaped backslash followed by n is not a newline
    assert unescape("\\\\n") == "\\n"
    assert unescape("\\\\n", keep_one_line=True) == "\\n"


def test_unescape_leaves_unknown_escapes():
    assert unescape("\\x41 \\u00e9") == "\\x41 \\u00e9"


def test_trim():
    assert trim("  \t padded \t ") == "padded"


def test_chomp():
    assert chomp("line\r\n") == "line"
    assert chomp("line\n") == "line"
    assert chomp("line") == "line"
    assert chomp("a\rb") == "a\rb"


def test_apply_display_transforms_trims_then_unescapes():
    options = DisplayOptions(unescape=True, keep_one_line=True, trim_space=True)

    # Trim runs first, so the escaped trailing newline survives as a space
    assert apply_display_transforms("  x\\n  ", options) == "x "


def test_apply_display_transforms_noop_by_default():
    assert apply_display_transforms("  raw\\n  ", DisplayOptions()) == "  raw\\n  "


def test_is_well_formed():
    assert is_well_formed('{"level": "info", "n": 3}')
    assert is_well_formed('[1, 2, 3]')
    assert is_well_formed('"just a string"')
    assert not is_well_formed('{"level": ')
    assert not is_well_formed('2024-01-01 INFO started')
    assert not is_well_formed('NaN')


def test_pretty_print_indents_and_sorts_keys():
    formatted = pretty_print('{"b": 1, "a": {"c": [1, 2]}}')

    assert formatted.split("\n") == [
        "{",
        '  "a": {',
        '    "c": [',
        "      1,",
        "      2",
        "    ]",
        "  },",
        '  "b": 1',
        "}",
    ]
    assert json.loads(formatted) == {"a": {"c": [1, 2]}, "b": 1}


def test_pretty_print_keeps_unicode():
    assert pretty_print('{"msg": "héllo"}') == '{\n  "msg": "héllo"\n}'


def test_pretty_print_rejects_invalid():
    with pytest.raises(ValueError):
        pretty_print("not json")
