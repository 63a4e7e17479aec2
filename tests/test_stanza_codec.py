from __future__ import annotations

import pytest

from edsp.codecs._stanza_parser import StanzaError, parse_stanzas, split_list_value
from edsp.codecs._stanza_writer import format_stanza, join_list_value
from edsp.codecs.edsp import format_stanzas


def test_parse_stanzas_splits_on_blank_lines() -> None:
    text = "\n".join(
        [
            "",
            "A: 1",
            "B:  two words  ",
            "",
            "   ",
            "",
            "C: 3",
        ]
    )
    assert parse_stanzas(text) == [{"A": "1", "B": "two words"}, {"C": "3"}]


def test_parse_stanzas_continuation_lines() -> None:
    text = "\n".join(
        [
            "Message: first",
            " second",
            " .",
            "\tthird",
            "Other: x",
        ]
    )
    (stanza,) = parse_stanzas(text)
    assert stanza["Message"] == "first\nsecond\n\nthird"
    assert stanza["Other"] == "x"


def test_parse_stanzas_keeps_key_spelling_and_allows_empty_values() -> None:
    (stanza,) = parse_stanzas("apt-id: 3\nEmpty:\n")
    assert stanza == {"apt-id": "3", "Empty": ""}


@pytest.mark.parametrize(
    "text, line, message",
    [
        (" leading: x\n", 1, "continuation line outside of a field"),
        ("A: 1\n\n continued\n", 3, "continuation line outside of a field"),
        ("A: 1\nno colon here\n", 2, "expected 'Key: value'"),
        (": value\n", 1, "invalid field name"),
        ("Two Words: x\n", 1, "invalid field name"),
        ("Package: a\npackage: b\n", 2, "duplicate field"),
    ],
)
def test_parse_stanzas_errors(text: str, line: int, message: str) -> None:
    with pytest.raises(StanzaError, match=message) as exc_info:
        parse_stanzas(text)
    assert exc_info.value.line == line
    assert str(exc_info.value).startswith(f"line {line}: ")


def test_split_list_value() -> None:
    assert split_list_value("amd64  i386\n arm64", " ") == ["amd64", "i386", "arm64"]
    assert split_list_value("foo (>= 1),\n bar | baz,", ",") == ["foo (>= 1)", "bar | baz"]
    assert split_list_value("", ",") == []


def test_join_list_value_aligns_comma_lists() -> None:
    value = join_list_value("xxx", ["foo", "bar", "baz"], ",")
    assert format_stanza([("xxx", value)]) == "xxx: foo,\n     bar,\n     baz\n"

    assert join_list_value("Architectures", ["amd64", "i386"], " ") == "amd64 i386"


def test_format_stanza_multiline_values() -> None:
    out = format_stanza([("Message", "first\n\nthird"), ("Empty", "")])
    assert out == "Message: first\n .\n third\nEmpty:\n"


def test_format_stanzas_roundtrip() -> None:
    stanzas = [
        {"Package": "foo", "Depends": "bar,\n         baz"},
        {"Error": "e1", "Message": "one\n\ntwo"},
    ]
    text = format_stanzas(stanzas)

    assert text == "Package: foo\nDepends: bar,\n          baz\n\nError: e1\nMessage: one\n .\n two\n"
    assert parse_stanzas(text) == stanzas


def test_only_newline_ends_a_line() -> None:
    text = "Message: page\x0cbreak sep\x85nel\r\n more\x1e\r\nOther: x\r\n"
    (stanza,) = parse_stanzas(text)

    assert stanza == {"Message": "page\x0cbreak sep\x85nel\nmore\x1e", "Other": "x"}


def test_unusual_line_separators_roundtrip() -> None:
    stanzas = [{"Error": "e", "Message": "dependency on foo\x0cbar\nand\x0bbaz qux"}]
    assert parse_stanzas(format_stanzas(stanzas)) == stanzas


def test_dot_lines_read_back_empty() -> None:
    text = format_stanza([("Message", "a\n.\n \nb\n .")])

    assert text == "Message: a\n .\n .\n b\n  .\n"
    # lines holding just "." or only whitespace have no deb822 escape
    assert parse_stanzas(text) == [{"Message": "a\n\n\nb\n ."}]
