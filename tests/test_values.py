from __future__ import annotations

import pytest

from edsp.core.values import ArchQualifiedPackageName, format_bool, parse_bool


def test_bool_values() -> None:
    assert parse_bool("yes") is True
    assert parse_bool("no") is False
    assert format_bool(True) == "yes"
    assert format_bool(False) == "no"

    for bad in ["Yes", "true", "1", ""]:
        with pytest.raises(ValueError, match='expected "yes" or "no"'):
            parse_bool(bad)


def test_arch_qualified_name_parse() -> None:
    q = ArchQualifiedPackageName.parse("libc6:i386")
    assert q == ArchQualifiedPackageName("libc6", "i386")
    assert str(q) == "libc6:i386"

    bare = ArchQualifiedPackageName.parse("libc6")
    assert bare.architecture is None
    assert str(bare) == "libc6"


@pytest.mark.parametrize(
    "text, message",
    [
        (":amd64", "empty package name"),
        ("foo:", "empty architecture"),
        ("", "empty package name"),
    ],
)
def test_arch_qualified_name_rejects_empty_parts(text: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        ArchQualifiedPackageName.parse(text)


def test_arch_qualified_name_rejects_invalid_fields() -> None:
    with pytest.raises(ValueError, match="invalid package name"):
        ArchQualifiedPackageName("foo bar")
    with pytest.raises(ValueError, match="invalid architecture"):
        ArchQualifiedPackageName("foo", "amd 64")
