"""Internal writing helpers for the stanza codec.

Private module for formatting logic; public API is in `edsp.py`.
"""
from __future__ import annotations

from typing import Iterable


def _format_field(key: str, value: str) -> list[str]:
    """Render one field; continuation lines get a one-space prefix.

    Empty or whitespace-only lines are written as `` .``. deb822 has no escape
    for a line holding just ``.``, so such a line also reads back empty.
    """
    first, *rest = value.split("\n")
    lines = [f"{key}: {first}" if first else f"{key}:"]
    for piece in rest:
        lines.append(f" {piece}" if piece.strip() else " .")
    return lines


def join_list_value(key: str, items: list[str], separator: str) -> str:
    """Render repeated values the way `parse_stanzas` + `split_list_value` read them.

    Comma lists put one item per line, aligned under the first value::

        Depends: foo,
                 bar | baz
    """
    if separator == " ":
        return " ".join(items)
    # _format_field adds one leading space to every continuation line.
    indent = " " * (len(key) + 1)
    return f"{separator}\n{indent}".join(items)


def format_stanza(fields: Iterable[tuple[str, str]]) -> str:
    """Render ``(key, value)`` pairs as one newline-terminated stanza."""
    lines: list[str] = []
    for key, value in fields:
        lines.extend(_format_field(key, value))
    return "".join(f"{line}\n" for line in lines)


def format_stanzas(stanzas: Iterable[Iterable[tuple[str, str]]]) -> str:
    """Render stanzas separated by one blank line."""
    return "\n".join(format_stanza(fields) for fields in stanzas)
