"""Internal parsing helpers for the stanza codec.

Private module for parsing logic; public API is in `edsp.py`.
"""
from __future__ import annotations


class StanzaError(ValueError):
    """Malformed stanza text; ``line`` is 1-based."""

    def __init__(self, message: str, *, line: int):
        self.line = line
        super().__init__(f"line {line}: {message}")


def _is_blank(line: str) -> bool:
    return not line.strip()


def _is_continuation(line: str) -> bool:
    return line[:1] in (" ", "\t")


def _split_field(line: str, *, lineno: int) -> tuple[str, str]:
    key, sep, value = line.partition(":")
    if not sep:
        raise StanzaError(f"expected 'Key: value', got {line!r}", line=lineno)
    if not key or any(c.isspace() for c in key):
        raise StanzaError(f"invalid field name {key!r}", line=lineno)
    return key, value.strip()


def parse_stanzas(text: str) -> list[dict[str, str]]:
    """Split deb822-style text into stanzas of ``{key: value}``.

    Rules:
    - lines end at ``\\n`` (a trailing ``\\r`` is dropped)
    - stanzas are separated by one or more blank (empty/whitespace-only) lines
    - ``Key: value`` starts a field; the value is stripped
    - a line starting with a space or tab continues the previous field: its
      first character is dropped, a piece that is exactly ``.`` stands for an
      empty line, and the pieces are joined with ``\\n``
    - keys are kept as written; a key may appear once per stanza
      (case-insensitive)
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_stanzas: expected str, got {type(text).__name__}")

    stanzas: list[dict[str, str]] = []
    current: dict[str, str] = {}
    seen: set[str] = set()
    last_key: str | None = None

    # Only "\n" ends a line; other characters str.splitlines() breaks on may
    # occur inside values.
    for lineno, raw in enumerate(text.split("\n"), start=1):
        line = raw[:-1] if raw.endswith("\r") else raw
        if _is_blank(line):
            if current:
                stanzas.append(current)
            current, seen, last_key = {}, set(), None
            continue

        if _is_continuation(line):
            if last_key is None:
                raise StanzaError("continuation line outside of a field", line=lineno)
            piece = line[1:]
            if piece == ".":
                piece = ""
            current[last_key] += "\n" + piece
            continue

        key, value = _split_field(line, lineno=lineno)
        folded = key.lower()
        if folded in seen:
            raise StanzaError(f"duplicate field {key!r}", line=lineno)
        seen.add(folded)
        current[key] = value
        last_key = key

    if current:
        stanzas.append(current)
    return stanzas


def split_list_value(value: str, separator: str) -> list[str]:
    """Split a repeated-value field into its items.

    ``separator`` is ``","`` for comma lists (items stripped, empty items from
    trailing commas dropped) or ``" "`` for whitespace-separated words.
    Continuation newlines count as whitespace.
    """
    if separator == " ":
        return value.split()
    items = (item.strip() for item in value.replace("\n", " ").split(separator))
    return [item for item in items if item]
