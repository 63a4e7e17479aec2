"""EDSP codec (scenario import + answer export, and the reverse directions).

Stanza text is deb822-like (see `_stanza_parser.parse_stanzas`). Records are
mapped onto stanzas through `edsp.core.schema.STANZA_SCHEMAS`:

- known keys are looked up case-insensitively and converted by value kind
- unknown keys are kept verbatim, in encounter order, in ``record.extra``
- on write, known fields come first in schema order, then ``extra``; absent
  values (None, empty lists, booleans equal to their default) are omitted

Canonical text round-trips exactly, e.g.
``format_scenario(parse_scenario_text(s)) == s``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, TextIO

from edsp.codecs._stanza_parser import StanzaError, parse_stanzas, split_list_value
from edsp.codecs._stanza_writer import format_stanzas as _format_field_stanzas
from edsp.codecs._stanza_writer import join_list_value
from edsp.core.model import AnswerRecord, Package, Request, Scenario
from edsp.core.schema import ANSWER_KINDS, STANZA_SCHEMAS, VALUE_KINDS, FieldSpec

logger = logging.getLogger(__name__)

__all__ = [
    "RecordError",
    "StanzaError",
    "format_answer",
    "format_packages",
    "format_request",
    "format_scenario",
    "format_stanzas",
    "parse_answer_text",
    "parse_packages_text",
    "parse_request_text",
    "parse_scenario_text",
    "parse_stanzas",
    "read_scenario",
    "write_answer",
]


class RecordError(ValueError):
    """A stanza does not describe a valid record.

    ``index`` is the 0-based position of the stanza in its text; ``key`` is the
    offending field when one can be named.
    """

    def __init__(self, record: str, index: int, key: str | None, message: str):
        self.record = record
        self.index = index
        self.key = key
        where = f"{record} stanza {index}" + (f", field {key!r}" if key else "")
        super().__init__(f"{where}: {message}")


# ----------------------------
# Record <-> stanza
# ----------------------------


def _decode_value(spec: FieldSpec, raw: str) -> Any:
    kind = VALUE_KINDS[spec.kind]
    if kind.separator is None:
        return kind.parse(raw)
    return tuple(kind.parse(item) for item in split_list_value(raw, kind.separator))


def _encode_value(spec: FieldSpec, value: Any) -> str | None:
    if value is None:
        return None
    kind = VALUE_KINDS[spec.kind]
    if kind.separator is None:
        if spec.kind == "bool" and value == spec.default:
            return None
        return kind.format(value)
    items = [kind.format(item) for item in value]
    if not items:
        return None
    return join_list_value(spec.key, items, kind.separator)


def _record_from_stanza(cls: type, stanza: Mapping[str, str], *, index: int) -> Any:
    schema = STANZA_SCHEMAS[cls]
    lookup = {key.lower(): key for key in stanza}

    kwargs: dict[str, Any] = {}
    used: set[str] = set()
    for spec in schema:
        key = lookup.get(spec.key.lower())
        if key is None:
            if spec.required:
                raise RecordError(cls.__name__, index, spec.key, "missing required field")
            continue
        used.add(key)
        try:
            kwargs[spec.attr] = _decode_value(spec, stanza[key])
        except ValueError as e:
            raise RecordError(cls.__name__, index, spec.key, str(e)) from e

    kwargs["extra"] = {key: value for key, value in stanza.items() if key not in used}
    try:
        return cls(**kwargs)
    except ValueError as e:
        raise RecordError(cls.__name__, index, None, str(e)) from e


def _stanza_from_record(record: Any) -> list[tuple[str, str]]:
    try:
        schema = STANZA_SCHEMAS[type(record)]
    except KeyError:
        raise TypeError(f"no stanza schema for {type(record).__name__}") from None

    fields: list[tuple[str, str]] = []
    for spec in schema:
        rendered = _encode_value(spec, getattr(record, spec.attr))
        if rendered is not None:
            fields.append((spec.key, rendered))
    fields.extend(record.extra.items())
    return fields


# ----------------------------
# Public API
# ----------------------------


def format_stanzas(stanzas: Iterable[Mapping[str, str]]) -> str:
    """Render raw ``{key: value}`` stanzas (inverse of `parse_stanzas`)."""
    return _format_field_stanzas(list(stanza.items()) for stanza in stanzas)


def _format_records(records: Iterable[Any]) -> str:
    return _format_field_stanzas(_stanza_from_record(r) for r in records)


def parse_request_text(text: str) -> Request:
    """Parse a text holding exactly one `Request` stanza."""
    stanzas = parse_stanzas(text)
    if len(stanzas) != 1:
        raise RecordError("Request", 0, None, f"expected exactly one stanza, got {len(stanzas)}")
    return _record_from_stanza(Request, stanzas[0], index=0)


def format_request(request: Request) -> str:
    return _format_records([request])


def parse_packages_text(text: str) -> list[Package]:
    """Parse a sequence of `Package` stanzas."""
    return [_record_from_stanza(Package, s, index=i) for i, s in enumerate(parse_stanzas(text))]


def format_packages(packages: Iterable[Package]) -> str:
    return _format_records(packages)


def parse_scenario_text(text: str) -> Scenario:
    """Parse a full scenario: the request stanza, then the package universe.

    Stanza indexes in errors count from the request (index 0).
    """
    logger.info("Parsing scenario...")

    stanzas = parse_stanzas(text)
    if not stanzas:
        raise RecordError("Request", 0, None, "scenario is empty")

    request = _record_from_stanza(Request, stanzas[0], index=0)
    logger.debug("Parsed request: %r", request)

    universe = [_record_from_stanza(Package, s, index=i) for i, s in enumerate(stanzas[1:], start=1)]
    logger.debug("Parsed universe with %d packages", len(universe))

    return Scenario(request=request, universe=tuple(universe))


def read_scenario(source: str | Path | TextIO) -> Scenario:
    """Read a scenario from a path or an open text stream (e.g. ``sys.stdin``)."""
    if hasattr(source, "read"):
        text = source.read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    return parse_scenario_text(text)


def format_scenario(scenario: Scenario) -> str:
    return _format_records([scenario.request, *scenario.universe])


def parse_answer_text(text: str) -> list[AnswerRecord]:
    """Parse solver output: action, error and progress stanzas.

    Each stanza's kind is taken from its first key (``Install``, ``Remove``,
    ``Autoremove``, ``Error`` or ``Progress``).
    """
    records: list[AnswerRecord] = []
    for i, stanza in enumerate(parse_stanzas(text)):
        first_key = next(iter(stanza))
        cls = ANSWER_KINDS.get(first_key.lower())
        if cls is None:
            raise RecordError("Answer", i, first_key, "unknown answer stanza")
        records.append(_record_from_stanza(cls, stanza, index=i))
    return records


def format_answer(records: Iterable[AnswerRecord]) -> str:
    return _format_records(records)


def write_answer(stream: TextIO, records: Iterable[AnswerRecord]) -> None:
    """Write answer stanzas to ``stream`` (typically stdout) and flush it."""
    records = list(records)
    stream.write(format_answer(records))
    stream.flush()
    logger.debug("Wrote %d answer stanzas", len(records))
