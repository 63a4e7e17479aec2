"""Codecs between EDSP stanza text and typed records.

- `edsp.codecs.edsp` is the public API (scenario/answer read + write).
- `_stanza_parser` / `_stanza_writer` hold the deb822-style line mechanics.
"""

from __future__ import annotations

__all__: list[str] = []
