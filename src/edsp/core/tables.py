"""Canonical tabular view of a package universe.

A scenario's universe can hold tens of thousands of packages; a pandas
DataFrame is the convenient shape for inspecting, filtering and exporting it
(CSV). This module is the single source of truth for:

- the universe table's columns / canonical column order
- dtype normalization (pandas string/boolean/Int64 extension dtypes)
- deterministic row order: package name, then Debian version order
  (not string order), then architecture
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from edsp.core.model import Package

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd


# Schema values are *logical dtypes*; we use pandas extension dtypes so missing
# values stay <NA>.
UNIVERSE_SCHEMA: dict[str, str] = {
    "package": "string",
    "version": "string",
    "architecture": "string",
    "installed": "boolean",
    "apt_id": "string",
    "apt_pin": "Int64",
    "candidate": "boolean",
    "depends": "string",
    "conflicts": "string",
}

UNIVERSE_KEYS: list[str] = ["package", "_version_rank", "architecture"]

UNIVERSE_COLUMN_ORDER: list[str] = list(UNIVERSE_SCHEMA.keys())


def _join(values: Iterable[object]) -> str | None:
    # Same separator the stanza codec uses for repeated values, on one line.
    items = [str(v) for v in values]
    return ", ".join(items) if items else None


def _package_row(pkg: Package) -> dict[str, object]:
    return {
        "package": pkg.package,
        "version": str(pkg.version),
        "architecture": pkg.architecture,
        "installed": pkg.installed,
        "apt_id": pkg.apt_id,
        "apt_pin": pkg.apt_pin,
        "candidate": pkg.candidate,
        "depends": _join(pkg.depends),
        "conflicts": _join(pkg.conflicts),
    }


def _version_ranks(packages: list[Package]) -> list[int]:
    """Dense rank of each package's version in Debian order.

    Versions that compare equal (e.g. ``1.0`` and ``1.00``) share a rank.
    """
    ordered = sorted(packages, key=lambda p: p.version)
    ranks: dict[int, int] = {}
    rank = -1
    prev = None
    for pkg in ordered:
        if prev is None or pkg.version.compare(prev) != 0:
            rank += 1
            prev = pkg.version
        ranks[id(pkg)] = rank
    return [ranks[id(pkg)] for pkg in packages]


def universe_table(packages: Iterable[Package]) -> "pd.DataFrame":
    """Return the canonical universe table for ``packages``.

    Post-conditions:
    - columns are exactly `UNIVERSE_COLUMN_ORDER`, cast to `UNIVERSE_SCHEMA`
    - ``depends``/``conflicts`` hold the comma-joined field text (or <NA>)
    - rows are sorted by (package, Debian version order, architecture) with a
      stable sort, so ties keep input order
    - index is reset to RangeIndex
    """
    import pandas as pd

    pkgs = list(packages)
    for i, pkg in enumerate(pkgs):
        if not isinstance(pkg, Package):
            raise TypeError(f"universe_table: item {i}: expected Package, got {type(pkg).__name__}")

    df = pd.DataFrame([_package_row(p) for p in pkgs], columns=UNIVERSE_COLUMN_ORDER)
    for col, dtype in UNIVERSE_SCHEMA.items():
        df[col] = df[col].astype(dtype)

    df["_version_rank"] = pd.Series(_version_ranks(pkgs), index=df.index, dtype="int64")
    df = df.sort_values(UNIVERSE_KEYS, kind="mergesort", na_position="last").reset_index(drop=True)
    return df.loc[:, UNIVERSE_COLUMN_ORDER]
