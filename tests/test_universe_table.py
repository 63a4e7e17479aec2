from __future__ import annotations

import pandas as pd
import pytest

from conftest import make_package, scenario_text
from edsp.codecs.edsp import parse_scenario_text
from edsp.core.relations import Dependency, VersionSet
from edsp.core.tables import UNIVERSE_COLUMN_ORDER, UNIVERSE_SCHEMA, universe_table


def test_universe_table_columns_and_dtypes() -> None:
    df = universe_table(parse_scenario_text(scenario_text()).universe)

    assert list(df.columns) == UNIVERSE_COLUMN_ORDER
    for col, dtype in UNIVERSE_SCHEMA.items():
        assert str(df[col].dtype) == dtype
    assert isinstance(df.index, pd.RangeIndex)


def test_universe_table_sorts_by_debian_version() -> None:
    df = universe_table(parse_scenario_text(scenario_text()).universe)

    # 1:0.1.0-2 sorts after 0.2.0 although it is smaller as a string
    assert df["package"].tolist() == ["bar", "bar", "foo"]
    assert df["version"].tolist() == ["0.2.0", "1:0.1.0-2", "1.0.0"]
    assert df["installed"].tolist() == [True, False, False]
    assert df["apt_pin"].tolist() == [100, 500, 500]


def test_universe_table_relationship_text() -> None:
    df = universe_table(parse_scenario_text(scenario_text()).universe)
    foo = df[df["package"] == "foo"].iloc[0]
    bar = df[df["package"] == "bar"].iloc[0]

    assert foo["depends"] == "bar (>= 0.1.0), libc6 (>= 2.36) | libc6-compat"
    assert pd.isna(foo["conflicts"])
    assert bar["conflicts"] == "foo (<< 1.0.0)"
    assert pd.isna(bar["depends"])


def test_universe_table_tilde_and_ties() -> None:
    pkgs = [
        make_package(version="1.0", apt_id="a", architecture="i386"),
        make_package(version="1.0~rc1", apt_id="b"),
        make_package(version="1.00", apt_id="c", architecture="amd64"),
        make_package(version="1.0", apt_id="d", architecture="amd64"),
    ]
    df = universe_table(pkgs)

    # 1.0 and 1.00 share a rank, so architecture decides, then input order
    assert df["apt_id"].tolist() == ["b", "c", "d", "a"]


def test_universe_table_empty_and_bad_input() -> None:
    df = universe_table([])
    assert df.empty
    assert list(df.columns) == UNIVERSE_COLUMN_ORDER

    with pytest.raises(TypeError, match="item 1"):
        universe_table([make_package(), "foo"])  # type: ignore[list-item]


def test_universe_table_matches_expected_frame() -> None:
    pkg = make_package(
        candidate=True,
        depends=(Dependency.parse("a | b"),),
        conflicts=(VersionSet.parse("c"), VersionSet.parse("d (>> 1)")),
    )
    expected = pd.DataFrame(
        [
            {
                "package": "foo",
                "version": "1.0",
                "architecture": "amd64",
                "installed": False,
                "apt_id": "0",
                "apt_pin": 500,
                "candidate": True,
                "depends": "a | b",
                "conflicts": "c, d (>> 1)",
            }
        ]
    ).astype(UNIVERSE_SCHEMA)

    pd.testing.assert_frame_equal(universe_table([pkg]), expected)
