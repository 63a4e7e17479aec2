"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import edsp` to fail.

To keep the suite robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared Test Helpers for EDSP Tests
# =============================================================================


def scenario_text() -> str:
    """A small but complete scenario: request + three packages."""
    return "\n".join(
        [
            "Request: EDSP 0.5",
            "Architecture: amd64",
            "Architectures: amd64 i386",
            "Install: foo:amd64",
            "Upgrade-All: yes",
            "",
            "Package: foo",
            "Version: 1.0.0",
            "Architecture: amd64",
            "APT-ID: 0",
            "APT-Pin: 500",
            "APT-Candidate: yes",
            "Depends: bar (>= 0.1.0),",
            "         libc6 (>= 2.36) | libc6-compat",
            "",
            "Package: bar",
            "Version: 0.2.0",
            "Architecture: amd64",
            "Installed: yes",
            "APT-ID: 1",
            "APT-Pin: 100",
            "Conflicts: foo (<< 1.0.0)",
            "",
            "Package: bar",
            "Version: 1:0.1.0-2",
            "Architecture: amd64",
            "APT-ID: 2",
            "APT-Pin: 500",
            "X-Origin: local",
        ]
    ) + "\n"


def make_package(**overrides: Any):
    """Create a minimal valid Package; keyword arguments override fields."""
    from edsp.core.model import Package

    fields: dict[str, Any] = {
        "package": "foo",
        "version": "1.0",
        "architecture": "amd64",
        "apt_id": "0",
        "apt_pin": 500,
    }
    fields.update(overrides)
    return Package(**fields)
