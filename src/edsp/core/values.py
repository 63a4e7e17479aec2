"""Small scalar value types used by EDSP stanzas."""

from __future__ import annotations

from dataclasses import dataclass


def parse_bool(text: str) -> bool:
    """Parse an EDSP boolean (``yes`` / ``no``)."""
    if text == "yes":
        return True
    if text == "no":
        return False
    raise ValueError(f'expected "yes" or "no", got {text!r}')


def format_bool(value: bool) -> str:
    return "yes" if value else "no"


@dataclass(frozen=True)
class ArchQualifiedPackageName:
    """``name:architecture`` as used by the ``Install`` and ``Remove`` request fields.

    The architecture may be omitted (``name`` alone).
    """

    name: str
    architecture: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name or any(c.isspace() or c == ":" for c in self.name):
            raise ValueError(f"ArchQualifiedPackageName.name: invalid package name {self.name!r}")
        if self.architecture is not None:
            if not isinstance(self.architecture, str) or not self.architecture or any(
                c.isspace() for c in self.architecture
            ):
                raise ValueError(f"ArchQualifiedPackageName.architecture: invalid architecture {self.architecture!r}")

    @classmethod
    def parse(cls, text: str) -> "ArchQualifiedPackageName":
        name, sep, arch = text.partition(":")
        if not name:
            raise ValueError(f"{text!r}: empty package name")
        if sep and not arch:
            raise ValueError(f"{text!r}: empty architecture")
        return cls(name, arch if sep else None)

    def __str__(self) -> str:
        if self.architecture is None:
            return self.name
        return f"{self.name}:{self.architecture}"
