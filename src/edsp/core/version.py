"""Debian package versions.

A version string has the shape ``[epoch:]upstream[-revision]``:

- the epoch is everything before the *first* ``:`` and must be a non-negative
  integer (default 0)
- the revision is everything after the *last* ``-`` (default empty)
- the upstream version is whatever is left in between

Ordering follows dpkg: epochs compare numerically, then upstream and revision
are compared with the alternating non-digit / digit run algorithm where ``~``
sorts before everything (even the end of a run) and letters sort before
non-letters.

The original text is kept verbatim so ``str(Version(s)) == s``; it takes no
part in equality, hashing or ordering.
"""

from __future__ import annotations

from typing import Any

_TILDE = ord("~")


class VersionEpochError(ValueError):
    """The text before the first ``:`` is not a non-negative integer."""

    def __init__(self, text: str, epoch: str):
        self.text = text
        self.epoch = epoch
        if not epoch:
            self.kind = "empty"
            msg = "cannot parse integer from empty string"
        else:
            self.kind = "invalid digit"
            msg = "invalid digit found in string"
        super().__init__(f"{msg}: epoch {epoch!r} in version {text!r}")


def _parse_epoch(text: str, epoch: str) -> int:
    # ASCII digits only: no sign, whitespace or underscores.
    if not epoch or not all("0" <= c <= "9" for c in epoch):
        raise VersionEpochError(text, epoch)
    return int(epoch)


def _is_digit(c: int) -> bool:
    return 0x30 <= c <= 0x39


def _is_alpha(c: int) -> bool:
    return 0x41 <= c <= 0x5A or 0x61 <= c <= 0x7A


def _cmp_non_digit(a: bytes, i: int, b: bytes, j: int) -> tuple[int, int, int]:
    """Compare the non-digit runs starting at ``a[i]`` and ``b[j]``.

    Returns ``(result, i, j)`` with the positions advanced past the common
    prefix of both runs.
    """
    while i < len(a) or j < len(b):
        ca = a[i] if i < len(a) and not _is_digit(a[i]) else None
        cb = b[j] if j < len(b) and not _is_digit(b[j]) else None
        if ca is None and cb is None:
            return 0, i, j
        if ca != cb:
            if ca == _TILDE:
                return -1, i, j
            if cb == _TILDE:
                return 1, i, j
            if cb is None:
                return 1, i, j
            if ca is None:
                return -1, i, j
            alpha_a, alpha_b = _is_alpha(ca), _is_alpha(cb)
            if alpha_a == alpha_b:
                return (1 if ca > cb else -1), i, j
            return (-1 if alpha_a else 1), i, j
        i += 1
        j += 1
    return 0, i, j


def _take_number(s: bytes, i: int) -> tuple[int, int]:
    start = i
    while i < len(s) and _is_digit(s[i]):
        i += 1
    return (int(s[start:i]) if i > start else 0), i


def compare_strings(a: str, b: str) -> int:
    """Compare two upstream (or revision) strings with dpkg's algorithm.

    Returns -1, 0 or 1.
    """
    ba = a.encode("utf-8")
    bb = b.encode("utf-8")
    i = j = 0
    non_digit = True
    while i < len(ba) or j < len(bb):
        if non_digit:
            res, i, j = _cmp_non_digit(ba, i, bb, j)
        else:
            na, i = _take_number(ba, i)
            nb, j = _take_number(bb, j)
            res = (na > nb) - (na < nb)
        if res:
            return res
        non_digit = not non_digit
    return 0


class Version:
    """A parsed Debian version.

    >>> Version("1:2.30-1ubuntu4").epoch
    1
    >>> Version("1.5~rc1") < Version("1.5")
    True
    """

    __slots__ = ("_epoch", "_upstream", "_revision", "_original")

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise TypeError(f"Version: expected str, got {type(text).__name__}")

        epoch_text, sep, remainder = text.partition(":")
        if sep:
            epoch = _parse_epoch(text, epoch_text)
        else:
            epoch, remainder = 0, text

        upstream, sep, revision = remainder.rpartition("-")
        if not sep:
            upstream, revision = remainder, ""

        object.__setattr__(self, "_epoch", epoch)
        object.__setattr__(self, "_upstream", upstream)
        object.__setattr__(self, "_revision", revision)
        object.__setattr__(self, "_original", text)

    @classmethod
    def parse(cls, text: str) -> "Version":
        return cls(text)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Version is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (Version, (self._original,))

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def upstream(self) -> str:
        return self._upstream

    @property
    def revision(self) -> str:
        return self._revision

    @property
    def original(self) -> str:
        return self._original

    def _key(self) -> tuple[int, str, str]:
        return (self._epoch, self._upstream, self._revision)

    def compare(self, other: "Version") -> int:
        """Return -1, 0 or 1 as this version sorts before, equal to or after ``other``."""
        if self._epoch != other._epoch:
            return -1 if self._epoch < other._epoch else 1
        res = compare_strings(self._upstream, other._upstream)
        if res:
            return res
        return compare_strings(self._revision, other._revision)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    # "1.0" and "1.00" compare as neither < nor > yet are not ==, so the
    # remaining comparisons cannot be derived from == and <.
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) >= 0

    def __str__(self) -> str:
        return self._original

    def __repr__(self) -> str:
        return f"Version({self._original!r})"


def compare_versions(a: Version | str, b: Version | str) -> int:
    """Compare two versions (parsing strings first); returns -1, 0 or 1."""
    va = a if isinstance(a, Version) else Version(a)
    vb = b if isinstance(b, Version) else Version(b)
    return va.compare(vb)
