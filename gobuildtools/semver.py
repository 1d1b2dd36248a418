"""Semantic version strings with a leading ``v``, as used for Go module tags."""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable
from typing import NamedTuple

_NUM = r"(?:0|[1-9][0-9]*)"
_PRE_IDENT = r"(?:0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*)"
_BUILD_IDENT = r"[0-9A-Za-z-]+"

_VERSION_RE = re.compile(
    rf"v(?P<major>{_NUM})"
    rf"(?:\.(?P<minor>{_NUM})"
    rf"(?:\.(?P<patch>{_NUM})"
    rf"(?:-(?P<prerelease>{_PRE_IDENT}(?:\.{_PRE_IDENT})*))?"
    rf"(?:\+(?P<build>{_BUILD_IDENT}(?:\.{_BUILD_IDENT})*))?"
    r")?)?"
)


class _Parsed(NamedTuple):
    major: str
    minor: str
    patch: str
    prerelease: str
    build: str


def _parse(version: str) -> _Parsed | None:
    match = _VERSION_RE.fullmatch(version)
    if match is None:
        return None
    return _Parsed(
        major=match["major"],
        minor=match["minor"] or "0",
        patch=match["patch"] or "0",
        prerelease=match["prerelease"] or "",
        build=match["build"] or "",
    )


def is_valid(version: str) -> bool:
    """Report whether ``version`` is a valid semantic version (``vMAJOR[.MINOR[.PATCH...]]``)."""
    return _parse(version) is not None


def _compare_int(a: str, b: str) -> int:
    key_a, key_b = (len(a), a), (len(b), b)
    if key_a == key_b:
        return 0
    return -1 if key_a < key_b else 1


def _compare_prerelease(x: str, y: str) -> int:
    if x == y:
        return 0
    if not x:
        return 1
    if not y:
        return -1
    xs, ys = x.split("."), y.split(".")
    for a, b in zip(xs, ys):
        if a == b:
            continue
        a_num, b_num = a.isdigit(), b.isdigit()
        if a_num and b_num:
            return _compare_int(a, b)
        if a_num:
            return -1
        if b_num:
            return 1
        return -1 if a < b else 1
    if len(xs) == len(ys):
        return 0
    return -1 if len(xs) < len(ys) else 1


def compare(v: str, w: str) -> int:
    """Compare two versions, returning -1, 0 or 1.

    Invalid versions compare equal to each other and below every valid one.
    Build metadata is ignored.
    """
    pv, pw = _parse(v), _parse(w)
    if pv is None and pw is None:
        return 0
    if pv is None:
        return -1
    if pw is None:
        return 1
    for a, b in ((pv.major, pw.major), (pv.minor, pw.minor), (pv.patch, pw.patch)):
        result = _compare_int(a, b)
        if result:
            return result
    return _compare_prerelease(pv.prerelease, pw.prerelease)


def major(version: str) -> str:
    """Return the major version prefix (``vN``) or an empty string when invalid."""
    parsed = _parse(version)
    return f"v{parsed.major}" if parsed else ""


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Return the versions sorted in ascending semantic-version order."""
    return sorted(versions, key=functools.cmp_to_key(compare))