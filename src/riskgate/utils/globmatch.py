"""Restricted glob matching for CI path classification.

Only the subset of glob syntax used by risk-tier patterns is supported:

- ``**/`` matches zero or more leading directory segments
- ``**`` anywhere else matches any run of characters, ``/`` included
- ``*`` matches any run of characters except ``/``
- ``?`` matches exactly one character except ``/``

Every other character, ``.`` and bracket expressions included, is matched
literally. Unsupported constructs therefore under-match rather than raise.
Patterns are anchored at both ends and case-sensitive.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class GlobPattern:
    """A compiled, immutable path matcher."""

    source: str
    regex: re.Pattern[str]

    def matches(self, path: str) -> bool:
        return self.regex.fullmatch(path) is not None


def glob_to_regex(pattern: str) -> str:
    """Translate a glob pattern into an (unanchored) regular expression body."""
    parts: list[str] = []
    i = 0
    length = len(pattern)

    while i < length:
        char = pattern[i]

        if char == "*" and pattern.startswith("**", i):
            if pattern.startswith("**/", i):
                parts.append("(?:.+/)?")
                i += 3
            else:
                parts.append(".*")
                i += 2
        elif char == "*":
            parts.append("[^/]*")
            i += 1
        elif char == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(char))
            i += 1

    return "".join(parts)


@lru_cache(maxsize=1024)
def compile_glob(pattern: str) -> GlobPattern:
    """Compile a glob pattern once; repeated calls return the cached matcher."""
    return GlobPattern(source=pattern, regex=re.compile(glob_to_regex(pattern)))


def matches(path: str, pattern: str) -> bool:
    """Return True when pattern matches the entire path."""
    return compile_glob(pattern).matches(path)


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    """Return True when any pattern matches path. An empty list never matches."""
    return any(matches(path, pattern) for pattern in patterns)
