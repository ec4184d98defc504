"""Glob-style ignore patterns matched against root-relative slash paths.

Patterns go through ``wcmatch.fnmatch`` without path semantics, so ``*``
matches any run of characters with ``/`` included. ``?``, ``[abc]``,
``[a-z]``, ``[!abc]``, ``{a,b}`` alternatives and ``\\`` escapes are
supported; a leading dot needs no literal match and matching is
case-sensitive on every platform. Patterns the library rejects are reported
as ``InvalidPatternError`` and left out of the matcher so the remaining
patterns keep working.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from wcmatch import fnmatch
from wcmatch._wcparse import PatternLimitException

from .errors import InvalidPatternError

GLOB_FLAGS = fnmatch.BRACE | fnmatch.DOTMATCH | fnmatch.CASE
# Upper bound on the patterns one brace expression may expand into.
BRACE_EXPANSION_LIMIT = 1000


@dataclass(frozen=True)
class CompiledGlob:
    """One source pattern and the regexes its brace expansion produced."""

    pattern: str
    regexes: tuple[re.Pattern[str], ...]

    def matches(self, rel_path: str) -> bool:
        return any(regex.fullmatch(rel_path) is not None for regex in self.regexes)


def compile_glob(pattern: str) -> CompiledGlob:
    """Compile one glob; raises ``InvalidPatternError`` when it is rejected."""
    try:
        include, _exclude = fnmatch.translate(pattern, flags=GLOB_FLAGS, limit=BRACE_EXPANSION_LIMIT)
        regexes = tuple(re.compile(body) for body in include)
    except (PatternLimitException, ValueError, re.error) as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc
    return CompiledGlob(pattern=pattern, regexes=regexes)


@dataclass(frozen=True)
class IgnoreMatcher:
    """Ordered compiled ignore patterns plus the ones that failed to compile."""

    compiled: tuple[CompiledGlob, ...] = ()
    invalid: tuple[InvalidPatternError, ...] = ()

    def first_match(self, rel_path: str) -> str | None:
        """Return the first pattern (in list order) matching ``rel_path``."""
        for glob in self.compiled:
            if glob.matches(rel_path):
                return glob.pattern
        return None

    def matches(self, rel_path: str) -> bool:
        return self.first_match(rel_path) is not None

    def __bool__(self) -> bool:
        return bool(self.compiled)


def compile_ignore_patterns(patterns: Iterable[str]) -> IgnoreMatcher:
    """Compile ``patterns`` once per walk, skipping rejected ones."""
    compiled: list[CompiledGlob] = []
    invalid: list[InvalidPatternError] = []
    for pattern in patterns:
        try:
            compiled.append(compile_glob(pattern))
        except InvalidPatternError as exc:
            invalid.append(exc)
    return IgnoreMatcher(compiled=tuple(compiled), invalid=tuple(invalid))


__all__ = [
    "GLOB_FLAGS",
    "BRACE_EXPANSION_LIMIT",
    "CompiledGlob",
    "IgnoreMatcher",
    "compile_glob",
    "compile_ignore_patterns",
]
