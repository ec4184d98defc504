"""Connector-prefix derivation over a flat, depth-annotated entry list.

Entries arrive in pre-order with only ``depth`` describing structure; no
parent/child tree is ever built. Two rules drive every connector:

- an entry is the *last sibling* when it is the final entry or the next
  entry is at the same depth or shallower (only the comparison matters, not
  the size of a depth jump);
- a per-depth flag table records, for each level, whether the most recent
  entry seen at that level was not last; ancestor columns draw a vertical bar
  when their flag is set and blank padding otherwise.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .types import Entry


@dataclass(frozen=True)
class GlyphSet:
    """Column glyphs used to draw connectors; all four share one width."""

    vertical: str
    blank: str
    branch: str
    corner: str

    @classmethod
    def from_template(
        cls,
        vertical: str,
        branch: str,
        corner: str,
        min_width: int = 4,
    ) -> GlyphSet:
        """Pad bare template glyphs (``"│"``, ``"├──"``) to a common column width."""
        width = max(min_width, *(len(glyph) + 1 for glyph in (vertical, branch, corner)))
        return cls(
            vertical=vertical.ljust(width),
            blank=" " * width,
            branch=branch.ljust(width),
            corner=corner.ljust(width),
        )


UNICODE_GLYPHS = GlyphSet(vertical="│   ", blank="    ", branch="├── ", corner="└── ")
ASCII_GLYPHS = GlyphSet(vertical="|   ", blank="    ", branch="+-- ", corner="`-- ")


@dataclass(frozen=True)
class TreeRow:
    """One entry with its derived connector state."""

    index: int
    entry: Entry
    is_last: bool
    prefix: str


def is_last_sibling(entries: Sequence[Entry], index: int) -> bool:
    if index >= len(entries) - 1:
        return True
    return entries[index + 1].depth <= entries[index].depth


def _compose(glyphs: GlyphSet, depth: int, is_last: bool, needs_vertical: Sequence[bool]) -> str:
    if depth <= 0:
        return ""
    parts = [glyphs.vertical if needs_vertical[level] else glyphs.blank for level in range(1, depth)]
    parts.append(glyphs.corner if is_last else glyphs.branch)
    return "".join(parts)


class PrefixDeriver:
    """Forward-only prefix derivation with one flag per observed depth.

    ``derive`` must be called with strictly increasing indices over the same
    entry sequence; it only ever peeks at the next entry.
    """

    def __init__(self, glyphs: GlyphSet = UNICODE_GLYPHS) -> None:
        self.glyphs = glyphs
        self._needs_vertical: list[bool] = [False]
        self._last_index = -1

    def advance(self, entries: Sequence[Entry], index: int) -> TreeRow:
        if index <= self._last_index:
            raise ValueError(f"prefix derivation must move forward (got {index} after {self._last_index})")
        self._last_index = index

        entry = entries[index]
        depth = entry.depth
        is_last = is_last_sibling(entries, index)
        while len(self._needs_vertical) <= depth:
            self._needs_vertical.append(False)
        if depth > 0:
            self._needs_vertical[depth] = not is_last
        prefix = _compose(self.glyphs, depth, is_last, self._needs_vertical)
        return TreeRow(index=index, entry=entry, is_last=is_last, prefix=prefix)

    def derive(self, entries: Sequence[Entry], index: int) -> str:
        return self.advance(entries, index).prefix


def derive_prefix(entries: Sequence[Entry], index: int, glyphs: GlyphSet = UNICODE_GLYPHS) -> str:
    """Prefix for one entry without prior calls.

    Produces the same string ``PrefixDeriver`` yields at ``index``: each
    ancestor column takes its flag from the latest earlier entry at that depth.
    """
    depth = entries[index].depth
    if depth <= 0:
        return ""
    needs_vertical = [False] * depth
    resolved: set[int] = set()
    for earlier in range(index - 1, -1, -1):
        if len(resolved) == depth - 1:
            break
        level = entries[earlier].depth
        if 1 <= level < depth and level not in resolved:
            resolved.add(level)
            needs_vertical[level] = not is_last_sibling(entries, earlier)
    return _compose(glyphs, depth, is_last_sibling(entries, index), needs_vertical)


def iter_tree_rows(entries: Sequence[Entry], glyphs: GlyphSet = UNICODE_GLYPHS) -> Iterator[TreeRow]:
    """Yield every entry with its connector state in one forward pass."""
    deriver = PrefixDeriver(glyphs)
    for index in range(len(entries)):
        yield deriver.advance(entries, index)


__all__ = [
    "GlyphSet",
    "UNICODE_GLYPHS",
    "ASCII_GLYPHS",
    "TreeRow",
    "is_last_sibling",
    "PrefixDeriver",
    "derive_prefix",
    "iter_tree_rows",
]
