"""Syntax-highlighted file preview for the explorer.

Text is decoded with a tolerant encoding fallback and highlighted through
pygments' terminal formatter; binary or oversized files get a one-line notice.
"""

from __future__ import annotations

from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, guess_lexer_for_filename
from pygments.util import ClassNotFound

from ..tree_model import format_size

PREVIEW_MAX_BYTES = 512 * 1024
BINARY_SNIFF_BYTES = 4096
DEFAULT_STYLE = "monokai"


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order."""
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def looks_binary(path: Path) -> bool:
    with path.open("rb") as handle:
        return b"\x00" in handle.read(BINARY_SNIFF_BYTES)


def highlight_source(source: str, path: Path, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    if no_color:
        return source
    try:
        lexer = guess_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    try:
        formatter = TerminalFormatter(style=style)
    except ClassNotFound:
        formatter = TerminalFormatter(style=DEFAULT_STYLE)
    return highlight(source, lexer, formatter)


def build_preview_lines(path: Path, style: str = DEFAULT_STYLE, no_color: bool = False) -> list[str]:
    """Return display lines for ``path``; read failures become a notice line."""
    try:
        size = path.stat().st_size
        if size > PREVIEW_MAX_BYTES:
            return [f"<file too large to preview: {format_size(size)}>"]
        if looks_binary(path):
            return [f"<binary file: {format_size(size)}>"]
        source = read_text(path)
    except OSError as exc:
        return [f"<cannot read {path.name}: {exc.strerror or exc}>"]
    text = highlight_source(source.expandtabs(4), path, style=style, no_color=no_color)
    return text.splitlines() or [""]


__all__ = ["read_text", "looks_binary", "highlight_source", "build_preview_lines"]
