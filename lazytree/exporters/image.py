"""Raster (PNG) and vector (SVG) tree export drawn with matplotlib.

Both formats lay out one monospace text row per entry on a fixed-width canvas;
they differ only in default glyphs, background and encoder.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from pathlib import Path

import matplotlib
from matplotlib.figure import Figure
from matplotlib.font_manager import FontProperties

from ..tree_model import ASCII_GLYPHS, UNICODE_GLYPHS, Entry, GlyphSet, iter_tree_rows
from .base import Exporter, ExportFormat, ExportOptions, require_entries

_LOGGER = logging.getLogger(__name__)

DPI = 100
LINE_HEIGHT = 22
PADDING = 20
FONT_SIZE = 16
MONOSPACE_FAMILIES = ["DejaVu Sans Mono", "monospace"]


def canvas_height(entry_count: int) -> int:
    return PADDING * 2 + entry_count * LINE_HEIGHT


class ImageExporter(Exporter):
    """Shared layout for the image formats."""

    background = "#ffffff"
    default_glyphs: GlyphSet = UNICODE_GLYPHS

    def glyphs(self) -> GlyphSet:
        template = self.options.template
        if template.customized_prefix:
            return template.glyphs()
        return self.default_glyphs

    def font(self) -> FontProperties:
        size_points = FONT_SIZE * 72 / DPI
        font_path = self.options.font_path
        if font_path:
            if Path(font_path).is_file():
                return FontProperties(fname=font_path, size=size_points)
            _LOGGER.warning("Font %s not found, using the default monospace font", font_path)
        return FontProperties(family=MONOSPACE_FAMILIES, size=size_points)

    def build_figure(self, entries: Sequence[Entry]) -> Figure:
        width = max(1, self.options.image_width)
        height = canvas_height(len(entries))
        figure = Figure(figsize=(width / DPI, height / DPI), dpi=DPI)
        figure.patch.set_facecolor(self.background)
        font = self.font()
        template = self.options.template
        for row in iter_tree_rows(entries, self.glyphs()):
            name = row.entry.name + ("/" if row.entry.is_dir else "")
            top = PADDING + row.index * LINE_HEIGHT
            figure.text(
                PADDING / width,
                1.0 - top / height,
                row.prefix + name,
                fontproperties=font,
                color=template.dir_color if row.entry.is_dir else template.file_color,
                ha="left",
                va="top",
                parse_math=False,
            )
        return figure

    def encode(self, figure: Figure) -> bytes:
        raise NotImplementedError

    def render(self, entries: Sequence[Entry]) -> bytes:
        require_entries(entries)
        return self.encode(self.build_figure(entries))


class PNGExporter(ImageExporter):
    format = ExportFormat.PNG
    background = "#fafafa"
    default_glyphs = ASCII_GLYPHS

    def encode(self, figure: Figure) -> bytes:
        buffer = io.BytesIO()
        figure.savefig(buffer, format="png", dpi=DPI, facecolor=self.background)
        return buffer.getvalue()


class SVGExporter(ImageExporter):
    format = ExportFormat.SVG

    def encode(self, figure: Figure) -> bytes:
        buffer = io.BytesIO()
        # Keep rows as <text> elements instead of outlined glyph paths.
        with matplotlib.rc_context({"svg.fonttype": "none"}):
            figure.savefig(buffer, format="svg", dpi=DPI, facecolor=self.background)
        return buffer.getvalue()


__all__ = [
    "DPI",
    "LINE_HEIGHT",
    "PADDING",
    "FONT_SIZE",
    "canvas_height",
    "ImageExporter",
    "PNGExporter",
    "SVGExporter",
]
