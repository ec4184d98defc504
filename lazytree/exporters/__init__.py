"""Export formats for walk results: text, JSON, PNG and SVG.

All exporters consume ``iter_tree_rows`` so every format draws the same
connector topology as the console renderer.
"""

from __future__ import annotations

from .base import ExportError, Exporter, ExportFormat, ExportOptions, UnsupportedFormatError
from .factory import create_exporter, format_for_path
from .image import ImageExporter, PNGExporter, SVGExporter
from .json_export import JSONExporter
from .text import TextExporter

__all__ = [
    "ExportError",
    "Exporter",
    "ExportFormat",
    "ExportOptions",
    "UnsupportedFormatError",
    "create_exporter",
    "format_for_path",
    "ImageExporter",
    "PNGExporter",
    "SVGExporter",
    "JSONExporter",
    "TextExporter",
]
