"""Export format detection and exporter construction."""

from __future__ import annotations

from pathlib import Path

from .base import Exporter, ExportFormat, ExportOptions, UnsupportedFormatError
from .image import PNGExporter, SVGExporter
from .json_export import JSONExporter
from .text import TextExporter

_EXPORTERS: dict[ExportFormat, type[Exporter]] = {
    ExportFormat.TXT: TextExporter,
    ExportFormat.JSON: JSONExporter,
    ExportFormat.PNG: PNGExporter,
    ExportFormat.SVG: SVGExporter,
}


def format_for_path(path: Path | str) -> ExportFormat:
    """Pick the format from the extension; unknown names default to text."""
    name = str(path).lower()
    suffix = Path(name).suffix.lstrip(".")
    for fmt in ExportFormat:
        if suffix == fmt.value:
            return fmt
    if "json" in name:
        return ExportFormat.JSON
    return ExportFormat.TXT


def create_exporter(fmt: ExportFormat | str, options: ExportOptions | None = None) -> Exporter:
    try:
        resolved = fmt if isinstance(fmt, ExportFormat) else ExportFormat(str(fmt).lower())
    except ValueError as exc:
        raise UnsupportedFormatError(fmt) from exc
    exporter_cls = _EXPORTERS.get(resolved)
    if exporter_cls is None:
        raise UnsupportedFormatError(fmt)
    return exporter_cls(options)


__all__ = ["format_for_path", "create_exporter"]
