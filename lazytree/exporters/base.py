"""Exporter base class, format enum and export errors."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..runtime.config import DEFAULT_IMAGE_WIDTH
from ..runtime.templates import DEFAULT_TEMPLATE, Template
from ..tree_model import Entry


class ExportError(Exception):
    """Export could not be rendered or written."""


class UnsupportedFormatError(ExportError):
    def __init__(self, fmt: object) -> None:
        super().__init__(f"unsupported export format: {fmt}")
        self.format = fmt


class ExportFormat(enum.Enum):
    TXT = "txt"
    JSON = "json"
    PNG = "png"
    SVG = "svg"


@dataclass(frozen=True)
class ExportOptions:
    template: Template = DEFAULT_TEMPLATE
    font_path: str | None = None
    image_width: int = DEFAULT_IMAGE_WIDTH


class Exporter:
    """Renders an entry list into one output format."""

    format: ExportFormat

    def __init__(self, options: ExportOptions | None = None) -> None:
        self.options = options or ExportOptions()

    def render(self, entries: Sequence[Entry]) -> str | bytes:
        raise NotImplementedError

    def export(self, entries: Sequence[Entry], path: Path) -> None:
        payload = self.render(entries)
        try:
            if isinstance(payload, bytes):
                path.write_bytes(payload)
            else:
                path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise ExportError(f"Cannot create file {path}: {exc}") from exc


def require_entries(entries: Sequence[Entry]) -> None:
    if not entries:
        raise ExportError("no entries to export")


__all__ = [
    "ExportError",
    "UnsupportedFormatError",
    "ExportFormat",
    "ExportOptions",
    "Exporter",
    "require_entries",
]
