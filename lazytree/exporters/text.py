"""Plain-text tree export."""

from __future__ import annotations

from collections.abc import Sequence

from ..tree_model import Entry, iter_tree_rows
from .base import Exporter, ExportFormat, require_entries


class TextExporter(Exporter):
    format = ExportFormat.TXT

    def render(self, entries: Sequence[Entry]) -> str:
        require_entries(entries)
        glyphs = self.options.template.glyphs()
        lines = [
            row.prefix + row.entry.name + ("/" if row.entry.is_dir else "")
            for row in iter_tree_rows(entries, glyphs)
        ]
        return "\n".join(lines) + "\n"


__all__ = ["TextExporter"]
