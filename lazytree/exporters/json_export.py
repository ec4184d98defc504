"""JSON export: the flat entry list with derived connector state per row."""

from __future__ import annotations

import json
from collections.abc import Sequence

from ..tree_model import Entry, iter_tree_rows
from .base import Exporter, ExportFormat, require_entries


class JSONExporter(Exporter):
    format = ExportFormat.JSON

    def render(self, entries: Sequence[Entry]) -> str:
        require_entries(entries)
        glyphs = self.options.template.glyphs()
        rows = [
            {
                "path": row.entry.path,
                "name": row.entry.name,
                "depth": row.entry.depth,
                "is_dir": row.entry.is_dir,
                "size": row.entry.size,
                "mtime_ns": row.entry.metadata.mtime_ns,
                "is_last": row.is_last,
                "prefix": row.prefix,
            }
            for row in iter_tree_rows(entries, glyphs)
        ]
        payload = {"root": entries[0].name, "entries": rows}
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


__all__ = ["JSONExporter"]
