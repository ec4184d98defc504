"""Terminal-independent explorer state: listing, selection, preview scrolling.

The listing of the current directory is a fresh walk limited to depth 1,
re-run on every navigation step; nothing is cached between directories.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..runtime.templates import DEFAULT_TEMPLATE, Template
from ..tree_model import UNICODE_GLYPHS, Entry, GlyphSet, WalkCancelled, WalkError, format_size, iter_tree_rows
from ..ui_theme import PLAIN_THEME, UITheme
from .preview import build_preview_lines

ListDirectory = Callable[[Path, bool], Sequence[Entry]]
BuildPreview = Callable[[Path], list[str]]

QUIT_KEYS = {"q", "Q", "ESC", "CTRL_C", "CTRL_D"}
DOWN_KEYS = {"j", "DOWN"}
UP_KEYS = {"k", "UP"}
OPEN_KEYS = {"ENTER", "l", "RIGHT"}
BACK_KEYS = {"h", "LEFT", "BACKSPACE"}
LIST_HINT = "j/k move  enter open  h back  . hidden  q quit"
PREVIEW_HINT = "j/k scroll  space/b page  q back"


@dataclass
class PreviewState:
    path: Path
    lines: list[str] = field(default_factory=list)
    offset: int = 0


class ExplorerState:
    """Navigation model for the explorer; never touches the terminal."""

    def __init__(
        self,
        root: Path,
        list_directory: ListDirectory,
        build_preview: BuildPreview = build_preview_lines,
        show_hidden: bool = False,
    ) -> None:
        self.root = root.resolve()
        self.current = self.root
        self.list_directory = list_directory
        self.build_preview = build_preview
        self.show_hidden = show_hidden
        self.entries: tuple[Entry, ...] = ()
        self.selected = 0
        self.offset = 0
        self.preview: PreviewState | None = None
        self.message = ""
        self.running = True

    @property
    def children(self) -> tuple[Entry, ...]:
        return self.entries[1:]

    @property
    def selected_entry(self) -> Entry | None:
        children = self.children
        if not children:
            return None
        return children[min(self.selected, len(children) - 1)]

    def reload(self, select_name: str | None = None) -> bool:
        """Re-walk the current directory; keep the old listing on failure."""
        try:
            entries = tuple(self.list_directory(self.current, self.show_hidden))
        except WalkCancelled:
            raise
        except WalkError as exc:
            self.message = str(exc)
            return False
        self.entries = entries
        self.selected = 0
        self.offset = 0
        if select_name is not None:
            for idx, entry in enumerate(self.children):
                if entry.name == select_name:
                    self.selected = idx
                    break
        return True

    def move(self, delta: int) -> None:
        count = len(self.children)
        if count == 0:
            self.selected = 0
            return
        self.selected = max(0, min(count - 1, self.selected + delta))

    def ensure_visible(self, page_size: int) -> None:
        page_size = max(1, page_size)
        if self.selected < self.offset:
            self.offset = self.selected
        elif self.selected >= self.offset + page_size:
            self.offset = self.selected - page_size + 1

    def open_selected(self) -> None:
        entry = self.selected_entry
        if entry is None or entry.absolute_path is None:
            return
        if not entry.is_dir:
            self.preview = PreviewState(path=entry.absolute_path, lines=self.build_preview(entry.absolute_path))
            return
        previous = self.current
        self.current = entry.absolute_path
        if not self.reload():
            self.current = previous

    def go_parent(self) -> None:
        if self.current == self.root:
            self.message = "Already at the start directory"
            return
        child_name = self.current.name
        previous = self.current
        self.current = self.current.parent
        if not self.reload(select_name=child_name):
            self.current = previous

    def toggle_hidden(self) -> None:
        selected = self.selected_entry
        self.show_hidden = not self.show_hidden
        self.reload(select_name=selected.name if selected is not None else None)

    def _scroll_preview(self, delta: int, page_size: int) -> None:
        assert self.preview is not None
        max_offset = max(0, len(self.preview.lines) - max(1, page_size))
        self.preview.offset = max(0, min(max_offset, self.preview.offset + delta))

    def handle_key(self, key: str, page_size: int = 20) -> bool:
        """Apply one key token; return ``False`` once the explorer should exit."""
        self.message = ""
        if self.preview is not None:
            if key in QUIT_KEYS or key in BACK_KEYS:
                self.preview = None
            elif key in DOWN_KEYS:
                self._scroll_preview(1, page_size)
            elif key in UP_KEYS:
                self._scroll_preview(-1, page_size)
            elif key in {" ", "PAGE_DOWN"}:
                self._scroll_preview(page_size, page_size)
            elif key in {"b", "PAGE_UP"}:
                self._scroll_preview(-page_size, page_size)
            return self.running

        if key in QUIT_KEYS:
            self.running = False
        elif key in DOWN_KEYS:
            self.move(1)
        elif key in UP_KEYS:
            self.move(-1)
        elif key in {"PAGE_DOWN", "CTRL_F"}:
            self.move(page_size)
        elif key in {"PAGE_UP", "CTRL_B"}:
            self.move(-page_size)
        elif key in {"g", "HOME"}:
            self.move(-len(self.children))
        elif key in {"G", "END"}:
            self.move(len(self.children))
        elif key in OPEN_KEYS:
            self.open_selected()
        elif key in BACK_KEYS:
            self.go_parent()
        elif key == ".":
            self.toggle_hidden()
        self.ensure_visible(page_size)
        return self.running


def describe_entry(entry: Entry | None) -> str:
    if entry is None:
        return "empty directory"
    if entry.is_dir:
        return "directory"
    return format_size(entry.size)


def render_screen(
    state: ExplorerState,
    width: int,
    height: int,
    theme: UITheme = PLAIN_THEME,
    template: Template = DEFAULT_TEMPLATE,
    glyphs: GlyphSet = UNICODE_GLYPHS,
) -> list[str]:
    """Compose the full screen (header, body rows, status line)."""
    body_rows = max(1, height - 2)
    reset = theme.reset

    if state.preview is not None:
        preview = state.preview
        header = f"{theme.tree_dir}{preview.path}{reset}"
        body = preview.lines[preview.offset : preview.offset + body_rows]
        last_line = min(len(preview.lines), preview.offset + body_rows)
        status = f"{theme.status_hint}{PREVIEW_HINT}  [{last_line}/{len(preview.lines)}]{reset}"
    else:
        header = f"{theme.tree_dir}{state.current}/{reset}"
        state.ensure_visible(body_rows)
        rows = list(iter_tree_rows(state.entries, glyphs))[1:]
        body = []
        for idx in range(state.offset, min(len(rows), state.offset + body_rows)):
            row = rows[idx]
            icon = template.dir_icon if row.entry.is_dir else template.file_icon
            name = row.entry.name + ("/" if row.entry.is_dir else "")
            text = f"{row.prefix}{icon} {name}"
            if len(text) > width:
                text = text[: max(0, width - 3)] + "..."
            if idx == state.selected:
                body.append(f"{theme.reverse}{text}{reset}")
            else:
                color = theme.tree_dir if row.entry.is_dir else theme.tree_file
                body.append(f"{theme.tree_branch}{row.prefix}{reset}{color}{text[len(row.prefix):]}{reset}")
        if not rows:
            body.append(f"{theme.status_hint}(empty){reset}")
        detail = state.message or f"{describe_entry(state.selected_entry)}  {len(rows)} items"
        status = f"{theme.status_hint}{LIST_HINT}  |  {detail}{reset}"

    return [header, *body, *([""] * (body_rows - len(body))), status]


__all__ = [
    "PreviewState",
    "ExplorerState",
    "describe_entry",
    "render_screen",
]
