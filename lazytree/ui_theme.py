"""UI theme definitions and selection helpers.

Themes are ANSI palettes for console tree rows, the metrics report and the
interactive explorer. Image/vector export colors come from templates instead.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    tree_branch: str
    tree_dir: str
    tree_file: str
    tree_size: str
    tree_empty: str
    metrics_heading: str
    metrics_files: str
    metrics_dirs: str
    metrics_size: str
    metrics_depth: str
    metrics_duration: str
    metrics_rate: str
    status_hint: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    tree_branch="\033[2;38;5;245m",
    tree_dir="\033[1;36m",
    tree_file="\033[37m",
    tree_size="\033[38;5;109m",
    tree_empty="\033[31m",
    metrics_heading="\033[1;96m",
    metrics_files="\033[32m",
    metrics_dirs="\033[34m",
    metrics_size="\033[33m",
    metrics_depth="\033[35m",
    metrics_duration="\033[37m",
    metrics_rate="\033[36m",
    status_hint="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    tree_branch="\033[2;38;5;31m",
    tree_dir="\033[1;38;5;45m",
    tree_file="\033[38;5;252m",
    tree_size="\033[38;5;73m",
    tree_empty="\033[38;5;203m",
    metrics_heading="\033[1;38;5;45m",
    metrics_files="\033[38;5;117m",
    metrics_dirs="\033[38;5;39m",
    metrics_size="\033[38;5;153m",
    metrics_depth="\033[38;5;110m",
    metrics_duration="\033[38;5;252m",
    metrics_rate="\033[38;5;73m",
    status_hint="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    tree_branch="",
    tree_dir="",
    tree_file="",
    tree_size="",
    tree_empty="",
    metrics_heading="",
    metrics_files="",
    metrics_dirs="",
    metrics_size="",
    metrics_depth="",
    metrics_duration="",
    metrics_rate="",
    status_hint="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
