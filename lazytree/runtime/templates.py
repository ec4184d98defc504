"""Glyph/icon/color templates stored as JSON under the config directory.

A template may override any of ``prefix.vertical``, ``prefix.branch``,
``prefix.corner``, ``icons.file``, ``icons.dir``, ``colors.file`` and
``colors.dir``; missing keys keep the built-in defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path

from ..tree_model import GlyphSet

_LOGGER = logging.getLogger(__name__)

DEFAULT_TEMPLATE_NAME = "default"


@dataclass(frozen=True)
class Template:
    """Connector glyphs, icons and export colors for one named template."""

    name: str = DEFAULT_TEMPLATE_NAME
    vertical: str = "│"
    branch: str = "├──"
    corner: str = "└──"
    file_icon: str = "📄"
    dir_icon: str = "📁"
    file_color: str = "#000000"
    dir_color: str = "#1e88e5"
    customized_prefix: bool = False

    def glyphs(self) -> GlyphSet:
        return GlyphSet.from_template(self.vertical, self.branch, self.corner)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            "prefix": {"vertical": self.vertical, "corner": self.corner, "branch": self.branch},
            "icons": {"file": self.file_icon, "dir": self.dir_icon},
            "colors": {"file": self.file_color, "dir": self.dir_color},
        }


DEFAULT_TEMPLATE = Template()


def _section(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _text(section: dict[str, object], key: str, fallback: str) -> str:
    value = section.get(key)
    if not isinstance(value, str) or not value:
        return fallback
    return value


def template_from_dict(name: str, data: dict[str, object]) -> Template:
    """Build a template from decoded JSON, defaulting every missing value."""
    prefix = _section(data, "prefix")
    icons = _section(data, "icons")
    colors = _section(data, "colors")
    base = DEFAULT_TEMPLATE
    vertical = _text(prefix, "vertical", base.vertical)
    branch = _text(prefix, "branch", base.branch)
    corner = _text(prefix, "corner", base.corner)
    return replace(
        base,
        name=name,
        vertical=vertical,
        branch=branch,
        corner=corner,
        file_icon=_text(icons, "file", base.file_icon),
        dir_icon=_text(icons, "dir", base.dir_icon),
        file_color=_text(colors, "file", base.file_color),
        dir_color=_text(colors, "dir", base.dir_color),
        customized_prefix=(vertical, branch, corner) != (base.vertical, base.branch, base.corner),
    )


def load_template(templates_dir: Path, name: str | None = None) -> Template:
    """Load ``<templates_dir>/<name>.json``.

    Missing, unreadable or malformed files fall back to the built-in default
    template so rendering never fails on template problems.
    """
    template_name = (name or "").strip() or DEFAULT_TEMPLATE_NAME
    path = templates_dir / f"{template_name}.json"
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        if template_name != DEFAULT_TEMPLATE_NAME:
            _LOGGER.warning("Template %r not found in %s, using default", template_name, templates_dir)
        return replace(DEFAULT_TEMPLATE, name=template_name)
    except (OSError, ValueError) as exc:
        _LOGGER.warning("Cannot load template %s: %s", path, exc)
        return replace(DEFAULT_TEMPLATE, name=template_name)
    if not isinstance(data, dict):
        _LOGGER.warning("Template %s is not a JSON object, using default", path)
        return replace(DEFAULT_TEMPLATE, name=template_name)
    return template_from_dict(template_name, data)


__all__ = [
    "DEFAULT_TEMPLATE_NAME",
    "Template",
    "DEFAULT_TEMPLATE",
    "template_from_dict",
    "load_template",
]
