"""Persistent JSON config helpers.

Stores scan defaults (hidden files, depth, ignore patterns, walk mode), log
level, export settings and the active template/theme. Loading is defensive:
a missing or malformed file, or wrong-typed values, fall back to defaults.
"""

from __future__ import annotations

import json
import os
import shlex
import subprocess
import tempfile
from dataclasses import asdict, dataclass, field
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

from ..tree_model import ScanOptions, WalkMode
from ..ui_theme import normalize_theme_name
from .templates import DEFAULT_TEMPLATE, DEFAULT_TEMPLATE_NAME

APP_NAME = "lazytree"
CONFIG_FILENAME = "config.json"
TEMPLATES_DIRNAME = "templates"
CONFIG_DIR = Path(user_config_dir(APP_NAME, appauthor=False))
LOG_DIR = Path(user_log_dir(APP_NAME, appauthor=False))

LOG_LEVELS = ("debug", "info", "warn", "error")
COLOR_MODES = ("auto", "always", "never")
DEFAULT_MAX_DEPTH = 10
DEFAULT_IMAGE_WIDTH = 1200


class ConfigError(Exception):
    """Config, template or log location could not be created, read or saved."""


@dataclass(frozen=True)
class AppConfig:
    """User-level defaults; CLI flags override these for a single run."""

    font_path: str | None = None
    log_level: str = "info"
    image_width: int = DEFAULT_IMAGE_WIDTH
    show_hidden_files: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    ignore_patterns: tuple[str, ...] = field(default_factory=tuple)
    template: str = DEFAULT_TEMPLATE_NAME
    color: str = "auto"
    theme: str = "default"
    walk_mode: str = WalkMode.LENIENT.value

    def scan_options(self) -> ScanOptions:
        return ScanOptions(
            show_hidden=self.show_hidden_files,
            max_depth=self.max_depth,
            ignore_patterns=tuple(self.ignore_patterns),
            mode=WalkMode.parse(self.walk_mode),
        )

    def to_dict(self) -> dict[str, object]:
        data = asdict(self)
        data["ignore_patterns"] = list(self.ignore_patterns)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> AppConfig:
        """Coerce decoded JSON into a config, dropping invalid values."""
        defaults = cls()

        font_path = data.get("font_path")
        log_level = str(data.get("log_level", "")).strip().lower()
        if log_level == "warning":
            log_level = "warn"
        patterns = data.get("ignore_patterns")
        template = data.get("template")
        color = str(data.get("color", "")).strip().lower()
        walk_mode = str(data.get("walk_mode", "")).strip().lower()

        return cls(
            font_path=font_path if isinstance(font_path, str) and font_path.strip() else None,
            log_level=log_level if log_level in LOG_LEVELS else defaults.log_level,
            image_width=_coerce_positive_int(data.get("image_width"), defaults.image_width),
            show_hidden_files=_coerce_bool(data.get("show_hidden_files"), defaults.show_hidden_files),
            max_depth=_coerce_int(data.get("max_depth"), defaults.max_depth),
            ignore_patterns=(
                tuple(item for item in patterns if isinstance(item, str) and item)
                if isinstance(patterns, list)
                else ()
            ),
            template=template.strip() if isinstance(template, str) and template.strip() else defaults.template,
            color=color if color in COLOR_MODES else defaults.color,
            theme=normalize_theme_name(data.get("theme") if isinstance(data.get("theme"), str) else None),
            walk_mode=walk_mode if walk_mode in {mode.value for mode in WalkMode} else defaults.walk_mode,
        )


def _coerce_bool(value: object, fallback: bool) -> bool:
    return value if isinstance(value, bool) else fallback


def _coerce_int(value: object, fallback: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return fallback
    return value


def _coerce_positive_int(value: object, fallback: int) -> int:
    parsed = _coerce_int(value, fallback)
    return parsed if parsed > 0 else fallback


def config_file() -> Path:
    return CONFIG_DIR / CONFIG_FILENAME


def templates_dir() -> Path:
    return CONFIG_DIR / TEMPLATES_DIRNAME


def load_config_data() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(config_file().read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def load_config() -> AppConfig:
    return AppConfig.from_dict(load_config_data())


def save_config(config: AppConfig) -> None:
    """Persist ``config`` as pretty-printed JSON."""
    path = config_file()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config.to_dict(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot write config {path}: {exc}") from exc


def ensure_config() -> AppConfig:
    """Create config/template directories and default files, then load config."""
    default_template = templates_dir() / f"{DEFAULT_TEMPLATE_NAME}.json"
    try:
        templates_dir().mkdir(parents=True, exist_ok=True)
        if not default_template.exists():
            default_template.write_text(
                json.dumps(DEFAULT_TEMPLATE.to_dict(), indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
    except OSError as exc:
        raise ConfigError(f"Cannot create config directory {CONFIG_DIR}: {exc}") from exc
    if not config_file().exists():
        save_config(AppConfig())
    return load_config()


def _editor_command() -> list[str]:
    editor_env = os.environ.get("EDITOR", "").strip()
    cmd = shlex.split(editor_env) if editor_env else []
    if cmd:
        return cmd
    return ["notepad"] if os.name == "nt" else ["vi"]


def edit_config_interactive() -> AppConfig:
    """Open the config in ``$EDITOR`` on a temp copy and save it once it validates.

    Raises ``ConfigError`` when the editor fails or the edited text is not a
    JSON object; the stored config is left untouched in that case.
    """
    ensure_config()
    try:
        original = config_file().read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config {config_file()}: {exc}") from exc

    fd, tmp_name = tempfile.mkstemp(prefix="lazytree-config-", suffix=".json")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(original)
        try:
            completed = subprocess.run([*_editor_command(), str(tmp_path)], check=False)
        except OSError as exc:
            raise ConfigError(f"Failed to launch editor: {exc}") from exc
        if completed.returncode != 0:
            raise ConfigError(f"Editor exited with status {completed.returncode}")
        try:
            data = json.loads(tmp_path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise ConfigError(f"Edited config is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError("Edited config must be a JSON object")
        updated = AppConfig.from_dict(data)
        save_config(updated)
        return updated
    finally:
        tmp_path.unlink(missing_ok=True)


__all__ = [
    "APP_NAME",
    "CONFIG_DIR",
    "LOG_DIR",
    "LOG_LEVELS",
    "COLOR_MODES",
    "ConfigError",
    "AppConfig",
    "config_file",
    "templates_dir",
    "load_config_data",
    "load_config",
    "save_config",
    "ensure_config",
    "edit_config_interactive",
]
