"""Runtime services around the tree core.

Contains config persistence, templates, logging setup, the explicit run
context and the background progress indicator.
"""

from __future__ import annotations

from .config import (
    APP_NAME,
    AppConfig,
    ConfigError,
    edit_config_interactive,
    ensure_config,
    load_config,
    save_config,
    templates_dir,
)
from .context import RunContext
from .logging_setup import configure_logging
from .progress import ScanProgress
from .templates import DEFAULT_TEMPLATE, Template, load_template

__all__ = [
    "APP_NAME",
    "AppConfig",
    "ConfigError",
    "edit_config_interactive",
    "ensure_config",
    "load_config",
    "save_config",
    "templates_dir",
    "RunContext",
    "configure_logging",
    "ScanProgress",
    "DEFAULT_TEMPLATE",
    "Template",
    "load_template",
]
