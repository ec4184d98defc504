"""Explicit per-invocation context handed to the walk, renderers and explorer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path

from ..tree_model import CancellationToken, Entry, ScanOptions, WalkResult, walk
from ..ui_theme import DEFAULT_THEME, UITheme
from .config import AppConfig
from .templates import DEFAULT_TEMPLATE, Template


@dataclass(frozen=True)
class RunContext:
    """Config, logger, cancellation token and styling for one run."""

    config: AppConfig = field(default_factory=AppConfig)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("lazytree"))
    token: CancellationToken = field(default_factory=CancellationToken)
    theme: UITheme = DEFAULT_THEME
    template: Template = DEFAULT_TEMPLATE

    def scan_options(self) -> ScanOptions:
        return self.config.scan_options()

    def with_config(self, **changes: object) -> RunContext:
        return replace(self, config=replace(self.config, **changes))

    def walk(
        self,
        root: Path | str,
        *,
        options: ScanOptions | None = None,
        on_entry: Callable[[Entry], None] | None = None,
        match_prefix: str = "",
    ) -> WalkResult:
        return walk(
            root,
            options or self.scan_options(),
            self.token,
            on_entry=on_entry,
            logger=self.logger.getChild("walk"),
            match_prefix=match_prefix,
        )


__all__ = ["RunContext"]
