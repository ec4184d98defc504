"""Command-line front door for lazytree.

Loads config and logging, applies one-run flag overrides, then walks the
target directory and prints, exports or explores it. Cancellation (Ctrl+C)
is a clean exit; genuine failures exit with status 1.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

from .exporters import ExportError, ExportOptions, create_exporter, format_for_path
from .explorer import run_explorer
from .render import print_metrics, print_tree, should_use_color
from .runtime import config as runtime_config
from .runtime import (
    AppConfig,
    ConfigError,
    RunContext,
    ScanProgress,
    configure_logging,
    edit_config_interactive,
    ensure_config,
    load_template,
    templates_dir,
)
from .tree_model import CancellationToken, WalkCancelled, WalkError, WalkMode, cancel_on_interrupt
from .ui_theme import available_theme_names, resolve_theme

CANCELLED_MESSAGE = "Operation cancelled by user"


def parse_ignore_patterns(raw: Iterable[str]) -> list[str]:
    """Normalize ``--ignore`` values.

    Accepts single patterns, ``[a, b]`` bracketed lists, comma-separated and
    whitespace-separated lists; empty items are dropped.
    """
    out: list[str] = []
    for item in raw:
        text = item.strip()
        text = text.removeprefix("[").removesuffix("]")
        if "," in text:
            parts = text.split(",")
        else:
            parts = text.split()
        out.extend(part.strip() for part in parts if part.strip())
    return out


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazytree",
        description="Advanced directory tree visualizer.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to scan. Defaults to current directory.")
    parser.add_argument("-e", "--export", metavar="FILE", help="Export tree to FILE (txt, json, png, svg).")
    parser.add_argument("--font", metavar="TTF", help="Font file for PNG/SVG export.")
    parser.add_argument("--template", metavar="NAME", help="Glyph/icon/color template name.")
    parser.add_argument("--no-progress", action="store_true", help="Disable the scan progress indicator.")
    parser.add_argument("--no-metrics", action="store_true", help="Hide scan metrics.")
    parser.add_argument("--depth", type=int, default=None, help="Max depth of the tree (0 or less: unlimited).")
    parser.add_argument(
        "-I",
        "--ignore",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Ignore paths matching glob PATTERN (repeatable, comma lists accepted).",
    )
    parser.add_argument("-a", "--show-hidden", action="store_true", help="Include dot-files and dot-directories.")
    parser.add_argument("--strict", action="store_true", help="Abort on the first unreadable entry.")
    parser.add_argument(
        "--color",
        choices=runtime_config.COLOR_MODES,
        default=None,
        help="Color output mode (default from config: auto).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("-i", "--interactive", action="store_true", help="Explore the directory interactively.")
    parser.add_argument("--style", default="monokai", help="Pygments style for file previews.")
    parser.add_argument("--edit-config", action="store_true", help="Edit the configuration in $EDITOR and exit.")
    return parser


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Fold one-run CLI flags into ``config`` without persisting them."""
    changes: dict[str, object] = {}
    if args.depth is not None:
        changes["max_depth"] = args.depth
    if args.ignore is not None:
        changes["ignore_patterns"] = tuple(parse_ignore_patterns(args.ignore))
    if args.show_hidden:
        changes["show_hidden_files"] = True
    if args.strict:
        changes["walk_mode"] = WalkMode.STRICT.value
    if args.no_color:
        changes["color"] = "never"
    elif args.color is not None:
        changes["color"] = args.color
    if args.theme is not None:
        changes["theme"] = args.theme
    if args.template is not None:
        changes["template"] = args.template
    if args.font is not None:
        changes["font_path"] = args.font
    return replace(config, **changes) if changes else config


def process_directory(context: RunContext, path: Path, args: argparse.Namespace) -> None:
    """Walk ``path`` then print or export it, followed by the metrics report."""
    context.logger.info("Processing directory: %s", path)
    config = context.config
    progress = None
    if not args.no_progress and sys.stderr.isatty():
        progress = ScanProgress(sys.stderr, context.token).start()
    try:
        result = context.walk(path, on_entry=progress.advance if progress is not None else None)
    finally:
        if progress is not None:
            progress.stop()

    if args.export:
        export_path = Path(args.export)
        exporter = create_exporter(
            format_for_path(export_path),
            ExportOptions(
                template=context.template,
                font_path=config.font_path,
                image_width=config.image_width,
            ),
        )
        exporter.export(result.entries, export_path)
        sys.stdout.write(f"Exported {len(result.entries)} entries to {export_path}\n")
        context.logger.info("Exported to %s", export_path)
    else:
        print_tree(
            result.entries,
            sys.stdout,
            theme=context.theme,
            glyphs=context.template.glyphs(),
            template=context.template,
        )

    if not args.no_metrics:
        print_metrics(result.metrics, sys.stdout, context.theme)
    context.logger.info("Successfully rendered tree for %s", result.root)


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and run lazytree.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)

    try:
        config = ensure_config()
        logger = configure_logging(config.log_level, runtime_config.LOG_DIR)
    except ConfigError as exc:
        raise SystemExit(f"Config error: {exc}") from exc

    if args.edit_config:
        try:
            updated = edit_config_interactive()
        except ConfigError as exc:
            logger.error("Config edit failed: %s", exc)
            raise SystemExit(f"Config edit failed: {exc}") from exc
        logger.info("Config updated (max_depth=%d, template=%s)", updated.max_depth, updated.template)
        sys.stdout.write(f"Config saved to {runtime_config.config_file()}\n")
        return

    config = apply_overrides(config, args)
    use_color = should_use_color(config.color, sys.stdout)
    context = RunContext(
        config=config,
        logger=logger,
        token=CancellationToken(),
        theme=resolve_theme(config.theme, no_color=not use_color),
        template=load_template(templates_dir(), config.template),
    )

    path = Path(args.path) if args.path is not None else (default_path or Path.cwd())
    with cancel_on_interrupt(context.token):
        try:
            if args.interactive:
                run_explorer(context, path, style=args.style, no_color=not use_color)
            else:
                process_directory(context, path, args)
        except WalkCancelled:
            logger.info(CANCELLED_MESSAGE)
            sys.stdout.write(f"{CANCELLED_MESSAGE}\n")
            return
        except (WalkError, ExportError) as exc:
            logger.error("Run failed: %s", exc)
            raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
