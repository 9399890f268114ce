"""Command line entry point for building preview documents."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_config
from .convert import render_fragment
from .document import TextDirection
from .preview import PreviewRenderer
from .themes import THEMES, list_themes

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = {".md", ".markdown", ".mdown"}


def configure_logging(verbose: bool = False) -> logging.Logger:
    app_logger = logging.getLogger("pinepreview")
    app_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not app_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        app_logger.addHandler(handler)
    return app_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pinepreview",
        description="Build self-contained preview pages for an embedded web view.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Wrap an HTML fragment (or markdown file) in a preview page.")
    render.add_argument("input", help="HTML fragment or markdown file to render.")
    render.add_argument("-o", "--output", default=None, help="Write the page here instead of stdout.")
    render.add_argument(
        "--markdown",
        action="store_true",
        help="Treat input as markdown (implied for .md/.markdown files).",
    )
    render.add_argument("--rtl", action="store_true", help="Lay out the body right-to-left.")
    render.add_argument("--scroll", type=int, default=0, help="Vertical scroll offset in pixels.")
    render.add_argument("--theme", default=None, help="Theme name (see the `themes` command).")
    render.add_argument(
        "--system-appearance",
        action="store_true",
        help="Leave the page background transparent for the host window.",
    )
    render.add_argument("--extensions-dir", default=None, help="Directory of extension .js files.")
    render.add_argument("--config", default=None, help="Settings file (default: platform config path).")

    sub.add_parser("themes", help="List built-in themes.")
    return parser


def _run_render(args: argparse.Namespace) -> int:
    source = Path(args.input).expanduser()
    if not source.is_file():
        print(f"Input file does not exist: {source}", file=sys.stderr)
        return 2
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Cannot read {source}: {exc}", file=sys.stderr)
        return 2

    cfg = load_config(Path(args.config).expanduser() if args.config else None)
    if args.theme:
        cfg.appearance.theme = args.theme
    if cfg.appearance.theme not in THEMES:
        logger.warning(
            "unknown theme %r, using default; available: %s",
            cfg.appearance.theme,
            ", ".join(list_themes()),
        )
    if args.system_appearance:
        cfg.appearance.use_system_appearance = True
    if args.extensions_dir:
        cfg.extensions.directory = args.extensions_dir

    renderer = PreviewRenderer(cfg)
    renderer.initialize()

    fragment = text
    if args.markdown or source.suffix.lower() in MARKDOWN_SUFFIXES:
        fragment = render_fragment(text)
    direction = TextDirection.RIGHT_TO_LEFT if args.rtl else TextDirection.NATURAL
    document = renderer.assemble(fragment, direction, args.scroll)

    if args.output:
        output = Path(args.output).expanduser()
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document, encoding="utf-8")
        logger.info("wrote %s", output)
    else:
        sys.stdout.write(document)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    if args.command == "themes":
        for name in list_themes():
            print(name)
        return 0
    return _run_render(args)


if __name__ == "__main__":
    raise SystemExit(main())
