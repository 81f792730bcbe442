"""Command-line front door for splitview.

Parses CLI options, opens the JSON Lines row feed, and either prints one
rendered frame (``--render``) or runs the interactive split-pane runtime.
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import IO

from .input import PaneKeyMap
from .runtime import RowFeed, apply_message, run_main_loop
from .runtime import config
from .runtime.feed import iter_messages
from .runtime.loop import RuntimeLoopHooks
from .runtime.terminal import TerminalController
from .split_pane import Mode, SplitPane, parse_columns
from .split_pane.pane import DEFAULT_SPLIT_PERCENT
from .syntax import DEFAULT_STYLE, highlight_and_wrap, normalize_style, wrap_without_highlight
from .ui_theme import available_theme_names, resolve_theme

log = logging.getLogger(__name__)

DEFAULT_COLUMNS = "Name:24,Type:14,Network:10"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _percent(value: str) -> float:
    """argparse type for a percentage in the open interval (0, 100)."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid percentage: {value!r}") from exc
    if parsed <= 0 or parsed >= 100:
        raise argparse.ArgumentTypeError("percentage must be between 0 and 100")
    return parsed


def _columns(value: str):
    try:
        return parse_columns(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="splitview",
        description="Browse streamed records with highlighted Cadence source in a split terminal view.",
    )
    parser.add_argument("feed", nargs="?", default="-", help="JSON Lines row feed path, or '-' for stdin.")
    parser.add_argument(
        "--columns",
        type=_columns,
        default=None,
        help=f"Selector columns as NAME:WIDTH,... (default: {DEFAULT_COLUMNS}).",
    )
    parser.add_argument("--style", default=None, help=f"Pygments style for code (default: {DEFAULT_STYLE}).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable all color output.")
    parser.add_argument("--split-percent", type=_percent, default=None, help="Selector width as percent of terminal.")
    parser.add_argument("--save", action="store_true", help="Persist --style/--theme as defaults.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write diagnostics to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Log level used with --log-file.",
    )
    parser.add_argument("--render", action="store_true", help="Print one frame after reading the whole feed and exit.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Frame width for --render.")
    parser.add_argument("--height", type=_positive_int, default=None, help="Frame height for --render.")
    parser.add_argument("--select", type=int, default=0, help="Selected row index for --render.")
    parser.add_argument("--fullscreen", action="store_true", help="Render the detail pane fullscreen with --render.")
    parser.add_argument("--keys", action="store_true", help="Print key bindings for both modes and exit.")
    return parser


def format_key_help(keymap: PaneKeyMap | None = None) -> str:
    """Key help for split and fullscreen modes, one block per mode."""
    keymap = keymap if keymap is not None else PaneKeyMap()
    blocks = []
    for title, mode in (("split view", Mode.SPLIT), ("fullscreen", Mode.FULLSCREEN)):
        blocks.append("\n".join([f"{title}:", *(f"  {line}" for line in keymap.help_lines(mode))]))
    return "\n\n".join(blocks)


def configure_logging(log_file: Path | None, level: str) -> None:
    """Send logs to ``log_file``; without one the TUI stays silent."""
    if log_file is None:
        return
    logging.basicConfig(filename=str(log_file), level=getattr(logging, level), format=LOG_FORMAT)


def build_pane(args: argparse.Namespace) -> SplitPane:
    """Create the pane from CLI flags, falling back to persisted config."""
    style = normalize_style(args.style or config.load_style_name())
    theme_name = args.theme or config.load_theme_name()
    split_percent = args.split_percent or config.load_left_pane_percent()
    return SplitPane(
        args.columns if args.columns is not None else parse_columns(DEFAULT_COLUMNS),
        style=style,
        ui_theme=resolve_theme(theme_name, no_color=args.no_color),
        split_percent=(split_percent / 100.0) if split_percent is not None else DEFAULT_SPLIT_PERCENT,
        highlighter=wrap_without_highlight if args.no_color else highlight_and_wrap,
    )


@contextlib.contextmanager
def _open_feed(path: str):
    if path == "-":
        yield sys.stdin
        return
    feed_path = Path(path)
    if not feed_path.is_file():
        raise SystemExit(f"Feed not found: {feed_path}")
    with feed_path.open(encoding="utf-8") as stream:
        yield stream


def render_once(pane: SplitPane, stream: IO[str], args: argparse.Namespace) -> str:
    """Read the complete feed into ``pane`` and return a single frame."""
    for message in iter_messages(stream):
        apply_message(pane, message)
    term = shutil.get_terminal_size((80, 24))
    pane.resize(args.width or term.columns, args.height or term.lines)
    pane.set_selection(args.select)
    if args.fullscreen and pane.mode is Mode.SPLIT:
        pane.toggle_fullscreen()
    return pane.render()


def _keyboard_fd(feed_is_stdin: bool) -> int:
    """Use stdin for keys unless it carries the feed; then read the tty."""
    if not feed_is_stdin and sys.stdin.isatty():
        return sys.stdin.fileno()
    try:
        return os.open("/dev/tty", os.O_RDONLY)
    except OSError as exc:
        raise SystemExit(f"No terminal available for keyboard input: {exc}") from exc


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch splitview on a row feed."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    if args.keys:
        sys.stdout.write(format_key_help() + "\n")
        return

    if args.save:
        if args.style:
            config.save_style_name(args.style)
        if args.theme:
            config.save_theme_name(args.theme)

    pane = build_pane(args)
    with _open_feed(args.feed) as stream:
        if args.render:
            sys.stdout.write(render_once(pane, stream, args) + "\n")
            return

        if not sys.stdout.isatty():
            raise SystemExit("Interactive mode needs a terminal; use --render for piped output.")
        feed = RowFeed(stream, name=args.feed).start()
        stdin_fd = _keyboard_fd(args.feed == "-")
        terminal = TerminalController(stdin_fd, sys.stdout.fileno())
        log.info("starting interactive session")
        try:
            run_main_loop(
                pane,
                terminal,
                stdin_fd,
                feed,
                hooks=RuntimeLoopHooks(save_left_pane_percent=config.save_left_pane_percent),
            )
        finally:
            if stdin_fd != sys.stdin.fileno():
                os.close(stdin_fd)


if __name__ == "__main__":
    main()
