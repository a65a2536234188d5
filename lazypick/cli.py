"""Command-line front door for lazypick.

Checks the startup argument, reads candidates from stdin, and runs the
interactive picker on the controlling terminal. The chosen line is printed
to stdout; cancelling prints nothing.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import termios

from .candidates import read_candidates
from .config import MAX_HEIGHT, MIN_HEIGHT, load_height, load_theme_name, save_preferences
from .session import PickerSession, run_session
from .terminal import TerminalController, open_tty
from .ui_theme import available_theme_names, resolve_theme

LOG_ENV_VAR = "LAZYPICK_LOG"
MISSING_ARGUMENT_MESSAGE = "You must provide an argument."

logger = logging.getLogger(__name__)


def _height(value: str) -> int:
    """argparse type for viewport heights."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if not MIN_HEIGHT <= parsed <= MAX_HEIGHT:
        raise argparse.ArgumentTypeError(f"value must be between {MIN_HEIGHT} and {MAX_HEIGHT}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazypick",
        description="Pick one line from stdin with an interactive incremental filter.",
    )
    parser.add_argument("args", nargs="*", help="Reserved arguments; at least one argument of any kind is required.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--height",
        type=_height,
        default=None,
        help=f"Inline viewport rows ({MIN_HEIGHT}-{MAX_HEIGHT}, default from config or 12).",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist --theme/--height as defaults in the config file.",
    )
    return parser


def configure_logging(environ: dict[str, str] | None = None) -> None:
    """Log to the file named by ``LAZYPICK_LOG``; otherwise stay silent.

    The terminal belongs to the picker UI, so nothing is logged there.
    """
    env = os.environ if environ is None else environ
    path = env.get(LOG_ENV_VAR, "").strip()
    if not path:
        return
    logging.basicConfig(
        filename=path,
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, ingest stdin, and run one picker session.

    Any command-line token satisfies the startup check, options included;
    tokens the parser does not know are accepted and ignored.
    """
    raw_args = sys.argv[1:] if argv is None else list(argv)
    if not raw_args:
        print(MISSING_ARGUMENT_MESSAGE)
        raise SystemExit(0)
    args, unknown = build_parser().parse_known_args(raw_args)

    configure_logging()
    if unknown:
        logger.debug("ignoring unrecognised arguments: %s", unknown)
    if args.save_defaults:
        save_preferences(args.theme, args.height)

    no_color = args.no_color or bool(os.environ.get("NO_COLOR"))
    theme = resolve_theme(args.theme or load_theme_name(), no_color=no_color)
    height = args.height if args.height is not None else load_height()

    candidates = read_candidates(sys.stdin.buffer)
    session = PickerSession(candidates)

    try:
        tty_fd = open_tty()
    except OSError as exc:
        raise SystemExit(f"lazypick: cannot open terminal: {exc}") from exc
    try:
        try:
            terminal = TerminalController(tty_fd, tty_fd, height)
        except (OSError, termios.error) as exc:
            raise SystemExit(f"lazypick: cannot configure terminal: {exc}") from exc
        _columns, lines = terminal.size()
        terminal.viewport_rows = max(1, min(height, lines))
        choice = run_session(session, terminal, tty_fd, theme)
    finally:
        os.close(tty_fd)

    if choice is not None:
        sys.stdout.write(choice + "\n")
        sys.stdout.flush()


if __name__ == "__main__":
    main()
