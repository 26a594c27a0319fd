import argparse
import curses
import logging
import os
import sys

import config_paths
from errors import PreviewError
from preview_session import load_preview, render_headless

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"

logger = logging.getLogger(__name__)


def build_parser(default_rows: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parqview",
        description="Inspect Parquet files in the terminal",
    )
    parser.add_argument("path", metavar="FILE", help="path to the Parquet file")
    parser.add_argument(
        "-n",
        "--rows",
        type=int,
        default=default_rows,
        help=f"number of rows to preview from the top of the file (default {default_rows})",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="print the preview to stdout instead of launching the UI",
    )
    parser.add_argument("-v", "--version", action="version", version=__version__)
    return parser


def configure_logging(level: str, headless: bool):
    if headless:
        handler = logging.StreamHandler(sys.stderr)
    else:
        # curses owns the terminal; keep log output out of it
        try:
            config_paths.ensure_config_dirs()
            handler = logging.FileHandler(config_paths.LOG_PATH, encoding="utf-8")
        except OSError:
            handler = logging.NullHandler()

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[handler],
        force=True,
    )


def main(argv=None):
    cfg = config_paths.load_config()
    args = build_parser(cfg["PREVIEW_ROWS"]).parse_args(argv)
    if args.rows < 0:
        print("--rows must be non-negative", file=sys.stderr)
        return 2

    configure_logging(cfg["LOG_LEVEL"], args.headless)

    try:
        session = load_preview(args.path, args.rows)
    except PreviewError as exc:
        logger.error("failed to load %s: %s", args.path, exc)
        print(f"Load failed: {exc}", file=sys.stderr)
        return 1

    if args.headless:
        print(render_headless(session))
        return 0

    from orchestrator import Orchestrator

    def curses_main(stdscr):
        Orchestrator(stdscr, session, cfg).run()

    curses.wrapper(curses_main)
    return 0


if __name__ == "__main__":
    sys.exit(main())
