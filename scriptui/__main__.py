"""Command-line entry point for scriptui."""

import argparse
import sys

from .main import run_demo, run_headless
from .theme import THEMES
from .utils import setup_logging, setup_runtime_logging


def headless(argv=None) -> int:
    """Headless mode entry point."""
    parser = argparse.ArgumentParser()
    parser.add_argument("--frames", type=int, default=10)
    parser.add_argument("--theme", default="teal")
    parser.add_argument("--config-dir", default=None)
    args = parser.parse_args(argv)
    return run_headless(args.frames, args.theme, args.config_dir)


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(prog="scriptui", description="scriptui demo window")
    parser.add_argument("--headless", action="store_true", help="drive the demo without a display")
    parser.add_argument("--frames", type=int, default=None, help="stop after this many frames")
    parser.add_argument("--theme", default="teal", choices=sorted(THEMES))
    parser.add_argument("--config-dir", default=None, help="where <identity>.config.json files live")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--runtime-log", default=None, help="write lifecycle events to this file")
    parser.add_argument("--list-themes", action="store_true")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    if args.runtime_log:
        setup_runtime_logging(args.runtime_log)

    if args.list_themes:
        for name in THEMES:
            print(name)
        return 0
    if args.headless:
        return run_headless(args.frames if args.frames is not None else 10, args.theme, args.config_dir)
    return run_demo(args.theme, args.config_dir, args.frames)


if __name__ == "__main__":
    sys.exit(main())
