"""Command line entrypoint for the Rudolf editor."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import load_config
from .editor import run_editor
from .errors import ConfigurationError, TerminalIOError
from .logging_setup import configure_logging, get_logger, install_crash_hook
from .screen import VERSION


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rudolf", description="Rudolf terminal editor")
    parser.add_argument("--config", help="Path to config.json")
    parser.add_argument("--log-level", help="Override the configured log level")
    parser.add_argument("--version", action="version", version=f"rudolf {VERSION}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config(Path(args.config).expanduser() if args.config else None)
    if args.log_level:
        cfg.logging.level = args.log_level.upper()

    try:
        configure_logging(level=cfg.logging.level, keep_files=cfg.logging.keep_files, enabled=cfg.logging.enabled)
    except ValueError:
        print(f"rudolf: unknown log level {cfg.logging.level!r}", file=sys.stderr)
        return 2
    install_crash_hook()
    logger = get_logger()

    try:
        run_editor(cfg)
    except ConfigurationError as exc:
        logger.error(str(exc), extra={"event": "configuration_error"})
        print(f"rudolf: {exc}", file=sys.stderr)
        return 2
    except TerminalIOError as exc:
        logger.exception("terminal i/o failure", extra={"event": "terminal_io_error"})
        print(f"rudolf: {exc}", file=sys.stderr)
        return 1
    return 0
