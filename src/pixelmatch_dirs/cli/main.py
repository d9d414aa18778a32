"""CLI entry point: pixelmatch-dirs [THRESHOLD] [SRC_DIR] [TARGET_DIR]."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import NoReturn

from pixelmatch_dirs.config import build_run_config
from pixelmatch_dirs.constants import DEFAULT_SRC_DIR, DEFAULT_TARGET_DIR, DEFAULT_THRESHOLD
from pixelmatch_dirs.errors import PixelmatchDirsError
from pixelmatch_dirs.report import render_report
from pixelmatch_dirs.runner import run
from pixelmatch_dirs.validation import validate

logger = logging.getLogger(__name__)

_DESCRIPTION = (
    'Compare png files in the source directory with the same name of file in the '
    'target directory by pixelmatch docker container.'
)


def _configure_logging() -> None:
    """Configure logging for CLI (stderr, level from PIXELMATCH_DIRS_LOG, default WARNING)."""
    level = logging.WARNING
    env_level = os.environ.get('PIXELMATCH_DIRS_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser: three optional positionals plus -h/--help."""
    parser = argparse.ArgumentParser(prog='pixelmatch-dirs', description=_DESCRIPTION)
    parser.add_argument(
        'threshold',
        nargs='?',
        default=DEFAULT_THRESHOLD,
        metavar='THRESHOLD',
        help=f'threshold for pixelmatch, range is 0 to 1 (default "{DEFAULT_THRESHOLD}")',
    )
    parser.add_argument(
        'src_dir',
        nargs='?',
        default=DEFAULT_SRC_DIR,
        metavar='SRC_DIR',
        help=f'source directory (default "{DEFAULT_SRC_DIR}")',
    )
    parser.add_argument(
        'target_dir',
        nargs='?',
        default=DEFAULT_TARGET_DIR,
        metavar='TARGET_DIR',
        help=f'target directory (default "{DEFAULT_TARGET_DIR}")',
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for pixelmatch-dirs.

    Parameters:
        argv: Arguments without program name; defaults to sys.argv[1:].

    Returns:
        Exit code 0 on success, 1 on a fatal error.
    """
    args = build_parser().parse_args(argv)
    _configure_logging()
    config = build_run_config(args.threshold, args.src_dir, args.target_dir)
    logger.debug('Run configuration: %s', config)
    try:
        validate(config)
        report = run(config, sys.stdout)
    except PixelmatchDirsError as e:
        sys.stdout.flush()
        print(f'Error: {e}', file=sys.stderr)
        return 1
    if report.is_clean:
        logger.info('No differences in %d compared pair(s)', report.compared)
    render_report(report, sys.stdout)
    return 0


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
