"""Run a Hyeong program from the command line."""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from .errors import HyeongCancelled, HyeongFlushError
from .options import InterpreterOptions
from .processor import run_source

logger = logging.getLogger(__name__)

EXIT_USAGE = 2
EXIT_TIMEOUT = 124
EXIT_INTERRUPTED = 130


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hyeong", description=__doc__)
    parser.add_argument("source", help="path to the program text, or - to read it from stdin")
    parser.add_argument("--input", help="file bound to stack 0 (default: stdin)")
    parser.add_argument("--output", help="file bound to stack 1 (default: stdout)")
    parser.add_argument("--error", help="file bound to stack 2 (default: stderr)")
    parser.add_argument(
        "--recover-unclosed",
        action="store_true",
        help="skip open syllables that never close instead of ending the program there",
    )
    parser.add_argument("--max-steps", type=int, default=None, help="cancel after this many instructions")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="logging verbosity for interpreter diagnostics",
    )
    return parser


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.buffer.read().decode("utf-8")
    return Path(path).read_text(encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(name)s: %(levelname)s: %(message)s")

    try:
        options = InterpreterOptions(recover_unclosed=args.recover_unclosed, max_steps=args.max_steps)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        source = _read_source(args.source)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not read program %r: %s", args.source, exc)
        return EXIT_USAGE

    with contextlib.ExitStack() as files:
        try:
            if args.input is not None:
                stdin = files.enter_context(open(args.input, "rb"))
            elif args.source == "-":
                stdin = files.enter_context(open(os.devnull, "rb"))
            else:
                stdin = sys.stdin.buffer
            stdout = files.enter_context(open(args.output, "wb")) if args.output else sys.stdout.buffer
            stderr = files.enter_context(open(args.error, "wb")) if args.error else sys.stderr.buffer
        except OSError as exc:
            logger.error("Could not open stream: %s", exc)
            return EXIT_USAGE

        try:
            return run_source(source, stdin, stdout, stderr, options)
        except HyeongFlushError as exc:
            logger.error("%s", exc)
            return exc.exit_code if exc.exit_code is not None else 1
        except HyeongCancelled as exc:
            logger.warning("%s", exc)
            return EXIT_TIMEOUT
        except KeyboardInterrupt:
            return EXIT_INTERRUPTED


if __name__ == "__main__":
    raise SystemExit(main())
