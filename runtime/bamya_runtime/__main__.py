#!/usr/bin/env python3
"""
Bamya command line

Usage:
    python -m bamya_runtime                 # interactive shell
    python -m bamya_runtime program.bmy     # run a file
    python -m bamya_runtime -e 'len("hi")'  # run a snippet
"""

import argparse
import logging
import sys

from termcolor import colored

from .errors import BamyaError
from .objects import is_error
from .repl import BamyaShell
from .runtime import BamyaRuntime

DEFAULT_LOG_LEVEL = "WARNING"


def run_source(source: str, color: bool = True) -> int:
    """Run a whole program, printing its result. Returns an exit status."""
    runtime = BamyaRuntime()
    try:
        result = runtime.execute(source)
    except BamyaError as e:
        for msg in e.details or [e.message]:
            sys.stderr.write((colored(msg, "yellow") if color else msg) + "\n")
        return 2

    if result is None:
        return 0
    if is_error(result):
        text = result.inspect()
        sys.stderr.write((colored(text, "red", attrs=["bold"]) if color else text) + "\n")
        return 1
    print(result.inspect())
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="bamya", description="Bamya interpreter")
    parser.add_argument("path", nargs="?", help="source file to run; omit for the interactive shell")
    parser.add_argument("-e", "--eval", dest="snippet", help="evaluate SNIPPET and exit")
    parser.add_argument("--no-color", action="store_true", help="disable coloured output")
    parser.add_argument("--log-level", default=DEFAULT_LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="logging level (default: %(default)s)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")
    color = not args.no_color

    if args.snippet is not None:
        return run_source(args.snippet, color)

    if args.path is not None:
        with open(args.path, encoding="utf-8") as f:
            return run_source(f.read(), color)

    try:
        BamyaShell(color=color).cmdloop()
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
