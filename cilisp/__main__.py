"""
CI LISP read-evaluate-print loop.

Usage: python -m cilisp [FILE] [--max-depth N] [--verbose]

Reads from FILE, or from stdin when no file is given. Each complete top-level
expression is evaluated and its result printed; warnings go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Iterator, Optional, TextIO

from cilisp.config import get_log_level, get_max_depth, get_prompt
from cilisp.errors import CilispFatalError, CilispQuit, CilispRecursionError, CilispSyntaxError
from cilisp.interpreter import Interpreter
from cilisp.printer import COLOR_ERROR, COLOR_WARNING, colorize, format_result


class ColorFormatter(logging.Formatter):
    def __init__(self, color: bool):
        super().__init__("%(levelname)s: %(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if record.levelno >= logging.WARNING:
            return colorize(text, COLOR_WARNING, self.color)
        return text


def configure_logging(level: int, stream: TextIO) -> None:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColorFormatter(color=stream.isatty()))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def read_forms(lines: Iterable[str], prompt: Optional[str] = None) -> Iterator[str]:
    """Group input lines into chunks whose parentheses balance."""
    chunk: list[str] = []
    depth = 0
    if prompt:
        print(prompt, end="", flush=True)
    for line in lines:
        chunk.append(line)
        code = line.split(";", 1)[0]
        depth += code.count("(") - code.count(")")
        if depth <= 0:
            text = "".join(chunk)
            chunk, depth = [], 0
            if text.strip():
                yield text
            if prompt:
                print(prompt, end="", flush=True)
    if chunk and "".join(chunk).strip():
        yield "".join(chunk)


def run(interp: Interpreter, lines: Iterable[str], out: TextIO, err: TextIO, prompt: Optional[str] = None) -> int:
    color = err.isatty()
    for text in read_forms(lines, prompt):
        try:
            results = interp.eval_all(text)
        except CilispQuit as q:
            for result in q.results:
                print(format_result(result), file=out)
            return 0
        except (CilispSyntaxError, CilispRecursionError) as e:
            # expressions before the bad one in this chunk still count
            for result in e.results:
                print(format_result(result), file=out)
            print(colorize(f"WARNING: {e}", COLOR_WARNING, color), file=err)
            continue
        except (CilispFatalError, MemoryError) as e:
            print(colorize(f"\nERROR: {e}\nExiting...", COLOR_ERROR, color), file=err)
            return 1
        finally:
            # already logged; the sink only ever holds one chunk's warnings
            interp.diagnostics.clear()
        for result in results:
            print(format_result(result), file=out)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Command-line interface for the evaluator."""
    parser = argparse.ArgumentParser(
        description='CI LISP - evaluate s-expression arithmetic with let scopes'
    )
    parser.add_argument('input', nargs='?', help='Source file to evaluate (default: stdin)')
    parser.add_argument('--max-depth', type=int, default=None,
                        help=f'Maximum evaluation depth (default: {get_max_depth()})')
    parser.add_argument('--verbose', action='store_true',
                        help='Log reader tokens')
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else get_log_level(), sys.stderr)
    interp = Interpreter(max_depth=args.max_depth)

    if args.input:
        with open(args.input, 'r', encoding='utf-8') as f:
            return run(interp, f, sys.stdout, sys.stderr)

    prompt = get_prompt() if sys.stdin.isatty() else None
    return run(interp, sys.stdin, sys.stdout, sys.stderr, prompt)


if __name__ == '__main__':
    sys.exit(main())
