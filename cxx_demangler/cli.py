"""
CLI for the demangler.
"""

import argparse
import logging
import sys
from typing import Iterable, Optional, TextIO

from cxx_demangler.cxx import DemangleError
from cxx_demangler.demangler import parse

parser = argparse.ArgumentParser("cxx-demangler", description="Demangler for Itanium C++ symbols.")
parser.add_argument(
    "symbols",
    help="Symbols to demangle. If none are given, symbols are read from stdin, one per line.",
    nargs="*",
    type=str,
)
parser.add_argument(
    "--error-on-failure", "-e", help="Exit with an error if demangling fails", action="store_true"
)
parser.add_argument("--verbose", "-v", help="Log why demangling failed", action="store_true")


def _read_symbols(stream: TextIO) -> Iterable[str]:
    for line in stream:
        symbol = line.rstrip("\r\n")
        if symbol:
            yield symbol


def main(argv: Optional[list[str]] = None) -> int:
    args = parser.parse_args(argv)  # noqa
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    symbols = args.symbols if args.symbols else _read_symbols(sys.stdin)
    for symbol in symbols:
        sym = parse(symbol)
        if args.error_on_failure:
            try:
                sym.check()
            except DemangleError as e:
                print(str(e), file=sys.stderr)
                return 1
        print(str(sym))

    return 0


if __name__ == "__main__":
    sys.exit(main())
