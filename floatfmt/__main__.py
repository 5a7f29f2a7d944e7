"""
CLI interface for the float formatter.

Usage:
    python -m floatfmt f 3.14159 -p 2
    python -m floatfmt e 12345 -0.5 -w 12 --flags "+0"
    python -m floatfmt g 1234.5 --locale de_DE
"""

import sys
import argparse
import logging

from .formatter import FloatConf, FloatFormatter, FormatFlags
from .sentinels import UNSET


def main(argv: list[str] | None = None) -> int:
    """Format each VALUE with one directive and print one line per value."""
    parser = argparse.ArgumentParser(
        description="Format floating-point values like a printf %f/%e/%g/%a directive",
        prog="python -m floatfmt",
    )
    parser.add_argument("conversion", choices=list(FloatConf.CONVERSIONS), help="Conversion character")
    parser.add_argument("values", nargs="+", metavar="VALUE", help="Values to format ('nan', 'inf' accepted)")
    parser.add_argument("--width", "-w", type=int, default=0, help="Minimum field width (default: 0)")
    parser.add_argument("--precision", "-p", type=int, default=None, help="Precision (default: conversion default)")
    parser.add_argument("--flags", default="", help="printf flag characters, any of ' 0+-#'")
    parser.add_argument("--locale", default=FloatConf.DEFAULT_LOCALE, help="Locale for the decimal separator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log locale resolution to stderr")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr)

    try:
        flags = FormatFlags.from_chars(args.flags)
        values = [float(v) for v in args.values]
    except ValueError as e:
        parser.error(str(e))

    formatter = FloatFormatter(args.locale)
    precision = UNSET if args.precision is None else args.precision
    for value in values:
        try:
            out = formatter.format(args.conversion, args.width, precision, value, flags)
        except ValueError as e:
            parser.error(str(e))
        sys.stdout.write(out.decode("utf-8") + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
