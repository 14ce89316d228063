from __future__ import annotations

"""
Command line front end.

    calc -m '{"a": 1}' 'sum($a,2,3)+2*3'
    calc --compile '$x * 2 + 1'

Expression words are joined without separators, prints the result and exits 0;
on failure prints the message to stderr and exits 1.
"""

import argparse
import json
import logging
import sys
from typing import Sequence

from calc import config
from calc.calculator import default_calculator
from calc.compiler.disasm import disassemble
from calc.errors import CalcError
from calc.types.values import format_value

logger = logging.getLogger(__name__)

MAP_USAGE = 'Usage: -m flag require a JSON string, example: {"a": 1, "b": 2}'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="calc", description="Evaluate an infix expression.")
    parser.add_argument("expression", nargs="+", help="expression, e.g. 'sum($a,2,3)+2*3'")
    parser.add_argument("-m", dest="mapping", default="", help="variable map, JSON format")
    parser.add_argument("--compile", action="store_true", help="print the compiled formula instead of evaluating")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more logging (repeatable)")
    return parser


def _log_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return config.get_log_level()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=_log_level(args.verbose), format="%(levelname)s %(name)s: %(message)s")

    bindings = {}
    if args.mapping:
        try:
            bindings = json.loads(args.mapping)
        except json.JSONDecodeError as ex:
            logger.debug("bad variable map: %s", ex)
            bindings = None
        if not isinstance(bindings, dict):
            print(MAP_USAGE, file=sys.stderr)
            return 1

    source = "".join(args.expression)
    calculator = default_calculator()
    try:
        if args.compile:
            print(disassemble(calculator.compile(source)))
        else:
            print(format_value(calculator.evaluate(source, bindings)))
    except CalcError as ex:
        print(str(ex), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
