import argparse
import logging
import sys

from . import PROGRAM_VERSION
from .compiler import Compiler
from .codegen import format_program
from .errors import ThreePassError
from .nodes import render
from .vm import simulate


def build_parser():
    parser = argparse.ArgumentParser(
        prog='threepass',
        description='Compile an arithmetic expression and run it on the stack machine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  threepass "[ x y ] (x + y) / 2" 3 5
  threepass -f prog.tp --asm
  threepass "[] 2 + 3 * 4" --ast --no-fold
        """,
    )
    parser.add_argument('program', nargs='?', help='program text, e.g. "[ x ] x * 2"')
    parser.add_argument('args', nargs='*', type=int, metavar='ARG',
                        help='integer argument values, in declaration order')
    parser.add_argument('-f', '--file', metavar='FILE', help='read the program from FILE')
    parser.add_argument('--ast', action='store_true', help='print the syntax tree')
    parser.add_argument('--asm', action='store_true', help='print the instruction listing')
    parser.add_argument('--no-fold', action='store_true', help='skip constant folding')
    parser.add_argument('--strict', action='store_true',
                        help='reject unrecognized characters instead of skipping them')
    parser.add_argument('-D', '--debug', action='store_true', help='enable debug output')
    parser.add_argument('-V', '--verbose', action='store_true', help='enable verbose output')
    parser.add_argument('-v', '--version', action='version',
                        version=f'threepass {PROGRAM_VERSION}')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.debug else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format='%(levelname)s %(name)s: %(message)s')

    if args.file:
        # with -f every positional is an argument value
        if args.program is not None:
            try:
                args.args.insert(0, int(args.program))
            except ValueError:
                parser.error(f'invalid int value: {args.program!r}')
        try:
            with open(args.file) as f:
                source = f.read()
        except OSError as e:
            print(f'error: {e}', file=sys.stderr)
            return 1
    elif args.program is None:
        parser.error('a program or -f FILE is required')
    else:
        source = args.program

    compiler = Compiler(strict=args.strict, optimize=not args.no_fold)
    try:
        ast, names = compiler.parse(source)
        ast = compiler.pass2(ast)
        program = compiler.pass3(ast)
        if args.ast:
            print(render(ast, names))
        if args.asm:
            print(format_program(program))
        if not (args.ast or args.asm):
            print(simulate(program, args.args, trace=args.debug))
    except ThreePassError as e:
        print(f'error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
