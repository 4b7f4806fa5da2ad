"""Three-pass compiler for a tiny arithmetic language and its stack machine.

    >>> program = compile('[ x y ] (x + y) / 2')
    >>> simulate(program, [3, 5])
    4
"""

import logging

from .codegen import Instruction, Opcode, Program, format_program, generate
from .compiler import Compiler, compile
from .errors import (
    CompileError, DivisionByZero, IndexOutOfRange, LexError, MalformedBracket,
    MalformedExpression, ParseError, SimulationError, StackUnderflow,
    ThreePassError, UnknownIdentifier,
)
from .lexer import tokenize
from .nodes import Argument, BinaryOp, Immediate, count_nodes
from .optimizer import fold
from .parser import parse, parse_arguments, parse_expression
from .vm import MachineState, simulate

PROGRAM_VERSION = '1.0.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())
