import logging
from typing import Tuple

from .codegen import Program, format_program, generate
from .lexer import tokenize
from .nodes import Node, count_nodes, to_sexpr
from .optimizer import fold
from .parser import parse

logger = logging.getLogger(__name__)


class Compiler:
    """Three-pass compiler: parse, fold constants, generate code.

    A compiler holds only its options, so one instance can compile any
    number of sources.
    """

    def __init__(self, strict=False, optimize=True):
        self.strict = strict
        self.optimize = optimize

    def parse(self, source: str) -> Tuple[Node, Tuple[str, ...]]:
        """Returns the un-optimized AST and the declared parameter names."""
        tokens = tokenize(source, strict=self.strict)
        ast, names = parse(tokens)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('pass1: %d token(s) -> %s', len(tokens), to_sexpr(ast))
        return ast, names

    def pass1(self, source: str) -> Node:
        """Returns an un-optimized AST."""
        return self.parse(source)[0]

    def pass2(self, ast: Node) -> Node:
        """Returns the AST with constant subexpressions reduced."""
        if not self.optimize:
            return ast
        reduced = fold(ast)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('pass2: %d -> %d node(s)', count_nodes(ast), count_nodes(reduced))
        return reduced

    def pass3(self, ast: Node) -> Program:
        """Returns machine instructions."""
        program = generate(ast)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('pass3:\n%s', format_program(program))
        return program

    def compile(self, source: str) -> Program:
        return self.pass3(self.pass2(self.pass1(source)))


def compile(source: str, strict: bool = False, optimize: bool = True) -> Program:
    return Compiler(strict=strict, optimize=optimize).compile(source)
