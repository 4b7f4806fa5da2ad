"""Recursive-descent parser.

    program    := '[' IDENT* ']' expression
    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := NUMBER | '(' expression ')' | IDENT

Every rule takes the token tuple and a cursor and returns ``(node, cursor)``
with the cursor moved past what it consumed.  Nothing else is mutated.
"""

import logging
from typing import Dict, Sequence, Tuple

from .arith import INT_MAX
from .errors import MalformedBracket, MalformedExpression, UnknownIdentifier
from .lexer import END, Token, describe
from .nodes import Argument, BinaryOp, Immediate, Node

logger = logging.getLogger(__name__)


class Scope:
    """Parameter table plus a name -> slot lookup."""

    def __init__(self, names: Sequence[str]):
        self.names = tuple(names)
        # later duplicates win
        self.slots: Dict[str, int] = {name: slot for slot, name in enumerate(self.names)}

    def resolve(self, name):
        slot = self.slots.get(name)
        if slot is None:
            raise UnknownIdentifier(name, self.names)
        return slot


def _peek(tokens, pos) -> Token:
    return tokens[pos] if pos < len(tokens) else tokens[-1]


# ---------- argument list ----------
def parse_arguments(tokens: Sequence[Token], pos: int = 0) -> Tuple[Tuple[str, ...], int]:
    token = _peek(tokens, pos)
    if token.type != '[':
        raise MalformedBracket(f"Expected '[' to open the argument list, got {describe(token)}")
    pos += 1
    names = []
    while True:
        token = _peek(tokens, pos)
        if token.type == ']':
            return tuple(names), pos + 1
        if token.type == END:
            raise MalformedBracket("Argument list is missing its closing ']'")
        if token.type != 'IDENT':
            raise MalformedBracket(f'Expected a parameter name, got {describe(token)}')
        names.append(token.value)
        pos += 1


# ---------- expressions ----------
# each group costs three frames (expression, term, factor)
MAX_NESTING = 200


def parse_expression(tokens: Sequence[Token], arguments, pos: int = 0, depth: int = 0) -> Tuple[Node, int]:
    scope = arguments if isinstance(arguments, Scope) else Scope(arguments)
    node, pos = _term(tokens, scope, pos, depth)
    while _peek(tokens, pos).type in ('+', '-'):
        op = tokens[pos].type
        right, pos = _term(tokens, scope, pos + 1, depth)
        node = BinaryOp(op, node, right)
    return node, pos


def _term(tokens, scope, pos, depth):
    node, pos = _factor(tokens, scope, pos, depth)
    while _peek(tokens, pos).type in ('*', '/'):
        op = tokens[pos].type
        right, pos = _factor(tokens, scope, pos + 1, depth)
        node = BinaryOp(op, node, right)
    return node, pos


def _factor(tokens, scope, pos, depth):
    token = _peek(tokens, pos)
    if token.type == 'NUMBER':
        if token.value > INT_MAX:
            raise MalformedExpression(f'Integer literal {token.value} does not fit in 32 bits')
        return Immediate(token.value), pos + 1
    if token.type == '(':
        if depth >= MAX_NESTING:
            raise MalformedExpression(
                f'Expression nested too deeply (more than {MAX_NESTING} groups) at {describe(token)}')
        node, pos = parse_expression(tokens, scope, pos + 1, depth + 1)
        closing = _peek(tokens, pos)
        if closing.type != ')':
            raise MalformedExpression(f"Expected ')' to close the group, got {describe(closing)}")
        return node, pos + 1
    if token.type == 'IDENT':
        return Argument(scope.resolve(token.value)), pos + 1
    raise MalformedExpression(f'Expected a number, name or group, got {describe(token)}')


def parse(tokens: Sequence[Token]) -> Tuple[Node, Tuple[str, ...]]:
    """Parse a whole program: header, then exactly one expression."""
    names, pos = parse_arguments(tokens)
    node, pos = parse_expression(tokens, names, pos)
    token = _peek(tokens, pos)
    if token.type != END:
        raise MalformedExpression(f'Unexpected {describe(token)} after the expression')
    logger.debug('parsed %d parameter(s) %s', len(names), list(names))
    return node, names
