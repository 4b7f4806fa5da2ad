"""Abstract syntax tree for the expression language.

Three node kinds only: integer literals, references to declared parameters
(by slot index) and binary operations.  Nodes are immutable; every pass that
changes the tree builds new nodes instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Union

OPERATORS = ('+', '-', '*', '/')


@dataclass(frozen=True)
class Immediate:
    value: int


@dataclass(frozen=True)
class Argument:
    slot: int


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"

    def __post_init__(self):
        if self.op not in OPERATORS:
            raise ValueError(f'Unsupported operator {self.op!r}')


Node = Union[Immediate, Argument, BinaryOp]


def postorder(node: Node) -> Iterator[Node]:
    """Yield every node children-first, left before right.

    Uses an explicit stack, so left-deep chains of any length are fine.
    """
    stack = [(node, False)]
    while stack:
        n, expanded = stack.pop()
        if isinstance(n, BinaryOp) and not expanded:
            stack.append((n, True))
            stack.append((n.right, False))
            stack.append((n.left, False))
        elif isinstance(n, (Immediate, Argument, BinaryOp)):
            yield n
        else:
            raise TypeError(f'Not an AST node: {n!r}')


def count_nodes(node: Node) -> int:
    return sum(1 for _ in postorder(node))


def to_sexpr(node: Node) -> str:
    """One-line prefix rendering, e.g. ``(+ 2 (* arg0 3))``."""
    parts: List[str] = []
    for n in postorder(node):
        if isinstance(n, Immediate):
            parts.append(str(n.value))
        elif isinstance(n, Argument):
            parts.append(f'arg{n.slot}')
        else:
            right = parts.pop()
            left = parts.pop()
            parts.append(f'({n.op} {left} {right})')
    return parts.pop()


def render(node: Node, names=()) -> str:
    """Indented tree listing; slots are shown with their names when known."""
    lines: List[str] = []

    def label(n):
        if isinstance(n, Immediate):
            return f'imm {n.value}'
        if isinstance(n, Argument):
            if n.slot < len(names):
                return f'arg {n.slot} ({names[n.slot]})'
            return f'arg {n.slot}'
        if isinstance(n, BinaryOp):
            return n.op
        raise TypeError(f'Not an AST node: {n!r}')

    # (node, indent, is_last, is_root)
    stack = [(node, '', True, True)]
    while stack:
        n, indent, is_last, is_root = stack.pop()
        if is_root:
            lines.append(label(n))
            child_indent = ''
        else:
            head = '└─ ' if is_last else '├─ '
            lines.append(f'{indent}{head}{label(n)}')
            child_indent = indent + ('   ' if is_last else '│  ')
        if isinstance(n, BinaryOp):
            stack.append((n.right, child_indent, True, False))
            stack.append((n.left, child_indent, False, False))
    return '\n'.join(lines)
