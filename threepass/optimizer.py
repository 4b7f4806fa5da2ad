import logging

from .arith import apply
from .nodes import BinaryOp, Immediate, Node, postorder

logger = logging.getLogger(__name__)


def fold(node: Node) -> Node:
    """Collapse every subtree made only of literals into one Immediate.

    Raises DivisionByZero when a literal is divided by a literal zero.
    """
    debug = logger.isEnabledFor(logging.DEBUG)
    reduced = []
    for n in postorder(node):
        if not isinstance(n, BinaryOp):
            reduced.append(n)
            continue
        right = reduced.pop()
        left = reduced.pop()
        if isinstance(left, Immediate) and isinstance(right, Immediate):
            value = apply(n.op, left.value, right.value)
            if debug:
                logger.debug('folded (%s %d %d) -> %d', n.op, left.value, right.value, value)
            reduced.append(Immediate(value))
        elif left is n.left and right is n.right:
            reduced.append(n)
        else:
            reduced.append(BinaryOp(n.op, left, right))
    return reduced.pop()
