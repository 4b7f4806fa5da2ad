"""32-bit signed integer arithmetic shared by the folder and the machine."""

from .errors import DivisionByZero

INT_BITS = 32
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1
_MASK = (1 << INT_BITS) - 1


def wrap(value):
    """Reduce *value* to the signed 32-bit range, two's-complement style."""
    value &= _MASK
    if value > INT_MAX:
        value -= 1 << INT_BITS
    return value


def divide(a, b):
    # Python's // floors; the machine truncates toward zero
    if b == 0:
        raise DivisionByZero(f'Division by zero ({a} / 0)')
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return wrap(q)


def apply(op, a, b):
    if op == '+': return wrap(a + b)
    if op == '-': return wrap(a - b)
    if op == '*': return wrap(a * b)
    if op == '/': return divide(a, b)
    raise ValueError(f'Unknown operator {op!r}')
