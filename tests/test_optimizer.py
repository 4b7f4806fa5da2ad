import pytest

from threepass.arith import INT_MIN, apply, divide, wrap
from threepass.errors import DivisionByZero
from threepass.lexer import tokenize
from threepass.nodes import Argument, BinaryOp, Immediate
from threepass.optimizer import fold
from threepass.parser import parse


def folded(source):
    return fold(parse(tokenize(source))[0])


@pytest.mark.parametrize('source, value', [
    ('[] 2+3*4', 14),
    ('[] (2+3)*4', 20),
    ('[] 7/2', 3),
    ('[] (0-7)/2', -3),
    ('[] 0-7/2', -3),
    ('[] 1 + 3 + 2*2', 8),
    ('[] 2147483647+1', INT_MIN),
])
def test_constant_expressions_fold_to_one_immediate(source, value):
    assert folded(source) == Immediate(value)


def test_partial_folding():
    assert folded('[x] x + 2*3') == BinaryOp('+', Argument(0), Immediate(6))
    assert folded('[x] 2*3*x') == BinaryOp('*', Immediate(6), Argument(0))


def test_no_algebraic_simplification():
    assert folded('[x] x*0') == BinaryOp('*', Argument(0), Immediate(0))


def test_unfoldable_tree_is_returned_as_is():
    ast = parse(tokenize('[x] x*2*3'))[0]
    assert fold(ast) is ast


def test_leaves_pass_through():
    assert fold(Argument(2)) == Argument(2)
    assert fold(Immediate(-5)) == Immediate(-5)


@pytest.mark.parametrize('source', ['[] 1/0', '[x] x + 1/0', '[] 4/(2-2)'])
def test_division_by_zero_while_folding(source):
    with pytest.raises(DivisionByZero):
        folded(source)


def test_32_bit_arithmetic():
    assert wrap(2 ** 31) == INT_MIN
    assert wrap(-1) == -1
    assert apply('*', 65536, 65536) == 0
    assert divide(-7, 2) == -3
    assert divide(7, -2) == -3
    assert divide(INT_MIN, -1) == INT_MIN
