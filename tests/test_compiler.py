import logging

import pytest

from threepass import (
    Argument, Compiler, DivisionByZero, Immediate, IndexOutOfRange, MalformedExpression, UnknownIdentifier,
    compile, simulate,
)

PROGRAM = '[ x y z ] ( 2*3*x + 5*y - 3*z ) / (1 + 3 + 2*2)'


@pytest.mark.parametrize('arguments, expected', [
    ([4, 0, 0], 3),
    ([4, 8, 0], 8),
    ([4, 8, 16], 2),
])
def test_round_trip(arguments, expected):
    assert simulate(compile(PROGRAM), arguments) == expected


@pytest.mark.parametrize('source, expected', [
    ('[] 2+3*4', 14),
    ('[] (2+3)*4', 20),
    ('[] 7/2', 3),
    ('[] 5-2', 3),
])
def test_constant_programs(source, expected):
    assert simulate(compile(source), []) == expected


def test_passes():
    compiler = Compiler()
    ast = compiler.pass1('[] 2+3*4')
    assert compiler.parse("[ x y ] x")[1] == ("x", "y")
    assert compiler.pass2(ast) == Immediate(14)
    assert [str(ins) for ins in compiler.pass3(compiler.pass2(ast))] == ['IM 14', 'PU']


def test_without_folding():
    program = compile('[] 2+3*4', optimize=False)
    assert len(program) == 16
    assert simulate(program, []) == 14


def test_folding_does_not_change_results():
    source = '[ a b ] (a + 2*5) * (b - 12/4) / (1 + 1)'
    for args in ([0, 0], [3, 7], [-9, 2]):
        assert simulate(compile(source), args) == simulate(compile(source, optimize=False), args)


def test_errors():
    with pytest.raises(UnknownIdentifier):
        compile('[ x ] y')
    with pytest.raises(DivisionByZero):
        compile('[] 1/0')
    with pytest.raises(IndexOutOfRange):
        simulate(compile(PROGRAM), [4, 8])


def test_unfolded_division_by_zero_traps_at_run_time():
    program = compile('[] 1/0', optimize=False)
    with pytest.raises(DivisionByZero):
        simulate(program, [])


def test_compiler_keeps_no_state_between_sources():
    compiler = Compiler()
    first = compiler.parse('[ a b c ] c')
    second = compiler.parse('[ x ] x')
    assert first == (Argument(2), ('a', 'b', 'c'))
    assert second == (Argument(0), ('x',))
    assert simulate(compiler.compile('[ a b c ] c'), [1, 2, 3]) == 3


def test_long_chains():
    program = compile('[ x ] ' + '+'.join(['x'] * 2000))
    assert simulate(program, [3]) == 6000
    assert [str(ins) for ins in compile('[] ' + '+'.join(['1'] * 2000))] == ['IM 2000', 'PU']
    mixed = compile('[ x ] ' + '-'.join(['x', '2 * 3'] * 1000))
    assert simulate(mixed, [10]) == 10 - 6 * 1000 - 10 * 999


def test_long_chain_with_debug_logging(caplog):
    caplog.set_level(logging.DEBUG, logger='threepass')
    program = compile('[ x ] ' + '*'.join(['x'] * 2000), optimize=False)
    assert simulate(program, [1]) == 1
    assert any('pass3' in r.getMessage() for r in caplog.records)


def test_nested_groups():
    depth = 150
    assert simulate(compile('[ x ] ' + '(' * depth + 'x + 1' + ')' * depth), [4]) == 5


def test_groups_nested_too_deeply():
    with pytest.raises(MalformedExpression, match='nested too deeply'):
        compile('[] ' + '(' * 500 + '1' + ')' * 500)
